"""Flask REST API exposing the budget tracker services."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from budget_core.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from budget_core.services import BudgetService
from budget_core.storage import JSONStorage, RecordStore


def create_app(data_dir: Optional[Path] = None) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("BUDGET_TRACKER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("BUDGET_TRACKER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    data_path = Path(data_dir or os.getenv("BUDGET_TRACKER_DATA_DIR", "data"))
    service = BudgetService(RecordStore(JSONStorage(data_path)))

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/ledger")
    def get_ledger():
        return _success(service.document().to_dict())

    @app.get("/summary")
    def summary():
        return _success(service.summary())

    @app.get("/categories")
    def categories():
        return _success({"items": [share.to_dict() for share in service.breakdown()]})

    @app.get("/alert")
    def alert():
        return _success(service.alert().to_dict())

    @app.post("/incomes")
    def create_income():
        income = service.add_income(_json_body())
        return _success(income.to_dict(), 201)

    @app.get("/expenses")
    def list_expenses():
        expenses = service.expenses()
        return _success({
            "items": [expense.to_dict() for expense in expenses],
            "total": service.totals().to_dict()["total_expenses"],
        })

    @app.post("/expenses")
    def create_expense():
        expense = service.add_expense(_json_body())
        return _success(expense.to_dict(), 201)

    @app.delete("/expenses/<expense_id>")
    def delete_expense(expense_id: str):
        service.delete_expense(expense_id)
        return _success({}, 204)

    @app.get("/goals")
    def list_goals():
        return _success({"items": [progress.to_dict() for progress in service.goals()]})

    @app.post("/goals")
    def create_goal():
        goal = service.add_goal(_json_body())
        return _success(goal.to_dict(), 201)

    @app.post("/goals/<goal_id>/contributions")
    def contribute(goal_id: str):
        progress = service.contribute(goal_id, _json_body())
        return _success(progress.to_dict(), 201)

    @app.put("/settings")
    def update_settings():
        payload = _json_body()
        document = service.set_alert_threshold(payload.get("alertThreshold"))
        return _success(document.settings.to_dict())

    @app.post("/reset")
    def reset():
        service.reset()
        return _success({}, 204)

    return app
