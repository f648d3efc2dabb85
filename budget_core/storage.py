"""Persistence for the ledger document."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from .alerts import AlertResult, AlertSession, evaluate_alert
from .exceptions import PersistenceError
from .models import LedgerDocument
from .operations import new_document

logger = logging.getLogger(__name__)

STORAGE_KEY = "budgetApp"


class JSONStorage:
    """Simple file-based JSON storage with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Unable to create data directory {self._base_path}") from exc

    def _path(self, resource: str) -> Path:
        return self._base_path / f"{resource}.json"

    def load(self, resource: str) -> Optional[Dict[str, Any]]:
        """Return the stored object, or ``None`` when nothing was saved yet."""
        path = self._path(resource)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        if not isinstance(payload, dict):
            raise PersistenceError(f"Expected object payload in {path}")
        return payload

    def save(self, resource: str, payload: Dict[str, Any]) -> None:
        path = self._path(resource)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
                handle.flush()
            # replace() is an atomic rename on POSIX and Windows.
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc

    def delete(self, resource: str) -> None:
        try:
            self._path(resource).unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Unable to delete {self._path(resource)}") from exc

    @property
    def base_path(self) -> Path:
        return self._base_path


class RecordStore:
    """Owns the single ledger document and the session-scoped alert state.

    Mutations should go through :meth:`transaction` so that the
    load/modify/save sequence cannot interleave with another writer.
    """

    def __init__(self, storage: JSONStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._lock = threading.RLock()
        self.session = AlertSession()

    def load(self) -> LedgerDocument:
        with self._lock:
            payload = self._storage.load(self._key)
        if payload is None:
            return new_document()
        try:
            return LedgerDocument.from_dict(payload)
        except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError) as exc:
            logger.error("Ledger document %s is malformed: %s", self._key, exc)
            raise PersistenceError(f"Malformed ledger document '{self._key}'") from exc

    def save(self, document: LedgerDocument) -> None:
        with self._lock:
            self._storage.save(self._key, document.to_dict())

    def reset(self) -> None:
        """Discard the persisted document and the alert-suppression flag."""
        with self._lock:
            self._storage.delete(self._key)
            self.session.clear()

    def transaction(
        self, mutation: Callable[..., LedgerDocument], *args: Any, **kwargs: Any
    ) -> LedgerDocument:
        """Apply ``mutation(doc, *args, **kwargs)`` to the stored document and persist it."""
        with self._lock:
            current = self.load()
            updated = mutation(current, *args, **kwargs)
            if updated is not current:
                self.save(updated)
            return updated

    def check_alert(self) -> Tuple[LedgerDocument, AlertResult]:
        """Load the document and evaluate the alert without a writer in between."""
        with self._lock:
            document = self.load()
            return document, evaluate_alert(document, self.session)
