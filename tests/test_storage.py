import json

import pytest

from budget_core.exceptions import PersistenceError, ValidationError
from budget_core.models import LedgerDocument
from budget_core.operations import add_expense, add_goal, add_income, contribute_to_goal, new_document
from budget_core.storage import STORAGE_KEY, JSONStorage, RecordStore


def test_load_without_saved_data_returns_default(store):
    assert store.load() == LedgerDocument()


def test_save_then_load_round_trip(store):
    doc = add_income(new_document(), "Paycheck", 1000, "2026-01-15")
    doc = add_expense(doc, "Rent", "400", "Housing", "2026-01-16", "Card")
    doc = add_goal(doc, "Trip", 200)
    doc = contribute_to_goal(doc, doc.goals[0].id, 50)

    store.save(doc)
    assert store.load() == doc


def test_document_written_under_fixed_key(store, storage):
    store.save(add_income(new_document(), "Pay", 1))
    path = storage.base_path / f"{STORAGE_KEY}.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["income"][0]["name"] == "Pay"
    assert not path.with_suffix(".json.tmp").exists()


def test_corrupted_file_raises_persistence_error(store, storage):
    (storage.base_path / f"{STORAGE_KEY}.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        store.load()


def test_malformed_document_raises_persistence_error(store, storage):
    (storage.base_path / f"{STORAGE_KEY}.json").write_text(
        json.dumps({"income": [{"name": "no id"}]}), encoding="utf-8"
    )
    with pytest.raises(PersistenceError):
        store.load()


def test_non_object_payload_rejected(storage):
    (storage.base_path / "other.json").write_text("[]", encoding="utf-8")
    with pytest.raises(PersistenceError):
        storage.load("other")


def test_reset_discards_document_and_session_flag(store):
    store.save(add_income(new_document(), "Pay", 1))
    store.session.alert_shown = True
    store.reset()
    assert store.load() == LedgerDocument()
    assert store.session.alert_shown is False


def test_reset_without_saved_document(store):
    store.reset()
    assert store.load() == LedgerDocument()


def test_transaction_persists_result(store):
    updated = store.transaction(add_income, "Pay", 10)
    assert store.load() == updated


def test_failed_transaction_writes_nothing(store):
    store.transaction(add_income, "Pay", 10)
    before = store.load()
    with pytest.raises(ValidationError):
        store.transaction(add_expense, "", 5)
    assert store.load() == before


def test_stores_share_one_file(storage):
    first = RecordStore(storage)
    second = RecordStore(JSONStorage(storage.base_path))
    first.transaction(add_income, "Pay", 10)
    assert len(second.load().income) == 1


def test_settings_of_wrong_shape_raise_persistence_error(store, storage):
    (storage.base_path / f"{STORAGE_KEY}.json").write_text(
        json.dumps({"income": [], "expenses": [], "goals": [], "settings": [1]}),
        encoding="utf-8",
    )
    with pytest.raises(PersistenceError):
        store.load()


def test_unwritable_store_leaves_previous_document(store, storage):
    before = store.transaction(add_income, "Pay", 10)
    # A directory where the temp file should go makes every write fail.
    (storage.base_path / f"{STORAGE_KEY}.json.tmp").mkdir()

    with pytest.raises(PersistenceError):
        store.transaction(add_expense, "Lunch", 5)
    assert store.load() == before
