import pytest

from budget_core.services import BudgetService
from budget_core.storage import JSONStorage, RecordStore


@pytest.fixture
def storage(tmp_path):
    return JSONStorage(tmp_path / "data")


@pytest.fixture
def store(storage):
    return RecordStore(storage)


@pytest.fixture
def service(store):
    return BudgetService(store)
