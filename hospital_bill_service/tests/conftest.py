import pytest
from fastapi.testclient import TestClient

from billing.api.deps import get_storage
from billing.db.db_config import get_sqlite_connection
from billing.main import app
from billing.services.storage import BillingStorage


@pytest.fixture
def storage(tmp_path) -> BillingStorage:
    tested = BillingStorage(get_sqlite_connection(tmp_path / "billing_test.db"))
    tested.initialize_database(seed=True)
    yield tested
    tested.conn.close()


@pytest.fixture
def empty_storage(tmp_path) -> BillingStorage:
    tested = BillingStorage(get_sqlite_connection(tmp_path / "billing_empty.db"))
    tested.initialize_database(seed=False)
    yield tested
    tested.conn.close()


@pytest.fixture
def client(storage) -> TestClient:
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()
