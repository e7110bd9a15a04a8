"""
Shared test fixtures.

Settings are required at import time, so dummy Supabase credentials are
set before any application module is imported.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-key")

import pytest
from unittest.mock import patch
from typing import Generator

from models.product import CatalogProduct, Unit
from services.import_session_store import clear_sessions
from tests.fakes import FakeProductStore, FakeTagListStore, FakeUnitStore

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, client: "MockSupabaseClient", table: str, data: list = None):
        self._client = client
        self._table = table
        self._data = data or []
        self._filters: list[tuple[str, object]] = []

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        rows = data if isinstance(data, list) else [data]
        self._client.record_write(self._table, "insert", rows)
        self._data = rows
        return self

    def upsert(self, data):
        rows = data if isinstance(data, list) else [data]
        self._client.record_write(self._table, "upsert", rows)
        self._data = rows
        return self

    def delete(self):
        self._client.record_write(self._table, "delete", [])
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, **kwargs):
        return self

    def limit(self, count):
        return self

    def execute(self) -> MockSupabaseResponse:
        self._client.raise_if_failing(self._table)
        data = [
            row for row in self._data
            if all(row.get(col) == val for col, val in self._filters)
        ]
        return MockSupabaseResponse(data=data)


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, client: "MockSupabaseClient", name: str, data: list = None):
        self._client = client
        self._name = name
        self._data = data or []

    def _query(self) -> MockSupabaseQuery:
        return MockSupabaseQuery(self._client, self._name, [dict(row) for row in self._data])

    def select(self, *args, **kwargs):
        return self._query()

    def insert(self, data):
        return self._query().insert(data)

    def upsert(self, data):
        return self._query().upsert(data)

    def delete(self):
        return self._query().delete()


class MockSupabaseClient:
    """Mock Supabase client that records writes."""

    def __init__(self):
        self._tables = {}
        self._failing: set[str] = set()
        self.writes: list[tuple[str, str, list]] = []

    def set_table_data(self, table_name: str, data: list):
        """Configure mock data for a table."""
        self._tables[table_name] = data

    def fail_table(self, table_name: str):
        """Make every query on a table raise."""
        self._failing.add(table_name)

    def record_write(self, table: str, operation: str, rows: list):
        self.writes.append((table, operation, rows))

    def raise_if_failing(self, table: str):
        if table in self._failing:
            raise RuntimeError(f"connection to '{table}' refused")

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        return MockSupabaseTable(self, name, self._tables.get(name, []))


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "p1", "code": "1001", "name": "سكر", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            # Now any service created here gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase), \
            patch("services.product_service.get_supabase_client", return_value=mock_supabase), \
            patch("services.unit_service.get_supabase_client", return_value=mock_supabase), \
            patch("services.list_service.get_supabase_client", return_value=mock_supabase), \
            patch("services.tag_list_service.get_supabase_client", return_value=mock_supabase):
        yield mock_supabase


@pytest.fixture(autouse=True)
def reset_import_sessions():
    """Pending import sessions never leak between tests."""
    clear_sessions()
    yield
    clear_sessions()


@pytest.fixture
def sample_units() -> list[Unit]:
    """Units as seeded in a typical store."""
    return [
        Unit(id="u-piece", name="قطعة"),
        Unit(id="u-carton", name="كرتون"),
        Unit(id="u-kg", name="KG"),
    ]


@pytest.fixture
def sample_catalog() -> list[CatalogProduct]:
    """Small catalog with Arabic and English names."""
    return [
        CatalogProduct(id="p-sugar", code="1001", name="سكر أبيض", unit_id="u-kg", price="12"),
        CatalogProduct(id="p-rice", code="1002", name="أرز بسمتي", unit_id="u-carton", price="40"),
        CatalogProduct(id="p-tea", code="2001", name="Green Tea", unit_id="u-piece"),
    ]


@pytest.fixture
def product_store(sample_catalog) -> FakeProductStore:
    return FakeProductStore(sample_catalog)


@pytest.fixture
def unit_store(sample_units) -> FakeUnitStore:
    return FakeUnitStore(sample_units)


@pytest.fixture
def tag_list_store() -> FakeTagListStore:
    return FakeTagListStore()


@pytest.fixture
def reconciliation_service(product_store, unit_store, tag_list_store):
    """ReconciliationService wired to in-memory stores."""
    from services.reconciliation_service import ReconciliationService

    return ReconciliationService(
        product_service=product_store,
        unit_service=unit_store,
        tag_list_service=tag_list_store,
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Lifespan is not run, so no database check happens.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Service singletons are reset so they pick up the mock client.
    """
    from fastapi.testclient import TestClient
    from main import app
    import services.product_service as product_module
    import services.unit_service as unit_module
    import services.list_service as list_module

    product_module._product_service = None
    unit_module._unit_service = None
    list_module._list_service = None

    yield TestClient(app)

    product_module._product_service = None
    unit_module._unit_service = None
    list_module._list_service = None
