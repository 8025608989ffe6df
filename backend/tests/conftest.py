"""
Aula Backend — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The real SQLAlchemyStore is swapped for `InMemoryStore` through
       `app.dependency_overrides[get_store]`, so route and hook tests need
       no database.

Fixture Hierarchy (all function-scoped):
    ├── store:          InMemoryStore with call recording and failure switch
    ├── api:            FastAPI app wired to `store`
    ├── test_client:    HTTPX AsyncClient talking to `api` via ASGITransport
    ├── temp_storage:   Temporary directory for file operations
    └── sample_pdf_bytes
"""

import os
import tempfile

# Override settings BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="aula_db_"), "test.db"
)
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="aula_test_")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["LOG_LEVEL"] = "WARNING"

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.exceptions import StoreError
from app.main import create_app
from app.store import AnyOf, Eq, Query, Store, get_store


# ══════════════════════════════════════════════════════════════════════════
# In-memory store
# ══════════════════════════════════════════════════════════════════════════

def _matches(row: Dict[str, Any], flt) -> bool:
    if isinstance(flt, AnyOf):
        return any(_matches(row, eq) for eq in flt.clauses)
    return row.get(flt.column) == flt.value


class InMemoryStore(Store):
    """
    Fake store honoring the Store contract: ordering and filtering happen
    "server side" here, ids and creado_en are generated on insert.

    Attributes:
        calls:      ("select", Query) / ("insert", table, row) in call order
        fail_with:  StoreError raised by the next calls when set
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.calls: List[tuple] = []
        self.fail_with: Optional[StoreError] = None

    def seed(self, table: str, **row: Any) -> Dict[str, Any]:
        stored = {"id": uuid4(), "creado_en": datetime.now(timezone.utc), **row}
        self.tables[table].append(stored)
        return stored

    async def select(self, query: Query) -> List[Dict[str, Any]]:
        self.calls.append(("select", query))
        if self.fail_with:
            raise self.fail_with

        rows = [
            dict(row) for row in self.tables[query.table]
            if all(_matches(row, flt) for flt in query.filters)
        ]
        # NULLs last ascending, first descending (Postgres default)
        return sorted(
            rows,
            key=lambda r: (r.get(query.order_by) is None, r.get(query.order_by)),
            reverse=not query.ascending,
        )

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("insert", table, row))
        if self.fail_with:
            raise self.fail_with

        stored = {"id": uuid4(), "creado_en": datetime.now(timezone.utc), **row}
        self.tables[table].append(stored)
        return dict(stored)


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def api(store):
    """A fresh app per test with the store dependency pointed at the fake."""
    application = create_app()
    application.dependency_overrides[get_store] = lambda: store
    return application


@pytest_asyncio.fixture
async def test_client(api):
    """
    HTTPX AsyncClient routed directly to the app (no server).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/materias")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=api)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_pdf_bytes():
    """Smallest header-only PDF; content is never parsed."""
    return b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj<<>>endobj\ntrailer<<>>\n%%EOF\n"


@pytest.fixture
def base_time():
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def at(base_time):
    """at(n) → base_time + n hours, for deterministic ordering."""
    return lambda hours: base_time + timedelta(hours=hours)
