"""
Aula Backend — Relational Store Client
========================================

What:  The narrow query interface every resource handler talks to.
Why:   Handlers only ever need "select all rows, ordered, optionally
       filtered" and "insert one row and give it back". Keeping that behind
       an abstract `Store` lets tests inject an in-memory fake and keeps SQL
       out of the services.
How:   `Query` describes a select; `SQLAlchemyStore` compiles it to a
       SQLAlchemy Core statement against `Base.metadata` and runs it on the
       request's AsyncSession.
Who:   Constructed per request by the `get_store` dependency.

Supported operations (one network round trip each):
    select(Query)          → List[Dict]   rows as plain dicts
    insert(table, row)     → Dict         the stored row, with generated
                                          id / creado_en
    Failures of either, including an unreachable database, raise StoreError.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

from fastapi import Depends
from sqlalchemy import Table, insert, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

import app.models  # noqa: F401  (registers tables on Base.metadata)
from app.database import Base, get_db_session
from app.exceptions import StoreError

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Query description
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Eq:
    """column = value"""
    column: str
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """OR-combination of equality filters, e.g. remitente_id = u OR receptor_id = u."""
    clauses: Tuple[Eq, ...]


Filter = Union[Eq, AnyOf]


@dataclass(frozen=True)
class Query:
    """
    A select-all over one table.

    Attributes:
        table:      Table name ("tareas")
        order_by:   Column to sort on
        ascending:  Sort direction
        filters:    ANDed together; empty means the whole table
    """
    table: str
    order_by: str
    ascending: bool = False
    filters: Tuple[Filter, ...] = field(default_factory=tuple)

    def where(self, *filters: Filter) -> "Query":
        return Query(
            table=self.table,
            order_by=self.order_by,
            ascending=self.ascending,
            filters=self.filters + tuple(filters),
        )


# ══════════════════════════════════════════════════════════════════════════
# Store interface
# ══════════════════════════════════════════════════════════════════════════

class Store(ABC):
    """
    Abstract relational store.

    Contract:
        - Each call is a single atomic operation against the backing store
        - Ordering and filtering are done by the store, never in Python
        - Any backend failure surfaces as StoreError (never a driver exception)
    """

    @abstractmethod
    async def select(self, query: Query) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        ...


class SQLAlchemyStore(Store):
    """
    Store backed by an async SQLAlchemy session (asyncpg in production,
    aiosqlite in tests).

    Null ordering follows the database default (Postgres: NULLs last for
    ASC, first for DESC).
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise StoreError(
                message=f"Unknown table '{name}'",
                context={"table": name},
            )

    @staticmethod
    def _clause(table: Table, flt: Filter):
        if isinstance(flt, AnyOf):
            return or_(*(table.c[eq.column] == eq.value for eq in flt.clauses))
        return table.c[flt.column] == flt.value

    async def select(self, query: Query) -> List[Dict[str, Any]]:
        table = self._table(query.table)
        column = table.c[query.order_by]
        stmt = select(table).order_by(column.asc() if query.ascending else column.desc())
        for flt in query.filters:
            stmt = stmt.where(self._clause(table, flt))

        try:
            result = await self._session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Select on %s failed: %s", query.table, str(e))
            raise StoreError(
                message=f"Error loading {query.table}",
                context={"table": query.table, "error_type": type(e).__name__},
            )
        return [dict(row) for row in result.mappings().all()]

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        target = self._table(table)
        stmt = insert(target).values(**row).returning(*target.c)

        try:
            result = await self._session.execute(stmt)
            stored = result.mappings().one()
            await self._session.commit()
        except (SQLAlchemyError, OSError) as e:
            await self._session.rollback()
            logger.error("Insert into %s failed: %s", table, str(e))
            raise StoreError(
                message=f"Error creating {table} row",
                context={"table": table, "error_type": type(e).__name__},
            )
        return dict(stored)


# ── Dependency ────────────────────────────────────────────────────────────
async def get_store(db: AsyncSession = Depends(get_db_session)) -> Store:
    """
    FastAPI dependency providing the store for one request.

    Tests replace it with `app.dependency_overrides[get_store]`.
    """
    return SQLAlchemyStore(db)
