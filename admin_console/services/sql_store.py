"""Remote store backed by a direct SQLAlchemy connection.

Used for local development and tests. It honours the same contract as the
REST backend: per-relation reads and writes, no joins, and upserts resolved by
the database's ``ON CONFLICT`` clause.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Table, and_, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from admin_console import models  # noqa: F401  (registers tables on Base.metadata)
from admin_console.database import Base
from admin_console.errors import StoreError
from admin_console.services.store import RemoteStore, Row

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _store_error(error: SQLAlchemyError) -> StoreError:
    """Translate a database error into a StoreError carrying its SQLSTATE."""
    orig = getattr(error, "orig", None)
    code = getattr(orig, "pgcode", None)
    if isinstance(error, IntegrityError):
        return StoreError(str(orig or error), status_code=409, code=code or "23000")
    if isinstance(error, OperationalError):
        return StoreError(str(orig or error), status_code=503, code=code)
    return StoreError(str(orig or error), status_code=500, code=code)


class SqlStore(RemoteStore):
    """Store that talks to the database through SQLAlchemy Core."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"Store statement failed: {e}")
            raise _store_error(e) from e
        finally:
            session.close()

    def _table(self, relation: str) -> Table:
        table = Base.metadata.tables.get(relation)
        if table is None:
            raise StoreError(f"Unknown relation: {relation}", status_code=404, code="42P01")
        return table

    def _column(self, table: Table, name: str):
        if name not in table.c:
            raise StoreError(
                f"Unknown column {table.name}.{name}", status_code=400, code="42703"
            )
        return table.c[name]

    async def select(
        self,
        relation: str,
        columns: Sequence[str],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        table = self._table(relation)
        stmt = select(*(self._column(table, name) for name in columns))
        if order_by:
            column = self._column(table, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())

        with self._session() as session:
            return [dict(row._mapping) for row in session.execute(stmt)]

    async def count(self, relation: str) -> int:
        table = self._table(relation)
        with self._session() as session:
            return session.execute(select(func.count()).select_from(table)).scalar_one()

    async def insert(self, relation: str, row: Mapping[str, Any]) -> Row:
        table = self._table(relation)
        stmt = table.insert().values(**row).returning(*table.c)
        with self._session() as session:
            return dict(session.execute(stmt).one()._mapping)

    async def delete(self, relation: str, match: Mapping[str, Any]) -> int:
        if not match:
            raise StoreError("Refusing to delete without a filter", status_code=400)
        table = self._table(relation)
        condition = and_(*(self._column(table, name) == value for name, value in match.items()))
        with self._session() as session:
            return session.execute(table.delete().where(condition)).rowcount

    async def upsert(self, relation: str, row: Mapping[str, Any], on_conflict: str) -> Row:
        table = self._table(relation)
        self._column(table, on_conflict)

        with self._session() as session:
            dialect = session.get_bind().dialect.name
            dialect_insert = _DIALECT_INSERTS.get(dialect)
            if dialect_insert is None:
                raise StoreError(f"Upsert is not supported on {dialect}", status_code=501)

            stmt = dialect_insert(table).values(**row)
            updates = {name: stmt.excluded[name] for name in row if name != on_conflict}
            if "updated_at" in table.c:
                updates["updated_at"] = func.now()
            stmt = stmt.on_conflict_do_update(
                index_elements=[table.c[on_conflict]],
                set_=updates or {on_conflict: stmt.excluded[on_conflict]},
            ).returning(*table.c)
            return dict(session.execute(stmt).one()._mapping)
