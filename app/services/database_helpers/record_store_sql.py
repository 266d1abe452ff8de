# /app/services/database_helpers/record_store_sql.py

"""
This module is the direct interface to the database for every record
collection in the academy schema.

It exposes one small, collection-oriented API (`select`, `insert`, `update`,
`delete`, `count`) that works on plain dictionaries keyed by column name, so the
services above it never touch SQLAlchemy. Each call checks out its own
connection from the engine, which makes independent reads safe to run on
separate worker threads.

Failures are translated into two exception types. `TableNotFoundError` is kept
distinct from every other `RecordStoreError` because callers degrade a missing
table to an empty result while the schema is rolled out incrementally.
"""

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import Table, and_, delete, func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import Base

# Postgres SQLSTATE for "relation does not exist".
UNDEFINED_TABLE = "42P01"
_MISSING_TABLE_MARKERS = ("does not exist", "no such table", "undefined table")


class RecordStoreError(Exception):
    """Any failure while talking to the record store."""


class TableNotFoundError(RecordStoreError):
    """The requested collection does not exist (yet)."""

    def __init__(self, table: str, detail: str = ""):
        self.table = table
        super().__init__(f"Table '{table}' does not exist. {detail}".strip())


def _is_missing_table(exc: SQLAlchemyError) -> bool:
    original = getattr(exc, "orig", None)
    if getattr(original, "pgcode", None) == UNDEFINED_TABLE:
        return True
    message = str(original if original is not None else exc).lower()
    return any(marker in message for marker in _MISSING_TABLE_MARKERS)


def _build_condition(table: Table, key: str, value: Any):
    name, _, op = key.partition("__")
    if name not in table.c:
        raise RecordStoreError(f"Unknown column '{name}' on table '{table.name}'.")
    column = table.c[name]
    op = op or "eq"
    if op == "eq":
        return column.is_(None) if value is None else column == value
    if op == "ne":
        return column.is_not(None) if value is None else column != value
    if op == "in":
        return column.in_(list(value))
    if op == "gte":
        return column >= value
    if op == "gt":
        return column > value
    if op == "lte":
        return column <= value
    if op == "lt":
        return column < value
    raise RecordStoreError(f"Unsupported filter operator '{op}'.")


class RecordStoreSQL:
    def __init__(self, engine: Engine, metadata=None):
        self.engine = engine
        self.metadata = metadata if metadata is not None else Base.metadata

    # --- Helpers ---

    def _table(self, name: str) -> Table:
        table = self.metadata.tables.get(name)
        if table is None:
            raise TableNotFoundError(name, "It is not part of the schema.")
        return table

    def _where(self, table: Table, filters: Optional[Dict[str, Any]]):
        if not filters:
            return None
        return and_(*[_build_condition(table, key, value) for key, value in filters.items()])

    def _run(self, table_name: str, statement, write: bool = False) -> List[Dict[str, Any]]:
        try:
            if write:
                with self.engine.begin() as conn:
                    result = conn.execute(statement)
                    return [dict(row._mapping) for row in result] if result.returns_rows else []
            with self.engine.connect() as conn:
                return [dict(row._mapping) for row in conn.execute(statement)]
        except SQLAlchemyError as exc:
            if _is_missing_table(exc):
                raise TableNotFoundError(table_name, str(getattr(exc, "orig", exc))) from exc
            raise RecordStoreError(f"Query on '{table_name}' failed: {exc}") from exc

    # --- Collection operations ---

    def select(
        self,
        table_name: str,
        columns: Optional[Iterable[str]] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        table = self._table(table_name)
        selected = [table.c[c] for c in columns] if columns else [table]
        statement = select(*selected)
        condition = self._where(table, filters)
        if condition is not None:
            statement = statement.where(condition)
        if order_by:
            statement = statement.order_by(table.c[order_by].desc() if descending else table.c[order_by].asc())
        if limit is not None:
            statement = statement.limit(limit)
        return self._run(table_name, statement)

    def insert(self, table_name: str, row: Dict[str, Any]) -> Dict[str, Any]:
        table = self._table(table_name)
        statement = insert(table).values(**row).returning(*table.c)
        return self._run(table_name, statement, write=True)[0]

    def update(self, table_name: str, values: Dict[str, Any], filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Unconditional overwrite of `values` on every matching row. Returns the updated rows."""
        if not filters:
            raise RecordStoreError("Refusing to update without a filter.")
        table = self._table(table_name)
        statement = update(table).where(self._where(table, filters)).values(**values).returning(*table.c)
        return self._run(table_name, statement, write=True)

    def delete(self, table_name: str, filters: Dict[str, Any]) -> int:
        if not filters:
            raise RecordStoreError("Refusing to delete without a filter.")
        table = self._table(table_name)
        statement = delete(table).where(self._where(table, filters)).returning(table.c.id)
        return len(self._run(table_name, statement, write=True))

    def count(self, table_name: str, filters: Optional[Dict[str, Any]] = None) -> int:
        table = self._table(table_name)
        statement = select(func.count()).select_from(table)
        condition = self._where(table, filters)
        if condition is not None:
            statement = statement.where(condition)
        rows = self._run(table_name, statement)
        return int(next(iter(rows[0].values()))) if rows else 0
