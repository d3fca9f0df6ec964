"""Table-level helpers bound to a storage."""

from __future__ import annotations

import weakref
from typing import Any

from .v1_statement import ColumnType, QueryResult, SQLiteException, SQLiteStatement


class SQLiteTable:
    """A named table in a storage, held without keeping the storage alive."""

    def __init__(self, db=None, name=""):
        self._db = weakref.ref(db) if db is not None else None
        self.name = name

    def storage(self):
        """Return the storage, raising RuntimeError if it no longer exists."""
        db = self._db() if self._db is not None else None
        if db is None:
            raise RuntimeError("Operation on an orphaned Table!")
        return db

    def create_from_sql_string(self, query) -> bool:
        """Run a statement that must complete without producing rows."""
        stmt = SQLiteStatement(self.storage(), query)
        if stmt.execute_step() is not QueryResult.COMPLETED:
            raise SQLiteException(f"statement produced rows: {query}")
        return True

    def bind_value(self, stmt: SQLiteStatement, idx: int, value: Any) -> None:
        """Bind an int, float or str to a parameter of the statement."""
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise TypeError(f"cannot bind value of type {type(value).__name__}")
        stmt.bind(idx, value)

    def get_value(self, stmt: SQLiteStatement, idx: int, expected_type=int):
        """Read a column of the current row, checking its storage class."""
        if expected_type is int:
            if stmt.column_type(idx) is not ColumnType.INTEGER:
                raise RuntimeError("Not a SQLITE_INTEGER type column")
            return stmt.get_int_value(idx)
        if expected_type is str:
            if stmt.column_type(idx) is not ColumnType.TEXT:
                raise RuntimeError("Not a SQLITE_TEXT type column")
            return stmt.get_string_value(idx)
        raise TypeError(f"unsupported column type {expected_type!r}")

    def new_statement(self, query) -> SQLiteStatement:
        """Prepare a statement on this table's storage."""
        return SQLiteStatement(self.storage(), query)

    def execute(self, stmt: SQLiteStatement) -> bool:
        stmt.execute()
        return True

    def has_data(self, stmt: SQLiteStatement) -> bool:
        """Step once and report whether a row was produced."""
        found = False

        def mark():
            nonlocal found
            found = True
            return True

        stmt.execute_step(mark)
        return found

    def column_count(self, stmt: SQLiteStatement) -> int:
        return stmt.column_count()

    def get_last_row_id(self) -> int:
        return self.storage().get_last_row_id()