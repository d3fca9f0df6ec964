"""Prepared SQL statements with a step-wise execution model."""

from __future__ import annotations

import math
import re
import sqlite3
from enum import Enum
from typing import Any, Callable, Optional

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_PARAM_COUNT_RE = re.compile(r"uses (\d+)")


class SQLiteException(Exception):
    """Raised when the database reports an error."""


class QueryResult(Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    ABORTED = "aborted"


class ColumnType(Enum):
    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"
    BLOB = "BLOB"


def _sql_text(sql: Any) -> str:
    if isinstance(sql, str):
        return sql
    if hasattr(sql, "string"):
        return sql.string()
    return str(sql)


def _number_from_text(value: Any) -> float | int:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    match = _NUMBER_RE.match(value)
    if not match:
        return 0
    text = match.group(1)
    try:
        return int(text)
    except ValueError:
        return float(text)


def _to_int64(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (str, bytes)):
        value = _number_from_text(value)
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if value >= 2**63:
            return _INT64_MAX
        if value <= -(2**63):
            return _INT64_MIN
        return int(value)
    return int(value)


def _to_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, (str, bytes)):
        value = _number_from_text(value)
    return float(value)


class SQLiteStatement:
    """A statement bound to a storage, executed row by row."""

    def __init__(self, db=None, sql=None):
        self._db = None
        self._sql: Optional[str] = None
        self._param_count = 0
        self._bindings: dict[int, Any] = {}
        self._cursor: Optional[sqlite3.Cursor] = None
        self._row: Optional[tuple] = None
        if db is not None:
            self.attach(db, sql)

    def attach(self, db, sql=None):
        """Attach to a storage and, if given, prepare the SQL."""
        self._reset()
        self._db = db
        self._sql = None
        self._bindings = {}
        if sql is not None:
            self.prepare(sql)

    def _connection(self) -> sqlite3.Connection:
        if self._db is None:
            raise SQLiteException("statement is not attached to a storage")
        conn = self._db.handle()
        if conn is None:
            raise SQLiteException("database is not open")
        return conn

    def prepare(self, sql):
        """Compile the SQL, raising SQLiteException if it is invalid."""
        text = _sql_text(sql)
        conn = self._connection()
        self._reset()
        self._bindings = {}
        try:
            conn.execute("EXPLAIN " + text, ()).close()
            count = 0
        except sqlite3.ProgrammingError as exc:
            match = _PARAM_COUNT_RE.search(str(exc))
            if not match:
                raise SQLiteException(f"{exc}: {text}") from exc
            count = int(match.group(1))
        except sqlite3.Error as exc:
            raise SQLiteException(f"{exc}: {text}") from exc
        self._sql = text
        self._param_count = count

    def bind(self, idx, value):
        """Bind a value to the 1-based parameter index."""
        if self._sql is None:
            raise SQLiteException("statement is not prepared")
        if not 1 <= idx <= self._param_count:
            raise SQLiteException(f"bind index {idx} out of range")
        if isinstance(value, bool):
            value = int(value)
        if isinstance(value, int):
            if value > _INT64_MAX:
                value = ((value + 2**63) % 2**64) - 2**63
            elif value < _INT64_MIN:
                raise SQLiteException(f"integer {value} out of range")
        elif not isinstance(value, (str, float, bytes, type(None))):
            raise TypeError(f"cannot bind value of type {type(value).__name__}")
        self._bindings[idx] = value

    def bind_all(self, values):
        """Bind a sequence of values to parameters 1..n."""
        for idx, value in enumerate(values, start=1):
            self.bind(idx, value)

    def _reset(self):
        if self._cursor is not None:
            try:
                self._cursor.close()
            except sqlite3.Error:
                pass
        self._cursor = None
        self._row = None

    def execute_step(self, func: Optional[Callable[[], bool]] = None) -> QueryResult:
        """Advance one row; call func on a row and report the outcome."""
        if self._sql is None:
            raise SQLiteException("statement is not prepared")
        try:
            if self._cursor is None:
                params = [self._bindings.get(i) for i in range(1, self._param_count + 1)]
                self._cursor = self._connection().execute(self._sql, params)
            row = self._cursor.fetchone()
        except sqlite3.Error as exc:
            raise SQLiteException(str(exc)) from exc
        if row is None:
            self._row = None
            return QueryResult.COMPLETED
        self._row = row
        if func is None or func():
            return QueryResult.ONGOING
        return QueryResult.ABORTED

    def execute(self, func: Optional[Callable[[], bool]] = None) -> bool:
        """Run to completion; False if func stopped the iteration."""
        try:
            result = self.execute_step(func)
            while result is QueryResult.ONGOING:
                result = self.execute_step(func)
        except SQLiteException:
            self._reset()
            raise
        self._reset()
        self._bindings = {}
        return result is QueryResult.COMPLETED

    def _value(self, idx):
        if self._row is None:
            return None
        return self._row[idx]

    def get_long_value(self, idx) -> int:
        return _to_int64(self._value(idx))

    def get_ulong_value(self, idx) -> int:
        return _to_int64(self._value(idx)) % 2**64

    def get_int_value(self, idx) -> int:
        return ((_to_int64(self._value(idx)) + 2**31) % 2**32) - 2**31

    def get_double_value(self, idx) -> float:
        return _to_float(self._value(idx))

    def get_string_value(self, idx) -> str:
        value = self._value(idx)
        if value is None:
            return ""
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return str(value)

    def column_type(self, idx) -> ColumnType:
        value = self._value(idx)
        if isinstance(value, str):
            return ColumnType.TEXT
        if isinstance(value, int):
            return ColumnType.INTEGER
        if isinstance(value, float):
            return ColumnType.REAL
        if isinstance(value, bytes):
            return ColumnType.BLOB
        raise RuntimeError("Unhandled sqlite3 type")

    def is_null(self, idx) -> bool:
        return self._value(idx) is None

    def column_count(self) -> int:
        if self._cursor is None or self._cursor.description is None:
            return 0
        return len(self._cursor.description)