"""Database storage: connection, transactions and table helpers."""

from __future__ import annotations

import sqlite3
import threading
from enum import Enum
from typing import Optional

from .v1_statement import SQLiteException, SQLiteStatement


class Flags(Enum):
    ENFORCE_FOREIGN_KEYS = "enforce_foreign_keys"


class SQLiteStorage:
    """An SQLite database at a path."""

    def __init__(self, path):
        self.path = str(path)
        self._conn: Optional[sqlite3.Connection] = None
        self._flags: set[Flags] = set()
        self._lock = threading.Lock()
        self._on_transaction = False
        self._begin: Optional[SQLiteStatement] = None
        self._commit: Optional[SQLiteStatement] = None
        self._abort: Optional[SQLiteStatement] = None

    def open(self) -> bool:
        """Open (creating if needed) the database."""
        try:
            self._conn = sqlite3.connect(
                self.path, timeout=1.0, isolation_level=None, check_same_thread=False
            )
        except sqlite3.Error as exc:
            raise SQLiteException(str(exc)) from exc
        self._begin = SQLiteStatement(self, "BEGIN TRANSACTION;")
        self._commit = SQLiteStatement(self, "COMMIT TRANSACTION;")
        self._abort = SQLiteStatement(self, "ROLLBACK TRANSACTION;")
        for flag in self._flags:
            if flag is Flags.ENFORCE_FOREIGN_KEYS:
                try:
                    self._conn.execute("PRAGMA foreign_keys = ON;")
                except sqlite3.Error as exc:
                    raise SQLiteException(str(exc)) from exc
            else:
                raise ValueError("Unhandled case for flag")
        return True

    def close(self) -> bool:
        if self._conn is not None:
            self._conn.close()
        self._conn = None
        return True

    def handle(self) -> Optional[sqlite3.Connection]:
        return self._conn

    def _require(self) -> sqlite3.Connection:
        if self._conn is None:
            raise SQLiteException("database is not open")
        return self._conn

    def drop_table(self, table) -> bool:
        try:
            self._require().execute(f"DROP TABLE {table};")
        except sqlite3.Error as exc:
            raise SQLiteException(str(exc)) from exc
        return True

    def table_exists(self, table) -> bool:
        stmt = SQLiteStatement(
            self, "SELECT name FROM sqlite_master WHERE type='table' AND name=?;"
        )
        stmt.bind(1, table)
        found = False

        def mark():
            nonlocal found
            found = True
            return True

        stmt.execute(mark)
        return found

    def start_transaction(self) -> bool:
        with self._lock:
            if self._on_transaction:
                return False
            self._begin.execute()
            self._on_transaction = True
            return True

    def commit_transaction(self) -> bool:
        with self._lock:
            if not self._on_transaction:
                return False
            self._commit.execute()
            self._on_transaction = False
            return True

    def abort_transaction(self) -> bool:
        with self._lock:
            if not self._on_transaction:
                return False
            self._abort.execute()
            self._on_transaction = False
            return True

    def get_last_row_id(self) -> int:
        return self._require().execute("SELECT last_insert_rowid()").fetchone()[0]

    def set_flag(self, flag: Flags) -> None:
        self._flags.add(flag)