"""Scoped transactions over a storage."""

from __future__ import annotations

import weakref
from enum import Enum


class DestructorAction(Enum):
    COMMIT = "commit"
    ABORT = "abort"


class _Status(Enum):
    IDLE = "idle"
    STARTED = "started"
    COMMITTED = "committed"
    ABORTED = "aborted"


class SQLiteTransaction:
    """Starts a transaction; commits or aborts it when closed."""

    def __init__(self, db, action=DestructorAction.ABORT):
        self._db = weakref.ref(db)
        self._action = action
        self._status = _Status.IDLE
        if db.start_transaction():
            self._status = _Status.STARTED

    def _finish(self, commit: bool) -> None:
        db = self._db()
        if self._status is _Status.STARTED and db is not None:
            if commit:
                db.commit_transaction()
                self._status = _Status.COMMITTED
            else:
                db.abort_transaction()
                self._status = _Status.ABORTED

    def abort(self) -> None:
        self._finish(False)

    def commit(self) -> None:
        self._finish(True)

    def close(self) -> None:
        """Apply the configured action if still pending."""
        self._finish(self._action is DestructorAction.COMMIT)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass