from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, Protocol

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection


class UserLocks(Protocol):
    """Serialization boundary for mutations of one user's timeline."""

    def hold(self, user_id: int) -> ContextManager[None]:
        raise NotImplementedError


class InProcessUserLocks(UserLocks):
    """One threading.Lock per user id, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def _lock_for(self, user_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(int(user_id))
            if lock is None:
                lock = threading.Lock()
                self._locks[int(user_id)] = lock
            return lock

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        with self._lock_for(user_id):
            yield


class MySQLUserLocks(UserLocks):
    """Cross-process boundary built on MySQL named locks (GET_LOCK).

    The connection that owns the lock stays open until the block exits.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, timeout_seconds: int = 10):
        self._conn_factory = conn_factory
        self._timeout = int(timeout_seconds)

    @staticmethod
    def lock_name(user_id: int) -> str:
        return f"timekeeping.timeline.{int(user_id)}"

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        name = self.lock_name(user_id)
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._timeout))
                (acquired,) = cur.fetchone()
                if acquired != 1:
                    raise ConflictError("Another change for this user is in progress, please retry")
                try:
                    yield
                finally:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                    cur.fetchone()
            finally:
                cur.close()
        finally:
            conn.close()
