import sqlite3
from typing import Sequence

from .base import BaseConnection, BaseCursor, BaseDriver


class SQLite3Cursor(BaseCursor):
    """Cursor from the standard library sqlite3 module."""

    def __init__(self, cursor: sqlite3.Cursor):
        self._cursor = cursor

    def fetchone(self):
        return self._cursor.fetchone()

    def close(self):
        self._cursor.close()


class SQLite3Connection(BaseConnection):
    """Connection from the standard library sqlite3 module."""

    def execute(self, sql: str, params: Sequence = ()):
        cursor = self.raw.execute(sql, params)
        cursor.close()

    def query(self, sql: str, params: Sequence = ()) -> SQLite3Cursor:
        return SQLite3Cursor(self.raw.execute(sql, params))

    def _close(self):
        self.raw.close()


class SQLite3Driver(BaseDriver):
    """SQLite through the standard library ``sqlite3`` DB-API module."""

    label = "sqlite"
    identifier = "sqlite3"

    @property
    def error_types(self):
        return (sqlite3.Error,)

    def connect(self, uri: str) -> SQLite3Connection:
        # isolation_level=None keeps every statement in its own transaction
        raw = sqlite3.connect(uri, uri=True, isolation_level=None)
        return SQLite3Connection(self, raw)

    def version(self) -> str:
        return sqlite3.sqlite_version
