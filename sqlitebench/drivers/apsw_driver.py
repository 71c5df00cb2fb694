from typing import Sequence

import apsw

from .base import BaseConnection, BaseCursor, BaseDriver

_OPEN_FLAGS = apsw.SQLITE_OPEN_READWRITE | apsw.SQLITE_OPEN_CREATE | apsw.SQLITE_OPEN_URI


class APSWCursor(BaseCursor):
    """Cursor from apsw."""

    def __init__(self, cursor: apsw.Cursor):
        self._cursor = cursor

    def fetchone(self):
        return self._cursor.fetchone()

    def close(self):
        # force discards rows that were never fetched
        self._cursor.close(True)


class APSWConnection(BaseConnection):
    """Connection from apsw.

    apsw runs in autocommit mode unless a transaction is opened explicitly,
    which matches the sqlite3 driver opened with ``isolation_level=None``.
    """

    def execute(self, sql: str, params: Sequence = ()):
        cursor = self.raw.cursor()
        try:
            cursor.execute(sql, tuple(params))
        finally:
            cursor.close()

    def query(self, sql: str, params: Sequence = ()) -> APSWCursor:
        cursor = self.raw.cursor()
        try:
            cursor.execute(sql, tuple(params))
        except apsw.Error:
            cursor.close()
            raise
        return APSWCursor(cursor)

    def _close(self):
        self.raw.close()


class APSWDriver(BaseDriver):
    """SQLite through ``apsw`` (Another Python SQLite Wrapper)."""

    label = "apsw"
    identifier = "apsw"

    @property
    def error_types(self):
        return (apsw.Error,)

    def connect(self, uri: str) -> APSWConnection:
        # Without shared cache SQLite silently opens a private database instead
        if "cache=shared" in uri and "OMIT_SHARED_CACHE" in apsw.compile_options:
            raise apsw.CantOpenError(
                f"{uri}: this apsw build omits shared cache (SQLITE_OMIT_SHARED_CACHE), use a memdb URI"
            )
        raw = apsw.Connection(uri, flags=_OPEN_FLAGS)
        return APSWConnection(self, raw)

    def version(self) -> str:
        return f"{apsw.apswversion()} (SQLite {apsw.sqlite_lib_version()})"
