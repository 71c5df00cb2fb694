"""Drivers that fail on purpose, built on the sqlite3 driver."""

import sqlite3

from sqlitebench.drivers.sqlite3_driver import SQLite3Connection, SQLite3Driver


class BrokenConnection(SQLite3Connection):
    fail_on = "INSERT"

    def execute(self, sql, params=()):
        if sql.startswith(self.fail_on):
            raise sqlite3.OperationalError("disk I/O error")
        super().execute(sql, params)


class BrokenInsertDriver(SQLite3Driver):
    label = "broken"

    def connect(self, uri):
        conn = super().connect(uri)
        return BrokenConnection(self, conn.raw)


class BrokenCreateDriver(SQLite3Driver):
    label = "broken-create"

    def connect(self, uri):
        conn = super().connect(uri)
        broken = BrokenConnection(self, conn.raw)
        broken.fail_on = "CREATE"
        return broken


class UnopenableDriver(SQLite3Driver):
    label = "unopenable"

    def connect(self, uri):
        raise sqlite3.OperationalError("unable to open database file")
