import mysql.connector
import pytest
from mysql.connector import errorcode

from attendance_tracker.core.exceptions import ConflictError, StorageError
from attendance_tracker.database.bootstrap import SCHEMA_PATH, apply_schema, iter_sql_statements
from attendance_tracker.database.mysql_base import db_cursor


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, sql, params=None):
        if self.conn.fail_with is not None:
            raise self.conn.fail_with
        self.conn.executed.append(sql)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


def test_split_ignores_semicolons_in_quotes_and_comments():
    sql = "-- header; comment\nCREATE TABLE a (x VARCHAR(3) DEFAULT ';');\n\nINSERT INTO a VALUES ('b');"

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x VARCHAR(3) DEFAULT ';')",
        "INSERT INTO a VALUES ('b')",
    ]


def test_apply_schema_creates_all_tables():
    conn = FakeConnection()

    count = apply_schema(FakeFactory(conn))

    assert count == 3
    assert conn.committed and conn.closed
    assert all(stmt.startswith("CREATE TABLE IF NOT EXISTS") for stmt in conn.executed)
    assert SCHEMA_PATH.exists()


def test_duplicate_key_becomes_conflict():
    conn = FakeConnection(fail_with=mysql.connector.IntegrityError(msg="dup", errno=errorcode.ER_DUP_ENTRY))

    with pytest.raises(ConflictError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("INSERT ...")
    assert conn.rolled_back and conn.closed


def test_connector_errors_become_storage_errors():
    conn = FakeConnection(fail_with=mysql.connector.OperationalError(msg="gone away", errno=2006))

    with pytest.raises(StorageError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("SELECT 1")
    assert conn.rolled_back
