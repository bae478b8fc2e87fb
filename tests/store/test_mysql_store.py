from __future__ import annotations

from datetime import datetime, timezone

import mysql.connector
import pytest

from src.iakwe_hr.iakwe_hr.core.enums import ErrorKind, LeaveStatus
from src.iakwe_hr.iakwe_hr.core.exceptions import ConflictError, NotFoundError, StoreError
from src.iakwe_hr.iakwe_hr.store.mysql_store import MySQLStore


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0

    def execute(self, sql, params=()):
        self._conn.executed.append((sql, params))
        if self._conn.fail_with is not None:
            raise self._conn.fail_with
        if sql.startswith("UPDATE") or sql.startswith("DELETE"):
            self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=None, rowcount=1, fail_with=None):
        self.rows = rows or []
        self.rowcount = rowcount
        self.fail_with = fail_with
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
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


def test_select_builds_parameterized_sql():
    conn = FakeConnection(rows=[{"id": "r1", "created_at": datetime(2024, 1, 1, 8, 0)}])
    store = MySQLStore(FakeFactory(conn))

    rows = store.select(
        "leave_requests",
        filters={"company_id": "c1", "status": LeaveStatus.PENDING, "approved_by": None},
        order_by="-created_at",
        limit=10,
    )

    sql, params = conn.executed[0]
    assert sql == (
        "SELECT * FROM leave_requests WHERE 1=1 AND company_id=%s AND status=%s AND approved_by IS NULL "
        "ORDER BY created_at DESC LIMIT %s"
    )
    assert params == ("c1", "Pending", 10)
    assert rows[0]["created_at"].tzinfo == timezone.utc
    assert conn.committed and conn.closed


def test_insert_writes_all_columns():
    conn = FakeConnection()
    row = MySQLStore(FakeFactory(conn)).insert("employees", {"first_name": "Ana"})

    sql, params = conn.executed[0]
    assert sql.startswith("INSERT INTO employees(first_name,id,version,created_at,updated_at)")
    assert params[0] == "Ana"
    assert params[2] == 1
    assert params[3].tzinfo is None
    assert row["version"] == 1


def test_update_checks_version():
    conn = FakeConnection(rows=[{"id": "r1", "version": 3, "status": "Approved"}])
    row = MySQLStore(FakeFactory(conn)).update("leave_requests", "r1", {"status": "Approved"}, expected_version=2)

    sql, params = conn.executed[0]
    assert sql == "UPDATE leave_requests SET status=%s, updated_at=%s, version=version+1 WHERE id=%s AND version=%s"
    assert params[0] == "Approved"
    assert params[-2:] == ("r1", 2)
    assert row["version"] == 3


def test_update_with_no_matched_row_is_conflict():
    conn = FakeConnection(rows=[{"id": "r1", "version": 4}], rowcount=0)
    with pytest.raises(ConflictError) as exc:
        MySQLStore(FakeFactory(conn)).update("leave_requests", "r1", {"status": "Approved"}, expected_version=2)
    assert exc.value.current_version == 4


def test_update_of_missing_row_is_not_found():
    conn = FakeConnection(rows=[], rowcount=0)
    with pytest.raises(NotFoundError):
        MySQLStore(FakeFactory(conn)).update("leave_requests", "r1", {"status": "Approved"}, expected_version=2)


def test_driver_errors_become_store_errors():
    conn = FakeConnection(fail_with=mysql.connector.errors.OperationalError("Lost connection"))
    with pytest.raises(StoreError) as exc:
        MySQLStore(FakeFactory(conn)).select("employees")
    assert exc.value.kind == ErrorKind.NETWORK
    assert exc.value.retryable is True
    assert conn.rolled_back and conn.closed


def test_integrity_errors_are_client_errors():
    conn = FakeConnection(fail_with=mysql.connector.errors.IntegrityError("FK fails"))
    with pytest.raises(StoreError) as exc:
        MySQLStore(FakeFactory(conn)).insert("leave_requests", {"employee_id": "nope"})
    assert exc.value.kind == ErrorKind.CLIENT
    assert exc.value.retryable is False
