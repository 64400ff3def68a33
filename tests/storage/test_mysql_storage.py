from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import mysql.connector
import pytest

from src.teacher_timesheet.teacher_timesheet.core.exceptions import ConflictError, InternalError
from src.teacher_timesheet.teacher_timesheet.storage.mysql_storage import MySQLStorage


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.raise_on_execute is not None:
            raise self._conn.raise_on_execute
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows.pop(0) if self._conn.rows else None

    def fetchall(self):
        rows, self._conn.rows = self._conn.rows, []
        return rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=None, raise_on_execute=None, rowcount=0):
        self.rows = list(rows or [])
        self.raise_on_execute = raise_on_execute
        self.rowcount = rowcount
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


class FakeConnFactory:
    def __init__(self, conn=None, connect_error=None):
        self.conn = conn
        self.connect_error = connect_error

    def connect(self, *, with_database=True):
        if self.connect_error is not None:
            raise self.connect_error
        return self.conn


def _teacher_row(**overrides):
    row = {
        "id": "t1",
        "name": "Ana",
        "hourly_rate": "15.50",
        "max_billable_hours": "4.00",
        "is_checked_in": 1,
        "current_check_in_time": datetime(2025, 3, 10, 8, 0),
    }
    row.update(overrides)
    return row


def test_get_teacher_maps_row_to_utc_aware_model():
    conn = FakeConnection(rows=[_teacher_row()])
    storage = MySQLStorage(FakeConnFactory(conn))

    teacher = storage.get_teacher("t1")

    assert teacher.hourly_rate == Decimal("15.50")
    assert teacher.is_checked_in is True
    assert teacher.current_check_in_time == datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)
    assert conn.committed and conn.closed


def test_get_teacher_returns_none_when_missing():
    storage = MySQLStorage(FakeConnFactory(FakeConnection()))
    assert storage.get_teacher("missing") is None


def test_update_teacher_writes_naive_utc_and_int_flags():
    conn = FakeConnection(rows=[_teacher_row()])
    storage = MySQLStorage(FakeConnFactory(conn))
    check_in = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)

    storage.update_teacher("t1", is_checked_in=True, current_check_in_time=check_in)

    sql, params = conn.executed[0]
    assert sql == "UPDATE teachers SET is_checked_in=%s, current_check_in_time=%s WHERE id=%s"
    assert params == (1, datetime(2025, 3, 10, 8, 0), "t1")


def test_update_teacher_rejects_unknown_columns_before_touching_db():
    conn = FakeConnection()
    storage = MySQLStorage(FakeConnFactory(conn))

    with pytest.raises(ValueError):
        storage.update_teacher("t1", id="other")
    assert conn.executed == []


def test_duplicate_open_entry_becomes_conflict_and_rolls_back():
    conn = FakeConnection(raise_on_execute=mysql.connector.IntegrityError("Duplicate entry"))
    storage = MySQLStorage(FakeConnFactory(conn))

    with pytest.raises(ConflictError):
        storage.create_time_entry(
            teacher_id="t1",
            date="2025-03-10",
            check_in_time=datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc),
        )
    assert conn.rolled_back and not conn.committed


def test_driver_failure_surfaces_as_internal_error():
    conn = FakeConnection(raise_on_execute=mysql.connector.OperationalError("Lost connection"))
    storage = MySQLStorage(FakeConnFactory(conn))

    with pytest.raises(InternalError):
        storage.list_teachers()
    assert conn.rolled_back and conn.closed


def test_unreachable_server_surfaces_as_internal_error():
    storage = MySQLStorage(FakeConnFactory(connect_error=mysql.connector.InterfaceError("refused")))

    with pytest.raises(InternalError):
        storage.get_app_settings()


def test_time_entry_row_keeps_open_session_fields_empty():
    conn = FakeConnection(
        rows=[
            {
                "id": "e1",
                "teacher_id": "t1",
                "entry_date": "2025-03-10",
                "check_in_time": datetime(2025, 3, 10, 8, 0),
                "check_out_time": None,
                "hours_worked": None,
                "billable_hours": None,
                "pay": None,
            }
        ]
    )
    storage = MySQLStorage(FakeConnFactory(conn))

    (entry,) = storage.list_time_entries_by_teacher("t1")

    assert entry.is_open
    assert entry.pay is None


def test_delete_teacher_cascade_runs_in_one_transaction():
    conn = FakeConnection(rows=[{"id": "t1"}], rowcount=2)
    storage = MySQLStorage(FakeConnFactory(conn))

    assert storage.delete_teacher_cascade("t1") == 2

    statements = [sql for sql, _ in conn.executed]
    assert statements == [
        "SELECT id FROM teachers WHERE id=%s FOR UPDATE",
        "DELETE FROM time_entries WHERE teacher_id=%s",
        "DELETE FROM teachers WHERE id=%s",
    ]
    assert conn.committed and conn.closed


def test_delete_teacher_cascade_missing_teacher_deletes_nothing():
    conn = FakeConnection()
    storage = MySQLStorage(FakeConnFactory(conn))

    assert storage.delete_teacher_cascade("missing") is None
    assert len(conn.executed) == 1
