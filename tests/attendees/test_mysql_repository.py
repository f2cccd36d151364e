from __future__ import annotations

import mysql.connector
import pytest

from src.checkin_desk.checkin_desk.attendees.model import AttendeeRecord
from src.checkin_desk.checkin_desk.attendees.mysql_attendee_repository import MySQLAttendeeRepository
from src.checkin_desk.checkin_desk.core.enums import CheckInStatus, RecordSource
from src.checkin_desk.checkin_desk.core.exceptions import StoreError


class FakeCursor:
    def __init__(self, rows=None, fail_on=None):
        self.rows = rows or []
        self.fail_on = fail_on
        self.executed = []
        self.many = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append(" ".join(sql.split()))

    def executemany(self, sql, seq):
        if self.fail_on == "insert":
            raise mysql.connector.Error("insert failed")
        self.many.append((" ".join(sql.split()), list(seq)))

    def fetchall(self):
        return self.rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor):
        self.conn = FakeConnection(cursor)

    def connect(self, *, with_database=True):
        return self.conn


def test_load_all_maps_rows_in_position_order():
    cursor = FakeCursor(
        rows=[
            {"name": "张三", "phone": "138", "status": "pending", "check_in_time": None, "source": None, "is_new": 0},
            {"name": "王五", "phone": "139", "status": "checked_in", "check_in_time": 42, "source": "web_scan", "is_new": 1},
        ]
    )
    repo = MySQLAttendeeRepository(FakeConnFactory(cursor))

    records = repo.load_all()

    assert "ORDER BY position ASC" in cursor.executed[0]
    assert records[0] == AttendeeRecord(name="张三", phone="138")
    assert records[1] == AttendeeRecord(
        name="王五",
        phone="139",
        status=CheckInStatus.CHECKED_IN,
        check_in_time=42,
        source=RecordSource.WEB_SCAN,
        is_new=True,
    )


def test_replace_all_deletes_and_inserts_in_one_transaction():
    cursor = FakeCursor()
    factory = FakeConnFactory(cursor)
    repo = MySQLAttendeeRepository(factory)

    repo.replace_all(
        [
            AttendeeRecord(name="A", phone="1"),
            AttendeeRecord(name="B", phone="2", status=CheckInStatus.CHECKED_IN, check_in_time=7, source=RecordSource.WEB_SCAN, is_new=True),
        ]
    )

    assert cursor.executed == ["DELETE FROM attendees"]
    _, params = cursor.many[0]
    assert params == [
        (0, "A", "1", "pending", None, None, 0),
        (1, "B", "2", "checked_in", 7, "web_scan", 1),
    ]
    assert factory.conn.committed
    assert factory.conn.closed


def test_failed_insert_rolls_back_and_raises_store_error():
    cursor = FakeCursor(fail_on="insert")
    factory = FakeConnFactory(cursor)

    with pytest.raises(StoreError):
        MySQLAttendeeRepository(factory).replace_all([AttendeeRecord(name="A", phone="1")])

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert cursor.closed
