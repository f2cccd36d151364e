from __future__ import annotations

import json
import os

import pytest

from src.checkin_desk.checkin_desk.attendees.json_attendee_repository import JsonAttendeeRepository
from src.checkin_desk.checkin_desk.attendees.model import AttendeeRecord
from src.checkin_desk.checkin_desk.core.enums import CheckInStatus, RecordSource
from src.checkin_desk.checkin_desk.core.exceptions import StoreError


def test_missing_file_loads_as_empty(tmp_path):
    repo = JsonAttendeeRepository(tmp_path / "db.json")

    assert repo.load_all() == []


def test_ensure_exists_creates_empty_list(tmp_path):
    path = tmp_path / "db.json"
    JsonAttendeeRepository(path).ensure_exists()

    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_reads_legacy_db_json_shape(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(
        json.dumps(
            [
                {"name": "张三", "phone": "13800000001", "status": "pending"},
                {"name": "李四", "phone": "13800000002"},
                {
                    "name": "王五",
                    "phone": "13800000003",
                    "status": "checked_in",
                    "checkInTime": 1767256200000,
                    "source": "web_scan",
                    "isNew": True,
                },
            ],
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )

    records = JsonAttendeeRepository(path).load_all()

    assert records[0] == AttendeeRecord(name="张三", phone="13800000001")
    assert records[1].status == CheckInStatus.PENDING
    assert records[1].source is None
    assert records[2].source == RecordSource.WEB_SCAN
    assert records[2].is_new is True
    assert records[2].check_in_time == 1767256200000


def test_imported_rows_are_written_without_source_or_is_new(tmp_path):
    path = tmp_path / "db.json"
    repo = JsonAttendeeRepository(path)

    repo.replace_all([AttendeeRecord(name="张三", phone="13800000001")])

    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"name": "张三", "phone": "13800000001", "status": "pending"}
    ]


def test_replace_all_then_load_keeps_order(tmp_path):
    repo = JsonAttendeeRepository(tmp_path / "db.json")
    records = [
        AttendeeRecord(name="B", phone="2"),
        AttendeeRecord(name="A", phone="1", status=CheckInStatus.CHECKED_IN, check_in_time=10),
    ]

    repo.replace_all(records)

    assert repo.load_all() == records


def test_corrupt_file_raises_store_error(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError):
        JsonAttendeeRepository(path).load_all()


def test_non_list_file_raises_store_error(tmp_path):
    path = tmp_path / "db.json"
    path.write_text('{"name": "A"}', encoding="utf-8")

    with pytest.raises(StoreError):
        JsonAttendeeRepository(path).load_all()


def test_failed_write_leaves_previous_content(tmp_path, monkeypatch):
    path = tmp_path / "db.json"
    repo = JsonAttendeeRepository(path)
    repo.replace_all([AttendeeRecord(name="A", phone="1")])

    def boom(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", boom)

    with pytest.raises(StoreError):
        repo.replace_all([AttendeeRecord(name="B", phone="2")])

    assert repo.load_all() == [AttendeeRecord(name="A", phone="1")]
    assert [p.name for p in tmp_path.iterdir()] == ["db.json"]
