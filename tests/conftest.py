from __future__ import annotations

from typing import Sequence

import pytest

from src.checkin_desk.checkin_desk.attendees.model import AttendeeRecord


class InMemoryAttendees:
    def __init__(self, records: Sequence[AttendeeRecord] = ()):
        self._records = list(records)
        self.writes = 0

    def load_all(self) -> list[AttendeeRecord]:
        return list(self._records)

    def replace_all(self, records: Sequence[AttendeeRecord]) -> None:
        self.writes += 1
        self._records = list(records)


@pytest.fixture()
def fixed_now() -> int:
    # 2026-01-01 08:30:00 UTC in epoch millis
    return 1767256200000


@pytest.fixture()
def make_repo():
    return InMemoryAttendees
