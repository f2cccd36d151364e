from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..attendees.model import AttendeeRecord


@dataclass(frozen=True)
class CheckInStats:
    total: int
    checked_in: int
    new_checked_in: int
    original_checked_in: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "checkedIn": self.checked_in,
            "newCheckedIn": self.new_checked_in,
            "originalCheckedIn": self.original_checked_in,
        }


def compute_stats(records: Iterable[AttendeeRecord]) -> CheckInStats:
    """Aggregate counts for the dashboard.

    `total` is the original roster size (walk-ins excluded); walk-ins do count
    towards `checked_in` and `new_checked_in`.
    """
    total = 0
    checked_in = 0
    new_checked_in = 0
    for r in records:
        if not r.is_new:
            total += 1
        if r.is_checked_in:
            checked_in += 1
            if r.is_walk_in:
                new_checked_in += 1

    return CheckInStats(
        total=total,
        checked_in=checked_in,
        new_checked_in=new_checked_in,
        original_checked_in=checked_in - new_checked_in,
    )
