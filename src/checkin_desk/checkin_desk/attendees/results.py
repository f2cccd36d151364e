"""Outcomes of a check-in attempt.

Only store failures are raised (`StoreError`); every business outcome comes back
as one of these values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .model import AttendeeRecord, Candidate


@dataclass(frozen=True)
class CheckInSuccess:
    record: AttendeeRecord
    is_new: bool


@dataclass(frozen=True)
class AlreadyCheckedIn:
    name: str
    check_in_time: Optional[int]
    claimed: bool = False


@dataclass(frozen=True)
class RequiresConfirmation:
    candidates: tuple[Candidate, ...]


@dataclass(frozen=True)
class InvalidCheckIn:
    reason: str


CheckInResult = Union[CheckInSuccess, AlreadyCheckedIn, RequiresConfirmation, InvalidCheckIn]
