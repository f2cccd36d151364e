from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import CheckInStatus, MatchType, RecordSource


@dataclass(frozen=True)
class AttendeeRecord:
    """Domain entity: one guest-list entry.

    `source=None` means the row came from a roster import. Records are never
    mutated in place; the service swaps in a `dataclasses.replace` copy.
    """

    name: str
    phone: str
    status: CheckInStatus = CheckInStatus.PENDING
    check_in_time: Optional[int] = None
    source: Optional[RecordSource] = None
    is_new: bool = False

    @property
    def is_checked_in(self) -> bool:
        return self.status == CheckInStatus.CHECKED_IN

    @property
    def is_walk_in(self) -> bool:
        return self.is_new or self.source == RecordSource.SCAN_NEW

    def to_dict(self) -> dict[str, Any]:
        """Stored form (camelCase keys, optional fields omitted when unset)."""
        data: dict[str, Any] = {
            "name": self.name,
            "phone": self.phone,
            "status": self.status.value,
        }
        if self.check_in_time is not None:
            data["checkInTime"] = self.check_in_time
        if self.source is not None:
            data["source"] = self.source.value
        if self.is_new:
            data["isNew"] = True
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendeeRecord":
        check_in_time = data.get("checkInTime")
        source = data.get("source")
        return cls(
            name=str(data.get("name") or ""),
            phone=str(data.get("phone") or ""),
            status=CheckInStatus(data.get("status") or CheckInStatus.PENDING.value),
            check_in_time=int(check_in_time) if check_in_time is not None else None,
            source=RecordSource(source) if source else None,
            is_new=bool(data.get("isNew")),
        )


@dataclass(frozen=True)
class RosterRow:
    """One row of an uploaded guest list, already trimmed."""

    name: str
    phone: str


@dataclass(frozen=True)
class Candidate:
    """Possible identity offered to the operator during disambiguation."""

    name: str
    phone: str
    masked_phone: str
    match_type: MatchType


@dataclass(frozen=True)
class CheckInRequest:
    name: Optional[str]
    phone: Optional[str]
    confirm_new: bool = False
    use_existing_phone: Optional[str] = None
