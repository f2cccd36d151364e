from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendeeRecord


class AttendeeRepository(Protocol):
    """Whole-list store for attendee records.

    There is no partial update: callers load everything, change it in memory and
    write the full list back. Implementations raise `StoreError` on I/O failure
    and must leave the previous list intact when `replace_all` fails.
    """

    def load_all(self) -> list[AttendeeRecord]:
        raise NotImplementedError

    def replace_all(self, records: Sequence[AttendeeRecord]) -> None:
        raise NotImplementedError
