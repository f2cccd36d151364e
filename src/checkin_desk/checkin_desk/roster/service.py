from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from ..attendees.model import AttendeeRecord, RosterRow
from ..attendees.repository import AttendeeRepository
from ..common.validators import require_non_empty

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: replace the whole guest list with an uploaded roster."""

    def __init__(self, attendees: AttendeeRepository, *, lock: Optional[threading.Lock] = None):
        self._attendees = attendees
        self._lock = lock or threading.Lock()

    def import_roster(self, rows: Iterable[RosterRow]) -> int:
        records = [
            AttendeeRecord(
                name=require_non_empty(row.name, "姓名"),
                phone=require_non_empty(row.phone, "手机号"),
            )
            for row in rows
        ]
        with self._lock:
            self._attendees.replace_all(records)
        logger.info("Imported roster with %d attendees", len(records))
        return len(records)
