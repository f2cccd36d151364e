from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_millis
from ..common.validators import require_present
from ..core.enums import CheckInStatus, RecordSource
from ..core.exceptions import ValidationError
from .matcher import find_candidates, find_exact
from .model import AttendeeRecord, CheckInRequest
from .repository import AttendeeRepository
from .results import (
    AlreadyCheckedIn,
    CheckInResult,
    CheckInSuccess,
    InvalidCheckIn,
    RequiresConfirmation,
)

logger = logging.getLogger(__name__)


class CheckInService:
    """Use case: resolve who is at the desk and mark them present exactly once.

    Decision order:
    1. `use_existing_phone` names a stored record -> check that record in.
       An unknown override phone falls through to step 2.
    2. Exact phone match -> check in (or report the earlier check-in).
    3. No exact match, not confirmed new -> offer similar-phone / same-name
       candidates, nothing is written.
    4. Otherwise -> append a walk-in record.

    `lock` serializes every load -> mutate -> persist cycle. Pass the same lock
    to every service that writes the same store.
    """

    def __init__(self, attendees: AttendeeRepository, *, lock: Optional[threading.Lock] = None):
        self._attendees = attendees
        self._lock = lock or threading.Lock()

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    def check_in(self, request: CheckInRequest, *, now: Optional[int] = None) -> CheckInResult:
        try:
            name = require_present(request.name, "姓名")
            phone = require_present(request.phone, "手机号")
        except ValidationError as e:
            return InvalidCheckIn(reason=str(e))

        with self._lock:
            records = self._attendees.load_all()
            stamp = now if now is not None else now_millis()

            if request.use_existing_phone:
                idx = find_exact(records, request.use_existing_phone)
                if idx is not None:
                    return self._check_in_existing(records, idx, stamp, backfill_name=None, claimed=True)
                logger.info("Override phone %s not on roster, using submitted phone", request.use_existing_phone)

            idx = find_exact(records, phone)
            if idx is not None:
                return self._check_in_existing(records, idx, stamp, backfill_name=name)

            if not request.confirm_new:
                match = find_candidates(records, name, phone)
                if match.candidates:
                    logger.info("Check-in for %s needs confirmation (%d candidates)", name, len(match.candidates))
                    return RequiresConfirmation(candidates=match.candidates)

            record = AttendeeRecord(
                name=name,
                phone=phone,
                status=CheckInStatus.CHECKED_IN,
                check_in_time=stamp,
                source=RecordSource.WEB_SCAN,
                is_new=True,
            )
            self._attendees.replace_all([*records, record])
            logger.info("Walk-in %s checked in", name)
            return CheckInSuccess(record=record, is_new=True)

    def _check_in_existing(
        self,
        records: list[AttendeeRecord],
        idx: int,
        stamp: int,
        *,
        backfill_name: Optional[str],
        claimed: bool = False,
    ) -> CheckInResult:
        current = records[idx]
        if current.is_checked_in:
            logger.info("%s already checked in", current.name)
            return AlreadyCheckedIn(name=current.name, check_in_time=current.check_in_time, claimed=claimed)

        updated = replace(current, status=CheckInStatus.CHECKED_IN, check_in_time=stamp)
        if backfill_name and not current.name:
            updated = replace(updated, name=backfill_name)

        records = list(records)
        records[idx] = updated
        self._attendees.replace_all(records)
        logger.info("%s checked in", updated.name)
        return CheckInSuccess(record=updated, is_new=False)

    def list_records(self) -> list[AttendeeRecord]:
        """Newest check-ins first; records never checked in go last, in store order."""
        records = self._attendees.load_all()
        return sorted(records, key=lambda r: r.check_in_time or 0, reverse=True)
