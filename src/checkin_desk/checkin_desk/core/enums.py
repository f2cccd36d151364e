from __future__ import annotations

from enum import Enum


class CheckInStatus(str, Enum):
    """Check-in state of a roster entry, stored as-is in the data file."""

    PENDING = "pending"
    CHECKED_IN = "checked_in"


class RecordSource(str, Enum):
    """Provenance tag. Imported rows carry no explicit source."""

    IMPORTED = "imported"
    WEB_SCAN = "web_scan"
    SCAN_NEW = "scan_new"


class MatchType(str, Enum):
    """Why a record was offered to the operator as a possible identity."""

    SAME_NAME = "same-name"
    SIMILAR_PHONE = "similar-phone"
