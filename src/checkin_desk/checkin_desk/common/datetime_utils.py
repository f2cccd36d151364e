from __future__ import annotations

import time
from datetime import datetime
from typing import Optional


def now_millis() -> int:
    """Current time as epoch milliseconds.

    Note: Wrapped so tests can patch it easily.
    """
    return int(time.time() * 1000)


def from_millis(value: int) -> datetime:
    """Epoch milliseconds to a naive local datetime."""
    return datetime.fromtimestamp(value / 1000)


def format_millis(value: Optional[int], fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    if not value:
        return ""
    return from_millis(value).strftime(fmt)


def format_clock(value: Optional[int]) -> str:
    return format_millis(value, "%H:%M:%S")
