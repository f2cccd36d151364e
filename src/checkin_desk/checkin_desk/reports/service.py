from __future__ import annotations

import io

import pandas as pd

from ..attendees.model import AttendeeRecord
from ..attendees.repository import AttendeeRepository
from ..common.datetime_utils import format_millis
from ..core.constants import (
    EXPORT_SHEET_NAME,
    NEW_FLAG_LABEL,
    SOURCE_LABEL_IMPORTED,
    SOURCE_LABEL_NEW,
    STATUS_LABELS,
)
from .stats import CheckInStats, compute_stats

EXPORT_COLUMNS = ["姓名", "手机号", "状态", "签到时间", "新人标记", "来源"]


class StatsService:
    """Read-only projection, safe to call without the write lock."""

    def __init__(self, attendees: AttendeeRepository):
        self._attendees = attendees

    def get_stats(self) -> CheckInStats:
        return compute_stats(self._attendees.load_all())


class RosterExportService:
    def __init__(self, attendees: AttendeeRepository):
        self._attendees = attendees

    def export_rows(self) -> list[dict]:
        return [self._to_row(r) for r in self._attendees.load_all()]

    def export_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.export_rows(), columns=EXPORT_COLUMNS)

    def export_xlsx(self) -> bytes:
        # Built in memory, nothing touches the disk.
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            self.export_frame().to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
        return output.getvalue()

    def _to_row(self, r: AttendeeRecord) -> dict:
        return {
            "姓名": r.name,
            "手机号": r.phone,
            "状态": STATUS_LABELS.get(r.status.value, r.status.value),
            "签到时间": format_millis(r.check_in_time),
            "新人标记": NEW_FLAG_LABEL if r.is_new else "",
            "来源": SOURCE_LABEL_NEW if r.is_walk_in else SOURCE_LABEL_IMPORTED,
        }
