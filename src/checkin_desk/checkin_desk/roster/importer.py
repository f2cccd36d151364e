"""Guest list spreadsheet reader.

Only the first sheet is read. Headers are matched against a few common
Chinese/English aliases; rows without both a name and a phone are dropped.
"""

from __future__ import annotations

import re
import zipfile
from pathlib import PurePath
from typing import IO, Any, Iterable, Mapping, Optional

import pandas as pd

from ..attendees.model import RosterRow
from ..core.constants import NAME_HEADERS, PHONE_HEADERS
from ..core.exceptions import RosterFormatError

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}

# Spreadsheet apps turn long digit strings into floats: 13800000001.0
_FLOAT_DIGITS = re.compile(r"^(\d+)\.0+$")


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    m = _FLOAT_DIGITS.match(text)
    return m.group(1) if m else text


def _first_value(row: Mapping[str, Any], headers: Iterable[str]) -> str:
    for header in headers:
        text = _cell_text(row.get(header))
        if text:
            return text
    return ""


def rows_from_records(records: Iterable[Mapping[str, Any]]) -> list[RosterRow]:
    out: list[RosterRow] = []
    for row in records:
        name = _first_value(row, NAME_HEADERS)
        phone = _first_value(row, PHONE_HEADERS)
        if not name or not phone:
            continue
        out.append(RosterRow(name=name, phone=phone))
    return out


def read_frame(stream: IO[bytes], filename: str) -> pd.DataFrame:
    suffix = PurePath(filename or "").suffix.lower()
    try:
        if suffix in CSV_SUFFIXES:
            return pd.read_csv(stream, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        if suffix in EXCEL_SUFFIXES or not suffix:
            return pd.read_excel(stream, sheet_name=0, dtype=str, keep_default_na=False)
    except (ValueError, OSError, ImportError, zipfile.BadZipFile) as e:
        # ImportError: legacy .xls content needs a reader that is not installed
        raise RosterFormatError(f"解析失败: {e}") from e
    raise RosterFormatError(f"不支持的文件类型: {suffix}")


def read_roster_file(stream: IO[bytes], filename: Optional[str]) -> list[RosterRow]:
    frame = read_frame(stream, filename or "")
    frame.columns = [str(c).strip() for c in frame.columns]
    return rows_from_records(frame.to_dict(orient="records"))
