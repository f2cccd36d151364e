from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from ..core.exceptions import StoreError
from .model import AttendeeRecord
from .repository import AttendeeRepository

logger = logging.getLogger(__name__)


class JsonAttendeeRepository(AttendeeRepository):
    """Attendee list kept in a single JSON file (`db.json`).

    Writes go to a temp file in the same directory and are renamed over the
    target, so a failed write leaves the old file untouched.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def ensure_exists(self) -> None:
        if not self._path.exists():
            logger.info("Creating empty attendee store at %s", self._path)
            self.replace_all([])

    def load_all(self) -> list[AttendeeRecord]:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "[]")
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read attendee store {self._path}: {e}") from e

        if not isinstance(raw, list):
            raise StoreError(f"Attendee store {self._path} is not a JSON list")
        try:
            return [AttendeeRecord.from_dict(item) for item in raw]
        except (AttributeError, TypeError, ValueError) as e:
            raise StoreError(f"Attendee store {self._path} holds an invalid record: {e}") from e

    def replace_all(self, records: Sequence[AttendeeRecord]) -> None:
        payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".db-", suffix=".json", dir=self._path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Cannot write attendee store {self._path}: {e}") from e
