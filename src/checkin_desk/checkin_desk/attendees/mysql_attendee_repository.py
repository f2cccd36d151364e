from __future__ import annotations

from typing import Sequence

from ..core.enums import CheckInStatus, RecordSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendeeRecord
from .repository import AttendeeRepository


class MySQLAttendeeRepository(AttendeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_all(self) -> list[AttendeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT name, phone, status, check_in_time, source, is_new
                FROM attendees
                ORDER BY position ASC
                """
            )
            rows = fetchall(cur)
            return [
                AttendeeRecord(
                    name=r["name"] or "",
                    phone=r["phone"],
                    status=CheckInStatus(r["status"] or CheckInStatus.PENDING.value),
                    check_in_time=int(r["check_in_time"]) if r.get("check_in_time") is not None else None,
                    source=RecordSource(r["source"]) if r.get("source") else None,
                    is_new=bool(r.get("is_new")),
                )
                for r in rows
            ]

    def replace_all(self, records: Sequence[AttendeeRecord]) -> None:
        # Delete + insert share one transaction; db_cursor rolls back on failure.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendees")
            if not records:
                return
            cur.executemany(
                """
                INSERT INTO attendees(position, name, phone, status, check_in_time, source, is_new)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                [
                    (
                        position,
                        r.name,
                        r.phone,
                        r.status.value,
                        r.check_in_time,
                        r.source.value if r.source else None,
                        1 if r.is_new else 0,
                    )
                    for position, r in enumerate(records)
                ],
            )
