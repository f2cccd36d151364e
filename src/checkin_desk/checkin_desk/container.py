from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendees.json_attendee_repository import JsonAttendeeRepository
from .attendees.mysql_attendee_repository import MySQLAttendeeRepository
from .attendees.repository import AttendeeRepository
from .attendees.service import CheckInService
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import RosterExportService, StatsService
from .roster.service import RosterService
from .tunnel.service import TunnelService


@dataclass(frozen=True)
class Container:
    attendees_repo: AttendeeRepository

    checkin_service: CheckInService
    roster_service: RosterService
    stats_service: StatsService
    export_service: RosterExportService
    tunnel_service: Optional[TunnelService] = None


def build_repository(*, store_backend: str, db_file: Optional[str] = None, db_config: Optional[Mapping[str, Any]] = None) -> AttendeeRepository:
    backend = (store_backend or "json").lower()
    if backend == "json":
        if not db_file:
            raise ValueError("DB_FILE is required for the json store")
        repo = JsonAttendeeRepository(db_file)
        repo.ensure_exists()
        return repo
    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql store")
        return MySQLAttendeeRepository(DatabaseConnection(DBConfig.from_mapping(db_config)))
    raise ValueError(f"Unknown STORE_BACKEND: {store_backend!r}")


def build_container(
    *,
    attendees_repo: AttendeeRepository,
    tunnel_service: Optional[TunnelService] = None,
) -> Container:
    # One lock for every writer of the same store.
    write_lock = threading.Lock()

    return Container(
        attendees_repo=attendees_repo,
        checkin_service=CheckInService(attendees_repo, lock=write_lock),
        roster_service=RosterService(attendees_repo, lock=write_lock),
        stats_service=StatsService(attendees_repo),
        export_service=RosterExportService(attendees_repo),
        tunnel_service=tunnel_service,
    )
