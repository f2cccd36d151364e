"""Example: drive the service layer directly (no Flask).

Controllers stay thin; every decision lives in the services.
"""

import tempfile
from pathlib import Path

from src.checkin_desk.checkin_desk.attendees.json_attendee_repository import JsonAttendeeRepository
from src.checkin_desk.checkin_desk.attendees.model import CheckInRequest, RosterRow
from src.checkin_desk.checkin_desk.container import build_container


def main():
    with tempfile.TemporaryDirectory() as d:
        container = build_container(attendees_repo=JsonAttendeeRepository(Path(d) / "db.json"))
        container.roster_service.import_roster([RosterRow(name="张三", phone="13800000001")])

        # One digit off: the desk is asked to confirm identity first.
        print(container.checkin_service.check_in(CheckInRequest(name="张三", phone="13800000002")))
        print(container.checkin_service.check_in(CheckInRequest(name="张三", phone="13800000002", use_existing_phone="13800000001")))
        print(container.stats_service.get_stats())


if __name__ == "__main__":
    main()
