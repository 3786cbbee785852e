"""Drive the services directly, without Flask, against the in-memory backend."""

from datetime import datetime

from attendance_tracker.config import testing
from attendance_tracker.container import build_container
from attendance_tracker.core.enums import SessionKind
from attendance_tracker.geofence.provider import ReportedCoordinateProvider


def main():
    container = build_container(settings=testing)
    sessions = container.session_service

    office = ReportedCoordinateProvider(testing.OFFICE_LAT, testing.OFFICE_LON)
    ctx = sessions.check_in(1, SessionKind.REGULAR, office, now=datetime(2026, 2, 2, 9, 5))
    session_id = ctx.session.session_id

    sessions.start_break(1, session_id, now=datetime(2026, 2, 2, 13, 0))
    sessions.end_break(1, session_id, now=datetime(2026, 2, 2, 13, 45))
    ctx = sessions.check_out(1, session_id, now=datetime(2026, 2, 2, 17, 30))
    print(ctx.to_dict())

    stats = container.stats_service.compute_stats(
        1, datetime(2026, 2, 2).date(), datetime(2026, 2, 6).date(), now=datetime(2026, 2, 6, 18, 0)
    )
    print(stats.to_dict())


if __name__ == "__main__":
    main()
