from datetime import datetime

import pytest

from attendance_tracker.core.enums import BreakStatus, SessionKind, SessionStatus, WorkMode
from attendance_tracker.geofence.model import Coordinate
from attendance_tracker.sessions.breaks import BreakTracker
from attendance_tracker.sessions.model import AttendanceSession, BreakInterval
from attendance_tracker.stats.calculator.standard_calculator import StandardHoursCalculator


def _session(check_in, check_out=None):
    return AttendanceSession(
        session_id=1,
        user_id=1,
        kind=SessionKind.REGULAR,
        check_in=check_in,
        check_out=check_out,
        work_mode=WorkMode.ON_SITE,
        status=SessionStatus.PRESENT,
        location=Coordinate(0.0, 0.0),
    )


def _break(start, end=None):
    return BreakInterval(break_id=1, session_id=1, start_time=start, end_time=end, status=BreakStatus.ON_TIME)


def test_closed_session_uses_recorded_checkout():
    calc = StandardHoursCalculator()
    s = _session(datetime(2026, 2, 2, 9), datetime(2026, 2, 2, 17, 30))

    end, estimated = calc.effective_end(s, now=datetime(2026, 2, 5, 12))

    assert end == datetime(2026, 2, 2, 17, 30)
    assert estimated is False
    assert calc.net_hours(s, [], now=datetime(2026, 2, 5, 12)) == pytest.approx(8.5)


def test_missing_checkout_today_vs_earlier_day():
    calc = StandardHoursCalculator()
    s = _session(datetime(2026, 2, 2, 9))

    assert calc.effective_end(s, now=datetime(2026, 2, 2, 11)) == (datetime(2026, 2, 2, 11), True)
    assert calc.effective_end(s, now=datetime(2026, 2, 3, 8)) == (datetime(2026, 2, 2, 13), True)


def test_configured_defaults_are_honoured():
    calc = StandardHoursCalculator(
        break_tracker=BreakTracker(default_missing_break_hours=0.5),
        default_missing_checkout_hours=6,
        daily_hour_cap=5,
    )
    s = _session(datetime(2026, 2, 2, 8))

    # 6h default end, minus 0.5h open break, then capped at 5h
    assert calc.net_hours(s, [_break(datetime(2026, 2, 2, 10))], now=datetime(2026, 2, 4, 8)) == pytest.approx(5.0)


def test_breaks_longer_than_session_floor_at_zero():
    calc = StandardHoursCalculator()
    s = _session(datetime(2026, 2, 2, 9), datetime(2026, 2, 2, 9, 30))
    breaks = [_break(datetime(2026, 2, 2, 9), datetime(2026, 2, 2, 10))]

    assert calc.net_hours(s, breaks, now=datetime(2026, 2, 3, 9)) == 0.0
