from __future__ import annotations

from datetime import date, datetime

import pytest

from attendance_tracker.absences.memory_repository import InMemoryAbsenceRepository
from attendance_tracker.absences.model import AbsenceRecord
from attendance_tracker.core.constants import HALF_DAY_TIMING
from attendance_tracker.core.enums import AbsenceType, BreakStatus, SessionKind, SessionStatus, WorkMode
from attendance_tracker.core.exceptions import ValidationError
from attendance_tracker.geofence.model import Coordinate
from attendance_tracker.sessions.memory_repository import InMemorySessionRepository
from attendance_tracker.sessions.model import AttendanceSession, BreakInterval
from attendance_tracker.stats.service import StatsService, dedup_sessions_by_day

MONDAY = date(2026, 2, 2)
FRIDAY = date(2026, 2, 6)
SATURDAY = date(2026, 2, 7)
SUNDAY = date(2026, 2, 8)


def dt(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def make_session(
    session_id: int,
    check_in: datetime,
    check_out: datetime | None,
    *,
    user_id: int = 1,
    status: SessionStatus = SessionStatus.PRESENT,
    work_mode: WorkMode = WorkMode.ON_SITE,
    kind: SessionKind = SessionKind.REGULAR,
) -> AttendanceSession:
    return AttendanceSession(
        session_id=session_id,
        user_id=user_id,
        kind=kind,
        check_in=check_in,
        check_out=check_out,
        work_mode=work_mode,
        status=status,
        location=Coordinate(0.0, 0.0),
    )


def make_break(break_id: int, session_id: int, start: datetime, end: datetime | None) -> BreakInterval:
    return BreakInterval(break_id=break_id, session_id=session_id, start_time=start, end_time=end, status=BreakStatus.ON_TIME)


def build(sessions=(), breaks=(), absences=()):
    repo = InMemorySessionRepository()
    for s in sessions:
        repo.add_session(s)
    for b in breaks:
        repo.add_break(b)
    return StatsService(repo, InMemoryAbsenceRepository(absences)), repo


def test_full_day_with_half_hour_break_is_seven_and_a_half_hours():
    svc, _ = build(
        sessions=[make_session(1, dt(MONDAY, 9), dt(MONDAY, 17))],
        breaks=[make_break(1, 1, dt(MONDAY, 10), dt(MONDAY, 10, 30))],
    )

    stats = svc.compute_stats(1, MONDAY, MONDAY, now=dt(FRIDAY, 12))

    assert stats.total_hours_worked == pytest.approx(7.5)
    assert stats.present_days == 1
    assert stats.average_hours_per_day == pytest.approx(7.5)


def test_open_session_today_runs_until_now():
    svc, _ = build(sessions=[make_session(1, dt(MONDAY, 9), None)])

    stats = svc.compute_stats(1, MONDAY, MONDAY, now=dt(MONDAY, 15))

    assert stats.total_hours_worked == pytest.approx(6.0)


def test_open_session_in_the_past_uses_four_hour_default():
    svc, _ = build(sessions=[make_session(1, dt(MONDAY, 9), None)])

    stats = svc.compute_stats(1, MONDAY, MONDAY, now=dt(FRIDAY, 15))

    assert stats.total_hours_worked == pytest.approx(4.0)


def test_unclosed_break_counts_one_hour():
    svc, _ = build(
        sessions=[make_session(1, dt(MONDAY, 9), dt(MONDAY, 17))],
        breaks=[make_break(1, 1, dt(MONDAY, 13), None)],
    )

    assert svc.compute_stats(1, MONDAY, MONDAY, now=dt(FRIDAY, 12)).total_hours_worked == pytest.approx(7.0)


def test_day_is_capped_at_twelve_hours_and_floored_at_zero():
    svc, _ = build(
        sessions=[
            make_session(1, dt(MONDAY, 8), dt(date(2026, 2, 3), 10)),
            make_session(2, dt(date(2026, 2, 4), 9), dt(date(2026, 2, 4), 10)),
        ],
        breaks=[make_break(1, 2, dt(date(2026, 2, 4), 9), dt(date(2026, 2, 4), 12))],
    )

    stats = svc.compute_stats(1, MONDAY, FRIDAY, now=dt(SUNDAY, 12))

    assert stats.total_hours_worked == pytest.approx(12.0)


def test_duplicate_day_keeps_earliest_checkin_only():
    later = make_session(1, dt(MONDAY, 10), dt(MONDAY, 12), status=SessionStatus.LATE, work_mode=WorkMode.REMOTE)
    earlier = make_session(2, dt(MONDAY, 9), dt(MONDAY, 17))
    svc, _ = build(sessions=[later, earlier])

    stats = svc.compute_stats(1, MONDAY, MONDAY, now=dt(FRIDAY, 12))

    assert stats.present_days == 1
    assert stats.late_days == 0
    assert stats.remote_days == 0
    assert stats.attended_days == 1
    assert stats.total_hours_worked == pytest.approx(8.0)
    assert [s.session_id for s in dedup_sessions_by_day([later, earlier])] == [2]


def test_weekend_only_period_has_zero_rate():
    svc, _ = build(sessions=[make_session(1, dt(SATURDAY, 9), dt(SATURDAY, 12))])

    stats = svc.compute_stats(1, SATURDAY, SUNDAY, now=dt(SUNDAY, 18))

    assert stats.expected_working_days == 0
    assert stats.attendance_rate == 0.0
    assert stats.attended_days == 1


def test_week_counts_and_rate():
    svc, _ = build(
        sessions=[
            make_session(1, dt(MONDAY, 9), dt(MONDAY, 17)),
            make_session(2, dt(date(2026, 2, 3), 9, 45), dt(date(2026, 2, 3), 17), status=SessionStatus.LATE),
            make_session(3, dt(date(2026, 2, 4), 9), dt(date(2026, 2, 4), 13), work_mode=WorkMode.REMOTE),
        ],
        absences=[
            AbsenceRecord(1, 1, date(2026, 2, 5), AbsenceType.ABSENT, "Full Day"),
            AbsenceRecord(2, 1, FRIDAY, AbsenceType.LEAVE, HALF_DAY_TIMING),
        ],
    )

    stats = svc.compute_stats(1, MONDAY, SUNDAY, now=dt(SUNDAY, 20))

    assert stats.present_days == 2
    assert stats.late_days == 1
    assert stats.on_site_days == 2
    assert stats.remote_days == 1
    assert stats.absent_days == 2
    assert stats.expected_working_days == 5
    assert stats.expected_hours == pytest.approx(40.0)
    assert stats.attendance_rate == pytest.approx(3 / 5)
    assert stats.total_hours_worked == pytest.approx(8 + 7.25 + 4)


def test_overtime_is_aggregated_separately():
    svc, _ = build(
        sessions=[
            make_session(1, dt(MONDAY, 9), dt(MONDAY, 17)),
            make_session(2, dt(MONDAY, 18), dt(MONDAY, 20), kind=SessionKind.OVERTIME),
        ]
    )

    regular = svc.compute_stats(1, MONDAY, MONDAY, now=dt(FRIDAY, 12))
    overtime = svc.compute_stats(1, MONDAY, MONDAY, kind=SessionKind.OVERTIME, now=dt(FRIDAY, 12))

    assert regular.total_hours_worked == pytest.approx(8.0)
    assert overtime.total_hours_worked == pytest.approx(2.0)


def test_compute_stats_is_idempotent():
    svc, _ = build(
        sessions=[make_session(1, dt(MONDAY, 9), None), make_session(2, dt(date(2026, 2, 3), 9), dt(date(2026, 2, 3), 18))],
        breaks=[make_break(1, 2, dt(date(2026, 2, 3), 12), None)],
    )
    now = dt(FRIDAY, 12)

    assert svc.compute_stats(1, MONDAY, FRIDAY, now=now) == svc.compute_stats(1, MONDAY, FRIDAY, now=now)


def test_batch_form_matches_single_user_form_and_includes_requested_users():
    svc, _ = build(
        sessions=[
            make_session(1, dt(MONDAY, 9), dt(MONDAY, 17)),
            make_session(2, dt(MONDAY, 9, 40), dt(MONDAY, 16), user_id=2, status=SessionStatus.LATE),
        ],
        breaks=[make_break(1, 2, dt(MONDAY, 12), dt(MONDAY, 13))],
        absences=[AbsenceRecord(1, 3, MONDAY, AbsenceType.ABSENT, "Full Day")],
    )
    now = dt(FRIDAY, 12)

    result = svc.compute_stats_for_all_users(MONDAY, FRIDAY, user_ids=[4], now=now)

    assert sorted(result) == [1, 2, 3, 4]
    assert result[1] == svc.compute_stats(1, MONDAY, FRIDAY, now=now)
    assert result[2] == svc.compute_stats(2, MONDAY, FRIDAY, now=now)
    assert result[3].absent_days == 1
    assert result[4].attended_days == 0
    assert result[4].total_hours_worked == 0.0


def test_reversed_range_is_rejected():
    svc, _ = build()
    with pytest.raises(ValidationError):
        svc.compute_stats(1, FRIDAY, MONDAY)


def test_daily_rows_label_each_day():
    svc, _ = build(
        sessions=[
            make_session(1, dt(MONDAY, 9), dt(MONDAY, 17)),
            make_session(2, dt(date(2026, 2, 3), 9, 45), None, status=SessionStatus.LATE, work_mode=WorkMode.REMOTE),
            make_session(3, dt(date(2026, 2, 4), 9), dt(date(2026, 2, 4), 11)),
        ],
        absences=[
            AbsenceRecord(1, 1, date(2026, 2, 4), AbsenceType.ABSENT, HALF_DAY_TIMING),
            AbsenceRecord(2, 1, FRIDAY, AbsenceType.LEAVE, "Full Day"),
        ],
    )

    rows = svc.daily_rows(1, MONDAY, SUNDAY, now=dt(SUNDAY, 12))

    assert [r.status for r in rows] == [
        "Present",
        "Late",
        "Half Day Absent",
        "No Record",
        "Leave",
        "Weekend",
        "Weekend",
    ]
    assert rows[1].check_out == dt(date(2026, 2, 3), 13, 45)
    assert rows[1].check_out_estimated is True
    assert rows[1].work_mode == WorkMode.REMOTE
    assert rows[2].work_mode is None
    assert rows[2].net_hours == pytest.approx(2.0)
    assert rows[0].to_dict()["net_hours"] == "8.00"


def test_unrecorded_absences_skip_weekends_holidays_future_and_recorded_days():
    svc, _ = build(
        sessions=[make_session(1, dt(MONDAY, 9), dt(MONDAY, 17), kind=SessionKind.OVERTIME)],
        absences=[AbsenceRecord(1, 1, date(2026, 2, 3), AbsenceType.LEAVE, "Full Day")],
    )

    days = svc.find_unrecorded_absences(1, MONDAY, date(2026, 2, 10), holidays=[date(2026, 2, 5)], now=dt(date(2026, 2, 10), 9))

    assert days == [date(2026, 2, 4), FRIDAY, date(2026, 2, 9)]
