from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..absences.model import AbsenceRecord
from ..absences.repository import AbsenceRepository
from ..common.datetime_utils import count_weekdays, day_bounds, is_weekday, iter_days, now_local
from ..common.validators import require_date_range
from ..core.enums import AbsenceType, SessionKind, SessionStatus, WorkMode
from ..core.settings import TrackerSettings
from ..sessions.breaks import BreakTracker
from ..sessions.model import AttendanceSession, BreakInterval
from ..sessions.repository import SessionRepository
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import DailyStatusRow, PeriodStats

logger = logging.getLogger(__name__)

_COUNTED_ABSENCES = (AbsenceType.ABSENT, AbsenceType.LEAVE)


def dedup_sessions_by_day(sessions: Iterable[AttendanceSession]) -> list[AttendanceSession]:
    """Keep the earliest check-in per calendar date, ordered by date."""
    by_day: dict[date, AttendanceSession] = {}
    for s in sessions:
        current = by_day.get(s.work_date)
        if current is None or (s.check_in, s.session_id) < (current.check_in, current.session_id):
            by_day[s.work_date] = s
    return [by_day[d] for d in sorted(by_day)]


def _absence_label(record: AbsenceRecord) -> str:
    if record.absence_type == AbsenceType.LEAVE:
        return "Half Day Leave" if record.is_half_day else "Leave"
    return "Half Day Absent" if record.is_half_day else "Absent"


class StatsService:
    """Rolls sessions, breaks and absence records into per-period statistics.

    Read-only: every call re-queries storage and caches nothing.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        absences: AbsenceRepository,
        *,
        settings: Optional[TrackerSettings] = None,
        calculator: Optional[HoursCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._sessions = sessions
        self._absences = absences
        self._settings = settings or TrackerSettings()
        self._calculator = calculator or StandardHoursCalculator(
            break_tracker=BreakTracker(default_missing_break_hours=self._settings.default_missing_break_hours),
            default_missing_checkout_hours=self._settings.default_missing_checkout_hours,
            daily_hour_cap=self._settings.daily_hour_cap,
        )
        self._clock = clock

    def compute_stats(
        self,
        user_id: int,
        period_start: date,
        period_end: date,
        *,
        kind: SessionKind = SessionKind.REGULAR,
        now: datetime | None = None,
    ) -> PeriodStats:
        require_date_range(period_start, period_end)
        kind = SessionKind(kind)
        start, end = day_bounds(period_start, period_end)

        sessions = dedup_sessions_by_day(
            self._sessions.query_sessions(user_id=int(user_id), start=start, end=end, kind=kind)
        )
        breaks = self._sessions.query_breaks([s.session_id for s in sessions])
        absences = self._absences.query_absences(user_id=int(user_id), start=period_start, end=period_end)

        return self._build_stats(
            int(user_id),
            period_start,
            period_end,
            kind,
            sessions,
            BreakTracker.group_by_session(breaks),
            absences,
            now or self._clock(),
        )

    def compute_stats_for_all_users(
        self,
        period_start: date,
        period_end: date,
        *,
        kind: SessionKind = SessionKind.REGULAR,
        user_ids: Iterable[int] = (),
        now: datetime | None = None,
    ) -> dict[int, PeriodStats]:
        """Batch form for admin views; user_ids adds users with no records (all zeros)."""
        require_date_range(period_start, period_end)
        kind = SessionKind(kind)
        now = now or self._clock()
        start, end = day_bounds(period_start, period_end)

        sessions_by_user: dict[int, list[AttendanceSession]] = {}
        for s in self._sessions.query_all_sessions(start=start, end=end, kind=kind):
            sessions_by_user.setdefault(s.user_id, []).append(s)
        absences_by_user: dict[int, list[AbsenceRecord]] = {}
        for a in self._absences.query_all_absences(start=period_start, end=period_end):
            absences_by_user.setdefault(a.user_id, []).append(a)

        deduped = {uid: dedup_sessions_by_day(items) for uid, items in sessions_by_user.items()}
        breaks = BreakTracker.group_by_session(
            self._sessions.query_breaks([s.session_id for items in deduped.values() for s in items])
        )

        users = set(deduped) | set(absences_by_user) | {int(u) for u in user_ids}
        logger.debug("Aggregating %d user(s) for %s..%s", len(users), period_start, period_end)
        return {
            uid: self._build_stats(
                uid,
                period_start,
                period_end,
                kind,
                deduped.get(uid, []),
                breaks,
                absences_by_user.get(uid, []),
                now,
            )
            for uid in sorted(users)
        }

    def _build_stats(
        self,
        user_id: int,
        period_start: date,
        period_end: date,
        kind: SessionKind,
        sessions: Sequence[AttendanceSession],
        breaks_by_session: Mapping[int, Sequence[BreakInterval]],
        absences: Sequence[AbsenceRecord],
        now: datetime,
    ) -> PeriodStats:
        total_hours = sum(
            self._calculator.net_hours(s, breaks_by_session.get(s.session_id, ()), now=now) for s in sessions
        )
        attended = len(sessions)
        expected = count_weekdays(period_start, period_end)

        return PeriodStats(
            user_id=user_id,
            period_start=period_start,
            period_end=period_end,
            kind=kind,
            present_days=sum(1 for s in sessions if s.status == SessionStatus.PRESENT),
            late_days=sum(1 for s in sessions if s.status == SessionStatus.LATE),
            absent_days=sum(1 for a in absences if a.absence_type in _COUNTED_ABSENCES),
            on_site_days=sum(1 for s in sessions if s.work_mode == WorkMode.ON_SITE),
            remote_days=sum(1 for s in sessions if s.work_mode == WorkMode.REMOTE),
            attended_days=attended,
            total_hours_worked=total_hours,
            average_hours_per_day=total_hours / max(1, attended),
            expected_working_days=expected,
            expected_hours=expected * self._settings.expected_hours_per_workday,
            attendance_rate=(attended / expected) if expected else 0.0,
        )

    def daily_rows(
        self,
        user_id: int,
        start: date,
        end: date,
        *,
        kind: SessionKind = SessionKind.REGULAR,
        now: datetime | None = None,
    ) -> list[DailyStatusRow]:
        """One row per calendar day; an absence record overrides the session label."""
        require_date_range(start, end)
        now = now or self._clock()
        range_start, range_end = day_bounds(start, end)

        sessions = {
            s.work_date: s
            for s in dedup_sessions_by_day(
                self._sessions.query_sessions(user_id=int(user_id), start=range_start, end=range_end, kind=kind)
            )
        }
        breaks = BreakTracker.group_by_session(self._sessions.query_breaks([s.session_id for s in sessions.values()]))
        absences: dict[date, AbsenceRecord] = {}
        for a in self._absences.query_absences(user_id=int(user_id), start=start, end=end):
            absences.setdefault(a.absence_date, a)

        rows: list[DailyStatusRow] = []
        for day in iter_days(start, end):
            session = sessions.get(day)
            absence = absences.get(day)

            check_in = check_out = None
            estimated = False
            hours = 0.0
            work_mode = None
            if session is not None:
                check_in = session.check_in
                check_out, estimated = self._calculator.effective_end(session, now=now)
                hours = self._calculator.net_hours(session, breaks.get(session.session_id, ()), now=now)
                work_mode = session.work_mode

            if absence is not None:
                status = _absence_label(absence)
                work_mode = None
            elif session is not None:
                status = "Late" if session.status == SessionStatus.LATE else "Present"
            elif not is_weekday(day):
                status = "Weekend"
            else:
                status = "No Record"

            rows.append(
                DailyStatusRow(
                    work_date=day,
                    status=status,
                    work_mode=work_mode,
                    check_in=check_in,
                    check_out=check_out,
                    check_out_estimated=estimated,
                    net_hours=hours,
                )
            )
        return rows

    def find_unrecorded_absences(
        self,
        user_id: int,
        start: date,
        end: date,
        *,
        holidays: Iterable[date] = (),
        now: datetime | None = None,
    ) -> list[date]:
        """Past weekdays (not holidays) with neither a session of any kind nor an absence record."""
        require_date_range(start, end)
        today = (now or self._clock()).date()
        range_start, range_end = day_bounds(start, end)

        attended = {
            s.work_date
            for s in self._sessions.query_sessions(user_id=int(user_id), start=range_start, end=range_end)
        }
        recorded = {a.absence_date for a in self._absences.query_absences(user_id=int(user_id), start=start, end=end)}
        skip = set(holidays)

        return [
            day
            for day in iter_days(start, end)
            if is_weekday(day) and day < today and day not in skip and day not in attended and day not in recorded
        ]
