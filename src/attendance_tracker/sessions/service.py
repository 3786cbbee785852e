from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..absences.repository import AbsenceRepository
from ..common.datetime_utils import day_bounds, hours_between, now_local
from ..core.constants import HALF_DAY_TIMING
from ..core.enums import AbsenceType, BreakEnding, BreakStatus, SessionKind, WorkMode
from ..core.exceptions import InvalidStateError, NotFoundError, RemoteCheckInNotConfirmed
from ..core.settings import TrackerSettings
from ..geofence.classifier import classify_point
from ..geofence.provider import GeoProvider, read_coordinate
from .breaks import BreakTracker
from .factory import StatusStrategyFactory
from .model import AttendanceSession, BreakInterval, NewSession, SessionContext
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Lifecycle of attendance sessions: closed -> checked in -> on break -> checked in -> closed.

    Every operation takes the acting user id and returns the updated
    SessionContext. Nothing is written unless all checks pass.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        settings: Optional[TrackerSettings] = None,
        absences: Optional[AbsenceRepository] = None,
        strategy_factory: Optional[StatusStrategyFactory] = None,
        break_tracker: Optional[BreakTracker] = None,
        clock: Callable[[], datetime] = now_local,
        geo_executor: Optional[Executor] = None,
    ):
        self._sessions = sessions
        self._settings = settings or TrackerSettings()
        self._absences = absences
        self._factory = strategy_factory or StatusStrategyFactory()
        self._breaks = break_tracker or BreakTracker(
            default_missing_break_hours=self._settings.default_missing_break_hours
        )
        self._clock = clock
        # Shared across check-ins; abandoned geo reads finish on these workers.
        self._geo_executor = geo_executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="geo-read")

    # -- resolution -------------------------------------------------------

    def resolve_open_session(
        self, user_id: int, kind: SessionKind, *, now: datetime | None = None
    ) -> Optional[AttendanceSession]:
        """The user's open session of this kind for today, read from storage."""
        now = now or self._clock()
        start, end = day_bounds(now.date(), now.date())
        return self._sessions.find_open_session(user_id=int(user_id), kind=SessionKind(kind), start=start, end=end)

    def context_for(self, user_id: int, kind: SessionKind, *, now: datetime | None = None) -> SessionContext:
        kind = SessionKind(kind)
        session = self.resolve_open_session(user_id, kind, now=now)
        if session is None:
            return SessionContext(user_id=int(user_id), kind=kind)
        breaks = self._sessions.query_breaks([session.session_id])
        return SessionContext(
            user_id=int(user_id),
            kind=kind,
            session=session,
            open_break=self._breaks.open_break(breaks),
        )

    def _owned_open_session(self, user_id: int, session_id: int) -> AttendanceSession:
        session = self._sessions.get_session(int(session_id))
        if session is None or session.user_id != int(user_id):
            logger.warning("Session %s not found for user %s", session_id, user_id)
            raise NotFoundError("Attendance session not found")
        if not session.is_open:
            logger.warning("Session %s is already checked out", session_id)
            raise InvalidStateError("Attendance session is already checked out")
        return session

    # -- operations -------------------------------------------------------

    def check_in(
        self,
        user_id: int,
        kind: SessionKind,
        geo: GeoProvider,
        *,
        now: datetime | None = None,
        confirm_remote: bool = True,
        timeout: float | None = None,
    ) -> SessionContext:
        kind = SessionKind(kind)
        user_id = int(user_id)
        check_day = now or self._clock()

        if self.resolve_open_session(user_id, kind, now=check_day):
            logger.warning("User %s already checked in (%s)", user_id, kind.value)
            raise InvalidStateError("You are already checked in")
        if kind == SessionKind.OVERTIME and self.resolve_open_session(user_id, SessionKind.REGULAR, now=check_day):
            logger.warning("User %s tried overtime with an open regular session", user_id)
            raise InvalidStateError("Check out of your regular session before starting overtime")

        # No write happens before the coordinate resolves.
        coordinate = read_coordinate(
            geo,
            timeout if timeout is not None else self._settings.geo_timeout_seconds,
            self._geo_executor,
        )
        now = now or self._clock()

        work_mode = classify_point(coordinate, self._settings.office, self._settings.geofence_radius_km)
        if work_mode == WorkMode.REMOTE and not confirm_remote:
            raise RemoteCheckInNotConfirmed("Check-in is outside the office zone and must be confirmed as remote")

        cutoff = self._settings.late_checkin_cutoff
        strategy = self._factory.for_checkin(now=now, cutoff=cutoff)
        decision = strategy.decide_checkin(now=now, cutoff=cutoff)

        new_session = NewSession(
            user_id=user_id,
            kind=kind,
            check_in=now,
            work_mode=work_mode,
            status=decision.session_status,
            location=coordinate,
        )
        session_id = self._sessions.insert_session(new_session)
        logger.info(
            "User %s checked in (%s) session=%s mode=%s status=%s",
            user_id,
            kind.value,
            session_id,
            work_mode.value,
            decision.session_status.value,
        )

        session = AttendanceSession(
            session_id=session_id,
            user_id=user_id,
            kind=kind,
            check_in=now,
            check_out=None,
            work_mode=work_mode,
            status=decision.session_status,
            location=coordinate,
        )
        return SessionContext(user_id=user_id, kind=kind, session=session)

    def start_break(self, user_id: int, session_id: int, *, now: datetime | None = None) -> SessionContext:
        session = self._owned_open_session(user_id, session_id)
        self._breaks.ensure_can_start(self._sessions.query_breaks([session.session_id]))

        now = now or self._clock()
        if not self._breaks.within_session(now, session.check_in):
            raise InvalidStateError("A break cannot start before check-in")

        break_id = self._sessions.insert_break(
            session_id=session.session_id, start_time=now, status=BreakStatus.ON_TIME
        )
        logger.info("User %s started break %s on session %s", session.user_id, break_id, session.session_id)

        open_break = BreakInterval(
            break_id=break_id,
            session_id=session.session_id,
            start_time=now,
            end_time=None,
            status=BreakStatus.ON_TIME,
        )
        return SessionContext(user_id=session.user_id, kind=session.kind, session=session, open_break=open_break)

    def end_break(self, user_id: int, session_id: int, *, now: datetime | None = None) -> SessionContext:
        session = self._owned_open_session(user_id, session_id)
        current = self._breaks.require_open(self._sessions.query_breaks([session.session_id]))

        self._close_break(current, now or self._clock(), BreakEnding.MANUAL)
        return SessionContext(user_id=session.user_id, kind=session.kind, session=session)

    def check_out(self, user_id: int, session_id: int, *, now: datetime | None = None) -> SessionContext:
        session = self._owned_open_session(user_id, session_id)
        now = now or self._clock()
        if now < session.check_in:
            raise InvalidStateError("Check-out cannot precede check-in")

        current = self._breaks.open_break(self._sessions.query_breaks([session.session_id]))
        if current is not None and current.start_time > now:
            raise InvalidStateError("Check-out cannot precede the start of the open break")
        if current is not None:
            self._close_break(current, now, BreakEnding.AUTO)

        if not self._sessions.update_session_checkout(session_id=session.session_id, check_out=now):
            raise InvalidStateError("Attendance session is already checked out")
        logger.info("User %s checked out (%s) session=%s", session.user_id, session.kind.value, session.session_id)

        closed = replace(session, check_out=now)
        if closed.kind == SessionKind.REGULAR:
            self._mark_half_day_if_short(closed)
        return SessionContext(user_id=closed.user_id, kind=closed.kind, session=closed)

    # -- helpers ----------------------------------------------------------

    def _close_break(self, item: BreakInterval, now: datetime, ending: BreakEnding) -> BreakInterval:
        end_time = max(now, item.start_time)
        cutoff = self._settings.late_break_end_cutoff
        strategy = self._factory.for_break_end(now=end_time, cutoff=cutoff)
        decision = strategy.decide_break_end(now=end_time, cutoff=cutoff)

        ok = self._sessions.update_break_end(
            break_id=item.break_id,
            end_time=end_time,
            status=decision.break_status,
            ending=ending,
        )
        if not ok:
            raise InvalidStateError("Break has already ended")
        logger.info(
            "Break %s ended (%s) status=%s", item.break_id, ending.value, decision.break_status.value
        )
        return replace(item, end_time=end_time, status=decision.break_status, ending=ending)

    def _mark_half_day_if_short(self, closed: AttendanceSession) -> None:
        """Record a half-day absence when the day's regular attendance is short."""
        if self._absences is None or closed.check_out is None:
            return

        start, end = day_bounds(closed.work_date, closed.work_date)
        todays = self._sessions.query_sessions(
            user_id=closed.user_id, start=start, end=end, kind=SessionKind.REGULAR
        )
        first_check_in = min([s.check_in for s in todays] + [closed.check_in])
        if hours_between(first_check_in, closed.check_out) >= self._settings.half_day_threshold_hours:
            return
        if self._absences.has_absence_on(user_id=closed.user_id, absence_date=closed.work_date):
            return

        self._absences.create_absence(
            user_id=closed.user_id,
            absence_date=closed.work_date,
            absence_type=AbsenceType.ABSENT,
            timing=HALF_DAY_TIMING,
        )
        logger.info("User %s marked half-day absent on %s", closed.user_id, closed.work_date)
