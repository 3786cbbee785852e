from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import BreakEnding, BreakStatus, SessionKind
from ..core.exceptions import ConflictError
from .model import AttendanceSession, BreakInterval, NewSession
from .repository import SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Process-local gateway used by the testing settings.

    The lock stands in for the unique open-session key of the MySQL schema.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: dict[int, AttendanceSession] = {}
        self._breaks: dict[int, BreakInterval] = {}
        self._next_session_id = 1
        self._next_break_id = 1

    def insert_session(self, session: NewSession) -> int:
        with self._lock:
            for s in self._sessions.values():
                if (
                    s.is_open
                    and s.user_id == session.user_id
                    and s.kind == session.kind
                    and s.work_date == session.check_in.date()
                ):
                    raise ConflictError("An open session already exists for this day")

            session_id = self._next_session_id
            self._next_session_id += 1
            self._sessions[session_id] = AttendanceSession(
                session_id=session_id,
                user_id=session.user_id,
                kind=session.kind,
                check_in=session.check_in,
                check_out=None,
                work_mode=session.work_mode,
                status=session.status,
                location=session.location,
            )
            return session_id

    def add_session(self, session: AttendanceSession) -> None:
        """Load an existing record as-is (imports, fixtures)."""
        with self._lock:
            self._sessions[session.session_id] = session
            self._next_session_id = max(self._next_session_id, session.session_id + 1)

    def add_break(self, item: BreakInterval) -> None:
        with self._lock:
            self._breaks[item.break_id] = item
            self._next_break_id = max(self._next_break_id, item.break_id + 1)

    def get_session(self, session_id: int) -> Optional[AttendanceSession]:
        with self._lock:
            return self._sessions.get(int(session_id))

    def update_session_checkout(self, *, session_id: int, check_out: datetime) -> bool:
        with self._lock:
            current = self._sessions.get(int(session_id))
            if current is None or not current.is_open:
                return False
            self._sessions[current.session_id] = replace(current, check_out=check_out)
            return True

    def insert_break(self, *, session_id: int, start_time: datetime, status: BreakStatus) -> int:
        with self._lock:
            if any(b.session_id == int(session_id) and b.is_open for b in self._breaks.values()):
                raise ConflictError("A break is already open for this session")
            break_id = self._next_break_id
            self._next_break_id += 1
            self._breaks[break_id] = BreakInterval(
                break_id=break_id,
                session_id=int(session_id),
                start_time=start_time,
                end_time=None,
                status=status,
            )
            return break_id

    def update_break_end(
        self,
        *,
        break_id: int,
        end_time: datetime,
        status: BreakStatus,
        ending: BreakEnding,
    ) -> bool:
        with self._lock:
            current = self._breaks.get(int(break_id))
            if current is None or not current.is_open:
                return False
            self._breaks[current.break_id] = replace(current, end_time=end_time, status=status, ending=ending)
            return True

    def get_break(self, break_id: int) -> Optional[BreakInterval]:
        with self._lock:
            return self._breaks.get(int(break_id))

    def find_open_session(
        self,
        *,
        user_id: int,
        kind: SessionKind,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceSession]:
        candidates = [
            s
            for s in self.query_sessions(user_id=user_id, start=start, end=end, kind=kind)
            if s.is_open
        ]
        return candidates[-1] if candidates else None

    def query_sessions(
        self,
        *,
        user_id: int,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        return [s for s in self.query_all_sessions(start=start, end=end, kind=kind) if s.user_id == int(user_id)]

    def query_all_sessions(
        self,
        *,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        with self._lock:
            items = [
                s
                for s in self._sessions.values()
                if start <= s.check_in < end and (kind is None or s.kind == kind)
            ]
        items.sort(key=lambda s: (s.check_in, s.session_id))
        return items

    def query_breaks(self, session_ids: Iterable[int]) -> Sequence[BreakInterval]:
        wanted = {int(i) for i in session_ids}
        with self._lock:
            items = [b for b in self._breaks.values() if b.session_id in wanted]
        items.sort(key=lambda b: (b.start_time, b.break_id))
        return items
