from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import BreakEnding, BreakStatus, SessionKind
from ..database.retry import RetryPolicy
from .model import AttendanceSession, BreakInterval, NewSession
from .repository import SessionRepository


class RetryingSessionRepository(SessionRepository):
    """Applies a RetryPolicy at the gateway boundary.

    Inserts pass through untouched: a blind retry could create a duplicate
    session or break. Conditional updates are retried; a "not open" answer on a
    later attempt counts as success when the stored end time matches ours.
    """

    def __init__(self, inner: SessionRepository, policy: Optional[RetryPolicy] = None):
        self._inner = inner
        self._policy = policy or RetryPolicy()

    def insert_session(self, session: NewSession) -> int:
        return self._inner.insert_session(session)

    def insert_break(self, *, session_id: int, start_time: datetime, status: BreakStatus) -> int:
        return self._inner.insert_break(session_id=session_id, start_time=start_time, status=status)

    def get_session(self, session_id: int) -> Optional[AttendanceSession]:
        return self._policy.call("get_session", lambda _: self._inner.get_session(session_id))

    def get_break(self, break_id: int) -> Optional[BreakInterval]:
        return self._policy.call("get_break", lambda _: self._inner.get_break(break_id))

    def update_session_checkout(self, *, session_id: int, check_out: datetime) -> bool:
        def _attempt(attempt: int) -> bool:
            if self._inner.update_session_checkout(session_id=session_id, check_out=check_out):
                return True
            if attempt == 1:
                return False
            current = self._inner.get_session(session_id)
            return current is not None and current.check_out == check_out

        return self._policy.call("update_session_checkout", _attempt)

    def update_break_end(
        self,
        *,
        break_id: int,
        end_time: datetime,
        status: BreakStatus,
        ending: BreakEnding,
    ) -> bool:
        def _attempt(attempt: int) -> bool:
            if self._inner.update_break_end(break_id=break_id, end_time=end_time, status=status, ending=ending):
                return True
            if attempt == 1:
                return False
            current = self._inner.get_break(break_id)
            return current is not None and current.end_time == end_time

        return self._policy.call("update_break_end", _attempt)

    def find_open_session(
        self,
        *,
        user_id: int,
        kind: SessionKind,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceSession]:
        return self._policy.call(
            "find_open_session",
            lambda _: self._inner.find_open_session(user_id=user_id, kind=kind, start=start, end=end),
        )

    def query_sessions(
        self,
        *,
        user_id: int,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        return self._policy.call(
            "query_sessions",
            lambda _: self._inner.query_sessions(user_id=user_id, start=start, end=end, kind=kind),
        )

    def query_all_sessions(
        self,
        *,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        return self._policy.call(
            "query_all_sessions",
            lambda _: self._inner.query_all_sessions(start=start, end=end, kind=kind),
        )

    def query_breaks(self, session_ids: Iterable[int]) -> Sequence[BreakInterval]:
        ids = list(session_ids)
        return self._policy.call("query_breaks", lambda _: self._inner.query_breaks(ids))
