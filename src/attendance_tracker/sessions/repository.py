from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import BreakEnding, BreakStatus, SessionKind
from .model import AttendanceSession, BreakInterval, NewSession


class SessionRepository(Protocol):
    """Persistence gateway for sessions and breaks.

    Date ranges are half-open [start, end) on the check-in timestamp.
    """

    def insert_session(self, session: NewSession) -> int:
        """Persist an open session; raise ConflictError when one is already open."""

        raise NotImplementedError

    def get_session(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def update_session_checkout(self, *, session_id: int, check_out: datetime) -> bool:
        """Close the session if still open. False when already closed or missing."""

        raise NotImplementedError

    def insert_break(self, *, session_id: int, start_time: datetime, status: BreakStatus) -> int:
        raise NotImplementedError

    def update_break_end(
        self,
        *,
        break_id: int,
        end_time: datetime,
        status: BreakStatus,
        ending: BreakEnding,
    ) -> bool:
        """Close the break if still open. False when already closed or missing."""

        raise NotImplementedError

    def get_break(self, break_id: int) -> Optional[BreakInterval]:
        raise NotImplementedError

    def find_open_session(
        self,
        *,
        user_id: int,
        kind: SessionKind,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def query_sessions(
        self,
        *,
        user_id: int,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def query_all_sessions(
        self,
        *,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        """Batch variant of query_sessions over all users."""

        raise NotImplementedError

    def query_breaks(self, session_ids: Iterable[int]) -> Sequence[BreakInterval]:
        raise NotImplementedError
