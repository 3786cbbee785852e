from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import BreakEnding, BreakStatus, SessionKind, SessionState, SessionStatus, WorkMode
from ..geofence.model import Coordinate


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in/check-out cycle."""

    session_id: int
    user_id: int
    kind: SessionKind
    check_in: datetime
    check_out: Optional[datetime]
    work_mode: WorkMode
    status: SessionStatus
    location: Coordinate

    @property
    def work_date(self) -> date:
        return self.check_in.date()

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class NewSession:
    """Values for a session about to be persisted (no id yet)."""

    user_id: int
    kind: SessionKind
    check_in: datetime
    work_mode: WorkMode
    status: SessionStatus
    location: Coordinate


@dataclass(frozen=True)
class BreakInterval:
    """Domain entity: a pause nested inside one session."""

    break_id: int
    session_id: int
    start_time: datetime
    end_time: Optional[datetime]
    status: BreakStatus
    ending: Optional[BreakEnding] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class SessionContext:
    """Server-resolved state of one user's session family.

    Returned by every state-machine operation in place of client-held flags.
    """

    user_id: int
    kind: SessionKind
    session: Optional[AttendanceSession] = None
    open_break: Optional[BreakInterval] = None

    @property
    def state(self) -> SessionState:
        if self.session is None or not self.session.is_open:
            return SessionState.CLOSED
        if self.open_break is not None:
            return SessionState.ON_BREAK
        return SessionState.CHECKED_IN

    def to_dict(self) -> dict:
        s = self.session
        b = self.open_break
        return {
            "user_id": self.user_id,
            "kind": self.kind.value,
            "state": self.state.value,
            "session_id": s.session_id if s else None,
            "check_in": s.check_in.isoformat() if s else None,
            "check_out": s.check_out.isoformat() if s and s.check_out else None,
            "work_mode": s.work_mode.value if s else None,
            "status": s.status.value if s else None,
            "break_id": b.break_id if b else None,
            "break_start": b.start_time.isoformat() if b else None,
        }
