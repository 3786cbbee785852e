from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for route authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class SessionKind(str, Enum):
    """Two independent session families per user per day."""

    REGULAR = "regular"
    OVERTIME = "overtime"


class SessionState(str, Enum):
    CLOSED = "closed"
    CHECKED_IN = "checked_in"
    ON_BREAK = "on_break"


class WorkMode(str, Enum):
    ON_SITE = "on_site"
    REMOTE = "remote"


class SessionStatus(str, Enum):
    """Check-in status stored with the session."""

    PRESENT = "present"
    LATE = "late"


class BreakStatus(str, Enum):
    ON_TIME = "on_time"
    LATE = "late"


class BreakEnding(str, Enum):
    """How a break was closed: by the user or forced at checkout."""

    MANUAL = "manual"
    AUTO = "auto"


class AbsenceType(str, Enum):
    ABSENT = "Absent"
    LEAVE = "leave"


class Period(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
