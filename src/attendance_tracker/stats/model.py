from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import SessionKind, WorkMode


@dataclass(frozen=True)
class PeriodStats:
    """Derived, non-persisted statistics for one user over [period_start, period_end]."""

    user_id: int
    period_start: date
    period_end: date
    kind: SessionKind
    present_days: int
    late_days: int
    absent_days: int
    on_site_days: int
    remote_days: int
    attended_days: int
    total_hours_worked: float
    average_hours_per_day: float
    expected_working_days: int
    expected_hours: float
    attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "kind": self.kind.value,
            "present_days": self.present_days,
            "late_days": self.late_days,
            "absent_days": self.absent_days,
            "on_site_days": self.on_site_days,
            "remote_days": self.remote_days,
            "attended_days": self.attended_days,
            "total_hours_worked": round(self.total_hours_worked, 2),
            "average_hours_per_day": round(self.average_hours_per_day, 2),
            "expected_working_days": self.expected_working_days,
            "expected_hours": round(self.expected_hours, 2),
            "attendance_rate": round(self.attendance_rate, 4),
        }


@dataclass(frozen=True)
class DailyStatusRow:
    """Read-model for the per-day attendance table."""

    work_date: date
    status: str
    work_mode: Optional[WorkMode]
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    check_out_estimated: bool
    net_hours: float

    def to_dict(self) -> dict:
        return {
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "status": self.status,
            "work_mode": self.work_mode.value if self.work_mode else "-",
            "check_in": self.check_in.strftime("%H:%M") if self.check_in else "-",
            "check_out": self.check_out.strftime("%H:%M") if self.check_out else "-",
            "check_out_estimated": self.check_out_estimated,
            "net_hours": f"{self.net_hours:.2f}",
        }
