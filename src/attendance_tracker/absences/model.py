from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import HALF_DAY_TIMING
from ..core.enums import AbsenceType


@dataclass(frozen=True)
class AbsenceRecord:
    """Domain entity: independent daily absence/leave marker."""

    absence_id: int
    user_id: int
    absence_date: date
    absence_type: AbsenceType
    timing: Optional[str] = None

    @property
    def is_half_day(self) -> bool:
        return (self.timing or "").strip().lower() == HALF_DAY_TIMING.lower()
