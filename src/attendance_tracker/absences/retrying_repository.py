from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AbsenceType
from ..database.retry import RetryPolicy
from .model import AbsenceRecord
from .repository import AbsenceRepository


class RetryingAbsenceRepository(AbsenceRepository):
    """Retries reads; create_absence is not idempotent and passes through."""

    def __init__(self, inner: AbsenceRepository, policy: Optional[RetryPolicy] = None):
        self._inner = inner
        self._policy = policy or RetryPolicy()

    def query_absences(self, *, user_id: int, start: date, end: date) -> Sequence[AbsenceRecord]:
        return self._policy.call(
            "query_absences",
            lambda _: self._inner.query_absences(user_id=user_id, start=start, end=end),
        )

    def query_all_absences(self, *, start: date, end: date) -> Sequence[AbsenceRecord]:
        return self._policy.call("query_all_absences", lambda _: self._inner.query_all_absences(start=start, end=end))

    def has_absence_on(self, *, user_id: int, absence_date: date) -> bool:
        return self._policy.call(
            "has_absence_on",
            lambda _: self._inner.has_absence_on(user_id=user_id, absence_date=absence_date),
        )

    def create_absence(
        self,
        *,
        user_id: int,
        absence_date: date,
        absence_type: AbsenceType,
        timing: Optional[str] = None,
    ) -> int:
        return self._inner.create_absence(
            user_id=user_id, absence_date=absence_date, absence_type=absence_type, timing=timing
        )
