from __future__ import annotations

import random
from collections import Counter
from datetime import datetime, timedelta

import pytest

from attendance_tracker.absences.memory_repository import InMemoryAbsenceRepository
from attendance_tracker.core.enums import SessionKind
from attendance_tracker.core.exceptions import DomainError
from attendance_tracker.core.settings import TrackerSettings
from attendance_tracker.geofence.model import Coordinate
from attendance_tracker.sessions.memory_repository import InMemorySessionRepository
from attendance_tracker.sessions.service import SessionService

OFFICE = Coordinate(31.4504, 73.1350)
DAY_START = datetime(2026, 2, 2, 7, 0)
OPERATIONS = ("check_in", "start_break", "end_break", "check_out")


class FixedGeo:
    def get_current_coordinate(self, timeout):
        return OFFICE


def _assert_invariants(repo: InMemorySessionRepository) -> None:
    sessions = repo.query_all_sessions(start=DAY_START.replace(hour=0), end=DAY_START + timedelta(days=1))

    open_keys = Counter((s.user_id, s.kind, s.work_date) for s in sessions if s.is_open)
    assert all(n == 1 for n in open_keys.values())

    for s in sessions:
        breaks = repo.query_breaks([s.session_id])
        assert sum(1 for b in breaks if b.is_open) <= 1
        if not s.is_open:
            assert s.check_out >= s.check_in
            assert all(not b.is_open for b in breaks)
        for b in breaks:
            assert b.start_time >= s.check_in
            if b.end_time is not None:
                assert b.end_time >= b.start_time
                if s.check_out is not None:
                    assert b.end_time <= s.check_out


@pytest.mark.parametrize("seed", range(25))
def test_random_operation_sequences_keep_one_open_session_per_kind(seed):
    rng = random.Random(seed)
    repo = InMemorySessionRepository()
    svc = SessionService(repo, settings=TrackerSettings(office=OFFICE), absences=InMemoryAbsenceRepository())

    now = DAY_START
    for _ in range(60):
        now += timedelta(minutes=rng.randint(1, 10))
        user_id = rng.choice((1, 2))
        kind = rng.choice((SessionKind.REGULAR, SessionKind.OVERTIME))
        op = rng.choice(OPERATIONS)

        ctx = svc.context_for(user_id, kind, now=now)
        session_id = ctx.session.session_id if ctx.session else rng.randint(1, 50)

        try:
            if op == "check_in":
                svc.check_in(user_id, kind, FixedGeo(), now=now)
            elif op == "start_break":
                svc.start_break(user_id, session_id, now=now)
            elif op == "end_break":
                svc.end_break(user_id, session_id, now=now)
            else:
                svc.check_out(user_id, session_id, now=now)
        except DomainError:
            pass

        _assert_invariants(repo)
