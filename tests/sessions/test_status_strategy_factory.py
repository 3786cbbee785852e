from datetime import datetime, time

from attendance_tracker.core.enums import BreakStatus, SessionStatus
from attendance_tracker.sessions.factory import StatusStrategyFactory
from attendance_tracker.sessions.strategies.late_strategy import LateStrategy
from attendance_tracker.sessions.strategies.on_time_strategy import OnTimeStrategy


def test_factory_checkin_on_time_up_to_cutoff():
    factory = StatusStrategyFactory()
    strategy = factory.for_checkin(now=datetime(2026, 2, 2, 9, 30, 0), cutoff=time(9, 30))

    assert isinstance(strategy, OnTimeStrategy)


def test_factory_checkin_late_one_second_after_cutoff():
    factory = StatusStrategyFactory()
    strategy = factory.for_checkin(now=datetime(2026, 2, 2, 9, 30, 1), cutoff=time(9, 30))

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(now=datetime(2026, 2, 2, 9, 30, 1), cutoff=time(9, 30)).session_status == SessionStatus.LATE


def test_factory_break_end_late_after_cutoff():
    factory = StatusStrategyFactory()
    now = datetime(2026, 2, 2, 14, 11)
    decision = factory.for_break_end(now=now, cutoff=time(14, 10)).decide_break_end(now=now, cutoff=time(14, 10))

    assert decision.break_status == BreakStatus.LATE
