import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from attendance_tracker.core.enums import SessionKind
from attendance_tracker.core.exceptions import ProviderUnavailableError, ValidationError
from attendance_tracker.geofence.model import Coordinate
from attendance_tracker.geofence.provider import ReportedCoordinateProvider, read_coordinate
from attendance_tracker.sessions.memory_repository import InMemorySessionRepository
from attendance_tracker.sessions.service import SessionService


class HangingGeo:
    def __init__(self):
        self.release = threading.Event()

    def get_current_coordinate(self, timeout):
        self.release.wait(2.0)
        return Coordinate(0.0, 0.0)


class CountingExecutor(ThreadPoolExecutor):
    def __init__(self):
        super().__init__(max_workers=1)
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        return super().submit(fn, *args, **kwargs)


@pytest.fixture()
def executor():
    pool = ThreadPoolExecutor(max_workers=1)
    yield pool
    pool.shutdown(wait=True)


def test_reported_coordinate_is_returned(executor):
    assert read_coordinate(ReportedCoordinateProvider(31.45, 73.13), 1.0, executor) == Coordinate(31.45, 73.13)


def test_missing_reading_is_provider_unavailable(executor):
    with pytest.raises(ProviderUnavailableError):
        read_coordinate(ReportedCoordinateProvider(None, None), 1.0, executor)


def test_out_of_range_reading_is_validation_error(executor):
    with pytest.raises(ValidationError):
        read_coordinate(ReportedCoordinateProvider(123.0, 10.0), 1.0, executor)


def test_hanging_provider_is_bounded_by_timeout(executor):
    geo = HangingGeo()
    try:
        with pytest.raises(ProviderUnavailableError):
            read_coordinate(geo, 0.05, executor)
    finally:
        geo.release.set()


def test_service_reads_every_check_in_on_one_executor():
    pool = CountingExecutor()
    svc = SessionService(InMemorySessionRepository(), geo_executor=pool)
    office = ReportedCoordinateProvider(0.0, 0.0)

    try:
        svc.check_in(1, SessionKind.REGULAR, office)
        svc.check_in(2, SessionKind.REGULAR, office)
    finally:
        pool.shutdown(wait=True)

    assert pool.submitted == 2
