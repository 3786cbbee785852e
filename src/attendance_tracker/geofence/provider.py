from __future__ import annotations

import logging
from concurrent.futures import Executor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Optional, Protocol

from ..common.validators import require_coordinate
from ..core.exceptions import ProviderUnavailableError
from .model import Coordinate

logger = logging.getLogger(__name__)


class GeoProvider(Protocol):
    def get_current_coordinate(self, timeout: float) -> Coordinate:
        """Return one reading; raise TimeoutError or PermissionError on failure."""

        raise NotImplementedError


class ReportedCoordinateProvider:
    """Coordinate reported by the client with the request.

    A missing reading means the client could not (or was not allowed to)
    obtain one, which surfaces as a permission failure.
    """

    def __init__(self, lat: Optional[float], lon: Optional[float]):
        self._lat = lat
        self._lon = lon

    def get_current_coordinate(self, timeout: float) -> Coordinate:
        if self._lat is None or self._lon is None:
            raise PermissionError("Location permission denied or unavailable")
        lat, lon = require_coordinate(self._lat, self._lon)
        return Coordinate(lat, lon)


def read_coordinate(provider: GeoProvider, timeout: float, executor: Executor) -> Coordinate:
    """Read one coordinate on executor, bounded by timeout seconds.

    A provider that hangs past the timeout is abandoned, not cancelled: its
    read keeps running on the executor's worker until it returns.
    """
    future = executor.submit(provider.get_current_coordinate, timeout)
    try:
        return future.result(timeout=timeout)
    except (FutureTimeout, TimeoutError):
        future.cancel()
        logger.warning("Geo provider timed out after %.1fs", timeout)
        raise ProviderUnavailableError("Location request timed out")
    except PermissionError as e:
        logger.warning("Geo provider denied: %s", e)
        raise ProviderUnavailableError(str(e) or "Location permission denied")
