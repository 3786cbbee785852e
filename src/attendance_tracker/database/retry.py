from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from ..core.constants import DEFAULT_RETRY_BACKOFF_SECONDS, DEFAULT_RETRY_MAX_ATTEMPTS
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry transient StorageError with exponential backoff.

    Only wrap operations that are safe to repeat.
    """

    max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    backoff_seconds: float = DEFAULT_RETRY_BACKOFF_SECONDS
    multiplier: float = 2.0
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False)

    def delay_for(self, attempt: int) -> float:
        return self.backoff_seconds * (self.multiplier ** (attempt - 1))

    def call(self, operation: str, fn: Callable[[int], T]) -> T:
        """Run fn(attempt) until it succeeds or attempts run out."""
        attempt = 0
        while True:
            attempt += 1
            try:
                return fn(attempt)
            except StorageError as e:
                if attempt >= max(1, self.max_attempts):
                    logger.error("%s failed after %d attempt(s): %s", operation, attempt, e)
                    raise
                delay = self.delay_for(attempt)
                logger.warning("%s failed (attempt %d), retrying in %.2fs: %s", operation, attempt, delay, e)
                self.sleep(delay)
