from __future__ import annotations

import logging
import threading
import time
from typing import Callable

LOG = logging.getLogger(__name__)


class RateLimiter:
    """Process-wide gate in front of outbound geocoding requests.

    ``acquire`` returns only once ``min_interval`` seconds have passed since the
    previous caller was let through. The lock is held while sleeping, so
    concurrent callers queue up and pass one at a time.
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_call: float | None = None

    def acquire(self) -> float:
        with self._lock:
            waited = 0.0
            if self._last_call is not None:
                remaining = self._last_call + self.min_interval - self._clock()
                if remaining > 0:
                    LOG.debug("rate limit wait=%.3fs", remaining)
                    self._sleep(remaining)
                    waited = remaining
            self._last_call = self._clock()
            return waited

    @property
    def last_call(self) -> float | None:
        return self._last_call
