from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from zipmiles.models import CacheStatistics, DistanceResult, GeocodeResult

LOG = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class GeocodeCache:
    """Postal code -> GeocodeResult, with lazy time-based staleness.

    Stale entries are never evicted in the background. A read past the
    retention window is reported as a miss and the next write replaces it.
    """

    def __init__(
        self,
        ttl_days: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = ttl_days * SECONDS_PER_DAY
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, GeocodeResult] = {}

    def get(self, postal_code: str) -> GeocodeResult | None:
        with self._lock:
            entry = self._entries.get(postal_code)
        if entry is None:
            return None
        if self.is_stale(entry):
            LOG.debug("geocode cache stale zip=%s", postal_code)
            return None
        return entry

    def put(self, result: GeocodeResult) -> None:
        with self._lock:
            self._entries[result.postal_code] = result

    def is_stale(self, entry: GeocodeResult) -> bool:
        return self._clock() - entry.resolved_at > self.ttl_seconds

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        LOG.info("geocode cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def pair_key(origin: str, destination: str) -> tuple[str, str]:
    if origin <= destination:
        return origin, destination
    return destination, origin


class DistanceCache:
    """Unordered postal code pair -> DistanceResult.

    Entries never expire. When ``max_entries`` is reached the whole store is
    dropped before the next insert.
    """

    def __init__(self, max_entries: int = 10_000) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, str], DistanceResult] = {}

    def get(self, origin: str, destination: str) -> DistanceResult | None:
        with self._lock:
            return self._entries.get(pair_key(origin, destination))

    def put(self, result: DistanceResult) -> None:
        key = pair_key(*result.postal_codes)
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_entries:
                self._entries.clear()
                LOG.info("distance cache cleared size_limit=%s", self.max_entries)
            self._entries[key] = result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        LOG.info("distance cache cleared")

    def statistics(self) -> CacheStatistics:
        with self._lock:
            miles = [entry.miles for entry in self._entries.values()]
        if not miles:
            return CacheStatistics(count=0, average=0.0, minimum=0.0, maximum=0.0)
        return CacheStatistics(
            count=len(miles),
            average=sum(miles) / len(miles),
            minimum=min(miles),
            maximum=max(miles),
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
