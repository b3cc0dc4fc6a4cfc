from __future__ import annotations

import threading
import time
from typing import Any

import requests

from zipmiles.models import Coordinate, GeocodeResult, SourceTier
from zipmiles.providers.base import GeocodeProvider, GeocoderError
from zipmiles.ratelimit import RateLimiter

# Real-world coordinates as returned by zippopotam.
BEVERLY_HILLS = ("90210", 34.0901, -118.4065, "Beverly Hills", "CA")
MANHATTAN = ("10001", 40.7484, -73.9967, "New York City", "NY")
CHICAGO = ("60601", 41.8858, -87.6181, "Chicago", "IL")
NEWARK = ("07102", 40.7357, -74.1724, "Newark", "NJ")


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for requests.Session; answers by exact URL."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, params=None, headers=None, timeout=None) -> FakeResponse:
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        answer = self.responses.get(url, FakeResponse(404, {}))
        if isinstance(answer, Exception):
            raise answer
        return answer


def zippopotam_payload(code: str, lat: float, lon: float, city: str, state: str) -> dict[str, Any]:
    return {
        "post code": code,
        "country": "United States",
        "places": [
            {
                "place name": city,
                "longitude": str(lon),
                "latitude": str(lat),
                "state": "",
                "state abbreviation": state,
            }
        ],
    }


def zippopotam_session(*places: tuple[str, float, float, str, str], base: str = "http://zip.test/us") -> FakeSession:
    return FakeSession(
        {f"{base}/{p[0]}": FakeResponse(200, zippopotam_payload(*p)) for p in places}
    )


class CountingLimiter(RateLimiter):
    def __init__(self) -> None:
        super().__init__(min_interval=0.0)
        self.count = 0
        self._count_lock = threading.Lock()

    def acquire(self) -> float:
        with self._count_lock:
            self.count += 1
        return super().acquire()


class StaticProvider(GeocodeProvider):
    """Answers from a dict; anything else fails."""

    def __init__(self, tier: SourceTier, places: dict[str, tuple[float, float, str]], name: str | None = None) -> None:
        self.tier = tier
        self.name = name or tier.value
        self.places = places
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def _lookup(self, postal_code: str) -> GeocodeResult:
        with self._lock:
            self.calls.append(postal_code)
        if postal_code not in self.places:
            raise GeocoderError(f"unknown zip {postal_code}")
        lat, lon, region = self.places[postal_code]
        return GeocodeResult(
            postal_code=postal_code,
            coordinate=Coordinate(latitude=lat, longitude=lon),
            city="Test",
            region_code=region,
            source_tier=self.tier,
        )


def failing(tier: SourceTier) -> StaticProvider:
    return StaticProvider(tier, {})


def places(*rows: tuple[str, float, float, str, str]) -> dict[str, tuple[float, float, str]]:
    return {code: (lat, lon, state) for code, lat, lon, _city, state in rows}


def response_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


class TimestampingSession(FakeSession):
    """Records the monotonic time of every request it serves."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        super().__init__(responses)
        self.stamps: list[float] = []
        self._stamp_lock = threading.Lock()

    def get(self, url: str, params=None, headers=None, timeout=None) -> FakeResponse:
        with self._stamp_lock:
            self.stamps.append(time.monotonic())
        return super().get(url, params=params, headers=headers, timeout=timeout)


class ExplodingProvider(GeocodeProvider):
    """Raises something no provider is expected to raise."""

    name = "exploding"
    tier = SourceTier.PRIMARY

    def _lookup(self, postal_code: str) -> GeocodeResult:
        raise RuntimeError("unexpected upstream bug")
