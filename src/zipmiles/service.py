from __future__ import annotations

import logging
from pathlib import Path

import requests

from zipmiles.cache import DistanceCache, GeocodeCache
from zipmiles.config import EngineConfig, load_config
from zipmiles.engine import DistanceEngine
from zipmiles.geo import describe_distance
from zipmiles.models import CacheStatistics, DistanceFailure, DistanceResult, ValidationOutcome
from zipmiles.providers import (
    GeocodeProvider,
    NominatimProvider,
    RegionCentroidEstimator,
    ZippopotamProvider,
)
from zipmiles.ratelimit import RateLimiter
from zipmiles.resolver import GeocodingResolver
from zipmiles.validation import DistanceValidationGuard

LOG = logging.getLogger(__name__)


class DistanceService:
    """What the rest of the application talks to."""

    def __init__(
        self,
        engine: DistanceEngine,
        guard: DistanceValidationGuard | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.engine = engine
        self.guard = guard or DistanceValidationGuard()
        self.config = config or EngineConfig()

    @property
    def resolver(self) -> GeocodingResolver:
        return self.engine.resolver

    def resolve_distance(self, origin: str, destination: str) -> DistanceResult | DistanceFailure:
        return self.engine.resolve_distance(origin, destination)

    def validate_postal_code(self, code: str | None) -> ValidationOutcome:
        return self.guard.validate_postal_code(code)

    def validate_distance(
        self, origin: str | None, destination: str | None, miles: float
    ) -> ValidationOutcome:
        return self.guard.validate_distance(origin, destination, miles)

    def validate_per_mile_rate(self, rate: float) -> ValidationOutcome:
        return self.guard.validate_per_mile_rate(rate)

    def describe_distance(self, miles: float) -> str:
        return describe_distance(miles)

    def clear_geocode_cache(self) -> None:
        self.resolver.clear_cache()

    def clear_distance_cache(self) -> None:
        self.engine.clear_cache()

    def cache_statistics(self) -> CacheStatistics:
        return self.engine.statistics()


def build_providers(
    config: EngineConfig,
    rate_limiter: RateLimiter,
    session: requests.Session | None = None,
) -> list[GeocodeProvider]:
    session = session or requests.Session()
    shared = {
        "rate_limiter": rate_limiter,
        "session": session,
        "user_agent": config.user_agent,
        "timeout": config.timeout,
    }
    return [
        ZippopotamProvider(config.primary_base_url, **shared),
        NominatimProvider(config.secondary_base_url, **shared),
        RegionCentroidEstimator(),
    ]


def build_service(
    config: EngineConfig | None = None,
    session: requests.Session | None = None,
    rate_limiter: RateLimiter | None = None,
) -> DistanceService:
    config = config or EngineConfig()
    rate_limiter = rate_limiter or RateLimiter(min_interval=config.min_interval_seconds)
    resolver = GeocodingResolver(
        providers=build_providers(config, rate_limiter, session),
        cache=GeocodeCache(ttl_days=config.geocode_ttl_days),
    )
    engine = DistanceEngine(
        resolver=resolver,
        cache=DistanceCache(max_entries=config.distance_cache_max_entries),
        road_correction=config.road_correction_factor,
    )
    LOG.debug(
        "distance service ready primary=%s secondary=%s interval=%ss",
        config.primary_base_url,
        config.secondary_base_url,
        config.min_interval_seconds,
    )
    return DistanceService(engine=engine, config=config)


def build_service_from_path(config_path: str | Path | None = None) -> DistanceService:
    return build_service(load_config(config_path))
