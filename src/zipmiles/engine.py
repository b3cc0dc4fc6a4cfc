from __future__ import annotations

import logging
from typing import Iterable

from zipmiles.cache import DistanceCache, pair_key
from zipmiles.geo import ROAD_CORRECTION_FACTOR, describe_distance, estimate_driving_hours, road_miles
from zipmiles.models import (
    CacheStatistics,
    DistanceFailure,
    DistanceResult,
    ResolutionFailure,
)
from zipmiles.postal import InvalidFormatError, normalize_postal_code
from zipmiles.regions import are_adjacent
from zipmiles.resolver import GeocodingResolver

LOG = logging.getLogger(__name__)

SAME_CODE_MAX_MILES = 10.0
SAME_REGION_MAX_MILES = 500.0
ADJACENT_REGION_MAX_MILES = 1000.0
CROSS_COUNTRY_MAX_MILES = 3000.0
CONTINENTAL_MAX_MILES = 3500.0


class DistanceEngine:
    """Road-distance estimates between two postal codes.

    Failures come back as ``DistanceFailure`` values. Picking a substitute
    distance is left to the caller.
    """

    def __init__(
        self,
        resolver: GeocodingResolver,
        cache: DistanceCache | None = None,
        road_correction: float = ROAD_CORRECTION_FACTOR,
    ) -> None:
        self.resolver = resolver
        self.cache = cache if cache is not None else DistanceCache()
        self.road_correction = road_correction

    def resolve_distance(self, origin: str, destination: str) -> DistanceResult | DistanceFailure:
        origin_code = normalize_postal_code(origin)
        destination_code = normalize_postal_code(destination)

        if origin_code == destination_code:
            return DistanceResult(postal_codes=(origin_code, destination_code), miles=0.0)

        cached = self.cache.get(origin_code, destination_code)
        if cached is not None:
            LOG.debug(
                "distance cache hit %s-%s miles=%s", origin_code, destination_code, cached.miles
            )
            return cached

        origin_geo = self.resolver.resolve(origin_code)
        destination_geo = self.resolver.resolve(destination_code)

        reasons = [
            str(outcome)
            for outcome in (origin_geo, destination_geo)
            if isinstance(outcome, ResolutionFailure)
        ]
        if reasons:
            LOG.warning("distance unavailable %s-%s", origin_code, destination_code)
            return DistanceFailure(origin=origin_code, destination=destination_code, reasons=reasons)

        miles = road_miles(origin_geo.coordinate, destination_geo.coordinate, self.road_correction)
        result = DistanceResult(postal_codes=pair_key(origin_code, destination_code), miles=miles)
        self.cache.put(result)
        LOG.info(
            "distance %s-%s miles=%s tiers=%s/%s",
            origin_code,
            destination_code,
            miles,
            origin_geo.source_tier.value,
            destination_geo.source_tier.value,
        )
        return result

    def distance_miles(self, origin: str, destination: str) -> float | None:
        outcome = self.resolve_distance(origin, destination)
        if isinstance(outcome, DistanceFailure):
            return None
        return outcome.miles

    def resolve_many(
        self, pairs: Iterable[tuple[str, str]]
    ) -> list[DistanceResult | DistanceFailure]:
        results: list[DistanceResult | DistanceFailure] = []
        for origin, destination in pairs:
            try:
                results.append(self.resolve_distance(origin, destination))
            except InvalidFormatError as exc:
                results.append(
                    DistanceFailure(origin=str(origin), destination=str(destination), reasons=[str(exc)])
                )
        return results

    def is_reasonable_distance(self, origin: str, destination: str, miles: float) -> bool:
        if miles < 0:
            return False

        origin_code = normalize_postal_code(origin)
        destination_code = normalize_postal_code(destination)
        if origin_code == destination_code:
            return miles <= SAME_CODE_MAX_MILES

        origin_region = self.resolver.region_code_for(origin_code)
        destination_region = self.resolver.region_code_for(destination_code)
        if origin_region is None or destination_region is None:
            return miles <= CONTINENTAL_MAX_MILES
        if origin_region == destination_region:
            return miles <= SAME_REGION_MAX_MILES
        if are_adjacent(origin_region, destination_region):
            return miles <= ADJACENT_REGION_MAX_MILES
        return miles <= CROSS_COUNTRY_MAX_MILES

    def describe(self, miles: float) -> str:
        return describe_distance(miles)

    def estimate_driving_hours(self, miles: float) -> float:
        return estimate_driving_hours(miles)

    def clear_cache(self) -> None:
        self.cache.clear()

    def statistics(self) -> CacheStatistics:
        return self.cache.statistics()
