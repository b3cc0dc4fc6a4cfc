from __future__ import annotations

import logging
from typing import Sequence

from zipmiles.cache import GeocodeCache
from zipmiles.models import GeocodeResult, ProviderFailure, ResolutionFailure
from zipmiles.postal import normalize_postal_code
from zipmiles.providers.base import GeocodeProvider
from zipmiles.regions import region_for_prefix

LOG = logging.getLogger(__name__)


class GeocodingResolver:
    """Cache first, then each provider in order until one succeeds.

    Tier order and the stop-on-first-success rule live here only; providers
    know nothing about each other.
    """

    def __init__(self, providers: Sequence[GeocodeProvider], cache: GeocodeCache | None = None) -> None:
        if not providers:
            raise ValueError("at least one provider is required")
        self.providers = list(providers)
        self.cache = cache if cache is not None else GeocodeCache()

    def resolve(self, raw_code: str) -> GeocodeResult | ResolutionFailure:
        postal_code = normalize_postal_code(raw_code)

        cached = self.cache.get(postal_code)
        if cached is not None:
            LOG.debug("geocode cache hit zip=%s tier=%s", postal_code, cached.source_tier.value)
            return cached

        reasons: list[str] = []
        for provider in self.providers:
            outcome = provider.resolve(postal_code)
            if isinstance(outcome, ProviderFailure):
                reasons.append(outcome.reason)
                continue
            self.cache.put(outcome)
            return outcome

        LOG.warning("all geocoding tiers failed zip=%s", postal_code)
        return ResolutionFailure(postal_code=postal_code, reasons=reasons)

    def region_code_for(self, raw_code: str) -> str | None:
        outcome = self.resolve(raw_code)
        if isinstance(outcome, GeocodeResult) and outcome.region_code:
            return outcome.region_code
        return region_for_prefix(normalize_postal_code(raw_code))

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_size(self) -> int:
        return len(self.cache)
