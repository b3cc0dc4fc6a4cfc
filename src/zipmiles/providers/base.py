from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests
from pydantic import ValidationError

from zipmiles.models import GeocodeResult, ProviderFailure, SourceTier
from zipmiles.ratelimit import RateLimiter

LOG = logging.getLogger(__name__)


class GeocoderError(RuntimeError):
    pass


class GeocodeProvider(ABC):
    """One tier of the lookup chain.

    Subclasses implement ``_lookup`` and may raise freely; ``resolve`` turns every
    expected failure into a ``ProviderFailure`` so callers only branch on values.
    """

    name: str
    tier: SourceTier

    def resolve(self, postal_code: str) -> GeocodeResult | ProviderFailure:
        try:
            return self._lookup(postal_code)
        except (
            GeocoderError,
            requests.RequestException,
            ValidationError,
            AttributeError,
            KeyError,
            TypeError,
            ValueError,
        ) as exc:
            LOG.warning("provider=%s zip=%s failed: %s", self.name, postal_code, exc)
            return ProviderFailure(postal_code=postal_code, tier=self.tier, reason=f"{self.name}: {exc}")

    @abstractmethod
    def _lookup(self, postal_code: str) -> GeocodeResult:
        raise NotImplementedError


class NetworkProvider(GeocodeProvider):
    """Shared plumbing for tiers that call out over HTTP."""

    def __init__(
        self,
        base_url: str,
        rate_limiter: RateLimiter,
        session: requests.Session | None = None,
        user_agent: str = "zipmiles",
        timeout: tuple[float, float] = (5.0, 10.0),
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.rate_limiter = rate_limiter
        self.session = session or requests.Session()
        self.user_agent = user_agent
        self.timeout = timeout

    def _get(self, url: str, params: dict[str, object] | None = None) -> requests.Response:
        self.rate_limiter.acquire()
        LOG.debug("provider=%s GET %s params=%s", self.name, url, params)
        return self.session.get(
            url,
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
