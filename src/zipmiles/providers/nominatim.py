from __future__ import annotations

import logging

from zipmiles.models import Coordinate, GeocodeResult, SourceTier
from zipmiles.providers.base import GeocoderError, NetworkProvider
from zipmiles.regions import region_from_display_name

LOG = logging.getLogger(__name__)


class NominatimProvider(NetworkProvider):
    name = "nominatim"
    tier = SourceTier.SECONDARY

    def _lookup(self, postal_code: str) -> GeocodeResult:
        params = {
            "q": f"{postal_code}, USA",
            "format": "json",
            "limit": 1,
            "countrycodes": "us",
        }
        response = self._get(self.base_url, params=params)
        if response.status_code != 200:
            raise GeocoderError(f"search failed: {response.status_code}")

        payload = response.json()
        if not isinstance(payload, list) or not payload:
            raise GeocoderError(f"no results for zip {postal_code}")

        match = payload[0]
        display_name = str(match.get("display_name") or "")
        coordinate = Coordinate(latitude=float(match["lat"]), longitude=float(match["lon"]))
        LOG.info(
            "geocoded zip=%s lat=%s lon=%s via=%s",
            postal_code,
            coordinate.latitude,
            coordinate.longitude,
            self.name,
        )
        return GeocodeResult(
            postal_code=postal_code,
            coordinate=coordinate,
            city=display_name,
            region_code=region_from_display_name(display_name),
            source_tier=self.tier,
        )
