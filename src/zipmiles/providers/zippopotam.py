from __future__ import annotations

import logging

from zipmiles.models import Coordinate, GeocodeResult, SourceTier
from zipmiles.providers.base import GeocoderError, NetworkProvider

LOG = logging.getLogger(__name__)


class ZippopotamProvider(NetworkProvider):
    name = "zippopotam"
    tier = SourceTier.PRIMARY

    def _lookup(self, postal_code: str) -> GeocodeResult:
        response = self._get(f"{self.base_url}/{postal_code}")
        if response.status_code != 200:
            raise GeocoderError(f"zip lookup failed: {response.status_code}")

        payload = response.json()
        places = payload.get("places") or []
        if not places:
            raise GeocoderError(f"no places found for zip {postal_code}")

        place = places[0]
        coordinate = Coordinate(
            latitude=float(place["latitude"]),
            longitude=float(place["longitude"]),
        )
        result = GeocodeResult(
            postal_code=postal_code,
            coordinate=coordinate,
            city=str(place.get("place name") or ""),
            region_code=place.get("state abbreviation") or None,
            source_tier=self.tier,
        )
        LOG.info(
            "geocoded zip=%s city=%s region=%s lat=%s lon=%s via=%s",
            postal_code,
            result.city,
            result.region_code,
            coordinate.latitude,
            coordinate.longitude,
            self.name,
        )
        return result
