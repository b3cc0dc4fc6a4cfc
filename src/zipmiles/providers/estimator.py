from __future__ import annotations

import logging

from zipmiles.models import GeocodeResult, SourceTier
from zipmiles.providers.base import GeocodeProvider, GeocoderError
from zipmiles.regions import REGION_CENTROIDS, region_for_prefix

LOG = logging.getLogger(__name__)


class RegionCentroidEstimator(GeocodeProvider):
    """Last tier: the centroid of the region the postal prefix falls in.

    Approximate by nature. Makes no network calls.
    """

    name = "region-centroid"
    tier = SourceTier.ESTIMATE

    def _lookup(self, postal_code: str) -> GeocodeResult:
        region = region_for_prefix(postal_code)
        if region is None or region not in REGION_CENTROIDS:
            raise GeocoderError(f"no region known for prefix {postal_code[:3]}")

        LOG.info("estimating zip=%s from region=%s centroid", postal_code, region)
        return GeocodeResult(
            postal_code=postal_code,
            coordinate=REGION_CENTROIDS[region],
            city="Estimated",
            region_code=region,
            source_tier=self.tier,
        )
