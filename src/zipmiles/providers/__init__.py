from zipmiles.providers.base import GeocodeProvider, GeocoderError, NetworkProvider
from zipmiles.providers.estimator import RegionCentroidEstimator
from zipmiles.providers.nominatim import NominatimProvider
from zipmiles.providers.zippopotam import ZippopotamProvider

__all__ = [
    "GeocodeProvider",
    "GeocoderError",
    "NetworkProvider",
    "ZippopotamProvider",
    "NominatimProvider",
    "RegionCentroidEstimator",
]
