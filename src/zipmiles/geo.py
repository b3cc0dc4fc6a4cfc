from __future__ import annotations

import math

from zipmiles.models import Coordinate

EARTH_RADIUS_MILES = 3959.0
ROAD_CORRECTION_FACTOR = 1.15


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def great_circle_miles(origin: Coordinate, destination: Coordinate) -> float:
    return haversine_miles(
        origin.latitude, origin.longitude, destination.latitude, destination.longitude
    )


def road_miles(
    origin: Coordinate,
    destination: Coordinate,
    correction: float = ROAD_CORRECTION_FACTOR,
) -> float:
    """Straight-line miles scaled to approximate driving distance, to 0.1 mile."""
    return round(great_circle_miles(origin, destination) * correction, 1)


def describe_distance(miles: float) -> str:
    if miles < 0:
        return "Unable to calculate"
    if miles == 0:
        return "Same location"
    if miles < 50:
        bucket = "Local"
    elif miles < 200:
        bucket = "Regional"
    elif miles < 500:
        bucket = "Long distance"
    else:
        bucket = "Cross-country"
    return f"{miles:.1f} miles ({bucket})"


def estimate_driving_hours(miles: float) -> float:
    if miles <= 0:
        return 0.0

    if miles < 50:
        avg_mph = 35.0
    elif miles < 200:
        avg_mph = 50.0
    else:
        avg_mph = 60.0

    # 10 minutes of stops per 100 miles.
    breaks = (miles / 100) * (10.0 / 60.0)
    return round(miles / avg_mph + breaks, 1)
