"""Great-circle distance between two (lat, lon) points."""

import math

from models.location_model import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine(point_a: Coordinates, point_b: Coordinates) -> float:
    """Return the haversine distance in kilometres, rounded to 2 decimals."""
    lat1, lon1 = point_a
    lat2, lon2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # floating point drift can push a slightly past 1 near antipodes
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return round(EARTH_RADIUS_KM * c, 2)


def format_distance(distance_km: float) -> str:
    return f"{distance_km:.2f} km"
