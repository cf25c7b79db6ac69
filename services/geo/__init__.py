from .distance import EARTH_RADIUS_KM, format_distance, haversine
from .geo_resolver import GeoResolver

__all__ = [
    "EARTH_RADIUS_KM",
    "format_distance",
    "haversine",
    "GeoResolver",
]
