"""
Geo utilities: great-circle distance between coordinates.
"""

import math

EARTH_RADIUS_KM = 6371


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance in kilometres between two points given in degrees.

    Inputs are not validated; NaN coordinates yield NaN.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def has_coordinates(record: dict) -> bool:
    """True when both latitude and longitude are present and numeric (NaN counts as missing)."""
    lat = record.get("latitude")
    lng = record.get("longitude")
    if lat is None or lng is None:
        return False
    try:
        return not (math.isnan(float(lat)) or math.isnan(float(lng)))
    except (TypeError, ValueError):
        return False
