import math

from trackstats.core.constants import EARTH_RADIUS_M

# FIT stores positions as signed 32-bit integers spanning 360 degrees
DEGREES_PER_SEMICIRCLE = 180.0 / 2**31


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two samples, on a spherical earth."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    half_chord = (
        math.sin(math.radians(lat2 - lat1) / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(math.radians(lon2 - lon1) / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(half_chord, 1.0)))


def semicircles_to_degrees(value):
    if value is None:
        return None
    return value * DEGREES_PER_SEMICIRCLE
