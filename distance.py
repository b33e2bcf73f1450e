from typing import Sequence

from coord import to_radians
from vector import Spherical, Vector

# ============================================================================
# CONFIGURATION
# ============================================================================

EARTH_MEAN_RADIUS = 6371.0      # km
KILOMETERS_PER_MILE = 1.609344

# (upper bound, decimal digits) of the distance text
PRECISION_BRACKETS = [(1, 4), (10, 3), (100, 2), (1000, 1)]


def lon_lat_to_vector(p: Sequence[float]) -> Vector:
    """Unit vector of a [lon, lat] pair given in degrees."""
    return Vector.from_spherical(Spherical(to_radians(p[0]), to_radians(p[1])))


def distance_between(p0: Sequence[float], p1: Sequence[float]) -> float:
    """
    Great-circle distance in kilometres between two [lon, lat] points.

    Args:
        p0: First point, degrees
        p1: Second point, degrees

    Returns:
        Distance along the Earth's surface in km
    """
    return lon_lat_to_vector(p0).angle_between(lon_lat_to_vector(p1)) * EARTH_MEAN_RADIUS


def format_distance(km: float, use_miles: bool = False) -> str:
    """Human readable distance, e.g. 0.25 km, 1500 km, 12.43 mi."""
    value = km / (KILOMETERS_PER_MILE if use_miles else 1.0)

    digits = 0
    for bound, bracket_digits in PRECISION_BRACKETS:
        if value < bound:
            digits = bracket_digits
            break

    text = f"{value:.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {'mi' if use_miles else 'km'}"
