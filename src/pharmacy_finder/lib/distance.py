"""Great-circle distance between two coordinates."""

import math

from pharmacy_finder.lib.geocoder.base import Coordinate

EARTH_RADIUS_METERS = 6_371_000


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Return the Haversine distance in meters between two coordinates."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    delta_phi = math.radians(b.latitude - a.latitude)
    delta_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(delta_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    # Rounding can push h slightly past 1 for antipodal points
    h = min(h, 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c
