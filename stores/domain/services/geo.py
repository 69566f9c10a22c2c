"""Great-circle distance between two points given in decimal degrees."""

import math

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float, radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Haversine distance in kilometres.

    Symmetric, zero for identical points, never negative.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Clamp rounding noise so asin stays in its domain for antipodal points.
    a = min(1.0, max(0.0, a))
    return 2 * radius_km * math.asin(math.sqrt(a))
