"""Great-circle distance helpers."""

import math

# Mean Earth radius (IUGG), metres
EARTH_RADIUS_METERS = 6_371_008.8


def haversine_distance(
    a: tuple[float, float],
    b: tuple[float, float],
) -> float:
    """Great-circle distance in metres between two ``(lat, lon)`` points."""
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # Clamp guards asin against rounding just above 1 for antipodal points
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def format_distance(meters: float) -> str:
    """Human-readable distance: whole metres below 1 km, one decimal km above.

    Examples:
        >>> format_distance(850.4)
        '850m'
        >>> format_distance(1234.0)
        '1.2km'
    """
    if meters < 1000:
        return f"{int(meters)}m"
    return f"{meters / 1000:.1f}km"
