"""Geospatial primitives shared by matching and map filtering."""

import math
from dataclasses import dataclass

EARTH_RADIUS_MILES = 3959.0
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def haversine_distance(
    a: GeoPoint | None,
    b: GeoPoint | None,
    radius: float = EARTH_RADIUS_MILES,
) -> float:
    """Return the great-circle distance between two points.

    The unit follows the Earth radius passed in (miles by default). Missing or
    non-numeric coordinates yield ``math.inf`` so that any bound check fails.
    """
    if a is None or b is None:
        return math.inf
    coords = (a.lat, a.lng, b.lat, b.lng)
    if not all(_is_finite_number(value) for value in coords):
        return math.inf
    lat1, lng1, lat2, lng2 = (math.radians(float(value)) for value in coords)
    d_lat = lat2 - lat1
    d_lng = lng2 - lng1
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push h a hair past 1.0 for antipodal points.
    h = min(1.0, max(0.0, h))
    return radius * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def parse_point(lat: object, lng: object) -> GeoPoint | None:
    """Build a point from loose payload values, or None when incomplete."""
    lat_value = _to_float(lat)
    lng_value = _to_float(lng)
    if lat_value is None or lng_value is None:
        return None
    return GeoPoint(lat=lat_value, lng=lng_value)


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def _to_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value)
        except ValueError:
            return None
    else:
        return None
    return result if math.isfinite(result) else None
