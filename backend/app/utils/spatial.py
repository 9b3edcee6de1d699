"""
Geospatial helpers for the Doha mall dataset.

Distances use the Haversine formula on a sphere of mean Earth radius, which
ignores ellipsoidal flattening. That is plenty for city-scale radius search.
"""
import math
from typing import Any, Iterable, List, Mapping, NamedTuple, Tuple, Union

EARTH_RADIUS_KM = 6371.0


class Coordinate(NamedTuple):
    """Latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float


PointLike = Union[Coordinate, Tuple[float, float]]


def distance_km(a: PointLike, b: PointLike) -> float:
    """
    Great-circle distance between two points in kilometers.

    Args:
        a: First point as (lat, lon)
        b: Second point as (lat, lon)

    Returns:
        Distance in kilometers

    Example:
        >>> distance_km((25.2854, 51.5310), (25.2854, 51.5310))
        0.0
    """
    lat1, lon1 = a
    lat2, lon2 = b

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.sin(d_lon / 2) ** 2 * math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
    )
    # Rounding can push h a hair above 1 for antipodal points
    h = min(1.0, h)

    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def is_within_radius(point: PointLike, center: PointLike, radius_meters: float) -> bool:
    """Return True if ``point`` lies within ``radius_meters`` of ``center`` (inclusive)."""
    return distance_km(point, center) * 1000 <= radius_meters


def _item_point(item: Any) -> Coordinate:
    if isinstance(item, Mapping):
        return Coordinate(item["latitude"], item["longitude"])
    return Coordinate(item.latitude, item.longitude)


def filter_within_radius(items: Iterable[Any], center: PointLike, radius_meters: float) -> List[Any]:
    """
    Return the items located within a radius of a center point.

    Args:
        items: Mappings or objects exposing ``latitude`` and ``longitude``
        center: Center point as (lat, lon)
        radius_meters: Search radius in meters

    Returns:
        Matching items, in input order
    """
    return [
        item for item in items
        if is_within_radius(_item_point(item), center, radius_meters)
    ]
