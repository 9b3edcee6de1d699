"""
Stateless helpers shared by the services.
"""
from app.utils.spatial import (
    Coordinate,
    distance_km,
    is_within_radius,
    filter_within_radius,
)

__all__ = [
    "Coordinate",
    "distance_km",
    "is_within_radius",
    "filter_within_radius",
]
