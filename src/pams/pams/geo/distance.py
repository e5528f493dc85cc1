"""Great-circle distance helpers.

All distances are in metres on a spherical Earth.
"""

from __future__ import annotations

import math

EARTH_RADIUS_M = 6371000.0


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push ``a`` a hair above 1 for antipodal points.
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_within_fence(lat: float, lng: float, fence_lat: float, fence_lng: float, radius_m: float) -> bool:
    return haversine_distance(lat, lng, fence_lat, fence_lng) <= radius_m


def distance_from_fence_boundary(lat: float, lng: float, fence_lat: float, fence_lng: float, radius_m: float) -> float:
    """Positive = outside the fence, negative = inside."""
    return haversine_distance(lat, lng, fence_lat, fence_lng) - radius_m
