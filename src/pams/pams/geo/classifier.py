from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import FenceType, LocationType
from .distance import haversine_distance
from .model import GeoFence


@dataclass(frozen=True)
class LocationClassification:
    location_type: LocationType
    nearest_fence_id: Optional[int]
    distance_m: Optional[float]

    @property
    def is_on_site(self) -> bool:
        return self.location_type in (LocationType.OFFICE, LocationType.CLIENT_SITE)


def classify_location(
    lat: float,
    lng: float,
    fences: Sequence[GeoFence],
    wfh_threshold_m: float,
) -> LocationClassification:
    """Classify a coordinate against the company's fences.

    Fences are tried in the given order and the first one containing the point
    wins, even when a later fence is closer. Repositories return fences ordered
    by id so the outcome is stable for overlapping fences.
    """

    nearest: Optional[GeoFence] = None
    nearest_distance = math.inf

    for fence in fences:
        distance = haversine_distance(lat, lng, fence.latitude, fence.longitude)
        if distance < nearest_distance:
            nearest = fence
            nearest_distance = distance

        if distance <= fence.radius_m:
            location_type = (
                LocationType.CLIENT_SITE if fence.fence_type == FenceType.CLIENT_SITE else LocationType.OFFICE
            )
            return LocationClassification(location_type, fence.fence_id, distance)

    if nearest is None:
        return LocationClassification(LocationType.UNKNOWN, None, None)

    if nearest_distance <= wfh_threshold_m:
        return LocationClassification(LocationType.WORK_FROM_HOME, nearest.fence_id, nearest_distance)

    return LocationClassification(LocationType.UNKNOWN, nearest.fence_id, nearest_distance)
