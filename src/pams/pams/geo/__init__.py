from .classifier import LocationClassification, classify_location
from .distance import distance_from_fence_boundary, haversine_distance, is_within_fence

__all__ = [
    "LocationClassification",
    "classify_location",
    "distance_from_fence_boundary",
    "haversine_distance",
    "is_within_fence",
]
