from src.pams.pams.core.enums import FenceType, LocationType
from src.pams.pams.geo.classifier import classify_location
from src.pams.pams.geo.model import GeoFence

OFFICE = GeoFence(fence_id=1, company_id=1, latitude=21.0285, longitude=105.8542, radius_m=200, fence_type=FenceType.OFFICE)
CLIENT = GeoFence(fence_id=2, company_id=1, latitude=21.0300, longitude=105.8542, radius_m=500, fence_type=FenceType.CLIENT_SITE)


def test_point_inside_office_fence():
    result = classify_location(21.0286, 105.8542, [OFFICE], 5000)

    assert result.location_type == LocationType.OFFICE
    assert result.nearest_fence_id == 1
    assert result.is_on_site


def test_point_inside_client_site():
    result = classify_location(21.0330, 105.8542, [CLIENT], 5000)

    assert result.location_type == LocationType.CLIENT_SITE
    assert result.nearest_fence_id == 2


def test_overlapping_fences_first_match_wins():
    # Inside both fences but closer to the client site centre.
    point = (21.0297, 105.8542)

    assert classify_location(*point, [OFFICE, CLIENT], 5000).nearest_fence_id == 1
    assert classify_location(*point, [CLIENT, OFFICE], 5000).nearest_fence_id == 2


def test_outside_fences_within_threshold_is_wfh():
    # ~1.1 km north of the office
    result = classify_location(21.0385, 105.8542, [OFFICE], 5000)

    assert result.location_type == LocationType.WORK_FROM_HOME
    assert result.nearest_fence_id == 1
    assert not result.is_on_site


def test_far_away_is_unknown_with_nearest_fence():
    result = classify_location(10.7769, 106.7009, [OFFICE, CLIENT], 5000)

    assert result.location_type == LocationType.UNKNOWN
    assert result.nearest_fence_id == 1
    assert result.distance_m > 1_000_000


def test_no_fences_is_unknown_without_fence():
    result = classify_location(21.0285, 105.8542, [], 5000)

    assert result.location_type == LocationType.UNKNOWN
    assert result.nearest_fence_id is None
    assert result.distance_m is None
