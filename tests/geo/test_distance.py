import math

import pytest

from src.pams.pams.geo.distance import distance_from_fence_boundary, haversine_distance, is_within_fence

POINTS = [
    (21.0285, 105.8542),
    (10.7769, 106.7009),
    (51.5074, -0.1278),
    (-33.8688, 151.2093),
    (0.0, 0.0),
]


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_distance_is_symmetric(a, b):
    assert haversine_distance(*a, *b) == pytest.approx(haversine_distance(*b, *a))


@pytest.mark.parametrize("p", POINTS)
def test_distance_to_self_is_zero(p):
    assert haversine_distance(*p, *p) == 0.0


def test_one_degree_of_latitude_is_about_111_km():
    assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, rel=1e-3)


def test_antipodal_points_do_not_blow_up():
    d = haversine_distance(0.0, 0.0, 0.0, 180.0)
    assert d == pytest.approx(math.pi * 6371000.0)


def test_within_fence_and_boundary_sign():
    centre = (21.0285, 105.8542)
    near = (21.0290, 105.8542)  # ~55 m north

    assert is_within_fence(*near, *centre, radius_m=100)
    assert not is_within_fence(*near, *centre, radius_m=10)
    assert distance_from_fence_boundary(*near, *centre, radius_m=100) < 0
    assert distance_from_fence_boundary(*near, *centre, radius_m=10) > 0
