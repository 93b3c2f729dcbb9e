import math

import pytest

from app.utils.geo import distance_km, has_coordinates


@pytest.mark.parametrize("lat, lng", [(0.0, 0.0), (15.5, 73.8), (-33.86, 151.21), (89.9, -179.9)])
def test_distance_to_self_is_zero(lat, lng):
    assert distance_km(lat, lng, lat, lng) == 0


def test_distance_is_symmetric():
    a = (15.4989, 73.8278)
    b = (15.5439, 73.7553)
    assert distance_km(*a, *b) == pytest.approx(distance_km(*b, *a))


def test_one_degree_of_latitude_at_equator():
    assert distance_km(0, 0, 1, 0) == pytest.approx(111, abs=1)


def test_panaji_to_calangute():
    # Roughly 9 km as the crow flies
    assert 8 < distance_km(15.4989, 73.8278, 15.5439, 73.7553) < 10


def test_nan_propagates_without_raising():
    assert math.isnan(distance_km(float("nan"), 73.8, 15.5, 73.8))


def test_has_coordinates():
    assert has_coordinates({"latitude": 15.5, "longitude": 73.8})
    assert has_coordinates({"latitude": 0, "longitude": 0})
    assert not has_coordinates({"latitude": None, "longitude": 73.8})
    assert not has_coordinates({"latitude": 15.5})
    assert not has_coordinates({"latitude": float("nan"), "longitude": 73.8})
    assert not has_coordinates({"latitude": "north", "longitude": 73.8})
