"""Tests for haversine distance, bounding boxes and nearest-aircraft selection."""

import random

import pytest

from radar.models.flight import GeoPoint
from radar.render.geo import BoundingBox, NoAircraftInRange, Selected, haversine_km, select
from tests.conftest import CENTER, make_aircraft


def test_haversine_distance_zurich():
    a = GeoPoint(latitude=47.3769, longitude=8.5417)
    b = GeoPoint(latitude=47.3780, longitude=8.5400)
    # Approx 0.17 km
    assert 0.1 < haversine_km(a, b) < 0.3


def test_haversine_same_point_is_zero():
    assert haversine_km(CENTER, CENTER) == 0.0


def test_haversine_meridian_distance():
    far = make_aircraft(km=40.0)
    assert haversine_km(CENTER, far.position) == pytest.approx(40.0, rel=1e-9)


def test_select_empty_is_none():
    assert isinstance(select([], CENTER), NoAircraftInRange)


def test_select_closest_regardless_of_order():
    near = make_aircraft("aaaaaa", km=10.0)
    far = make_aircraft("bbbbbb", km=40.0)

    for candidates in ([near, far], [far, near]):
        result = select(candidates, CENTER)
        assert isinstance(result, Selected)
        assert result.aircraft.icao24 == "aaaaaa"
        assert result.distance_km == pytest.approx(10.0, rel=1e-9)


def test_select_tie_goes_to_first():
    first = make_aircraft("111111", km=12.0)
    second = make_aircraft("222222", km=12.0)
    farther = make_aircraft("333333", km=30.0)

    assert select([first, second], CENTER).aircraft.icao24 == "111111"
    assert select([second, first], CENTER).aircraft.icao24 == "222222"
    assert select([farther, second, first], CENTER).aircraft.icao24 == "222222"


def test_select_accepts_any_iterable():
    result = select(iter([make_aircraft(km=3.0)]), CENTER)
    assert isinstance(result, Selected)


def test_select_returns_minimum_distance():
    rng = random.Random(7)
    candidates = [
        make_aircraft(
            f"{i:06x}",
            position=GeoPoint(
                latitude=CENTER.latitude + rng.uniform(-0.3, 0.3),
                longitude=CENTER.longitude + rng.uniform(-0.3, 0.3),
            ),
        )
        for i in range(50)
    ]
    result = select(candidates, CENTER)
    expected = min(haversine_km(CENTER, c.position) for c in candidates)
    assert result.distance_km == expected


def test_bounding_box_around_center():
    box = BoundingBox.around(CENTER, 25.0)
    assert box.min_lat <= box.max_lat
    assert box.min_lon <= box.max_lon
    assert box.contains(CENTER)
    # ~50 km tall
    south = GeoPoint(latitude=box.min_lat, longitude=CENTER.longitude)
    north = GeoPoint(latitude=box.max_lat, longitude=CENTER.longitude)
    assert haversine_km(south, north) == pytest.approx(50.0, rel=0.01)


def test_bounding_box_clamps_latitude():
    box = BoundingBox.around(GeoPoint(latitude=89.9, longitude=0.0), 50.0)
    assert box.max_lat == 90.0
    assert box.min_lat <= box.max_lat


def test_bounding_box_rejects_negative_radius():
    with pytest.raises(ValueError):
        BoundingBox.around(CENTER, -1.0)
