"""Tests for FlightFeed filtering, selection and enrichment."""

import asyncio

import httpx
import pytest

from radar.config import Settings
from radar.errors import UpstreamError
from radar.feeds.flight_feed import FlightFeed, create_feed
from radar.render.geo import NoAircraftInRange, Selected
from tests.conftest import CENTER, ROUTE, make_aircraft, png_bytes


class FakePositions:
    def __init__(self, states=None, error=None):
        self.states_result = states or []
        self.error = error
        self.boxes = []

    async def states(self, box):
        self.boxes.append(box)
        if self.error:
            raise self.error
        return self.states_result


class FakeAdsbdb:
    def __init__(self, route=None, aircraft_type=None):
        self._route = route
        self._type = aircraft_type
        self.callsigns = []

    async def route(self, callsign):
        self.callsigns.append(callsign)
        return self._route

    async def aircraft_type(self, icao24):
        return self._type


class FakePhotos:
    def __init__(self, result=None):
        self.result = result

    async def photo(self, icao24):
        return self.result


def _feed(states=None, error=None, route=None, aircraft_type=None, photo=None, **limits) -> FlightFeed:
    return FlightFeed(
        positions=FakePositions(states, error),
        adsbdb=FakeAdsbdb(route, aircraft_type),
        photos=FakePhotos(photo),
        center=CENTER,
        query_radius_km=25.0,
        **limits,
    )


def test_altitude_ceiling():
    feed = _feed(max_altitude_m=6096.0)
    assert feed.in_range(make_aircraft(altitude_m=6096.0))
    assert not feed.in_range(make_aircraft(altitude_m=10000.0))
    # unknown altitude passes
    assert feed.in_range(make_aircraft(altitude_m=None))


def test_distance_limit():
    feed = _feed(max_distance_km=8.0)
    assert feed.in_range(make_aircraft(km=7.9))
    assert not feed.in_range(make_aircraft(km=8.1))


def test_no_limits_accepts_everything():
    feed = _feed()
    assert feed.in_range(make_aircraft(km=20.0, altitude_m=12000.0))


def test_candidates_are_filtered_in_order():
    states = [
        make_aircraft("aaaaaa", km=3.0, altitude_m=11000.0),
        make_aircraft("bbbbbb", km=12.0),
        make_aircraft("cccccc", km=6.0),
        make_aircraft("dddddd", km=2.0),
    ]
    feed = _feed(states, max_altitude_m=6096.0, max_distance_km=8.0)
    result = asyncio.run(feed.candidates())
    assert [a.icao24 for a in result] == ["cccccc", "dddddd"]


def test_candidates_outside_query_box_are_dropped():
    # upstream may hand back positions beyond the requested box
    states = [make_aircraft("inside", km=20.0), make_aircraft("beyond", km=40.0)]
    feed = _feed(states)
    result = asyncio.run(feed.candidates())
    assert [a.icao24 for a in result] == ["inside"]


def test_query_uses_bounding_box():
    feed = _feed()
    asyncio.run(feed.snapshot())
    (box,) = feed.positions.boxes
    assert box.contains(CENTER)
    assert box == feed.box


def test_empty_sky_snapshot():
    feed = _feed([make_aircraft(km=15.0)], max_distance_km=8.0)
    snapshot = asyncio.run(feed.snapshot())
    assert isinstance(snapshot.selection, NoAircraftInRange)
    assert snapshot.route is None
    assert snapshot.photo is None
    assert feed.adsbdb.callsigns == []


def test_enriched_snapshot():
    data = png_bytes()
    url = "https://cdn.test/p.jpg"
    states = [make_aircraft("far000", km=6.0), make_aircraft("near00", km=1.0, callsign="SWR318 ")]
    feed = _feed(states, route=ROUTE, aircraft_type="A220-300", photo=(url, data))

    snapshot = asyncio.run(feed.snapshot())

    assert isinstance(snapshot.selection, Selected)
    aircraft = snapshot.selection.aircraft
    assert aircraft.icao24 == "near00"
    assert aircraft.route == ROUTE
    assert aircraft.photo_url == url
    assert snapshot.selection.distance_km == pytest.approx(1.0, abs=1e-6)
    assert snapshot.route == ROUTE
    assert snapshot.aircraft_type == "A220-300"
    assert snapshot.photo == data
    assert feed.adsbdb.callsigns == ["SWR318"]


def test_missing_enrichment_still_selects():
    feed = _feed([make_aircraft(km=2.0)])
    snapshot = asyncio.run(feed.snapshot())
    assert isinstance(snapshot.selection, Selected)
    assert snapshot.selection.aircraft.route is None
    assert snapshot.selection.aircraft.photo_url is None
    assert snapshot.aircraft_type is None
    assert snapshot.photo is None


def test_position_failure_propagates():
    feed = _feed(error=UpstreamError("OpenSky query failed: 503"))
    with pytest.raises(UpstreamError):
        asyncio.run(feed.snapshot())


def test_create_feed_from_settings():
    cfg = Settings(latitude=46.0, longitude=7.0, max_distance_km=5.0, opensky_client_id="", opensky_client_secret="")

    async def build():
        async with httpx.AsyncClient() as client:
            return create_feed(client, cfg)

    feed = asyncio.run(build())
    assert feed.center.latitude == 46.0
    assert feed.max_distance_km == 5.0
    assert feed.max_altitude_m == cfg.max_altitude_m
    assert feed.box.contains(feed.center)
