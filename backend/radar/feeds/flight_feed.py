"""Fetches everything one frame needs and picks the aircraft."""

from __future__ import annotations

import asyncio
import logging
import time

import httpx

from radar.config import Settings
from radar.feeds.adsbdb import AdsbdbClient
from radar.feeds.auth import OpenSkyTokenProvider
from radar.feeds.opensky import OpenSkyClient
from radar.feeds.planespotters import PlanespottersClient
from radar.models.flight import AircraftRecord, GeoPoint
from radar.render.geo import BoundingBox, NoAircraftInRange, Selected, haversine_km, select
from radar.render.pipeline import Snapshot

logger = logging.getLogger(__name__)


class FlightFeed:
    def __init__(
        self,
        positions: OpenSkyClient,
        adsbdb: AdsbdbClient,
        photos: PlanespottersClient,
        center: GeoPoint,
        query_radius_km: float,
        max_altitude_m: float | None = None,
        max_distance_km: float | None = None,
    ) -> None:
        self.positions = positions
        self.adsbdb = adsbdb
        self.photos = photos
        self.center = center
        self.box = BoundingBox.around(center, query_radius_km)
        self.max_altitude_m = max_altitude_m
        self.max_distance_km = max_distance_km

    def in_range(self, aircraft: AircraftRecord) -> bool:
        """Altitude ceiling and distance limit; unknown altitude passes."""
        if (
            self.max_altitude_m is not None
            and aircraft.altitude_m is not None
            and aircraft.altitude_m > self.max_altitude_m
        ):
            return False
        if self.max_distance_km is not None:
            return haversine_km(self.center, aircraft.position) <= self.max_distance_km
        return True

    async def candidates(self) -> list[AircraftRecord]:
        """Positions inside the query box that pass the range filters."""
        states = await self.positions.states(self.box)
        return [a for a in states if self.box.contains(a.position) and self.in_range(a)]

    async def snapshot(self) -> Snapshot:
        """Fetch, select and enrich. Only the position query may raise."""
        start = time.perf_counter()
        candidates = await self.candidates()
        selection = select(candidates, self.center)

        if isinstance(selection, NoAircraftInRange):
            logger.info(
                "No flight found among %d candidates: fetch=%.0fms",
                len(candidates),
                (time.perf_counter() - start) * 1000,
            )
            return Snapshot(selection=selection)

        aircraft = selection.aircraft
        route, aircraft_type, photo = await asyncio.gather(
            self.adsbdb.route(aircraft.callsign),
            self.adsbdb.aircraft_type(aircraft.icao24),
            self.photos.photo(aircraft.icao24),
        )

        photo_bytes = None
        if photo is not None:
            photo_url, photo_bytes = photo
            aircraft = aircraft.model_copy(update={"photo_url": photo_url})
        if route is not None:
            aircraft = aircraft.model_copy(update={"route": route})

        logger.info(
            "Flight found: %s (%s) at %.1f km: fetch=%.0fms",
            aircraft.callsign or "?",
            aircraft.icao24,
            selection.distance_km,
            (time.perf_counter() - start) * 1000,
        )
        return Snapshot(
            selection=Selected(aircraft=aircraft, distance_km=selection.distance_km),
            route=route,
            aircraft_type=aircraft_type,
            photo=photo_bytes,
        )


def create_feed(client: httpx.AsyncClient, cfg: Settings) -> FlightFeed:
    """Wire the upstream clients from settings around a shared HTTP client."""
    tokens = OpenSkyTokenProvider(client, cfg.opensky_token_url, cfg.opensky_credentials)
    if tokens.configured:
        logger.info("OpenSky OAuth2 credentials found.")
    else:
        logger.info("OpenSky OAuth2 credentials not found, using anonymous requests.")

    return FlightFeed(
        positions=OpenSkyClient(client, cfg.opensky_api_url, tokens),
        adsbdb=AdsbdbClient(client, cfg.adsbdb_api_url),
        photos=PlanespottersClient(client, cfg.planespotters_api_url),
        center=GeoPoint(latitude=cfg.latitude, longitude=cfg.longitude),
        query_radius_km=cfg.query_radius_km,
        max_altitude_m=cfg.max_altitude_m,
        max_distance_km=cfg.max_distance_km,
    )
