"""adsbdb lookups: route by callsign, aircraft type by ICAO hex. Best effort."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from radar.models.flight import Airport, RouteInfo
from radar.models.upstream import AdsbdbData, AdsbdbResponse

logger = logging.getLogger(__name__)


class AdsbdbClient:
    def __init__(self, client: httpx.AsyncClient, api_url: str) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")

    async def _lookup(self, kind: str, key: str) -> AdsbdbData | None:
        url = f"{self._api_url}/{kind}/{key}"
        logger.info("Fetching %s info for %s: %s", kind, key, url)
        try:
            r = await self._client.get(url)
            r.raise_for_status()
            payload = AdsbdbResponse.model_validate(r.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning("adsbdb %s lookup for %s failed: %s", kind, key, e)
            return None
        if isinstance(payload.response, str):
            logger.info("adsbdb has no %s for %s: %s", kind, key, payload.response)
            return None
        return payload.response

    async def route(self, callsign: str | None) -> RouteInfo | None:
        if not callsign:
            return None
        data = await self._lookup("callsign", callsign)
        if data is None or data.flightroute is None:
            return None
        fr = data.flightroute
        return RouteInfo(
            origin=Airport(iata=fr.origin.iata_code, municipality=fr.origin.municipality),
            destination=Airport(iata=fr.destination.iata_code, municipality=fr.destination.municipality),
            flight_number=fr.callsign_iata,
        )

    async def aircraft_type(self, icao24: str) -> str | None:
        data = await self._lookup("aircraft", icao24)
        if data is None or data.aircraft is None:
            return None
        return data.aircraft.aircraft_type or None
