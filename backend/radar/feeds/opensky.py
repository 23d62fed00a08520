"""OpenSky state-vector query for a bounding box."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from radar.errors import UpstreamError
from radar.feeds.auth import OpenSkyTokenProvider
from radar.models.flight import AircraftRecord, GeoPoint
from radar.models.upstream import OpenSkyStates
from radar.render.geo import BoundingBox

logger = logging.getLogger(__name__)

# State vector field positions, see the OpenSky REST API docs
_ICAO24 = 0
_CALLSIGN = 1
_LONGITUDE = 5
_LATITUDE = 6
_BARO_ALTITUDE = 7
_VELOCITY = 9
_TRUE_TRACK = 10


def _field(state: list[Any], index: int) -> Any:
    return state[index] if index < len(state) else None


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_state(state: list[Any]) -> AircraftRecord | None:
    """Turn one state vector into a record; ``None`` if it has no position."""
    icao24 = _field(state, _ICAO24)
    lat = _number(_field(state, _LATITUDE))
    lon = _number(_field(state, _LONGITUDE))
    if not isinstance(icao24, str) or not icao24 or lat is None or lon is None:
        return None

    callsign = _field(state, _CALLSIGN)
    return AircraftRecord(
        icao24=icao24.strip().lower(),
        position=GeoPoint(latitude=lat, longitude=lon),
        callsign=callsign if isinstance(callsign, str) else None,
        altitude_m=_number(_field(state, _BARO_ALTITUDE)),
        ground_speed_ms=_number(_field(state, _VELOCITY)),
        heading_deg=_number(_field(state, _TRUE_TRACK)),
    )


class OpenSkyClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str,
        tokens: OpenSkyTokenProvider | None = None,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._tokens = tokens

    async def states(self, box: BoundingBox) -> list[AircraftRecord]:
        """All positioned aircraft inside ``box``, in API order."""
        params = {
            "lamin": box.min_lat,
            "lomin": box.min_lon,
            "lamax": box.max_lat,
            "lomax": box.max_lon,
        }
        headers = {}
        token = await self._tokens.get_token() if self._tokens else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self._api_url}/states/all"
        logger.info("Fetching flights from OpenSky: %s %s", url, params)
        try:
            r = await self._client.get(url, params=params, headers=headers)
            r.raise_for_status()
            payload = OpenSkyStates.model_validate(r.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise UpstreamError(f"OpenSky query failed: {e}") from e

        records = []
        for state in payload.states or []:
            record = parse_state(state)
            if record is not None:
                records.append(record)
        logger.debug("OpenSky returned %d states, %d positioned", len(payload.states or []), len(records))
        return records
