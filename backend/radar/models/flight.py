"""Aircraft, route and position models shared by the feeds and the renderer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class Airport(BaseModel):
    model_config = ConfigDict(frozen=True)

    iata: str
    municipality: str | None = None


class RouteInfo(BaseModel):
    """Origin/destination pair for a callsign, as resolved by adsbdb."""

    model_config = ConfigDict(frozen=True)

    origin: Airport
    destination: Airport
    flight_number: str | None = None


class AircraftRecord(BaseModel):
    """One aircraft from the position query.

    Units follow OpenSky: altitude in metres, ground speed in m/s,
    heading as true track in degrees.
    """

    model_config = ConfigDict(frozen=True)

    icao24: str
    position: GeoPoint
    callsign: str | None = None
    altitude_m: float | None = None
    ground_speed_ms: float | None = None
    heading_deg: float | None = None
    route: RouteInfo | None = None
    photo_url: str | None = None

    @field_validator("callsign")
    @classmethod
    def _blank_callsign_is_absent(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None
