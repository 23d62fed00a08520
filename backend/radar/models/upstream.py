"""Response shapes of the upstream APIs (only the fields we read)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    access_token: str
    expires_in: int = 60


class OpenSkyStates(BaseModel):
    time: int | None = None
    states: list[list[Any]] | None = None


class AdsbdbAirport(BaseModel):
    iata_code: str
    municipality: str | None = None


class AdsbdbFlightRoute(BaseModel):
    origin: AdsbdbAirport
    destination: AdsbdbAirport
    callsign_iata: str | None = None


class AdsbdbAircraft(BaseModel):
    aircraft_type: str = Field(alias="type")


class AdsbdbData(BaseModel):
    flightroute: AdsbdbFlightRoute | None = None
    aircraft: AdsbdbAircraft | None = None


class AdsbdbResponse(BaseModel):
    # adsbdb answers unknown callsigns with a plain string here
    response: AdsbdbData | str


class PlanespottersImage(BaseModel):
    src: str


class PlanespottersPhoto(BaseModel):
    thumbnail_large: PlanespottersImage


class PlanespottersResponse(BaseModel):
    photos: list[PlanespottersPhoto] = Field(default_factory=list)
