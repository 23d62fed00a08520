"""Great-circle distance, query bounding box and nearest-aircraft selection."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from radar.models.flight import AircraftRecord, GeoPoint

EARTH_RADIUS_KM = 6371.0

# Mean length of one degree of latitude.
_KM_PER_DEG_LAT = 111.32


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @classmethod
    def around(cls, center: GeoPoint, radius_km: float) -> BoundingBox:
        """Box extending ``radius_km`` north/south/east/west of ``center``."""
        if radius_km < 0:
            raise ValueError(f"radius_km must be non-negative, got {radius_km}")
        d_lat = radius_km / _KM_PER_DEG_LAT
        cos_lat = max(math.cos(math.radians(center.latitude)), 1e-6)
        d_lon = min(radius_km / (_KM_PER_DEG_LAT * cos_lat), 180.0)
        return cls(
            min_lat=max(center.latitude - d_lat, -90.0),
            min_lon=center.longitude - d_lon,
            max_lat=min(center.latitude + d_lat, 90.0),
            max_lon=center.longitude + d_lon,
        )

    def contains(self, point: GeoPoint) -> bool:
        return (
            self.min_lat <= point.latitude <= self.max_lat
            and self.min_lon <= point.longitude <= self.max_lon
        )


@dataclass(frozen=True)
class Selected:
    aircraft: AircraftRecord
    distance_km: float


@dataclass(frozen=True)
class NoAircraftInRange:
    pass


SelectionResult = Selected | NoAircraftInRange


def select(candidates: Iterable[AircraftRecord], center: GeoPoint) -> SelectionResult:
    """Pick the candidate closest to ``center``.

    Equidistant candidates resolve to the first one in input order.
    """
    best: Selected | None = None
    for aircraft in candidates:
        distance = haversine_km(center, aircraft.position)
        if best is None or distance < best.distance_km:
            best = Selected(aircraft=aircraft, distance_km=distance)
    if best is None:
        return NoAircraftInRange()
    return best
