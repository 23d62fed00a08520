"""Shared test fixtures."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from radar.models.flight import AircraftRecord, Airport, GeoPoint, RouteInfo
from radar.render.fonts import FontCollection
from radar.render.images import PaletteImage, RasterImage
from radar.render.palette import PALETTE

# Reference point used throughout the tests
CENTER = GeoPoint(latitude=47.4197, longitude=8.4344)

# haversine with R = 6371 km: one degree of latitude
KM_PER_DEG = 6371.0 * 3.141592653589793 / 180.0


def north_of(center: GeoPoint, km: float) -> GeoPoint:
    """Point exactly ``km`` kilometres due north of ``center``."""
    return GeoPoint(latitude=center.latitude + km / KM_PER_DEG, longitude=center.longitude)


def make_aircraft(icao24: str = "4b1805", km: float = 5.0, **overrides) -> AircraftRecord:
    fields = {
        "icao24": icao24,
        "position": north_of(CENTER, km),
        "callsign": "SWR318",
        "altitude_m": 1524.0,
        "ground_speed_ms": 102.9,
        "heading_deg": 274.0,
    }
    fields.update(overrides)
    return AircraftRecord(**fields)


ROUTE = RouteInfo(
    origin=Airport(iata="WAW", municipality="Warsaw"),
    destination=Airport(iata="ZRH", municipality="Zurich"),
    flight_number="LX1349",
)


def png_bytes(width: int = 40, height: int = 30, rgb: tuple[int, int, int] = (0, 0, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), rgb).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def fonts() -> FontCollection:
    # Pillow's bundled font keeps the tests independent of installed fonts
    return FontCollection.default()


@pytest.fixture
def aircraft() -> AircraftRecord:
    return make_aircraft()


@pytest.fixture
def route() -> RouteInfo:
    return ROUTE


@pytest.fixture
def photo() -> bytes:
    return png_bytes()


def palette_index(name: str) -> int:
    return [c.name for c in PALETTE.colors].index(name)


def solid_raster(width: int, height: int, rgb: tuple[int, int, int]) -> RasterImage:
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = rgb
    pixels[..., 3] = 255
    return RasterImage(width=width, height=height, pixels=pixels)


def expand_indices(image: PaletteImage) -> np.ndarray:
    """Palette indices back to an (H, W, 3) RGB array."""
    return PALETTE.rgb_array()[image.indices]
