"""Scene composition: lays out the selected aircraft on the fixed canvas.

Every data field is optional. A missing field removes its element from the
scene; it never turns into an error or a placeholder string. A photo that
fails to decode counts as missing.
"""

from __future__ import annotations

import io
import logging

from PIL import Image

from radar.models.flight import AircraftRecord, Airport, RouteInfo
from radar.render.config import DEFAULT_CONFIG, RenderConfig
from radar.render.geo import NoAircraftInRange, Selected, SelectionResult
from radar.render.scene import Element, EmbeddedImage, Line, Polygon, Rect, Text, VectorScene

logger = logging.getLogger(__name__)

WHITE = "#ffffff"
BLACK = "#000000"

_FEET_PER_METRE = 3.28084
_KNOTS_PER_MS = 1.943844

_STATS_SEPARATOR = "   ·   "


def compose(
    selection: SelectionResult,
    route: RouteInfo | None = None,
    photo: bytes | None = None,
    aircraft_type: str | None = None,
    config: RenderConfig = DEFAULT_CONFIG,
) -> VectorScene:
    """Build the scene for one frame."""
    if isinstance(selection, NoAircraftInRange):
        return _placeholder_scene(config)
    if not isinstance(selection, Selected):
        raise TypeError(f"unexpected selection variant: {type(selection).__name__}")

    aircraft = selection.aircraft
    if route is None:
        route = aircraft.route

    elements: list[Element] = [_background(config)]
    if photo and _decodable(photo):
        x, y, w, h = config.photo_region
        elements.append(EmbeddedImage(x=x, y=y, width=w, height=h, data=photo))

    # Bars are drawn over the photo so an oversized image never bleeds into text
    top = config.top_bar_height
    bottom_y = config.canvas_height - config.bottom_bar_height
    elements += [
        Rect(0, 0, config.canvas_width, top, fill=WHITE),
        Rect(0, bottom_y, config.canvas_width, config.bottom_bar_height, fill=WHITE),
        Line(0, top, config.canvas_width, top, stroke=BLACK, stroke_width=3),
        Line(0, bottom_y, config.canvas_width, bottom_y, stroke=BLACK, stroke_width=3),
    ]

    if route is not None:
        elements += _route_elements(route, config)
    elements += _info_elements(aircraft, route, aircraft_type, config)
    elements += _stats_elements(selection, config)

    return VectorScene(
        width=config.canvas_width,
        height=config.canvas_height,
        elements=tuple(elements),
        font_family=config.font_family,
    )


def _background(config: RenderConfig) -> Rect:
    return Rect(0, 0, config.canvas_width, config.canvas_height, fill=WHITE)


def _placeholder_scene(config: RenderConfig) -> VectorScene:
    cx = config.canvas_width / 2
    cy = config.canvas_height / 2
    elements = (
        _background(config),
        Text(cx, cy - 20, "No aircraft overhead", 90, bold=True),
        Text(cx, cy + 70, "Skies are clear", 45),
    )
    return VectorScene(
        width=config.canvas_width,
        height=config.canvas_height,
        elements=elements,
        font_family=config.font_family,
    )


def _airport_elements(airport: Airport, cx: float) -> list[Element]:
    out: list[Element] = [Text(cx, 105, airport.iata, 100, bold=True)]
    if airport.municipality:
        out.append(Text(cx, 150, airport.municipality, 35))
    return out


def _arrow(cx: float, cy: float) -> list[Element]:
    half = 70
    head = 40
    return [
        Line(cx - half, cy, cx + half - head, cy, stroke=BLACK, stroke_width=10),
        Polygon(
            ((cx + half - head, cy - 25), (cx + half, cy), (cx + half - head, cy + 25)),
            fill=BLACK,
        ),
    ]


def _route_elements(route: RouteInfo, config: RenderConfig) -> list[Element]:
    return (
        _airport_elements(route.origin, config.origin_x)
        + _arrow(config.arrow_x, 70)
        + _airport_elements(route.destination, config.destination_x)
    )


def _info_elements(
    aircraft: AircraftRecord,
    route: RouteInfo | None,
    aircraft_type: str | None,
    config: RenderConfig,
) -> list[Element]:
    label_y = config.canvas_height - config.bottom_bar_height + 50
    value_y = label_y + 85
    flight_number = route.flight_number if route is not None else None
    columns = (
        ("CALLSIGN", aircraft.callsign, 80),
        ("FLIGHT", flight_number, 80),
        ("AIRCRAFT", aircraft_type, 60),
    )

    out: list[Element] = []
    for cx, (label, value, size) in zip(config.info_columns, columns):
        if not value:
            continue
        out.append(Text(cx, label_y, label, 35))
        out.append(Text(cx, value_y, value, size, bold=True))
    return out


def _stats_elements(selection: Selected, config: RenderConfig) -> list[Element]:
    parts = format_stats(selection)
    if not parts:
        return []
    y = config.canvas_height - 30
    return [Text(config.canvas_width / 2, y, _STATS_SEPARATOR.join(parts), 38)]


def format_stats(selection: Selected) -> list[str]:
    """Human-readable altitude, speed, heading and distance, skipping unknowns."""
    aircraft = selection.aircraft
    parts: list[str] = []
    if aircraft.altitude_m is not None:
        parts.append(f"{round(aircraft.altitude_m * _FEET_PER_METRE):,} ft")
    if aircraft.ground_speed_ms is not None:
        parts.append(f"{round(aircraft.ground_speed_ms * _KNOTS_PER_MS)} kt")
    if aircraft.heading_deg is not None:
        parts.append(f"{round(aircraft.heading_deg) % 360:03d}°")
    parts.append(f"{selection.distance_km:.1f} km")
    return parts


def _decodable(photo: bytes) -> bool:
    """Cheap header and checksum check of the photo bytes."""
    try:
        with Image.open(io.BytesIO(photo)) as img:
            img.verify()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        logger.warning("Leaving out undecodable photo (%d bytes): %s", len(photo), e)
        return False
    return True
