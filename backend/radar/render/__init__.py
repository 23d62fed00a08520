"""Radar render core: selection, composition, rasterization, quantization."""

from radar.errors import QuantizationInputInvalid, RadarError, RenderError
from radar.render.composer import compose
from radar.render.fonts import FontCollection, load_system_fonts
from radar.render.geo import NoAircraftInRange, Selected, SelectionResult, haversine_km, select
from radar.render.images import PaletteImage, RasterImage
from radar.render.palette import PALETTE, Palette
from radar.render.quantizer import quantize
from radar.render.rasterizer import rasterize
from radar.render.scene import VectorScene

__all__ = [
    "compose",
    "QuantizationInputInvalid",
    "RadarError",
    "RenderError",
    "FontCollection",
    "load_system_fonts",
    "NoAircraftInRange",
    "Selected",
    "SelectionResult",
    "haversine_km",
    "select",
    "PaletteImage",
    "RasterImage",
    "PALETTE",
    "Palette",
    "quantize",
    "rasterize",
    "VectorScene",
]
