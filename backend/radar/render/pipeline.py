"""Render pipeline: snapshot -> scene -> raster -> palette image, plus encoders."""

from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass, field

from PIL import Image

from radar.errors import QuantizationInputInvalid
from radar.models.flight import RouteInfo
from radar.render.composer import compose
from radar.render.config import DEFAULT_CONFIG, RenderConfig
from radar.render.epd import encode_epd
from radar.render.fonts import FontCollection
from radar.render.geo import NoAircraftInRange, SelectionResult
from radar.render.images import PaletteImage, RasterImage
from radar.render.palette import PALETTE, Palette
from radar.render.quantizer import quantize
from radar.render.rasterizer import rasterize
from radar.render.scene import VectorScene
from radar.svg.serializer import serialize_scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Everything one frame needs, already fetched. Absent data is ``None``."""

    selection: SelectionResult = field(default_factory=NoAircraftInRange)
    route: RouteInfo | None = None
    aircraft_type: str | None = None
    photo: bytes | None = field(default=None, repr=False)


class RenderPipeline:
    """Stateless renderer; the fonts and palette it holds are never mutated."""

    def __init__(
        self,
        fonts: FontCollection,
        palette: Palette = PALETTE,
        config: RenderConfig = DEFAULT_CONFIG,
    ) -> None:
        self.fonts = fonts
        self.palette = palette
        self.config = config

    def scene(self, snapshot: Snapshot) -> VectorScene:
        return compose(
            snapshot.selection,
            route=snapshot.route,
            photo=snapshot.photo,
            aircraft_type=snapshot.aircraft_type,
            config=self.config,
        )

    def svg(self, snapshot: Snapshot) -> str:
        return serialize_scene(self.scene(snapshot))

    def raster(self, snapshot: Snapshot) -> RasterImage:
        t0 = time.perf_counter()
        scene = self.scene(snapshot)
        raster = rasterize(scene, self.fonts)
        logger.debug("Rasterized %d elements in %.0fms", len(scene.elements), _ms(t0))
        return raster

    def quantized(self, snapshot: Snapshot) -> PaletteImage:
        raster = self.raster(snapshot)
        expected = (self.config.canvas_width, self.config.canvas_height)
        if (raster.width, raster.height) != expected:
            raise QuantizationInputInvalid(
                f"raster is {raster.width}x{raster.height}, canvas is {expected[0]}x{expected[1]}"
            )
        t0 = time.perf_counter()
        result = quantize(raster, self.palette)
        logger.info("Dithered %dx%d frame in %.0fms", raster.width, raster.height, _ms(t0))
        return result

    # ── encoders ──

    def png(self, snapshot: Snapshot) -> bytes:
        return encode_png(self.raster(snapshot))

    def dithered_png(self, snapshot: Snapshot) -> bytes:
        return encode_palette_png(self.quantized(snapshot), self.palette)

    def epd(self, snapshot: Snapshot) -> bytes:
        return encode_epd(self.quantized(snapshot), self.palette)


def encode_png(raster: RasterImage) -> bytes:
    """Full-colour RGB PNG (alpha dropped, the panel has none)."""
    raster.validate()
    buf = io.BytesIO()
    Image.fromarray(raster.pixels).convert("RGB").save(buf, format="PNG")
    return buf.getvalue()


def encode_palette_png(image: PaletteImage, palette: Palette = PALETTE) -> bytes:
    """Indexed PNG whose every pixel is one of the palette colours."""
    img = Image.frombytes("P", (image.width, image.height), image.tobytes())
    img.putpalette(palette.flat())
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def _ms(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000
