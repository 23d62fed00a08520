"""Draws a VectorScene into an RGBA buffer with Pillow."""

from __future__ import annotations

import io
import logging

import numpy as np
from PIL import Image, ImageDraw, ImageOps

from radar.errors import RenderError
from radar.render.fonts import FontCollection, FontFace
from radar.render.images import RasterImage
from radar.render.scene import Element, EmbeddedImage, Line, Polygon, Rect, Text, VectorScene

logger = logging.getLogger(__name__)

# SVG text-anchor -> Pillow anchor on the alphabetic baseline
_ANCHORS = {"start": "ls", "middle": "ms", "end": "rs"}


class _Canvas:
    """Per-call drawing state: the image, its draw handle and a face cache."""

    def __init__(self, scene: VectorScene, fonts: FontCollection) -> None:
        self.image = Image.new("RGBA", (scene.width, scene.height), (255, 255, 255, 255))
        self.draw = ImageDraw.Draw(self.image)
        self.fonts = fonts
        self._faces: dict[tuple[int, bool], FontFace] = {}

    def face(self, size: int, bold: bool) -> FontFace:
        key = (size, bold)
        if key not in self._faces:
            self._faces[key] = self.fonts.face(size, bold)
        return self._faces[key]

    def render(self, element: Element) -> None:
        if isinstance(element, Rect):
            self._rect(element)
        elif isinstance(element, Line):
            self.draw.line(
                [(element.x1, element.y1), (element.x2, element.y2)],
                fill=element.stroke,
                width=max(1, round(element.stroke_width)),
            )
        elif isinstance(element, Polygon):
            self.draw.polygon(list(element.points), fill=element.fill)
        elif isinstance(element, Text):
            self.draw.text(
                (element.x, element.y),
                element.text,
                font=self.face(element.font_size, element.bold),
                fill=element.fill,
                anchor=_ANCHORS[element.anchor],
            )
        elif isinstance(element, EmbeddedImage):
            self._embedded(element)
        else:
            raise RenderError(f"unsupported scene element: {type(element).__name__}")

    def _rect(self, rect: Rect) -> None:
        if rect.width <= 0 or rect.height <= 0:
            return
        # Pillow rectangles include both corners
        x0, y0 = rect.x, rect.y
        x1, y1 = rect.x + rect.width - 1, rect.y + rect.height - 1
        self.draw.rectangle([x0, y0, x1, y1], fill=rect.fill)

    def _embedded(self, element: EmbeddedImage) -> None:
        try:
            with Image.open(io.BytesIO(element.data)) as src:
                src.load()
                photo = src.convert("RGBA")
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise RenderError(f"cannot decode embedded image: {e}") from e

        box = (int(element.width), int(element.height))
        fitted = ImageOps.contain(photo, box, Image.Resampling.LANCZOS)
        left = int(element.x) + (box[0] - fitted.width) // 2
        top = int(element.y) + (box[1] - fitted.height) // 2
        self.image.alpha_composite(fitted, dest=(left, top))


def rasterize(scene: VectorScene, fonts: FontCollection) -> RasterImage:
    """Rasterize ``scene`` at its canvas size.

    Optional elements (the photo) that fail are logged and left out; a
    failing required element raises :class:`RenderError`.
    """
    canvas = _Canvas(scene, fonts)

    for element in scene.elements:
        try:
            canvas.render(element)
        except (RenderError, OSError, ValueError) as e:
            if element.optional:
                logger.warning("Skipping %s: %s", type(element).__name__, e)
                continue
            if isinstance(e, RenderError):
                raise
            raise RenderError(f"cannot draw {type(element).__name__}: {e}") from e

    pixels = np.array(canvas.image, dtype=np.uint8)
    return RasterImage(width=scene.width, height=scene.height, pixels=pixels)
