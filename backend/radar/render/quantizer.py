"""Floyd-Steinberg quantization to the panel palette.

Pixels are visited in row-major order, which is part of the output
contract: error diffusion is order-sensitive. Each pixel gets the error
carried from earlier neighbours, is clamped to [0, 255], snapped to the
nearest palette colour and passes its residual on:

            .     *    7/16
          3/16  5/16   1/16

Shares that would land outside the buffer are dropped. Alpha is ignored.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from radar.render.images import PaletteImage, RasterImage
from radar.render.palette import PALETTE, Palette

logger = logging.getLogger(__name__)

_RIGHT = 7 / 16
_BELOW_LEFT = 3 / 16
_BELOW = 5 / 16
_BELOW_RIGHT = 1 / 16


def nearest_index(rgb: tuple[float, float, float], colors: tuple[tuple[int, int, int], ...]) -> int:
    """Index of the closest colour by squared RGB distance; first wins on ties."""
    r, g, b = rgb
    best = 0
    best_dist = float("inf")
    for i, (pr, pg, pb) in enumerate(colors):
        dist = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if dist < best_dist:
            best = i
            best_dist = dist
    return best


def _exact_row(row: NDArray[np.float64], palette_rgb: NDArray[np.float64]) -> NDArray[np.uint8] | None:
    """Palette indices of ``row`` if every pixel already is a palette colour."""
    hits = (row[:, None, :] == palette_rgb[None, :, :]).all(axis=2)
    if not hits.any(axis=1).all():
        return None
    return hits.argmax(axis=1).astype(np.uint8)


def quantize(image: RasterImage, palette: Palette = PALETTE) -> PaletteImage:
    """Dither ``image`` down to ``palette`` indices."""
    image.validate()
    width, height = image.width, image.height
    colors = palette.rgb
    indices = np.zeros((height, width), dtype=np.uint8)
    if width == 0 or height == 0:
        return PaletteImage(width=width, height=height, indices=indices)

    rgb = image.pixels[..., :3].astype(np.float64)
    palette_rgb = palette.rgb_array().astype(np.float64)
    nearest: dict[tuple[float, float, float], int] = {}
    stable_sq = _stable_radius_sq(colors)

    current = None
    carried = False
    fast_rows = 0
    for y in range(height):
        if not carried:
            # No error came down from above: a row of exact palette colours
            # maps straight through and passes nothing on.
            exact = _exact_row(rgb[y], palette_rgb)
            if exact is not None:
                indices[y] = exact
                fast_rows += 1
                continue
            current = rgb[y].tolist()

        below = rgb[y + 1].tolist() if y + 1 < height else None
        indices[y], carried = _diffuse_row(current, below, colors, nearest, stable_sq)
        current = below

    logger.debug(
        "Quantized %dx%d raster to %d colours (%d flat rows)",
        width,
        height,
        len(palette),
        fast_rows,
    )
    return PaletteImage(width=width, height=height, indices=indices)


def _stable_radius_sq(colors: tuple[tuple[int, int, int], ...]) -> float:
    """Squared distance within which a palette colour is certainly the nearest.

    Anything closer than half the gap between the two closest palette colours
    cannot be nearer to another one (triangle inequality).
    """
    gaps = [
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
        for i, a in enumerate(colors)
        for b in colors[i + 1 :]
    ]
    if not gaps:
        return float("inf")
    # shrunk slightly so float rounding never lands on the boundary
    return min(gaps) / 4 * 0.999


def _diffuse_row(
    current: list[list[float]],
    below: list[list[float]] | None,
    colors: tuple[tuple[int, int, int], ...],
    nearest: dict[tuple[float, float, float], int],
    stable_sq: float,
) -> tuple[list[int], bool]:
    """Quantize one row in place; returns its indices and whether ``below`` got error."""
    width = len(current)
    row = [0] * width
    touched = False
    last = 0
    for x in range(width):
        r, g, b = current[x]
        if r < 0.0:
            r = 0.0
        elif r > 255.0:
            r = 255.0
        if g < 0.0:
            g = 0.0
        elif g > 255.0:
            g = 255.0
        if b < 0.0:
            b = 0.0
        elif b > 255.0:
            b = 255.0

        pr, pg, pb = colors[last]
        er, eg, eb = r - pr, g - pg, b - pb
        if er * er + eg * eg + eb * eb < stable_sq:
            index = last
        else:
            key = (r, g, b)
            index = nearest.get(key)
            if index is None:
                index = nearest[key] = nearest_index(key, colors)
            pr, pg, pb = colors[index]
            er, eg, eb = r - pr, g - pg, b - pb
            last = index
        row[x] = index

        if er == 0.0 and eg == 0.0 and eb == 0.0:
            continue

        if x + 1 < width:
            _spread(current[x + 1], er, eg, eb, _RIGHT)
        if below is not None:
            touched = True
            if x > 0:
                _spread(below[x - 1], er, eg, eb, _BELOW_LEFT)
            _spread(below[x], er, eg, eb, _BELOW)
            if x + 1 < width:
                _spread(below[x + 1], er, eg, eb, _BELOW_RIGHT)
    return row, touched


def _spread(pixel: list[float], er: float, eg: float, eb: float, weight: float) -> None:
    pixel[0] += er * weight
    pixel[1] += eg * weight
    pixel[2] += eb * weight
