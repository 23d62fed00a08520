"""Pixel buffers produced by the rasterizer and the quantizer."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from radar.errors import QuantizationInputInvalid


@dataclass(frozen=True, eq=False)
class RasterImage:
    """Row-major RGBA buffer, shape (height, width, 4), dtype uint8."""

    width: int
    height: int
    pixels: NDArray[np.uint8]

    def validate(self) -> None:
        expected = (self.height, self.width, 4)
        if self.pixels.shape != expected:
            raise QuantizationInputInvalid(
                f"raster buffer shape {self.pixels.shape} does not match declared {expected}"
            )


@dataclass(frozen=True, eq=False)
class PaletteImage:
    """Row-major buffer of palette indices, shape (height, width), dtype uint8."""

    width: int
    height: int
    indices: NDArray[np.uint8]

    def tobytes(self) -> bytes:
        return self.indices.tobytes()
