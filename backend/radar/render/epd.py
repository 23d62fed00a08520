"""Panel-native frame buffer for the 1200x1600 6-colour EPD.

The landscape frame is rotated 90 degrees clockwise into portrait. The
controller takes two 600-px-wide vertical strips one after the other, each
row-major with two pixels per byte (even pixel in the high nibble).
"""

from __future__ import annotations

import numpy as np

from radar.errors import QuantizationInputInvalid
from radar.render.images import PaletteImage
from radar.render.palette import PALETTE, Palette

PANEL_WIDTH = 1200
PANEL_HEIGHT = 1600
STRIP_WIDTH = PANEL_WIDTH // 2

FRAME_BYTES = PANEL_WIDTH * PANEL_HEIGHT // 2


def _pack_nibbles(codes: np.ndarray) -> bytes:
    flat = codes.reshape(-1)
    return ((flat[0::2] << 4) | flat[1::2]).astype(np.uint8).tobytes()


def encode_epd(image: PaletteImage, palette: Palette = PALETTE) -> bytes:
    """Encode a 1600x1200 palette image as the panel's frame buffer."""
    if (image.width, image.height) != (PANEL_HEIGHT, PANEL_WIDTH):
        raise QuantizationInputInvalid(
            f"EPD frames are {PANEL_HEIGHT}x{PANEL_WIDTH}, got {image.width}x{image.height}"
        )

    # Clockwise: portrait[y, x] = landscape[H - 1 - x, y]
    portrait = np.rot90(image.indices, k=-1)
    codes = palette.epd_codes()[portrait]

    left = _pack_nibbles(codes[:, :STRIP_WIDTH])
    right = _pack_nibbles(codes[:, STRIP_WIDTH:])
    return left + right
