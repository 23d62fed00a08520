"""The 6-colour palette of the e-paper panel."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class PaletteColor:
    name: str
    rgb: tuple[int, int, int]
    # Nibble the panel controller expects for this colour
    epd_code: int


@dataclass(frozen=True)
class Palette:
    colors: tuple[PaletteColor, ...]

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def rgb(self) -> tuple[tuple[int, int, int], ...]:
        return tuple(c.rgb for c in self.colors)

    def rgb_array(self) -> NDArray[np.uint8]:
        return np.array(self.rgb, dtype=np.uint8)

    def epd_codes(self) -> NDArray[np.uint8]:
        return np.array([c.epd_code for c in self.colors], dtype=np.uint8)

    def flat(self) -> list[int]:
        """Flattened RGB triplets, the layout ``Image.putpalette`` expects."""
        return [channel for color in self.colors for channel in color.rgb]


# Code 4 is not used by the panel
PALETTE = Palette(
    colors=(
        PaletteColor("black", (0, 0, 0), 0),
        PaletteColor("white", (255, 255, 255), 1),
        PaletteColor("yellow", (255, 255, 0), 2),
        PaletteColor("red", (255, 0, 0), 3),
        PaletteColor("blue", (0, 0, 255), 5),
        PaletteColor("green", (0, 255, 0), 6),
    )
)
