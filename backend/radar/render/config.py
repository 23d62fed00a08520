"""Render configuration: canvas size and layout geometry."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderConfig:
    """Fixed layout of the 1600x1200 landscape canvas."""

    canvas_width: int = 1600
    canvas_height: int = 1200

    font_family: str = "DejaVu Sans, Google Sans, sans-serif"

    # Route bar across the top, info bar across the bottom
    top_bar_height: int = 160
    bottom_bar_height: int = 240

    # Column centres of the info bar
    info_columns: tuple[int, int, int] = (260, 800, 1340)

    # Route bar: origin / arrow / destination centres
    origin_x: int = 400
    arrow_x: int = 800
    destination_x: int = 1200

    @property
    def photo_region(self) -> tuple[int, int, int, int]:
        """(x, y, width, height) of the area between the two bars."""
        top = self.top_bar_height
        height = self.canvas_height - self.top_bar_height - self.bottom_bar_height
        return (0, top, self.canvas_width, height)


DEFAULT_CONFIG = RenderConfig()
