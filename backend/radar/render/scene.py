"""Vector scene model: the declarative description of one frame.

Coordinates are canvas pixels, origin top-left. Text ``y`` is the baseline,
as in SVG.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal

Anchor = Literal["start", "middle", "end"]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str = "#ffffff"

    optional: ClassVar[bool] = False


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = "#000000"
    stroke_width: float = 1.0

    optional: ClassVar[bool] = False


@dataclass(frozen=True)
class Polygon:
    points: tuple[tuple[float, float], ...]
    fill: str = "#000000"

    optional: ClassVar[bool] = False


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    font_size: int
    bold: bool = False
    anchor: Anchor = "middle"
    fill: str = "#000000"

    optional: ClassVar[bool] = False


@dataclass(frozen=True)
class EmbeddedImage:
    """Raw encoded image bytes, aspect-fitted and centred in its region."""

    x: float
    y: float
    width: float
    height: float
    data: bytes = field(repr=False)

    # A photo that fails to decode is dropped rather than failing the frame
    optional: ClassVar[bool] = True

    @property
    def mime_type(self) -> str:
        return sniff_mime(self.data)


Element = Rect | Line | Polygon | Text | EmbeddedImage


@dataclass(frozen=True)
class VectorScene:
    width: int
    height: int
    elements: tuple[Element, ...] = ()
    font_family: str = "sans-serif"

    def __post_init__(self) -> None:
        images = sum(1 for e in self.elements if isinstance(e, EmbeddedImage))
        if images > 1:
            raise ValueError(f"a scene holds at most one embedded image, got {images}")

    @property
    def image(self) -> EmbeddedImage | None:
        for element in self.elements:
            if isinstance(element, EmbeddedImage):
                return element
        return None

    def texts(self) -> list[str]:
        return [e.text for e in self.elements if isinstance(e, Text)]


_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


def sniff_mime(data: bytes) -> str:
    """Best guess at the MIME type of encoded image bytes (JPEG if unknown)."""
    for magic, mime in _SIGNATURES:
        if data.startswith(magic):
            return mime
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
