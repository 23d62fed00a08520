"""Font collection, loaded once at startup, read-only afterwards."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from PIL import ImageFont

logger = logging.getLogger(__name__)

FontFace = ImageFont.FreeTypeFont | ImageFont.ImageFont


@dataclass(frozen=True)
class FontCollection:
    """Raw font files for the regular and bold weights.

    Faces are built on demand from the stored bytes, so handing the same
    collection to concurrent renders never mutates it. ``None`` for a weight
    means Pillow's bundled default font is used instead.
    """

    regular: bytes | None = field(default=None, repr=False)
    bold: bytes | None = field(default=None, repr=False)
    description: str = "pillow-default"

    def face(self, size: int, bold: bool = False) -> FontFace:
        data = self.bold if bold else self.regular
        if data is None:
            data = self.regular
        if data is None:
            return ImageFont.load_default(size=size)
        return ImageFont.truetype(io.BytesIO(data), size)

    @classmethod
    def default(cls) -> FontCollection:
        return cls()


def _read_first(paths: Iterable[str]) -> tuple[bytes, str] | None:
    for raw in paths:
        path = Path(raw)
        try:
            data = path.read_bytes()
        except OSError:
            continue
        try:
            ImageFont.truetype(io.BytesIO(data), 12)
        except OSError as e:
            logger.warning("Skipping unreadable font %s: %s", path, e)
            continue
        return data, path.name
    return None


def load_system_fonts(regular_paths: Iterable[str], bold_paths: Iterable[str]) -> FontCollection:
    """Load the first usable regular and bold font from the candidate paths."""
    regular = _read_first(regular_paths)
    bold = _read_first(bold_paths)

    if regular is None and bold is None:
        logger.warning("No system fonts found, falling back to Pillow's default font")
        return FontCollection.default()

    names = [found[1] for found in (regular, bold) if found is not None]
    collection = FontCollection(
        regular=regular[0] if regular else bold[0],
        bold=bold[0] if bold else None,
        description=", ".join(names),
    )
    logger.info("Fonts loaded: %s", collection.description)
    return collection
