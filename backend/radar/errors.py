"""Error taxonomy shared by the render core, the feeds and the API."""

from __future__ import annotations


class RadarError(Exception):
    """Base class for all radar failures."""


class RenderError(RadarError):
    """A scene element could not be rasterized."""


class QuantizationInputInvalid(RadarError):
    """Raster buffer does not match the dimensions it was declared with."""


class UpstreamError(RadarError):
    """The aircraft position query failed."""
