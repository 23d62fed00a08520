"""Write SVG markup for a VectorScene."""

from __future__ import annotations

import base64
from xml.sax.saxutils import escape, quoteattr

from radar.render.scene import Element, EmbeddedImage, Line, Polygon, Rect, Text, VectorScene


def _num(value: float) -> str:
    """Compact number formatting: 160.0 -> "160", 12.5 -> "12.5"."""
    return f"{value:g}"


def _attrs(**attrs: str | float) -> str:
    parts = []
    for key, value in attrs.items():
        name = key.rstrip("_").replace("_", "-")
        text = _num(value) if isinstance(value, (int, float)) else value
        parts.append(f"{name}={quoteattr(text)}")
    return " ".join(parts)


def _element_svg(elem: Element, font_family: str) -> str:
    if isinstance(elem, Rect):
        return f"<rect {_attrs(x=elem.x, y=elem.y, width=elem.width, height=elem.height, fill=elem.fill)} />"
    if isinstance(elem, Line):
        return (
            f"<line {_attrs(x1=elem.x1, y1=elem.y1, x2=elem.x2, y2=elem.y2, stroke=elem.stroke, stroke_width=elem.stroke_width)}"
            f" />"
        )
    if isinstance(elem, Polygon):
        points = " ".join(f"{_num(x)},{_num(y)}" for x, y in elem.points)
        return f"<polygon {_attrs(points=points, fill=elem.fill)} />"
    if isinstance(elem, Text):
        attrs = _attrs(
            x=elem.x,
            y=elem.y,
            font_family=font_family,
            font_size=elem.font_size,
            text_anchor=elem.anchor,
            fill=elem.fill,
        )
        if elem.bold:
            attrs += ' font-weight="bold"'
        return f"<text {attrs}>{escape(elem.text)}</text>"
    if isinstance(elem, EmbeddedImage):
        payload = base64.b64encode(elem.data).decode("ascii")
        href = f"data:{elem.mime_type};base64,{payload}"
        attrs = _attrs(
            x=elem.x,
            y=elem.y,
            width=elem.width,
            height=elem.height,
            preserveAspectRatio="xMidYMid meet",
            href=href,
        )
        return f"<image {attrs} />"
    raise TypeError(f"unsupported scene element: {type(elem).__name__}")


def serialize_scene(scene: VectorScene, title: str = "") -> str:
    """Generate a standalone SVG document for ``scene``."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg width="{scene.width}" height="{scene.height}"'
        f' viewBox="0 0 {scene.width} {scene.height}" xmlns="http://www.w3.org/2000/svg">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    for elem in scene.elements:
        lines.append(f"  {_element_svg(elem, scene.font_family)}")

    lines.append("</svg>")
    return "\n".join(lines)
