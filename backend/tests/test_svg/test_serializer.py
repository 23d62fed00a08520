"""Tests for SVG serialization of scenes."""

import base64
import xml.etree.ElementTree as ET

from radar.render.composer import compose
from radar.render.geo import NoAircraftInRange, Selected
from radar.render.scene import EmbeddedImage, Line, Polygon, Rect, Text, VectorScene
from radar.svg.serializer import serialize_scene
from tests.conftest import ROUTE, make_aircraft, png_bytes

SVG_NS = "{http://www.w3.org/2000/svg}"


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg.encode("utf-8"))


def test_canvas_attributes():
    root = _parse(serialize_scene(compose(NoAircraftInRange())))
    assert root.tag == f"{SVG_NS}svg"
    assert root.get("width") == "1600"
    assert root.get("height") == "1200"
    assert root.get("viewBox") == "0 0 1600 1200"


def test_placeholder_has_no_image():
    svg = serialize_scene(compose(NoAircraftInRange()))
    assert "<image" not in svg
    assert "No aircraft overhead" in svg


def test_text_is_escaped():
    scene = VectorScene(width=10, height=10, elements=(Text(5, 5, "A<B & C>", 12, bold=True),))
    root = _parse(serialize_scene(scene))
    text = root.find(f"{SVG_NS}text")
    assert text.text == "A<B & C>"
    assert text.get("font-weight") == "bold"
    assert text.get("text-anchor") == "middle"
    assert text.get("font-size") == "12"


def test_shapes():
    scene = VectorScene(
        width=10,
        height=10,
        elements=(
            Rect(0, 0, 10, 10, fill="#ffffff"),
            Line(0, 5, 10, 5, stroke="#000000", stroke_width=2.5),
            Polygon(((0, 0), (5, 2.5), (0, 5))),
        ),
    )
    root = _parse(serialize_scene(scene))
    assert root.find(f"{SVG_NS}rect").get("fill") == "#ffffff"
    assert root.find(f"{SVG_NS}line").get("stroke-width") == "2.5"
    assert root.find(f"{SVG_NS}polygon").get("points") == "0,0 5,2.5 0,5"


def test_embedded_image_is_inline_data_uri():
    data = png_bytes()
    scene = VectorScene(width=100, height=100, elements=(EmbeddedImage(0, 10, 100, 80, data=data),))
    root = _parse(serialize_scene(scene))
    image = root.find(f"{SVG_NS}image")
    href = image.get("href")
    assert href.startswith("data:image/png;base64,")
    assert base64.b64decode(href.split(",", 1)[1]) == data
    assert image.get("preserveAspectRatio") == "xMidYMid meet"


def test_jpeg_mime_default():
    scene = VectorScene(width=10, height=10, elements=(EmbeddedImage(0, 0, 10, 10, data=b"\xff\xd8\xff\xe0"),))
    assert "data:image/jpeg;base64," in serialize_scene(scene)


def test_full_scene_round_trips_through_xml(photo):
    scene = compose(Selected(aircraft=make_aircraft(), distance_km=1.0), route=ROUTE, photo=photo)
    root = _parse(serialize_scene(scene, title="Nearest aircraft"))
    texts = [t.text for t in root.iter(f"{SVG_NS}text")]
    assert texts == scene.texts()
    assert root.find(f"{SVG_NS}title").text == "Nearest aircraft"
