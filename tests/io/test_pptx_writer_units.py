"""
Unit tests for pptx_writer: create_presentation, add_slide with shapes, text, images, groups and connectors.
"""
from __future__ import annotations

from dataclasses import replace

from pptx.dml.color import RGBColor

from pptxconnect.geom.primitives import Point
from pptxconnect.io.pptx_writer import NSMAP_BOTH, PPTXWriter
from pptxconnect.model.intermediate import (
    ConnectorElement,
    GroupElement,
    ImageElement,
    ShapeElement,
    Style,
    TextElement,
)
from pptxconnect.routing.engine import ConnectorRouter
from pptxconnect.routing.reconnect import apply_route


def _named(slide, prefix: str):
    return [s for s in slide.shapes if (s.name or "").startswith(prefix)]


def _cxn(shape, tag: str):
    found = shape._element.xpath(f"./p:nvCxnSpPr/p:cNvCxnSpPr/a:{tag}")
    return found[0] if found else None


def _routed_elbow(router: ConnectorRouter, shape_a, shape_b, elbow_ab) -> ConnectorElement:
    connector = replace(elbow_ab, style=Style(arrow_end="triangle"))
    return apply_route(connector, router.compute_routing(shape_a, shape_b))


# ---- create_presentation ----
def test_create_presentation_none_page_size() -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    assert prs is not None
    assert layout is not None


def test_create_presentation_with_page_size() -> None:
    writer = PPTXWriter()
    prs, _ = writer.create_presentation((800.0, 600.0))
    assert prs.slide_width == 800 * 9525
    assert prs.slide_height == 600 * 9525


def test_create_presentation_zero_page_size() -> None:
    """Zero page size: should not crash; slide size stays default."""
    writer = PPTXWriter()
    prs, _ = writer.create_presentation((0.0, 0.0))
    assert prs.slide_width > 0


# ---- Shapes ----
def test_add_slide_shape_element() -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation((800.0, 600.0))
    shape = ShapeElement(
        id="s1", x=50.0, y=50.0, w=100.0, h=60.0,
        shape_type="diamond", text="Decide",
        style=Style(fill=RGBColor(0xFF, 0xEE, 0xDD), stroke=RGBColor(0x11, 0x22, 0x33)),
    )
    slide = writer.add_slide(prs, layout, [shape])
    (shp,) = _named(slide, "pptxconnect:shape:")
    assert shp.name == "pptxconnect:shape:s1"
    assert shp.text_frame.text == "Decide"
    assert shp.fill.fore_color.rgb == RGBColor(0xFF, 0xEE, 0xDD)
    assert shp._element.xpath("./p:spPr/a:prstGeom/@prst") == ["diamond"]
    assert shp._element.xpath("./p:spPr/a:ln/a:solidFill/a:srgbClr/@val") == ["112233"]


def test_add_slide_shape_zero_size_not_added() -> None:
    """Shape with w<=0 or h<=0 is not added."""
    writer = PPTXWriter()
    prs, layout = writer.create_presentation((800.0, 600.0))
    slide = writer.add_slide(prs, layout, [ShapeElement(id="s1", x=50.0, y=50.0, w=0.0, h=60.0)])
    assert _named(slide, "pptxconnect:shape:") == []


def test_unknown_shape_kind_written_as_rectangle() -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    slide = writer.add_slide(prs, layout, [ShapeElement(id="k", x=0.0, y=0.0, w=10.0, h=10.0, shape_type="cloud")])
    (shp,) = _named(slide, "pptxconnect:shape:")
    assert shp._element.xpath("./p:spPr/a:prstGeom/@prst") == ["rect"]


def test_shape_adjustments_are_written() -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    triangle = ShapeElement(
        id="t", x=0.0, y=0.0, w=100.0, h=80.0, shape_type="triangle", adjustments={"adj": 25000.0},
    )
    slide = writer.add_slide(prs, layout, [triangle])
    (shp,) = _named(slide, "pptxconnect:shape:")
    assert abs(shp.adjustments[0] - 0.25) < 1e-6


def test_add_text_and_image_frame() -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    slide = writer.add_slide(prs, layout, [
        TextElement(id="t1", x=10.0, y=10.0, w=200.0, h=40.0, text="Hello"),
        ImageElement(id="i1", x=10.0, y=100.0, w=50.0, h=50.0),
    ])
    (text,) = _named(slide, "pptxconnect:text:")
    assert text.text_frame.text == "Hello"
    (frame,) = _named(slide, "pptxconnect:image:")
    assert frame.width == 50 * 9525


def test_group_children_are_offset_by_group_origin() -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    group = GroupElement(
        id="g", x=100.0, y=50.0, w=60.0, h=40.0,
        children=(ShapeElement(id="c", x=10.0, y=20.0, w=30.0, h=20.0),),
    )
    slide = writer.add_slide(prs, layout, [group])
    (grp,) = _named(slide, "pptxconnect:group:")
    child = [s for s in grp.shapes if s.name == "pptxconnect:shape:c"][0]
    assert child.left == 110 * 9525
    assert child.top == 70 * 9525


# ---- Connectors ----
def test_routed_elbow_is_written_per_segment_and_glued(router, shape_a, shape_b, elbow_ab) -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    connector = _routed_elbow(router, shape_a, shape_b, elbow_ab)
    slide = writer.add_slide(prs, layout, [connector, shape_a, shape_b])

    segments = _named(slide, "pptxconnect:connector:c1:seg:")
    assert [s.name for s in segments] == [f"pptxconnect:connector:c1:seg:{i}" for i in range(5)]

    shape_ids = {s.name: s.shape_id for s in _named(slide, "pptxconnect:shape:")}
    st = _cxn(segments[0], "stCxn")
    end = _cxn(segments[-1], "endCxn")
    assert st.get("id") == str(shape_ids["pptxconnect:shape:A"])
    assert st.get("idx") == "3"
    assert end.get("id") == str(shape_ids["pptxconnect:shape:B"])
    assert end.get("idx") == "2"
    assert _cxn(segments[0], "endCxn") is None
    assert _cxn(segments[2], "stCxn") is None

    assert segments[-1]._element.xpath("./p:spPr/a:ln/a:tailEnd/@type") == ["triangle"]
    assert segments[0]._element.xpath("./p:spPr/a:ln/a:tailEnd") == []


def test_connectors_are_written_above_shapes(router, shape_a, shape_b, elbow_ab) -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    connector = _routed_elbow(router, shape_a, shape_b, elbow_ab)
    slide = writer.add_slide(prs, layout, [connector, shape_a, shape_b])
    names = [s.name for s in slide.shapes]
    assert names.index("pptxconnect:shape:B") < names.index("pptxconnect:connector:c1:seg:0")


def test_level_elbow_is_written_as_one_glued_connector(router, shape_a, elbow_ab) -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    level = ShapeElement(id="B", x=400.0, y=100.0, w=100.0, h=80.0)
    connector = apply_route(elbow_ab, router.compute_routing(shape_a, level))
    slide = writer.add_slide(prs, layout, [shape_a, level, connector])

    assert _named(slide, "pptxconnect:connector:c1:seg:") == []
    (line,) = _named(slide, "pptxconnect:connector:")
    assert line.begin_y == line.end_y == 140 * 9525
    assert line.end_x - line.begin_x == 200 * 9525
    assert _cxn(line, "stCxn") is not None
    assert _cxn(line, "endCxn") is not None


def test_straight_connector_is_single_shape() -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    line = ConnectorElement(
        id="l1", connector_type="straight", points=(Point(0.0, 0.0), Point(100.0, 50.0)),
        style=Style(arrow_start="oval"),
    )
    slide = writer.add_slide(prs, layout, [line])
    (shape,) = _named(slide, "pptxconnect:connector:")
    assert shape.name == "pptxconnect:connector:l1"
    assert shape.end_x == 100 * 9525
    assert shape._element.xpath("./p:spPr/a:ln/a:headEnd/@type") == ["oval"]


def test_connector_without_points_is_skipped(elbow_ab) -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    slide = writer.add_slide(prs, layout, [elbow_ab])
    assert _named(slide, "pptxconnect:connector:") == []


def test_connection_xml_keeps_schema_order(shape_a, shape_b) -> None:
    writer = PPTXWriter()
    prs, layout = writer.create_presentation(None)
    line = ConnectorElement(
        id="l2", source_id="A", target_id="B", connector_type="straight",
        start_site_name="right", end_site_name="top",
        points=(Point(200.0, 140.0), Point(450.0, 100.0)),
    )
    slide = writer.add_slide(prs, layout, [shape_a, shape_b, line])
    (shape,) = _named(slide, "pptxconnect:connector:")
    c_nv = shape._element.find(".//p:cNvCxnSpPr", namespaces=NSMAP_BOTH)
    tags = [child.tag.split("}")[1] for child in c_nv]
    assert tags.index("stCxn") < tags.index("endCxn")
    assert _cxn(shape, "endCxn").get("idx") == "0"
