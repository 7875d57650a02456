"""
Unit tests for pptx_loader: slide size, shapes, text boxes, connector attachments, groups.
"""
from __future__ import annotations

from pathlib import Path

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE
from pptx.oxml.ns import qn

from pptxconnect.geom.units import px_to_emu
from pptxconnect.io.pptx_loader import PPTXLoader
from pptxconnect.model.intermediate import (
    ConnectorElement,
    GroupElement,
    ShapeElement,
    TextElement,
)


def _approx(a: float, b: float, tol: float = 1e-6) -> bool:
    return abs(a - b) <= tol


def _blank_slide():
    prs = Presentation()
    return prs, prs.slides.add_slide(prs.slide_layouts[6])


# ---- load_file ----
def test_load_file_returns_one_list_per_slide(sample_pptx_path: Path) -> None:
    loader = PPTXLoader()
    slides = loader.load_file(sample_pptx_path)
    assert len(slides) == 1
    elements = slides[0]
    assert [type(e) for e in elements] == [ShapeElement, ShapeElement, ConnectorElement, TextElement]


def test_extract_slide_size(sample_pptx_path: Path) -> None:
    loader = PPTXLoader()
    assert loader.extract_slide_size() == (None, None)
    loader.load_file(sample_pptx_path)
    width, height = loader.extract_slide_size()
    assert _approx(width, 960.0)
    assert _approx(height, 720.0)


def test_shapes_geometry_and_kind(sample_pptx_path: Path) -> None:
    rect, oval, _, note = PPTXLoader().load_file(sample_pptx_path)[0]
    assert rect.shape_type == "rectangle"
    assert oval.shape_type == "ellipse"
    assert (rect.x, rect.y, rect.w, rect.h) == (100.0, 100.0, 100.0, 80.0)
    assert (oval.x, oval.y, oval.w, oval.h) == (400.0, 100.0, 100.0, 100.0)
    assert note.text == "note"


def test_connector_attachment_and_type(sample_pptx_path: Path) -> None:
    rect, oval, connector, _ = PPTXLoader().load_file(sample_pptx_path)[0]
    assert connector.connector_type == "elbow"
    assert connector.source_id == rect.id
    assert connector.target_id == oval.id
    assert connector.start_site_name == "right"
    assert connector.end_site_name == "left"
    assert connector.points[0].x == 200.0
    assert connector.points[0].y == 140.0


# ---- extract_elements ----
def test_unattached_connector_and_line_ends() -> None:
    _, slide = _blank_slide()
    line = slide.shapes.add_connector(
        MSO_CONNECTOR.STRAIGHT, px_to_emu(0), px_to_emu(0), px_to_emu(50), px_to_emu(20),
    )
    ln = line.line._get_or_add_ln()
    ln.append(ln.makeelement(qn("a:tailEnd"), {"type": "triangle"}))
    (connector,) = PPTXLoader().extract_elements(slide)
    assert connector.connector_type == "straight"
    assert connector.source_id is None
    assert connector.start_site_name is None
    assert connector.points[1].x == 50.0
    assert connector.style.arrow_end == "triangle"


def test_unknown_preset_keeps_raw_name_and_adjustments() -> None:
    _, slide = _blank_slide()
    slide.shapes.add_shape(MSO_SHAPE.CLOUD, 0, 0, px_to_emu(100), px_to_emu(50))
    triangle = slide.shapes.add_shape(MSO_SHAPE.ISOSCELES_TRIANGLE, 0, 0, px_to_emu(100), px_to_emu(80))
    triangle.adjustments[0] = 0.25
    triangle.fill.solid()
    triangle.fill.fore_color.rgb = RGBColor(0x12, 0x34, 0x56)
    elements = PPTXLoader().extract_elements(slide)
    assert elements[0].shape_type == "cloud"
    assert elements[1].shape_type == "triangle"
    assert elements[1].adjustments == {"adj": 25000.0}
    assert elements[1].style.fill == RGBColor(0x12, 0x34, 0x56)


def test_group_children_are_relative_to_group_origin() -> None:
    _, slide = _blank_slide()
    group = slide.shapes.add_group_shape()
    group.shapes.add_shape(MSO_SHAPE.RECTANGLE, px_to_emu(200), px_to_emu(100), px_to_emu(40), px_to_emu(20))
    group.shapes.add_shape(MSO_SHAPE.OVAL, px_to_emu(260), px_to_emu(150), px_to_emu(40), px_to_emu(40))
    (element,) = PPTXLoader().extract_elements(slide)
    assert isinstance(element, GroupElement)
    assert _approx(element.x, 200.0)
    assert _approx(element.y, 100.0)
    first, second = element.children
    assert _approx(first.x, 0.0) and _approx(first.y, 0.0)
    assert _approx(second.x, 60.0) and _approx(second.y, 50.0)
    assert second.shape_type == "ellipse"
