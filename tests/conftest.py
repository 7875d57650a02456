"""Shared fixtures: the two-shape routing scenario, routers with a fresh logger, a sample deck."""

from pathlib import Path

import pytest
from pptx import Presentation
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE
from pptx.util import Emu

from pptxconnect.geom.units import px_to_emu
from pptxconnect.logger import RoutingLogger
from pptxconnect.model.intermediate import ConnectorElement, ShapeElement
from pptxconnect.routing.engine import ConnectorRouter

# Repository root
ROOT_DIR = Path(__file__).resolve().parent.parent


@pytest.fixture
def shape_a() -> ShapeElement:
    """Rectangle A at (100, 100), 100 x 80."""
    return ShapeElement(id="A", x=100.0, y=100.0, w=100.0, h=80.0, shape_type="rectangle")


@pytest.fixture
def shape_b() -> ShapeElement:
    """Circle B at (400, 100), 100 x 100."""
    return ShapeElement(id="B", x=400.0, y=100.0, w=100.0, h=100.0, shape_type="circle")


@pytest.fixture
def elbow_ab() -> ConnectorElement:
    """Unrouted elbow connector from A to B."""
    return ConnectorElement(id="c1", source_id="A", target_id="B", connector_type="elbow")


@pytest.fixture
def routing_logger() -> RoutingLogger:
    return RoutingLogger()


@pytest.fixture
def router(routing_logger: RoutingLogger) -> ConnectorRouter:
    """Router with default config and its own warning list."""
    return ConnectorRouter(logger=routing_logger)


@pytest.fixture
def sample_pptx_path(tmp_path: Path) -> Path:
    """
    One-slide deck: rectangle (100,100,100,80) and oval (400,100,100,100)
    joined by an elbow connector from the rectangle's right site to the
    oval's left site, plus a text box.
    """
    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[6])
    rect = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE, px_to_emu(100), px_to_emu(100), px_to_emu(100), px_to_emu(80)
    )
    oval = slide.shapes.add_shape(
        MSO_SHAPE.OVAL, px_to_emu(400), px_to_emu(100), px_to_emu(100), px_to_emu(100)
    )
    connector = slide.shapes.add_connector(MSO_CONNECTOR.ELBOW, Emu(0), Emu(0), Emu(1), Emu(1))
    connector.begin_connect(rect, 3)  # right
    connector.end_connect(oval, 2)  # left site of the ellipse preset
    slide.shapes.add_textbox(px_to_emu(100), px_to_emu(300), px_to_emu(200), px_to_emu(40)).text_frame.text = "note"

    path = tmp_path / "sample.pptx"
    prs.save(str(path))
    return path
