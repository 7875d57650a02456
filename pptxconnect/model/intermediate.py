"""
Intermediate element model

Slide elements as seen by the routing engine: shapes, groups, text, pictures
and connectors. Elements are frozen; callers that change one build a new value
with dataclasses.replace
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from pptx.dml.color import RGBColor  # type: ignore[import]

from ..geom.primitives import Point

# Element types that never block routing
NON_OBSTRUCTING_TYPES = frozenset({"line", "text"})


@dataclass(frozen=True)
class Style:
    """Line and fill style carried through to the PowerPoint writer"""
    stroke: Optional[RGBColor] = None
    stroke_width: float = 1.0
    fill: Optional[RGBColor] = None
    arrow_start: Optional[str] = None  # DrawingML line-end type: 'triangle', 'stealth', 'arrow', 'oval', ...
    arrow_end: Optional[str] = None


@dataclass(frozen=True)
class BaseElement:
    """Common geometry for all slide elements (px, top-left origin)"""
    id: str
    x: Optional[float] = None
    y: Optional[float] = None
    w: Optional[float] = None
    h: Optional[float] = None
    name: Optional[str] = None
    element_type: str = field(default="element", init=False)


@dataclass(frozen=True)
class ShapeElement(BaseElement):
    shape_type: str = "rectangle"
    adjustments: Dict[str, float] = field(default_factory=dict, compare=False)
    text: str = ""
    style: Style = field(default_factory=Style)
    element_type: str = field(default="shape", init=False)


@dataclass(frozen=True)
class GroupElement(BaseElement):
    """Group whose children are positioned relative to the group origin"""
    children: Tuple[BaseElement, ...] = ()
    element_type: str = field(default="group", init=False)


@dataclass(frozen=True)
class TextElement(BaseElement):
    text: str = ""
    element_type: str = field(default="text", init=False)


@dataclass(frozen=True)
class ImageElement(BaseElement):
    description: str = ""
    blob: Optional[bytes] = field(default=None, repr=False, compare=False)
    element_type: str = field(default="image", init=False)


@dataclass(frozen=True)
class ConnectorElement(BaseElement):
    """Connector line; elbow connectors are routed between source and target"""
    source_id: Optional[str] = None
    target_id: Optional[str] = None
    start_site_name: Optional[str] = None
    end_site_name: Optional[str] = None
    connector_type: str = "elbow"  # 'elbow', 'straight' or 'curved'
    points: Tuple[Point, ...] = ()
    style: Style = field(default_factory=Style)
    element_type: str = field(default="line", init=False)

    @property
    def is_elbow(self) -> bool:
        return self.connector_type == "elbow"

    def is_attached_to(self, element_id: str) -> bool:
        return element_id in (self.source_id, self.target_id)
