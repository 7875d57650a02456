"""
Connection site catalog

Maps a shape kind and its bounding box to the ordered, named, angled
connection sites on its boundary. Sites are described per preset with guide
formulas (see guides.py) so that adjust values move them with the geometry.

Angles are outward normals in degrees: 0 = right, 90 = down, 180 = left,
270 = up (screen coordinates).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from ..geom.primitives import Point, Rect
from .guides import GuideEvaluator


class ShapeKind(str, Enum):
    """Closed set of shape kinds known to the catalog"""
    RECTANGLE = "rectangle"
    ROUNDED_RECTANGLE = "roundedRectangle"
    ELLIPSE = "ellipse"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    RIGHT_TRIANGLE = "rightTriangle"
    DIAMOND = "diamond"
    PARALLELOGRAM = "parallelogram"
    TRAPEZOID = "trapezoid"
    PENTAGON = "pentagon"
    HEXAGON = "hexagon"
    OCTAGON = "octagon"
    FLOWCHART_PROCESS = "flowchartProcess"
    FLOWCHART_DECISION = "flowchartDecision"
    FLOWCHART_TERMINATOR = "flowchartTerminator"
    FLOWCHART_DATA = "flowchartData"
    # Anything the catalog cannot resolve; uses the rectangle site set
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, name: Union[str, "ShapeKind", None]) -> "ShapeKind":
        """Resolve a shape kind name (case-insensitive, common aliases accepted); UNKNOWN otherwise"""
        if isinstance(name, ShapeKind):
            return name
        if not name:
            return cls.UNKNOWN
        return _SHAPE_KIND_BY_NAME.get(name.strip().lower(), cls.UNKNOWN)


_SHAPE_KIND_BY_NAME: Dict[str, ShapeKind] = {kind.value.lower(): kind for kind in ShapeKind}
_SHAPE_KIND_BY_NAME.update({
    'rect': ShapeKind.RECTANGLE,
    'square': ShapeKind.RECTANGLE,
    'roundrect': ShapeKind.ROUNDED_RECTANGLE,
    'oval': ShapeKind.ELLIPSE,
    'rhombus': ShapeKind.DIAMOND,
    'isoscelestriangle': ShapeKind.TRIANGLE,
    'rttriangle': ShapeKind.RIGHT_TRIANGLE,
    'process': ShapeKind.FLOWCHART_PROCESS,
    'decision': ShapeKind.FLOWCHART_DECISION,
    'terminator': ShapeKind.FLOWCHART_TERMINATOR,
    'data': ShapeKind.FLOWCHART_DATA,
})


@dataclass(frozen=True)
class ConnectionSite:
    """Named attachment point on a shape boundary"""
    id: str
    point: Point
    angle: Optional[float]  # None for the center site


@dataclass(frozen=True)
class SiteDefinition:
    id: str
    x: str  # guide name or formula
    y: str
    angle: float


@dataclass(frozen=True)
class PresetDefinition:
    name: str
    sites: Tuple[SiteDefinition, ...]
    guides: Tuple[Tuple[str, str], ...] = ()
    adjust_defaults: Tuple[Tuple[str, float], ...] = ()


def _sites(top: Tuple[str, str], right: Tuple[str, str], bottom: Tuple[str, str], left: Tuple[str, str]) -> Tuple[SiteDefinition, ...]:
    return (
        SiteDefinition("top", top[0], top[1], 270.0),
        SiteDefinition("right", right[0], right[1], 0.0),
        SiteDefinition("bottom", bottom[0], bottom[1], 90.0),
        SiteDefinition("left", left[0], left[1], 180.0),
    )


_BOX_SITES = _sites(("hc", "t"), ("r", "vc"), ("hc", "b"), ("l", "vc"))

_RECTANGLE_PRESET = PresetDefinition("rectangle", _BOX_SITES)

PRESETS: Dict[ShapeKind, PresetDefinition] = {
    ShapeKind.RECTANGLE: _RECTANGLE_PRESET,
    ShapeKind.ROUNDED_RECTANGLE: PresetDefinition("roundedRectangle", _BOX_SITES),
    ShapeKind.ELLIPSE: PresetDefinition("ellipse", _BOX_SITES),
    ShapeKind.CIRCLE: PresetDefinition("circle", _BOX_SITES),
    ShapeKind.DIAMOND: PresetDefinition("diamond", _BOX_SITES),
    ShapeKind.HEXAGON: PresetDefinition("hexagon", _BOX_SITES),
    ShapeKind.OCTAGON: PresetDefinition("octagon", _BOX_SITES),
    ShapeKind.FLOWCHART_PROCESS: PresetDefinition("flowchartProcess", _BOX_SITES),
    ShapeKind.FLOWCHART_DECISION: PresetDefinition("flowchartDecision", _BOX_SITES),
    ShapeKind.FLOWCHART_TERMINATOR: PresetDefinition("flowchartTerminator", _BOX_SITES),
    ShapeKind.TRIANGLE: PresetDefinition(
        "triangle",
        _sites(("x2", "t"), ("x3", "vc"), ("hc", "b"), ("x1", "vc")),
        guides=(
            ("a", "pin 0 adj 100000"),
            ("x1", "*/ w a 200000"),
            ("x2", "*/ w a 100000"),
            ("x3", "+- x1 wd2 0"),
        ),
        adjust_defaults=(("adj", 50000.0),),
    ),
    ShapeKind.RIGHT_TRIANGLE: PresetDefinition(
        "rightTriangle",
        _sites(("l", "t"), ("hc", "vc"), ("hc", "b"), ("l", "vc")),
    ),
    ShapeKind.PARALLELOGRAM: PresetDefinition(
        "parallelogram",
        _sites(("hc", "t"), ("x6", "vc"), ("hc", "b"), ("x1", "vc")),
        guides=(
            ("maxAdj", "*/ 100000 w ss"),
            ("a", "pin 0 adj maxAdj"),
            ("x1", "*/ ss a 200000"),
            ("x6", "+- r 0 x1"),
        ),
        adjust_defaults=(("adj", 25000.0),),
    ),
    ShapeKind.TRAPEZOID: PresetDefinition(
        "trapezoid",
        _sites(("hc", "t"), ("x4", "vc"), ("hc", "b"), ("x1", "vc")),
        guides=(
            ("maxAdj", "*/ 50000 w ss"),
            ("a", "pin 0 adj maxAdj"),
            ("x1", "*/ ss a 200000"),
            ("x4", "+- r 0 x1"),
        ),
        adjust_defaults=(("adj", 25000.0),),
    ),
    ShapeKind.PENTAGON: PresetDefinition(
        "pentagon",
        _sites(("hc", "t"), ("r", "y1"), ("hc", "b"), ("l", "y1")),
        guides=(("y1", "*/ h 38197 100000"),),
    ),
    ShapeKind.FLOWCHART_DATA: PresetDefinition(
        "flowchartData",
        _sites(("hc", "t"), ("x2", "vc"), ("hc", "b"), ("x1", "vc")),
        guides=(
            ("x1", "*/ w 1 10"),
            ("x2", "*/ w 9 10"),
        ),
    ),
    ShapeKind.UNKNOWN: _RECTANGLE_PRESET,
}


def get_preset(shape_kind: Union[str, ShapeKind, None]) -> PresetDefinition:
    """Preset for a kind; unknown kinds get the rectangle preset"""
    return PRESETS.get(ShapeKind.parse(shape_kind), _RECTANGLE_PRESET)


def center_site(bounds: Rect) -> ConnectionSite:
    return ConnectionSite("center", bounds.center, None)


def compute_sites(
    shape_kind: Union[str, ShapeKind, None],
    bounds: Rect,
    adjustments: Optional[Dict[str, float]] = None,
    include_center: bool = False,
) -> List[ConnectionSite]:
    """
    Calculate connection sites for one shape instance.

    Args:
        shape_kind: ShapeKind or name; unknown names fall back to the rectangle set
        bounds: Shape bounding box
        adjustments: Adjust values overriding the preset defaults (e.g. {"adj": 30000})
        include_center: Append a ``center`` site (angle None)

    Returns:
        Ordered list of sites (top, right, bottom, left[, center])
    """
    preset = get_preset(shape_kind)
    adjust_values = dict(preset.adjust_defaults)
    if adjustments:
        adjust_values.update({k: float(v) for k, v in adjustments.items()})

    evaluator = GuideEvaluator(bounds.width, bounds.height, adjust_values)
    for name, formula in preset.guides:
        evaluator.add_guide(name, formula)

    sites = [
        ConnectionSite(
            id=site.id,
            point=Point(bounds.x + evaluator.evaluate(site.x), bounds.y + evaluator.evaluate(site.y)),
            angle=site.angle,
        )
        for site in preset.sites
    ]
    if include_center:
        sites.append(center_site(bounds))
    return sites
