"""
Shape and connection site mapping

Maps between the routing catalog's ShapeKind, PowerPoint preset geometry
names (``prst``), python-pptx MSO_SHAPE / MSO_CONNECTOR members and the
connection site indices used by ``a:stCxn`` / ``a:endCxn``
"""
from typing import Dict, Optional, Union

from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE  # type: ignore[import]

from ..shapes.catalog import ShapeKind

# PowerPoint preset geometry name -> ShapeKind
PRST_TO_SHAPE_KIND: Dict[str, ShapeKind] = {
    'rect': ShapeKind.RECTANGLE,
    'roundRect': ShapeKind.ROUNDED_RECTANGLE,
    'ellipse': ShapeKind.ELLIPSE,
    'triangle': ShapeKind.TRIANGLE,
    'rtTriangle': ShapeKind.RIGHT_TRIANGLE,
    'diamond': ShapeKind.DIAMOND,
    'parallelogram': ShapeKind.PARALLELOGRAM,
    'trapezoid': ShapeKind.TRAPEZOID,
    'pentagon': ShapeKind.PENTAGON,
    'hexagon': ShapeKind.HEXAGON,
    'octagon': ShapeKind.OCTAGON,
    'flowChartProcess': ShapeKind.FLOWCHART_PROCESS,
    'flowChartDecision': ShapeKind.FLOWCHART_DECISION,
    'flowChartTerminator': ShapeKind.FLOWCHART_TERMINATOR,
    'flowChartInputOutput': ShapeKind.FLOWCHART_DATA,
}

SHAPE_KIND_TO_MSO: Dict[ShapeKind, MSO_SHAPE] = {
    ShapeKind.RECTANGLE: MSO_SHAPE.RECTANGLE,
    ShapeKind.ROUNDED_RECTANGLE: MSO_SHAPE.ROUNDED_RECTANGLE,
    ShapeKind.ELLIPSE: MSO_SHAPE.OVAL,
    ShapeKind.CIRCLE: MSO_SHAPE.OVAL,
    ShapeKind.TRIANGLE: MSO_SHAPE.ISOSCELES_TRIANGLE,
    ShapeKind.RIGHT_TRIANGLE: MSO_SHAPE.RIGHT_TRIANGLE,
    ShapeKind.DIAMOND: MSO_SHAPE.DIAMOND,
    ShapeKind.PARALLELOGRAM: MSO_SHAPE.PARALLELOGRAM,
    ShapeKind.TRAPEZOID: MSO_SHAPE.TRAPEZOID,
    ShapeKind.PENTAGON: MSO_SHAPE.REGULAR_PENTAGON,
    ShapeKind.HEXAGON: MSO_SHAPE.HEXAGON,
    ShapeKind.OCTAGON: MSO_SHAPE.OCTAGON,
    ShapeKind.FLOWCHART_PROCESS: MSO_SHAPE.FLOWCHART_PROCESS,
    ShapeKind.FLOWCHART_DECISION: MSO_SHAPE.FLOWCHART_DECISION,
    ShapeKind.FLOWCHART_TERMINATOR: MSO_SHAPE.FLOWCHART_TERMINATOR,
    ShapeKind.FLOWCHART_DATA: MSO_SHAPE.FLOWCHART_DATA,
}

CONNECTOR_TYPE_TO_MSO: Dict[str, MSO_CONNECTOR] = {
    'elbow': MSO_CONNECTOR.ELBOW,
    'straight': MSO_CONNECTOR.STRAIGHT,
    'curved': MSO_CONNECTOR.CURVE,
}

# Connection site indices of the preset geometries, per cardinal site.
# Box-like presets list their sites top, left, bottom, right; the ellipse
# preset has eight sites counter-clockwise from the top.
_BOX_SITE_INDEX = {'top': 0, 'left': 1, 'bottom': 2, 'right': 3}
_ELLIPSE_SITE_INDEX = {'top': 0, 'left': 2, 'bottom': 4, 'right': 6}

SITE_INDEX_BY_SHAPE_KIND: Dict[ShapeKind, Dict[str, int]] = {
    ShapeKind.RECTANGLE: _BOX_SITE_INDEX,
    ShapeKind.ROUNDED_RECTANGLE: _BOX_SITE_INDEX,
    ShapeKind.DIAMOND: _BOX_SITE_INDEX,
    ShapeKind.FLOWCHART_PROCESS: _BOX_SITE_INDEX,
    ShapeKind.FLOWCHART_DECISION: _BOX_SITE_INDEX,
    ShapeKind.FLOWCHART_TERMINATOR: _BOX_SITE_INDEX,
    ShapeKind.ELLIPSE: _ELLIPSE_SITE_INDEX,
    ShapeKind.CIRCLE: _ELLIPSE_SITE_INDEX,
}


def map_prst_to_shape_kind(prst: Optional[str]) -> ShapeKind:
    """Preset geometry name to ShapeKind (UNKNOWN when not in the catalog)"""
    if not prst:
        return ShapeKind.UNKNOWN
    return PRST_TO_SHAPE_KIND.get(prst, ShapeKind.UNKNOWN)


def map_shape_type_to_pptx(shape_type: Union[str, ShapeKind, None]) -> MSO_SHAPE:
    """Map a shape kind name to MSO_SHAPE (rectangle when unknown)"""
    return SHAPE_KIND_TO_MSO.get(ShapeKind.parse(shape_type), MSO_SHAPE.RECTANGLE)


def map_connector_prst(prst: Optional[str]) -> str:
    """
    Connector type for a connector preset geometry name.

    bentConnector2..5 are elbow connectors, curvedConnector2..5 curved;
    everything else (straightConnector1, line) is straight.
    """
    prst = prst or ''
    if prst.startswith('bentConnector'):
        return 'elbow'
    if prst.startswith('curvedConnector'):
        return 'curved'
    return 'straight'


def map_connector_type_to_pptx(connector_type: Optional[str]) -> MSO_CONNECTOR:
    return CONNECTOR_TYPE_TO_MSO.get(connector_type or '', MSO_CONNECTOR.STRAIGHT)


def site_to_connection_index(shape_type: Union[str, ShapeKind, None], site_name: Optional[str]) -> Optional[int]:
    """Connection site index of a cardinal site on a preset, or None when it cannot be glued"""
    indices = SITE_INDEX_BY_SHAPE_KIND.get(ShapeKind.parse(shape_type))
    if not indices or not site_name:
        return None
    return indices.get(site_name)


def connection_index_to_site(shape_type: Union[str, ShapeKind, None], index: Optional[int]) -> Optional[str]:
    """Inverse of site_to_connection_index"""
    indices = SITE_INDEX_BY_SHAPE_KIND.get(ShapeKind.parse(shape_type))
    if not indices or index is None:
        return None
    for name, idx in indices.items():
        if idx == index:
            return name
    return None
