"""
Obstacle set builder

Element bounds (including the union bounds of groups) and the filtering of a
slide's elements down to the shapes a connector must avoid
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..errors import InvalidRoutingInput
from ..geom.primitives import Rect
from ..model.intermediate import (
    BaseElement,
    ConnectorElement,
    GroupElement,
    NON_OBSTRUCTING_TYPES,
    ShapeElement,
)
from ..shapes.catalog import ShapeKind


@dataclass(frozen=True)
class Obstacle:
    """Read-only projection of a shape used for collision testing"""
    element_id: str
    bounds: Rect
    shape_kind: ShapeKind


def _own_rect(element: BaseElement) -> Rect:
    if element.x is None or element.y is None or element.w is None or element.h is None:
        raise InvalidRoutingInput(f"Element {element.id!r} has no bounds")
    if element.w < 0 or element.h < 0:
        raise InvalidRoutingInput(f"Element {element.id!r} has negative size {element.w}x{element.h}")
    return Rect(float(element.x), float(element.y), float(element.w), float(element.h))


def _child_rect(child: BaseElement, origin_x: float, origin_y: float) -> Optional[Rect]:
    """Absolute rect of a group child, or None when the child has no usable geometry"""
    if isinstance(child, ConnectorElement):
        if not child.points:
            return None
        xs = [p.x + origin_x for p in child.points]
        ys = [p.y + origin_y for p in child.points]
        return Rect.from_edges(min(xs), min(ys), max(xs), max(ys))
    if child.x is None or child.y is None:
        return None
    width = float(child.w or 0.0)
    height = float(child.h or 0.0)
    if isinstance(child, ShapeElement) and ShapeKind.parse(child.shape_type) == ShapeKind.CIRCLE:
        # Circles are drawn with the smaller side as diameter
        diameter = min(width, height)
        width = height = diameter
    if isinstance(child, GroupElement) and child.children:
        return element_bounds(child).translated(origin_x, origin_y)
    return Rect(child.x + origin_x, child.y + origin_y, max(width, 0.0), max(height, 0.0))


def element_bounds(element: BaseElement) -> Rect:
    """
    Bounding box of an element.

    A group's bounds are the union of its children, which are positioned
    relative to the group origin. A group without usable children uses its
    own box.

    Raises:
        InvalidRoutingInput: the element has no position/size or a negative size
    """
    if element is None:
        raise InvalidRoutingInput("Element is required")
    if isinstance(element, GroupElement) and element.children:
        origin_x = float(element.x or 0.0)
        origin_y = float(element.y or 0.0)
        rects = [r for r in (_child_rect(c, origin_x, origin_y) for c in element.children) if r is not None]
        if rects:
            return Rect.union(rects)
    return _own_rect(element)


def element_shape_kind(element: BaseElement) -> ShapeKind:
    """Shape kind used for site lookup; non-shape elements route like rectangles"""
    if isinstance(element, ShapeElement):
        return ShapeKind.parse(element.shape_type)
    return ShapeKind.RECTANGLE


def is_obstructing(element: BaseElement) -> bool:
    return element.element_type not in NON_OBSTRUCTING_TYPES


def build_obstacles(
    elements: Iterable[BaseElement],
    start_id: str,
    end_id: str,
    connector_id: Optional[str] = None,
) -> List[Obstacle]:
    """
    Filter the full element list down to the shapes that must be avoided.

    Excludes both endpoints, the connector being routed, and element types
    that never block routing (free lines and text).
    """
    excluded = {start_id, end_id}
    if connector_id is not None:
        excluded.add(connector_id)
    return [
        Obstacle(element.id, element_bounds(element), element_shape_kind(element))
        for element in elements
        if element.id not in excluded and is_obstructing(element)
    ]
