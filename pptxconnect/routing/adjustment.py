"""
Bend handle manager

Derives draggable handles for the bend segments of a routed path and applies
a handle drag, keeping the path orthogonal
"""
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

from ..config import ORIENTATION_TOLERANCE_PX
from ..geom.primitives import Point, Segment
from ..logger import RoutingLogger, get_logger
from .engine import ConnectorPath

_ADJUSTMENT_ID = re.compile(r'-adjust-(\d+)$')


class DragAxis(str, Enum):
    """Axis a handle may be dragged along"""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class AdjustmentPoint:
    """Handle at the midpoint of a bend segment"""
    id: str
    point: Point
    axis_constraint: DragAxis  # opposite to the orientation of the segment
    segment_index: int
    segment_start: Point
    segment_end: Point


def adjustment_id(connector_id: str, segment_index: int) -> str:
    return f"{connector_id}-adjust-{segment_index}"


def derive_adjustment_points(
    connector_id: str,
    path: ConnectorPath,
    tolerance: float = ORIENTATION_TOLERANCE_PX,
) -> List[AdjustmentPoint]:
    """
    Handles for every interior segment perpendicular to both of its neighbours.

    A segment whose vertical extent is below ``tolerance`` counts as
    horizontal. Paths with fewer than three segments have no handles.
    """
    segments = path.segments
    if len(segments) < 3:
        return []

    handles = []
    for i in range(1, len(segments) - 1):
        prev_horizontal = segments[i - 1].is_horizontal(tolerance)
        horizontal = segments[i].is_horizontal(tolerance)
        next_horizontal = segments[i + 1].is_horizontal(tolerance)
        if horizontal == prev_horizontal or horizontal == next_horizontal:
            continue
        segment = segments[i]
        handles.append(AdjustmentPoint(
            id=adjustment_id(connector_id, i),
            point=segment.midpoint,
            axis_constraint=DragAxis.VERTICAL if horizontal else DragAxis.HORIZONTAL,
            segment_index=i,
            segment_start=segment.start,
            segment_end=segment.end,
        ))
    return handles


def constrain_to_axis(handle: AdjustmentPoint, position: Point) -> Point:
    """Project a drag position onto the handle's axis (the other coordinate stays locked)"""
    if handle.axis_constraint == DragAxis.HORIZONTAL:
        return Point(position.x, handle.point.y)
    return Point(handle.point.x, position.y)


def _find_handle(path: ConnectorPath, adjustment_id_: str, tolerance: float) -> AdjustmentPoint:
    match = _ADJUSTMENT_ID.search(adjustment_id_ or "")
    if not match:
        raise ValueError(f"Not an adjustment handle id: {adjustment_id_!r}")
    index = int(match.group(1))
    connector_id = adjustment_id_[:match.start()]
    for handle in derive_adjustment_points(connector_id, path, tolerance):
        if handle.segment_index == index:
            return handle
    raise ValueError(f"Unknown adjustment handle: {adjustment_id_!r}")


def apply_adjustment(
    path: ConnectorPath,
    adjustment_id: str,
    new_position: Point,
    tolerance: float = ORIENTATION_TOLERANCE_PX,
    logger: Optional[RoutingLogger] = None,
) -> ConnectorPath:
    """
    Move a bend segment to follow a dragged handle.

    The drag is projected onto the handle's axis, both endpoints of the bend
    segment are offset by the same amount, and the shared vertices of the two
    neighbouring segments follow. Their far vertices stay fixed, so the path
    start and end points never move. The result is not collision-tested.

    Args:
        path: Path to adjust (not modified)
        adjustment_id: Handle id as produced by derive_adjustment_points
        new_position: Pointer position; only the handle-axis coordinate is used
        tolerance: Orientation tolerance used to derive handles
        logger: RoutingLogger instance (uses the default logger if None)

    Returns:
        New ConnectorPath with the adjusted segments

    Raises:
        ValueError: the id does not name a handle of this path
    """
    logger = logger or get_logger()
    handle = _find_handle(path, adjustment_id, tolerance)
    target = constrain_to_axis(handle, new_position)
    dx = target.x - handle.point.x
    dy = target.y - handle.point.y

    i = handle.segment_index
    segments = list(path.segments)
    moved = Segment(segments[i].start.translated(dx, dy), segments[i].end.translated(dx, dy))
    segments[i] = moved

    before = segments[i - 1]
    after = segments[i + 1]
    segments[i - 1] = Segment(before.start, moved.start)
    segments[i + 1] = Segment(moved.end, after.end)

    for old, new in ((before, segments[i - 1]), (after, segments[i + 1])):
        old_vec = (old.end.x - old.start.x, old.end.y - old.start.y)
        new_vec = (new.end.x - new.start.x, new.end.y - new.start.y)
        if old_vec[0] * new_vec[0] + old_vec[1] * new_vec[1] <= 0:
            logger.debug(f"Adjustment {adjustment_id} collapsed or reversed a neighbouring segment")

    return replace(path, segments=tuple(segments))
