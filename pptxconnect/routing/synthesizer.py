"""
Path synthesizer

Generates the ordered list of candidate orthogonal routes between two
connection sites, most preferred first:

1. same-axis route (both sites face along the same axis): exit, midline, re-enter
2. mixed-axis route (perpendicular sites): a single L turn
3. perimeter-hugging alternates along the start, then the end, bounding box
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from ..config import RoutingConfig, default_config
from ..geom.path import points_from_segments, segments_from_points
from ..geom.primitives import Point, Rect, Segment
from ..shapes.catalog import ConnectionSite


class Axis(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Direction:
    """Outward direction of a connection site"""
    axis: Axis
    sign: int  # +1 right/down, -1 left/up
    name: str


RIGHT = Direction(Axis.HORIZONTAL, 1, "right")
DOWN = Direction(Axis.VERTICAL, 1, "down")
LEFT = Direction(Axis.HORIZONTAL, -1, "left")
UP = Direction(Axis.VERTICAL, -1, "up")


def direction_from_angle(angle) -> Direction:
    """Classify an angle into one of the four axis directions (a missing angle counts as right)"""
    normalized = ((angle or 0.0) % 360.0 + 360.0) % 360.0
    if normalized >= 315.0 or normalized < 45.0:
        return RIGHT
    if normalized < 135.0:
        return DOWN
    if normalized < 225.0:
        return LEFT
    return UP


@dataclass(frozen=True)
class RoutingCandidate:
    """One candidate route; transient within a routing call"""
    strategy: str
    segments: Tuple[Segment, ...]

    @property
    def points(self) -> List[Point]:
        return points_from_segments(self.segments)


def simplify_points(points: Sequence[Point]) -> List[Point]:
    """
    Drop repeated points and interior points lying on a straight run.

    The first and last points are always kept, so a route whose sites share
    a line collapses to one straight segment.
    """
    kept: List[Point] = []
    for point in points:
        if kept and kept[-1] == point:
            continue
        if len(kept) >= 2:
            a, b = kept[-2], kept[-1]
            if (a.x == b.x == point.x) or (a.y == b.y == point.y):
                kept[-1] = point
                continue
        kept.append(point)
    if len(kept) < 2:
        return [points[0], points[-1]]
    return kept


def candidate_from_points(strategy: str, points: Sequence[Point]) -> RoutingCandidate:
    points = simplify_points(points)
    segments = tuple(segments_from_points(points))
    # Coincident sites leave a single zero-length segment
    if len(segments) > 1 or segments[0].length > 0:
        for seg in segments:
            assert seg.is_axis_aligned(), f"{strategy} produced a non-orthogonal or empty segment {seg}"
    return RoutingCandidate(strategy, segments)


def exit_offset(point: Point, bounds: Rect, direction: Direction, clearance: float) -> float:
    """
    Signed distance to travel out of a site before turning.

    At least ``clearance``, and far enough to clear the shape's own bounding
    box plus ``clearance`` so the first leg never clips back into the shape.
    """
    if direction.axis == Axis.HORIZONTAL:
        to_edge = bounds.right - point.x if direction.sign > 0 else point.x - bounds.x
    else:
        to_edge = bounds.bottom - point.y if direction.sign > 0 else point.y - bounds.y
    return direction.sign * max(clearance, to_edge + clearance)


def _same_axis_candidate(
    start: Point, end: Point,
    start_dir: Direction, end_dir: Direction,
    start_bounds: Rect, end_bounds: Rect,
    clearance: float,
) -> RoutingCandidate:
    start_off = exit_offset(start, start_bounds, start_dir, clearance)
    end_off = exit_offset(end, end_bounds, end_dir, clearance)
    if start_dir.axis == Axis.HORIZONTAL:
        mid_y = (start.y + end.y) / 2.0
        waypoints = [
            Point(start.x + start_off, start.y),
            Point(start.x + start_off, mid_y),
            Point(end.x + end_off, mid_y),
            Point(end.x + end_off, end.y),
        ]
    else:
        mid_x = (start.x + end.x) / 2.0
        waypoints = [
            Point(start.x, start.y + start_off),
            Point(mid_x, start.y + start_off),
            Point(mid_x, end.y + end_off),
            Point(end.x, end.y + end_off),
        ]
    return candidate_from_points("same-axis", [start] + waypoints + [end])


def _mixed_axis_candidate(
    start: Point, end: Point, start_dir: Direction, start_bounds: Rect, clearance: float,
) -> RoutingCandidate:
    offset = exit_offset(start, start_bounds, start_dir, clearance)
    if start_dir.axis == Axis.HORIZONTAL:
        waypoints = [Point(start.x + offset, start.y), Point(start.x + offset, end.y)]
    else:
        waypoints = [Point(start.x, start.y + offset), Point(end.x, start.y + offset)]
    return candidate_from_points("mixed-axis", [start] + waypoints + [end])


def _perimeter_candidates(
    start: Point, end: Point,
    start_dir: Direction, end_dir: Direction,
    start_bounds: Rect, end_bounds: Rect,
    band: float,
) -> List[RoutingCandidate]:
    candidates = []

    # Around the start shape: a horizontal site detours along the band below/above it
    if start_dir.axis == Axis.HORIZONTAL:
        route_y = start_bounds.bottom + band if start_dir.sign > 0 else start_bounds.y - band
        corners = [Point(start.x, route_y), Point(end.x, route_y)]
    else:
        route_x = start_bounds.right + band if start_dir.sign > 0 else start_bounds.x - band
        corners = [Point(route_x, start.y), Point(route_x, end.y)]
    candidates.append(candidate_from_points("perimeter-start", [start] + corners + [end]))

    # Around the end shape
    if end_dir.axis == Axis.HORIZONTAL:
        route_y = end_bounds.bottom + band if end_dir.sign < 0 else end_bounds.y - band
        corners = [Point(start.x, route_y), Point(end.x, route_y)]
    else:
        route_x = end_bounds.right + band if end_dir.sign < 0 else end_bounds.x - band
        corners = [Point(route_x, start.y), Point(route_x, end.y)]
    candidates.append(candidate_from_points("perimeter-end", [start] + corners + [end]))

    return candidates


def generate_candidates(
    start_site: ConnectionSite,
    end_site: ConnectionSite,
    start_bounds: Rect,
    end_bounds: Rect,
    config: RoutingConfig = default_config,
) -> List[RoutingCandidate]:
    """
    Candidate routes between two sites in preference order.

    Every candidate starts exactly at ``start_site.point`` and ends exactly at
    ``end_site.point``.
    """
    start, end = start_site.point, end_site.point
    start_dir = direction_from_angle(start_site.angle)
    end_dir = direction_from_angle(end_site.angle)

    if start_dir.axis == end_dir.axis:
        primary = _same_axis_candidate(
            start, end, start_dir, end_dir, start_bounds, end_bounds, config.min_exit_clearance,
        )
    else:
        primary = _mixed_axis_candidate(start, end, start_dir, start_bounds, config.min_exit_clearance)

    return [primary] + _perimeter_candidates(
        start, end, start_dir, end_dir, start_bounds, end_bounds, config.perimeter_clearance,
    )
