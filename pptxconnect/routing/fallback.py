"""
Fallback router

Best-effort route used when every candidate collides: a single L turn after
a large offset in the start site's outward direction. Not collision-tested.
"""
from ..config import FALLBACK_OFFSET_PX
from ..geom.primitives import Point
from ..shapes.catalog import ConnectionSite
from .synthesizer import Axis, RoutingCandidate, candidate_from_points, direction_from_angle


def fallback_candidate(
    start_site: ConnectionSite,
    end_site: ConnectionSite,
    offset: float = FALLBACK_OFFSET_PX,
) -> RoutingCandidate:
    start, end = start_site.point, end_site.point
    direction = direction_from_angle(start_site.angle)
    if direction.axis == Axis.HORIZONTAL:
        turn_x = start.x + direction.sign * offset
        waypoints = [Point(turn_x, start.y), Point(turn_x, end.y)]
    else:
        turn_y = start.y + direction.sign * offset
        waypoints = [Point(start.x, turn_y), Point(end.x, turn_y)]
    return candidate_from_points("fallback", [start] + waypoints + [end])
