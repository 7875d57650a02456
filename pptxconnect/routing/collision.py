"""
Collision tester

Accepts the first candidate route whose segments stay out of every obstacle
and out of the interior of both endpoint shapes
"""
from typing import Optional, Sequence

from ..config import COLLISION_SAMPLES
from ..geom.primitives import Rect, segment_enters_rect
from .obstacles import Obstacle
from .synthesizer import RoutingCandidate


def candidate_collides(
    candidate: RoutingCandidate,
    obstacles: Sequence[Obstacle],
    start_bounds: Rect,
    end_bounds: Rect,
    samples: int = COLLISION_SAMPLES,
) -> bool:
    """True if any segment enters an obstacle or re-enters either endpoint shape"""
    for segment in candidate.segments:
        for obstacle in obstacles:
            if segment_enters_rect(segment, obstacle.bounds, samples):
                return True
        # Endpoint shapes: sites lie on the boundary, so touching is allowed there
        if segment_enters_rect(segment, start_bounds, samples) or segment_enters_rect(segment, end_bounds, samples):
            return True
    return False


def first_clear_candidate(
    candidates: Sequence[RoutingCandidate],
    obstacles: Sequence[Obstacle],
    start_bounds: Rect,
    end_bounds: Rect,
    samples: int = COLLISION_SAMPLES,
) -> Optional[RoutingCandidate]:
    """First candidate in emission order that collides with nothing, or None when all collide"""
    for candidate in candidates:
        if not candidate_collides(candidate, obstacles, start_bounds, end_bounds, samples):
            return candidate
    return None
