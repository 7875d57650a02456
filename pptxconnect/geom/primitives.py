"""
Geometry primitives

Point, axis-aligned rectangle and segment value types with the containment
tests used by collision testing
"""
from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Point:
    """2-D coordinate in pixels (screen coordinates, y grows downward)"""
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bounding box"""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def contains_strictly(self, point: Point) -> bool:
        """True when point lies in the interior (the boundary does not count)"""
        return self.x < point.x < self.right and self.y < point.y < self.bottom

    def contains(self, point: Point) -> bool:
        """True when point lies inside or on the boundary"""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    @classmethod
    def from_edges(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        return cls(left, top, right - left, bottom - top)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Rect":
        """Bounding box of a point set. Raises ValueError on an empty iterable."""
        points = list(points)
        if not points:
            raise ValueError("Rect.from_points() requires at least one point")
        return cls.from_edges(
            min(p.x for p in points),
            min(p.y for p in points),
            max(p.x for p in points),
            max(p.y for p in points),
        )

    @classmethod
    def union(cls, rects: Iterable["Rect"]) -> "Rect":
        """Smallest rectangle containing every rect. Raises ValueError on an empty iterable."""
        rects = list(rects)
        if not rects:
            raise ValueError("Rect.union() requires at least one rect")
        return cls.from_edges(
            min(r.x for r in rects),
            min(r.y for r in rects),
            max(r.right for r in rects),
            max(r.bottom for r in rects),
        )


@dataclass(frozen=True)
class Segment:
    """One leg of a connector path"""
    start: Point
    end: Point

    @property
    def midpoint(self) -> Point:
        return Point((self.start.x + self.end.x) / 2.0, (self.start.y + self.end.y) / 2.0)

    @property
    def length(self) -> float:
        return abs(self.end.x - self.start.x) + abs(self.end.y - self.start.y)

    def is_horizontal(self, tolerance: float = 1.0) -> bool:
        return abs(self.end.y - self.start.y) < tolerance

    def is_axis_aligned(self) -> bool:
        # Exactly one coordinate shared; a zero-length segment has no axis
        return (self.start.x == self.end.x) != (self.start.y == self.end.y)

    def point_at(self, t: float) -> Point:
        """Point at parameter t in [0, 1] along the segment"""
        return Point(
            self.start.x + t * (self.end.x - self.start.x),
            self.start.y + t * (self.end.y - self.start.y),
        )


def manhattan_distance(a: Point, b: Point) -> float:
    return abs(a.x - b.x) + abs(a.y - b.y)


def euclidean_distance(a: Point, b: Point) -> float:
    return ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5


def segment_enters_rect(segment: Segment, rect: Rect, samples: int) -> bool:
    """
    Check whether a segment enters the interior of a rectangle.

    Either endpoint strictly inside counts, as does any of the ``samples - 1``
    evenly spaced interior points. Touching the boundary is allowed so that a
    connector may end exactly on an edge. This is a sampled approximation:
    a thin rect falling between two consecutive samples is missed.
    """
    if rect.contains_strictly(segment.start) or rect.contains_strictly(segment.end):
        return True
    for i in range(1, samples):
        if rect.contains_strictly(segment.point_at(i / samples)):
            return True
    return False
