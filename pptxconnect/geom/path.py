"""
Path encoding

Converts between point lists, segment lists and the portable
``M x y L x y ...`` move/line-to string used by drawing surfaces
"""
import re
from typing import List, Sequence

from .primitives import Point, Segment

_PATH_TOKEN = re.compile(r'([ML])\s*(-?[\d.]+(?:[eE][-+]?\d+)?)[\s,]+(-?[\d.]+(?:[eE][-+]?\d+)?)')


def format_coordinate(value: float) -> str:
    """Format a coordinate without trailing zeros (200.0 -> '200', 12.5 -> '12.5')"""
    value = float(value)
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    return ("%f" % value).rstrip("0").rstrip(".")


def segments_from_points(points: Sequence[Point]) -> List[Segment]:
    """Split a polyline into consecutive segments"""
    return [Segment(points[i], points[i + 1]) for i in range(len(points) - 1)]


def points_from_segments(segments: Sequence[Segment]) -> List[Point]:
    """Inverse of segments_from_points: first start followed by every end"""
    if not segments:
        return []
    return [segments[0].start] + [seg.end for seg in segments]


def encode_path_data(segments: Sequence[Segment]) -> str:
    """Serialize segments as ``M x y L x y ...``"""
    if not segments:
        return ""
    parts = [f"M {format_coordinate(segments[0].start.x)} {format_coordinate(segments[0].start.y)}"]
    for seg in segments:
        parts.append(f"L {format_coordinate(seg.end.x)} {format_coordinate(seg.end.y)}")
    return " ".join(parts)


def parse_path_data(path_data: str) -> List[Point]:
    """
    Parse a ``M x y L x y ...`` string into its points.

    Raises:
        ValueError: if the string is not a single move followed by line-to commands
    """
    tokens = _PATH_TOKEN.findall(path_data or "")
    if not tokens:
        raise ValueError(f"Empty or malformed path data: {path_data!r}")
    if tokens[0][0] != "M" or any(cmd != "L" for cmd, _, _ in tokens[1:]):
        raise ValueError(f"Path data must be one M followed by L commands: {path_data!r}")
    consumed = _PATH_TOKEN.sub("", path_data).strip()
    if consumed:
        raise ValueError(f"Unexpected content in path data: {consumed!r}")
    return [Point(float(x), float(y)) for _, x, y in tokens]
