"""Geometry primitives, unit conversion and path encoding"""
from .primitives import (
    Point,
    Rect,
    Segment,
    manhattan_distance,
    euclidean_distance,
    segment_enters_rect,
)
from .path import (
    encode_path_data,
    parse_path_data,
    segments_from_points,
    points_from_segments,
)

__all__ = [
    "Point",
    "Rect",
    "Segment",
    "manhattan_distance",
    "euclidean_distance",
    "segment_enters_rect",
    "encode_path_data",
    "parse_path_data",
    "segments_from_points",
    "points_from_segments",
]
