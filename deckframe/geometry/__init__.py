"""
geometry/__init__.py - Geometry kernel exports.
"""

from .point import Point
from .polygon import (
    Segment,
    Outline,
    distance,
    is_horizontal,
    outline_polygon,
    bounding_box,
    point_to_segment_distance,
    is_point_on_polygon_edge,
    is_point_in_polygon,
    line_segments_in_polygon,
    longest_segment,
)

__all__ = [
    "Point",
    "Segment",
    "Outline",
    "distance",
    "is_horizontal",
    "outline_polygon",
    "bounding_box",
    "point_to_segment_distance",
    "is_point_on_polygon_edge",
    "is_point_in_polygon",
    "line_segments_in_polygon",
    "longest_segment",
]
