"""
geometry/polygon.py - Geometry kernel.

Deck outlines are handled as shapely polygons: containment and edge
distance for posts and member ends, and clipping of a member's axis line
to the outline. Outlines arrive as ordered Point sequences that may or
may not repeat the first vertex; callers clipping many lines against the
same outline can pass a prebuilt polygon from outline_polygon().
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple, Union
import math

from shapely.geometry import LineString, Polygon
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry.base import BaseGeometry

from .point import Point

Segment = Tuple[Point, Point]
Outline = Union[Sequence[Point], BaseGeometry]


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def is_horizontal(p1: Point, p2: Point) -> bool:
    """True when the segment runs more along x than along y."""
    return abs(p1.x - p2.x) > abs(p1.y - p2.y)


def bounding_box(points: Sequence[Point]) -> Tuple[float, float, float, float]:
    """Return (min_x, max_x, min_y, max_y)."""
    if not points:
        raise ValueError("Cannot compute bounding box of no points")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), max(xs), min(ys), max(ys)


def _shapely_point(p: Point) -> ShapelyPoint:
    return ShapelyPoint(p.x, p.y)


def outline_polygon(outline: Sequence[Point]) -> Polygon:
    """Shapely polygon for a deck outline; invalid rings are cleaned."""
    if len(outline) < 3:
        raise ValueError("A deck outline needs at least three points")
    polygon = Polygon([(p.x, p.y) for p in outline])
    return polygon if polygon.is_valid else polygon.buffer(0)


def _as_polygon(outline: Outline) -> Optional[BaseGeometry]:
    if isinstance(outline, BaseGeometry):
        return outline
    if len(outline) < 3:
        return None
    return outline_polygon(outline)


def point_to_segment_distance(point: Point, seg_p1: Point, seg_p2: Point) -> float:
    """Shortest distance from a point to a finite segment."""
    if seg_p1 == seg_p2:
        return distance(point, seg_p1)
    segment = LineString([(seg_p1.x, seg_p1.y), (seg_p2.x, seg_p2.y)])
    return segment.distance(_shapely_point(point))


def is_point_on_polygon_edge(point: Point, polygon: Outline, tolerance: float) -> bool:
    """True when the point lies within tolerance of the outline's boundary."""
    shape = _as_polygon(polygon)
    if shape is None or shape.is_empty:
        return False
    return shape.boundary.distance(_shapely_point(point)) <= tolerance


def is_point_in_polygon(point: Point, polygon: Outline, edge_tolerance: float = 0.0) -> bool:
    """
    Containment test.

    Points on the boundary are inside; with an edge_tolerance, so are
    points within that distance of the outline.
    """
    shape = _as_polygon(polygon)
    if shape is None or shape.is_empty:
        return False
    if edge_tolerance > 0:
        return shape.distance(_shapely_point(point)) <= edge_tolerance
    return shape.covers(_shapely_point(point))


def _line_parts(geometry: BaseGeometry) -> List[BaseGeometry]:
    """LineString pieces of an intersection result."""
    if geometry.is_empty:
        return []
    if geometry.geom_type == "LineString":
        return [geometry]
    if geometry.geom_type in ("MultiLineString", "GeometryCollection"):
        parts: List[BaseGeometry] = []
        for g in geometry.geoms:
            parts.extend(_line_parts(g))
        return parts
    return []


def line_segments_in_polygon(
    p1: Point,
    p2: Point,
    polygon: Outline,
    edge_tolerance: float,
    epsilon: float,
) -> List[Segment]:
    """
    Clip the segment p1-p2 to a deck outline.

    Returns the pieces of the segment that lie inside the outline or along
    its boundary, ordered from p1 towards p2 and running the same way.
    Touching pieces are joined. A segment that misses the outline by no
    more than edge_tolerance is clipped against the outline grown by that
    tolerance, limited to the outline's own extent.
    """
    length = distance(p1, p2)
    shape = _as_polygon(polygon)
    if length <= epsilon or shape is None or shape.is_empty:
        return []

    ux = (p2.x - p1.x) / length
    uy = (p2.y - p1.y) / length
    line = LineString([(p1.x, p1.y), (p2.x, p2.y)])

    def along(x: float, y: float) -> float:
        return (x - p1.x) * ux + (y - p1.y) * uy

    lo, hi = 0.0, length
    parts = _line_parts(line.intersection(shape))
    if not parts and edge_tolerance > 0 and shape.distance(line) <= edge_tolerance:
        min_x, min_y, max_x, max_y = shape.bounds
        extent = [along(x, y) for x in (min_x, max_x) for y in (min_y, max_y)]
        lo, hi = max(lo, min(extent)), min(hi, max(extent))
        parts = _line_parts(line.intersection(shape.buffer(edge_tolerance, join_style=2)))

    intervals = []
    for part in parts:
        coords = list(part.coords)
        ts = [along(x, y) for x, y in (coords[0], coords[-1])]
        t0, t1 = max(lo, min(ts)), min(hi, max(ts))
        if t1 > t0:
            intervals.append((t0, t1))
    intervals.sort()

    joined: List[Tuple[float, float]] = []
    for t0, t1 in intervals:
        if joined and t0 <= joined[-1][1] + epsilon:
            joined[-1] = (joined[-1][0], max(joined[-1][1], t1))
        else:
            joined.append((t0, t1))

    def at(t: float) -> Point:
        if abs(t) <= epsilon:
            return p1
        if abs(t - length) <= epsilon:
            return p2
        return Point(p1.x + ux * t, p1.y + uy * t)

    return [(at(t0), at(t1)) for t0, t1 in joined if t1 - t0 > epsilon]


def longest_segment(segments: Sequence[Segment]) -> Segment:
    """Return the longest segment; the first wins ties."""
    best = segments[0]
    for seg in segments[1:]:
        if distance(*seg) > distance(*best):
            best = seg
    return best
