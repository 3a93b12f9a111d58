"""
framing/models.py - Framing plan data model.

Members, posts, footings, deck outlines and the StructuralComponents
result. All coordinates are model units (pixels); lengths named *_feet
are already converted.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import math

from shapely.geometry import Polygon

from ..core import constants as c
from ..errors.aggregator import ErrorReport
from ..errors.taxonomy import ErrorCode, FramingError
from ..geometry.point import Point
from ..geometry.polygon import bounding_box, distance, outline_polygon
from .enums import (
    BeamUsage,
    BlockingUsage,
    FootingType,
    JoistUsage,
    LedgerUsage,
    LumberSize,
    PostSize,
    RimJoistUsage,
)


# =============================================================================
# DECK OUTLINE
# =============================================================================

@dataclass
class DeckDimensions:
    """Bounding box and outline of one deck (or one deck section)."""

    min_x: Optional[float] = None
    max_x: Optional[float] = None
    min_y: Optional[float] = None
    max_y: Optional[float] = None

    polygon_points: List[Point] = field(default_factory=list)
    """Outline; the bounding rectangle is used when empty."""

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> DeckDimensions:
        min_x, max_x, min_y, max_y = bounding_box(points)
        return cls(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, polygon_points=list(points))

    def has_extent(self, epsilon: float = c.EPSILON) -> bool:
        """Finite bounds, wider and deeper than epsilon."""
        values = (self.min_x, self.max_x, self.min_y, self.max_y)
        if any(v is None for v in values):
            return False
        if not all(math.isfinite(v) for v in values):
            return False
        return self.max_x - self.min_x > epsilon and self.max_y - self.min_y > epsilon

    @property
    def is_valid(self) -> bool:
        return self.has_extent()

    @property
    def outline(self) -> List[Point]:
        if self.polygon_points:
            return list(self.polygon_points)
        return [
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        ]

    @property
    def shape(self) -> Polygon:
        return outline_polygon(self.outline)

    def width_feet(self, pixels_per_foot: float = c.PIXELS_PER_FOOT) -> float:
        return (self.max_x - self.min_x) / pixels_per_foot

    def depth_feet(self, pixels_per_foot: float = c.PIXELS_PER_FOOT) -> float:
        return (self.max_y - self.min_y) / pixels_per_foot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_x": self.min_x,
            "max_x": self.max_x,
            "min_y": self.min_y,
            "max_y": self.max_y,
            "polygon_points": [p.to_dict() for p in self.polygon_points],
        }


@dataclass
class WallSegment:
    """A house wall edge, as handed over by the decomposition step."""

    p1: Point = field(default_factory=Point)
    p2: Point = field(default_factory=Point)


@dataclass
class RectangularSection:
    """One axis-aligned rectangle of a decomposed deck outline."""

    corners: List[Point] = field(default_factory=list)
    """Exactly four corners, in ring order."""

    is_ledger_rectangle: bool = False
    """Whether this rectangle touches a selected house wall."""

    ledger_walls: List[WallSegment] = field(default_factory=list)


# =============================================================================
# LUMBER MEMBERS
# =============================================================================

def _usage_value(usage: Optional[Enum]) -> Optional[str]:
    return usage.value if usage is not None else None


@dataclass
class LumberMember:
    """A single piece (or run) of dimensional lumber."""

    p1: Point = field(default_factory=Point)
    p2: Point = field(default_factory=Point)

    size: LumberSize = LumberSize.SIZE_2X8

    length_feet: float = 0.0

    usage: Optional[Enum] = None
    """Role of the member; a usage enum for its kind."""

    section_id: Optional[int] = None
    """Deck section that produced the member (multi-section only)."""

    @property
    def length_pixels(self) -> float:
        return distance(self.p1, self.p2)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "p1": self.p1.to_dict(),
            "p2": self.p2.to_dict(),
            "size": self.size.value,
            "length_feet": round(self.length_feet, 3),
            "usage": _usage_value(self.usage),
        }
        if self.section_id is not None:
            data["section_id"] = self.section_id
        return data


@dataclass
class Ledger(LumberMember):
    """Board fastened to the house rim; joists hang from it."""

    usage: Optional[Enum] = LedgerUsage.LEDGER

    ply: int = 1

    is_combined: bool = False
    combined_from_count: int = 1

    is_l_shaped_combination: bool = False
    """Combined from non-collinear walls; p1/p2 only span the first wall."""

    original_lengths: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "ply": self.ply,
            "is_combined": self.is_combined,
            "combined_from_count": self.combined_from_count,
            "is_l_shaped_combination": self.is_l_shaped_combination,
            "original_lengths": [round(v, 3) for v in self.original_lengths],
        })
        return data


@dataclass
class Beam(LumberMember):
    """Built-up beam carried on posts."""

    usage: Optional[Enum] = BeamUsage.OUTER

    centerline_p1: Point = field(default_factory=Point)
    centerline_p2: Point = field(default_factory=Point)
    """Post line; p1/p2 extend past it by the cantilever."""

    ply: int = 2
    is_flush: bool = False

    joist_span_feet: float = 0.0
    """Joist span bearing on this beam; sizes its footings."""

    # === MERGE METADATA ===
    is_merged: bool = False
    merged_from_count: int = 1
    original_sections: List[int] = field(default_factory=list)

    @property
    def is_horizontal(self) -> bool:
        return abs(self.centerline_p1.x - self.centerline_p2.x) > abs(self.centerline_p1.y - self.centerline_p2.y)

    @property
    def is_empty(self) -> bool:
        return self.length_feet <= 0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "centerline_p1": self.centerline_p1.to_dict(),
            "centerline_p2": self.centerline_p2.to_dict(),
            "ply": self.ply,
            "is_flush": self.is_flush,
        })
        if self.joist_span_feet > 0:
            data["joist_span_feet"] = round(self.joist_span_feet, 3)
        if self.is_merged:
            data.update({
                "is_merged": True,
                "merged_from_count": self.merged_from_count,
                "original_sections": list(self.original_sections),
            })
        return data


@dataclass
class Joist(LumberMember):
    usage: Optional[Enum] = JoistUsage.JOIST


@dataclass
class RimJoist(LumberMember):
    """Perimeter member closing off the joist ends or sides."""

    usage: Optional[Enum] = RimJoistUsage.OUTER_RIM

    full_edge_p1: Point = field(default_factory=Point)
    full_edge_p2: Point = field(default_factory=Point)
    """Whole deck edge the piece belongs to."""

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "full_edge_p1": self.full_edge_p1.to_dict(),
            "full_edge_p2": self.full_edge_p2.to_dict(),
        })
        return data


@dataclass
class Blocking(LumberMember):
    usage: Optional[Enum] = BlockingUsage.MID_SPAN

    board_count: int = 1

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["board_count"] = self.board_count
        return data


# =============================================================================
# POSTS & FOOTINGS
# =============================================================================

@dataclass
class Post:
    """Vertical support under a beam."""

    x: float = 0.0
    y: float = 0.0
    size: PostSize = PostSize.SIZE_4X4

    height_feet: float = 0.0
    section_id: Optional[int] = None

    @property
    def location(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "x": round(self.x, 3),
            "y": round(self.y, 3),
            "size": self.size.value,
            "height_feet": round(self.height_feet, 3),
        }
        if self.section_id is not None:
            data["section_id"] = self.section_id
        return data


@dataclass
class Footing:
    """Ground support under a post."""

    x: float = 0.0
    y: float = 0.0
    type: FootingType = FootingType.GH_LEVELLERS

    diameter_inches: Optional[int] = None
    design_load_lbs: Optional[float] = None
    section_id: Optional[int] = None

    @property
    def location(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "x": round(self.x, 3),
            "y": round(self.y, 3),
            "type": self.type.value,
        }
        if self.diameter_inches is not None:
            data["diameter_inches"] = self.diameter_inches
        if self.design_load_lbs is not None:
            data["design_load_lbs"] = round(self.design_load_lbs, 1)
        if self.section_id is not None:
            data["section_id"] = self.section_id
        return data


# =============================================================================
# RESULT
# =============================================================================

@dataclass
class StructuralComponents:
    """
    Complete framing plan for one deck.

    When error is set the member lists hold whatever was computed before
    the failure and must not be used as a plan.
    """

    ledger: Optional[Ledger] = None
    beams: List[Beam] = field(default_factory=list)
    joists: List[Joist] = field(default_factory=list)
    posts: List[Post] = field(default_factory=list)
    footings: List[Footing] = field(default_factory=list)
    rim_joists: List[RimJoist] = field(default_factory=list)
    mid_span_blocking: List[Blocking] = field(default_factory=list)
    picture_frame_blocking: List[Blocking] = field(default_factory=list)

    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None

    total_depth_feet: float = 0.0
    """Deck extent perpendicular to the ledger wall."""

    section_errors: Optional[ErrorReport] = None
    """Sections skipped in a multi-section plan."""

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def fail(self, error: FramingError) -> StructuralComponents:
        """Record an error on this result and return it."""
        self.error = error.message
        self.error_code = error.code
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ledger": self.ledger.to_dict() if self.ledger else None,
            "beams": [b.to_dict() for b in self.beams],
            "joists": [j.to_dict() for j in self.joists],
            "posts": [p.to_dict() for p in self.posts],
            "footings": [f.to_dict() for f in self.footings],
            "rim_joists": [r.to_dict() for r in self.rim_joists],
            "mid_span_blocking": [b.to_dict() for b in self.mid_span_blocking],
            "picture_frame_blocking": [b.to_dict() for b in self.picture_frame_blocking],
            "error": self.error,
            "error_code": self.error_code.value if self.error_code else None,
            "total_depth_feet": round(self.total_depth_feet, 3),
            "section_errors": self.section_errors.to_dict() if self.section_errors is not None else None,
        }
