"""
framing/joists.py - Joist sizing and layout.

Joist size is the smallest tabulated size spanning the deck depth at the
chosen spacing. Joists are laid out across the deck width, split at the
mid-beam when there is one, and clipped to the deck outline.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from ..core import constants as c
from ..core.config import FramingConfig, DEFAULT_CONFIG
from ..errors.taxonomy import ErrorCode, FramingError, create_sizing_error
from ..geometry.point import Point
from ..geometry.polygon import distance, line_segments_in_polygon
from ..spans.tables import SpanTableProvider, DEFAULT_SPAN_TABLES
from .enums import JoistUsage, LumberSize
from .models import DeckDimensions, Joist

logger = logging.getLogger(__name__)


# =============================================================================
# SIZE SELECTION
# =============================================================================

@dataclass
class JoistSizeResult:
    """Outcome of joist size selection."""

    size: Optional[LumberSize] = None
    requires_mid_beam: bool = False
    error: Optional[FramingError] = None

    max_allowed_span_feet: float = 0.0
    """Largest tabulated span among the allowed sizes."""

    @property
    def ok(self) -> bool:
        return self.size is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size.value if self.size else None,
            "requires_mid_beam": self.requires_mid_beam,
            "error": self.error.message if self.error else None,
            "max_allowed_span_feet": round(self.max_allowed_span_feet, 3),
        }


def select_joist_size(
    span_feet: float,
    spacing_inches: int,
    deck_height_inches: float,
    tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
    config: FramingConfig = DEFAULT_CONFIG,
    allow_mid_beam: bool = True,
) -> JoistSizeResult:
    """
    Pick the smallest joist that spans span_feet.

    2x6 is skipped for decks at or above the minimum height. When no
    allowed size spans the distance the result asks for a mid-beam,
    unless allow_mid_beam is False (sizing a half span), in which case
    it is an error.
    """
    if not tables.joist_span_rules():
        return JoistSizeResult(error=create_sizing_error(
            "Max joist span data not available.",
            source="joist_sizing",
            code=ErrorCode.SIZ_NO_SPAN_DATA,
        ))

    eps = config.epsilon
    prohibit_2x6 = deck_height_inches >= config.min_height_for_no_2x6_inches
    chosen: Optional[LumberSize] = None
    best = 0.0

    for size in LumberSize.ordered():
        if prohibit_2x6 and size == LumberSize.SIZE_2X6:
            continue
        max_span = tables.max_joist_span(size, spacing_inches)
        if max_span is None:
            continue
        best = max(best, max_span)
        if chosen is None and max_span >= span_feet - eps:
            chosen = size

    if chosen is not None:
        return JoistSizeResult(size=chosen, max_allowed_span_feet=best)

    if allow_mid_beam and best > 0 and span_feet > best + eps:
        logger.debug("Span %.2f ft exceeds %.2f ft; mid-beam required", span_feet, best)
        return JoistSizeResult(requires_mid_beam=True, max_allowed_span_feet=best)

    message = f"No joist for span {span_feet:.2f}' @ {spacing_inches}\" OC. Max: {best:.2f}'."
    if prohibit_2x6:
        message += f" (2x6 not allowed for height >= {config.min_height_for_no_2x6_inches / c.INCHES_PER_FOOT}')"
    return JoistSizeResult(
        max_allowed_span_feet=best,
        error=create_sizing_error(message, source="joist_sizing", actual=span_feet, expected=best),
    )


# =============================================================================
# LAYOUT
# =============================================================================

class JoistLayoutEngine:
    """Generates picture-frame and regular joists for one rectangle."""

    def __init__(self, config: FramingConfig = DEFAULT_CONFIG):
        self.config = config

    def layout(
        self,
        is_wall_horizontal: bool,
        dims: DeckDimensions,
        start_coord: float,
        end_coord_1: float,
        end_coord_2: Optional[float],
        has_mid_beam: bool,
        joist_size: LumberSize,
        has_picture_frame: bool,
        picture_frame_inset_pixels: float,
        joist_spacing_pixels: float,
        force_single_span: bool,
    ) -> List[Joist]:
        """
        Lay out joists across the deck.

        start_coord and the end coordinates are measured along the joist
        direction; end_coord_1 is the first support (mid-beam or outer),
        end_coord_2 the outer support when a mid-beam splits the run.
        """
        cfg = self.config
        outline = dims.shape
        joists: List[Joist] = []

        def line(pos: float, a: float, b: float):
            if is_wall_horizontal:
                return Point(pos, a), Point(pos, b)
            return Point(a, pos), Point(b, pos)

        def add_run(p1: Point, p2: Point, usage: JoistUsage) -> None:
            if distance(p1, p2) <= cfg.epsilon:
                return
            pieces = line_segments_in_polygon(p1, p2, outline, cfg.edge_tolerance_pixels, cfg.epsilon)
            for s, e in pieces:
                joists.append(Joist(
                    p1=s,
                    p2=e,
                    size=joist_size,
                    length_feet=cfg.pixels_to_feet(distance(s, e)),
                    usage=usage,
                ))

        def add_joist(pos: float, usage: JoistUsage) -> None:
            if force_single_span:
                outer = end_coord_2 if end_coord_2 is not None else end_coord_1
                add_run(*line(pos, start_coord, outer), usage)
                return
            add_run(*line(pos, start_coord, end_coord_1), usage)
            if has_mid_beam and end_coord_2 is not None:
                add_run(*line(pos, end_coord_1, end_coord_2), usage)

        axis_min = dims.min_x if is_wall_horizontal else dims.min_y
        axis_max = dims.max_x if is_wall_horizontal else dims.max_y

        area_start, area_end = axis_min, axis_max
        if has_picture_frame:
            first_pf = axis_min + picture_frame_inset_pixels
            last_pf = axis_max - picture_frame_inset_pixels
            add_joist(first_pf, JoistUsage.PICTURE_FRAME)
            if abs(last_pf - first_pf) > joist_spacing_pixels * 0.5:
                add_joist(last_pf, JoistUsage.PICTURE_FRAME)
            area_start, area_end = first_pf, last_pf

        pos = area_start + joist_spacing_pixels
        while pos < area_end - cfg.epsilon:
            add_joist(pos, JoistUsage.JOIST)
            pos += joist_spacing_pixels

        joists.sort(key=lambda j: j.p1.x if is_wall_horizontal else j.p1.y)
        logger.debug("Laid out %d joist piece(s)", len(joists))
        return joists
