"""
framing/rims.py - Rim joist layout.

End joists close the two sides of the joist field, the outer rim runs
along the far edge, and free-standing or concrete-side decks get a rim
along the wall edge as well.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import logging

from ..core.config import FramingConfig, DEFAULT_CONFIG
from ..geometry.point import Point
from ..geometry.polygon import distance
from .enums import AttachmentType, LumberSize, RimJoistUsage
from .models import DeckDimensions, RimJoist

logger = logging.getLogger(__name__)


class RimJoistLayoutEngine:
    """Generates end joists and rim joists for one rectangle."""

    def __init__(self, config: FramingConfig = DEFAULT_CONFIG):
        self.config = config

    def layout(
        self,
        is_wall_horizontal: bool,
        dims: DeckDimensions,
        start_coord: float,
        first_support_coord: float,
        outer_support_coord: Optional[float],
        has_mid_beam: bool,
        rim_size: LumberSize,
        wall_edge: Tuple[Point, Point],
        outer_edge: Tuple[Point, Point],
        attachment_type: AttachmentType,
        force_single_span: bool,
    ) -> List[RimJoist]:
        """
        Lay out rim joists.

        wall_edge and outer_edge are (p1, p2) pairs running across the deck
        at the wall side and far side, from the min to the max side.
        """
        cfg = self.config
        rims: List[RimJoist] = []
        wall_p1, wall_p2 = wall_edge
        outer_p1, outer_p2 = outer_edge

        def add(p1: Point, p2: Point, usage: RimJoistUsage, full_p1: Point, full_p2: Point) -> None:
            if distance(p1, p2) <= cfg.epsilon:
                return
            rims.append(RimJoist(
                p1=p1,
                p2=p2,
                size=rim_size,
                length_feet=cfg.pixels_to_feet(distance(p1, p2)),
                usage=usage,
                full_edge_p1=full_p1,
                full_edge_p2=full_p2,
            ))

        def at(side: float, coord: float) -> Point:
            return Point(side, coord) if is_wall_horizontal else Point(coord, side)

        split = has_mid_beam and outer_support_coord is not None
        single_span_end = outer_support_coord if split else first_support_coord

        sides = (
            (dims.min_x if is_wall_horizontal else dims.min_y, wall_p1, outer_p1),
            (dims.max_x if is_wall_horizontal else dims.max_y, wall_p2, outer_p2),
        )
        for side, wall_corner, outer_corner in sides:
            full_p1 = wall_corner
            full_p2 = at(side, outer_corner.y if is_wall_horizontal else outer_corner.x)
            if force_single_span:
                add(at(side, start_coord), at(side, single_span_end), RimJoistUsage.END_JOIST, full_p1, full_p2)
                continue
            add(at(side, start_coord), at(side, first_support_coord), RimJoistUsage.END_JOIST, full_p1, full_p2)
            if split:
                add(
                    at(side, first_support_coord),
                    at(side, outer_support_coord),
                    RimJoistUsage.END_JOIST,
                    full_p1,
                    full_p2,
                )

        add(outer_p1, outer_p2, RimJoistUsage.OUTER_RIM, outer_p1, outer_p2)

        if attachment_type in (AttachmentType.CONCRETE, AttachmentType.FLOATING):
            add(wall_p1, wall_p2, RimJoistUsage.WALL_RIM, wall_p1, wall_p2)

        return rims
