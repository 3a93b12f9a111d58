"""
framing/blocking.py - Mid-span and picture-frame blocking.
"""

from __future__ import annotations
from typing import List, Optional
import logging
import math

from ..core.config import FramingConfig, DEFAULT_CONFIG
from ..geometry.point import Point
from ..geometry.polygon import distance, line_segments_in_polygon
from .enums import BlockingUsage, LumberSize
from .models import Blocking, DeckDimensions, Joist

logger = logging.getLogger(__name__)


class BlockingEngine:
    """Generates blocking rows between joists."""

    def __init__(self, config: FramingConfig = DEFAULT_CONFIG):
        self.config = config

    def mid_span(
        self,
        is_wall_horizontal: bool,
        dims: DeckDimensions,
        span_start: float,
        mid_beam_coord: Optional[float],
        span_end: float,
        size: LumberSize,
        board_count: int = 1,
    ) -> List[Blocking]:
        """
        Rows of blocking across the deck width.

        Each joist run (split at the mid-beam when there is one) longer
        than the maximum blocking spacing is divided into equal bays.
        """
        cfg = self.config
        outline = dims.shape
        rows: List[Blocking] = []

        def add_rows(run_start: float, run_end: float) -> None:
            run_pixels = abs(run_end - run_start)
            run_feet = cfg.pixels_to_feet(run_pixels)
            if run_feet <= cfg.max_blocking_spacing_feet + cfg.epsilon:
                return
            count = max(0, math.ceil(run_feet / cfg.max_blocking_spacing_feet) - 1)
            if count < 1:
                return

            step = run_pixels / (count + 1)
            direction = 1 if run_end > run_start else -1
            for i in range(1, count + 1):
                coord = run_start + i * step * direction
                if is_wall_horizontal:
                    p1, p2 = Point(dims.min_x, coord), Point(dims.max_x, coord)
                else:
                    p1, p2 = Point(coord, dims.min_y), Point(coord, dims.max_y)
                for s, e in line_segments_in_polygon(p1, p2, outline, cfg.edge_tolerance_pixels, cfg.epsilon):
                    if distance(s, e) <= cfg.epsilon:
                        continue
                    rows.append(Blocking(
                        p1=s,
                        p2=e,
                        size=size,
                        length_feet=cfg.pixels_to_feet(distance(s, e)),
                        usage=BlockingUsage.MID_SPAN,
                        board_count=board_count,
                    ))

        if mid_beam_coord is not None:
            add_rows(span_start, mid_beam_coord)
            add_rows(mid_beam_coord, span_end)
        else:
            add_rows(span_start, span_end)
        return rows

    def ladder(
        self,
        is_wall_horizontal: bool,
        dims: DeckDimensions,
        extends_positive: bool,
        wall_edge_coord: float,
        outer_edge_coord: float,
        first_pf_joist: Optional[Joist],
        last_pf_joist: Optional[Joist],
        size: LumberSize,
        joist_spacing_pixels: float,
    ) -> List[Blocking]:
        """
        Ladder rungs between each side rim and its picture-frame joist.

        Rungs repeat every joist spacing along the joist direction, from
        half a board inside the wall edge to half a board inside the
        outer edge.
        """
        if first_pf_joist is None:
            return []

        cfg = self.config
        half = cfg.half_lumber_thickness_pixels
        rungs: List[Blocking] = []

        run_start = wall_edge_coord + (half if extends_positive else -half)
        run_end = outer_edge_coord + (-half if extends_positive else half)
        place_min, place_max = min(run_start, run_end), max(run_start, run_end)

        def add_bay(across_1: float, across_2: float, usage: BlockingUsage) -> None:
            if abs(across_2 - across_1) < cfg.epsilon:
                return
            pos = place_min + joist_spacing_pixels
            while pos < place_max - cfg.epsilon:
                if is_wall_horizontal:
                    p1, p2 = Point(across_1, pos), Point(across_2, pos)
                else:
                    p1, p2 = Point(pos, across_1), Point(pos, across_2)
                if distance(p1, p2) > cfg.epsilon:
                    rungs.append(Blocking(
                        p1=p1,
                        p2=p2,
                        size=size,
                        length_feet=cfg.pixels_to_feet(distance(p1, p2)),
                        usage=usage,
                    ))
                pos += joist_spacing_pixels

        def across(joist: Joist) -> float:
            return joist.p1.x if is_wall_horizontal else joist.p1.y

        side_min = dims.min_x if is_wall_horizontal else dims.min_y
        side_max = dims.max_x if is_wall_horizontal else dims.max_y

        add_bay(side_min + half, across(first_pf_joist) - half, BlockingUsage.LADDER_SIDE_1)
        if last_pf_joist is not None:
            add_bay(across(last_pf_joist) + half, side_max - half, BlockingUsage.LADDER_SIDE_2)

        logger.debug("Placed %d ladder rung(s)", len(rungs))
        return rungs
