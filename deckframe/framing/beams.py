"""
framing/beams.py - Beam and post placement.

Places one beam along an axis line across the deck, clipped to the deck
outline, with posts inset from the clipped ends, intermediate posts to
respect the maximum post spacing, and footings under every post that
lands on the deck.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List
import logging
import math

from ..core import constants as c
from ..core.config import FramingConfig, DEFAULT_CONFIG
from ..geometry.point import Point
from ..geometry.polygon import (
    distance,
    is_point_in_polygon,
    line_segments_in_polygon,
    longest_segment,
    Outline,
)
from ..spans.footings import calculate_footing_diameter, calculate_tributary_area
from .enums import BeamType, BeamUsage, FootingType, LumberSize, PostSize
from .models import Beam, DeckDimensions, Footing, Post

logger = logging.getLogger(__name__)


def select_post_size(
    deck_height_inches: float,
    config: FramingConfig = DEFAULT_CONFIG,
) -> PostSize:
    """6x6 posts at or above the tall-deck threshold, else 4x4."""
    if deck_height_inches >= config.six_by_six_min_height_inches:
        return PostSize.SIZE_6X6
    return PostSize.SIZE_4X4


def beam_ply_for_post(post_size: PostSize) -> int:
    """A 6x6 post carries a 3-ply beam; a 4x4 carries 2 plies."""
    return 3 if post_size == PostSize.SIZE_6X6 else 2


@dataclass
class PostLayout:
    """Posts and footings along one beam centerline."""

    posts: List[Post] = field(default_factory=list)
    footings: List[Footing] = field(default_factory=list)

    material_p1: Point = field(default_factory=Point)
    material_p2: Point = field(default_factory=Point)
    """Beam stock ends, one cantilever past the outermost posts."""


@dataclass
class BeamPlacement:
    """A beam with the posts and footings that carry it."""

    beam: Beam
    posts: List[Post] = field(default_factory=list)
    footings: List[Footing] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.beam.length_feet <= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "beam": self.beam.to_dict(),
            "posts": [p.to_dict() for p in self.posts],
            "footings": [f.to_dict() for f in self.footings],
        }


class BeamPostSolver:
    """
    Solves beam extent and post positions.

    Only the longest clipped piece of the axis line is used; an axis that
    crosses a notch in the outline loses the shorter pieces.
    """

    def __init__(self, config: FramingConfig = DEFAULT_CONFIG):
        self.config = config

    def solve(
        self,
        position: float,
        is_wall_horizontal: bool,
        dims: DeckDimensions,
        beam_size: LumberSize,
        ply: int,
        post_size: PostSize,
        deck_height_inches: float,
        footing_type: FootingType,
        usage: BeamUsage,
        beam_type: BeamType,
        joist_span_feet: float = 0.0,
    ) -> BeamPlacement:
        """
        Place a beam whose centerline sits at `position` across the deck.

        With a joist_span_feet, the footings are sized for the deck area
        each post carries.
        """
        cfg = self.config
        outline = dims.shape

        if is_wall_horizontal:
            axis_p1 = Point(dims.min_x, position)
            axis_p2 = Point(dims.max_x, position)
        else:
            axis_p1 = Point(position, dims.min_y)
            axis_p2 = Point(position, dims.max_y)

        is_flush = beam_type == BeamType.FLUSH
        segments = line_segments_in_polygon(
            axis_p1, axis_p2, outline, cfg.edge_tolerance_pixels, cfg.epsilon,
        )
        if not segments:
            logger.debug("%s at %.2f misses the deck outline", usage.value, position)
            return self._empty(axis_p1, beam_size, ply, usage, is_flush)

        start, end = longest_segment(segments)
        if distance(start, end) < cfg.epsilon:
            return self._empty(start, beam_size, ply, usage, is_flush)

        layout = self.place_posts(
            start, end, outline, post_size, deck_height_inches, footing_type, joist_span_feet,
        )
        beam = Beam(
            p1=layout.material_p1,
            p2=layout.material_p2,
            size=beam_size,
            length_feet=cfg.pixels_to_feet(distance(layout.material_p1, layout.material_p2)),
            usage=usage,
            centerline_p1=start,
            centerline_p2=end,
            ply=ply,
            is_flush=is_flush,
            joist_span_feet=joist_span_feet,
        )
        logger.debug(
            "%s: %.2f ft, %d post(s), %d footing(s)",
            usage.value, beam.length_feet, len(layout.posts), len(layout.footings),
        )
        return BeamPlacement(beam=beam, posts=layout.posts, footings=layout.footings)

    def place_posts(
        self,
        start: Point,
        end: Point,
        outline: Outline,
        post_size: PostSize,
        deck_height_inches: float,
        footing_type: FootingType,
        joist_span_feet: float = 0.0,
    ) -> PostLayout:
        """Posts, footings and beam stock ends for an explicit centerline."""
        cfg = self.config
        length = distance(start, end)
        if length < cfg.epsilon:
            return PostLayout(material_p1=start, material_p2=start)

        ux = (end.x - start.x) / length
        uy = (end.y - start.y) / length
        height_feet = deck_height_inches / c.INCHES_PER_FOOT

        def post_at(offset: float) -> Post:
            return Post(
                x=start.x + ux * offset,
                y=start.y + uy * offset,
                size=post_size,
                height_feet=height_feet,
            )

        inset = cfg.post_inset_pixels
        posts: List[Post] = []
        if length < 2 * inset:
            posts.append(post_at(length / 2))
        else:
            first = post_at(inset)
            last = post_at(length - inset)
            posts.append(first)
            if distance(first.location, last.location) > cfg.epsilon:
                posts.append(last)

            if len(posts) == 2:
                span_pixels = distance(first.location, last.location)
                span_feet = cfg.pixels_to_feet(span_pixels)
                if span_feet > cfg.max_post_spacing_feet:
                    count = math.floor(span_feet / cfg.max_post_spacing_feet)
                    step = span_pixels / (count + 1)
                    posts.extend(post_at(inset + step * i) for i in range(1, count + 1))

        horizontal = abs(end.x - start.x) > abs(end.y - start.y)
        posts.sort(key=lambda p: p.x if horizontal else p.y)

        # Stock runs from the first post to the last along start -> end
        along = sorted(posts, key=lambda p: (p.x - start.x) * ux + (p.y - start.y) * uy)
        cantilever = cfg.beam_cantilever_pixels
        material_p1 = Point(along[0].x - ux * cantilever, along[0].y - uy * cantilever)
        material_p2 = Point(along[-1].x + ux * cantilever, along[-1].y + uy * cantilever)

        footings = [
            self._footing(p, footing_type, along, length, joist_span_feet)
            for p in posts
            if is_point_in_polygon(p.location, outline, cfg.edge_tolerance_pixels)
        ]
        return PostLayout(
            posts=posts,
            footings=footings,
            material_p1=material_p1,
            material_p2=material_p2,
        )

    def _footing(
        self,
        post: Post,
        footing_type: FootingType,
        along: List[Post],
        length: float,
        joist_span_feet: float,
    ) -> Footing:
        """Footing under a post, sized when the joist span is known."""
        footing = Footing(x=post.x, y=post.y, type=footing_type)
        if joist_span_feet <= 0:
            return footing

        cfg = self.config
        if len(along) > 1:
            spacing = max(distance(a.location, b.location) for a, b in zip(along, along[1:]))
        else:
            spacing = length
        is_corner = len(along) > 1 and (post is along[0] or post is along[-1])
        area = calculate_tributary_area(cfg.pixels_to_feet(spacing), joist_span_feet, is_corner)
        size = calculate_footing_diameter(area, config=cfg)
        footing.diameter_inches = size.diameter_inches
        footing.design_load_lbs = size.load_lbs
        return footing

    def _empty(
        self,
        at: Point,
        beam_size: LumberSize,
        ply: int,
        usage: BeamUsage,
        is_flush: bool,
    ) -> BeamPlacement:
        beam = Beam(
            p1=at,
            p2=at,
            size=beam_size,
            length_feet=0.0,
            usage=usage,
            centerline_p1=at,
            centerline_p2=at,
            ply=ply,
            is_flush=is_flush,
        )
        return BeamPlacement(beam=beam)
