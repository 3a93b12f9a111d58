"""
framing/multi_section.py - Multi-section structure orchestrator.

A non-rectangular deck arrives decomposed into rectangles. Each rectangle
is framed on its own with joists running in one global direction, then
the results are merged: ledgers combine, collinear beams join and get
fresh posts, and duplicate posts and footings are dropped.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging

import networkx as nx

from ..core.config import FramingConfig, DEFAULT_CONFIG
from ..errors.aggregator import ErrorAggregator
from ..errors.taxonomy import ErrorCode, create_input_error, create_section_error
from ..geometry.point import Point
from ..geometry.polygon import (
    bounding_box,
    distance,
    is_horizontal,
    outline_polygon,
    point_to_segment_distance,
    Outline,
)
from ..spans.tables import SpanTableProvider, DEFAULT_SPAN_TABLES
from .beams import BeamPostSolver, select_post_size
from .calculator import StructureCalculator
from .enums import FootingType, PostSize
from .inputs import DeckInputSpec
from .models import (
    Beam,
    Blocking,
    DeckDimensions,
    Footing,
    Joist,
    Ledger,
    Post,
    RectangularSection,
    RimJoist,
    StructuralComponents,
)

logger = logging.getLogger(__name__)


# =============================================================================
# JOIST DIRECTION & EDGE SELECTION
# =============================================================================

@dataclass(frozen=True)
class GlobalJoistDirection:
    """Joist direction shared by every section of one deck."""

    is_main_ledger_horizontal: bool
    main_ledger_p1: Point
    main_ledger_p2: Point

    @property
    def joists_run_vertically(self) -> bool:
        return self.is_main_ledger_horizontal

    @property
    def joists_run_horizontally(self) -> bool:
        return not self.is_main_ledger_horizontal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_main_ledger_horizontal": self.is_main_ledger_horizontal,
            "joists_run_vertically": self.joists_run_vertically,
            "main_ledger_p1": self.main_ledger_p1.to_dict(),
            "main_ledger_p2": self.main_ledger_p2.to_dict(),
        }


def _normalize_wall_indices(selected_wall_indices: Union[int, Iterable[int], None]) -> List[int]:
    if selected_wall_indices is None:
        return []
    if isinstance(selected_wall_indices, int):
        return [selected_wall_indices]
    return [int(i) for i in selected_wall_indices]


def determine_global_joist_direction(
    selected_wall_indices: Union[int, Iterable[int], None],
    original_points: Sequence[Point],
) -> GlobalJoistDirection:
    """Joists run perpendicular to the first selected wall of the outline."""
    if len(original_points) < 2:
        raise ValueError("Original outline needs at least two points")
    indices = _normalize_wall_indices(selected_wall_indices)
    main = indices[0] if indices else 0
    if not indices:
        logger.warning("No wall selected; using edge 0 for the joist direction")
    if not 0 <= main < len(original_points):
        raise ValueError(f"Wall index {main} is not an edge of the deck outline.")

    p1 = original_points[main]
    p2 = original_points[(main + 1) % len(original_points)]
    return GlobalJoistDirection(
        is_main_ledger_horizontal=is_horizontal(p1, p2),
        main_ledger_p1=p1,
        main_ledger_p2=p2,
    )


def edges_overlap(
    edge1_start: Point,
    edge1_end: Point,
    edge2_start: Point,
    edge2_end: Point,
    tolerance: float = DEFAULT_CONFIG.collinear_tolerance,
) -> bool:
    """True when two axis-aligned edges are collinear and share some extent."""
    dx = edge1_end.x - edge1_start.x
    dy = edge1_end.y - edge1_start.y
    cross_1 = dx * (edge2_start.y - edge1_start.y) - dy * (edge2_start.x - edge1_start.x)
    cross_2 = dx * (edge2_end.y - edge1_start.y) - dy * (edge2_end.x - edge1_start.x)
    if abs(cross_1) > tolerance or abs(cross_2) > tolerance:
        return False

    if abs(edge1_start.y - edge1_end.y) < tolerance:
        lo_1, hi_1 = sorted((edge1_start.x, edge1_end.x))
        lo_2, hi_2 = sorted((edge2_start.x, edge2_end.x))
    elif abs(edge1_start.x - edge1_end.x) < tolerance:
        lo_1, hi_1 = sorted((edge1_start.y, edge1_end.y))
        lo_2, hi_2 = sorted((edge2_start.y, edge2_end.y))
    else:
        return False
    return hi_1 >= lo_2 - tolerance and lo_1 <= hi_2 + tolerance


def find_ledger_edge_in_section(
    section: RectangularSection,
    tolerance: float = DEFAULT_CONFIG.collinear_tolerance,
) -> int:
    """Index of the section edge lying along its first ledger wall (0 if none)."""
    if not section.ledger_walls:
        return 0

    wall = section.ledger_walls[0]
    corners = section.corners
    for i in range(len(corners)):
        if edges_overlap(corners[i], corners[(i + 1) % len(corners)], wall.p1, wall.p2, tolerance):
            logger.debug("Ledger wall found on section edge %d", i)
            return i

    logger.warning("Ledger wall does not lie on any section edge; using edge 0")
    return 0


def _first_edge_matching(points: Sequence[Point], horizontal: bool, fallback: int) -> int:
    for i in range(len(points)):
        if is_horizontal(points[i], points[(i + 1) % len(points)]) == horizontal:
            return i
    return fallback


def section_dimensions(section: RectangularSection) -> DeckDimensions:
    """Bounding box and outline of one rectangular section."""
    if section is None or len(section.corners) < 4:
        raise ValueError("Invalid rectangle for dimension calculation")
    min_x, max_x, min_y, max_y = bounding_box(section.corners)
    return DeckDimensions(
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        polygon_points=list(section.corners),
    )


def is_simple_rectangle(sections: Optional[Sequence[RectangularSection]]) -> bool:
    """A decomposition of exactly one rectangle."""
    return bool(sections) and len(sections) == 1


# =============================================================================
# MERGING
# =============================================================================

def _is_ledger_collinear(ledger_1: Ledger, ledger_2: Ledger, tolerance: float) -> bool:
    dx = ledger_1.p2.x - ledger_1.p1.x
    dy = ledger_1.p2.y - ledger_1.p1.y
    cross_1 = (ledger_2.p1.x - ledger_1.p1.x) * dy - (ledger_2.p1.y - ledger_1.p1.y) * dx
    cross_2 = (ledger_2.p2.x - ledger_1.p1.x) * dy - (ledger_2.p2.y - ledger_1.p1.y) * dx
    return abs(cross_1) < tolerance and abs(cross_2) < tolerance


def extend_ledger(
    ledger_1: Optional[Ledger],
    ledger_2: Optional[Ledger],
    config: FramingConfig = DEFAULT_CONFIG,
) -> Optional[Ledger]:
    """
    Combine two ledgers.

    Collinear ledgers become one ledger over their combined extent.
    Ledgers on different walls (an L-shaped house corner) become one
    virtual ledger whose length is the sum of both; its end points stay
    those of the first ledger.
    """
    if ledger_1 is None or ledger_2 is None:
        return ledger_1 or ledger_2

    if not ledger_1.is_l_shaped_combination and _is_ledger_collinear(
        ledger_1, ledger_2, config.collinear_tolerance,
    ):
        points = [ledger_1.p1, ledger_1.p2, ledger_2.p1, ledger_2.p2]
        horizontal = is_horizontal(ledger_1.p1, ledger_1.p2)
        axis = (lambda p: p.x) if horizontal else (lambda p: p.y)
        lo = min(points, key=axis)
        hi = max(points, key=axis)
        combined = replace(
            ledger_1,
            p1=lo,
            p2=hi,
            length_feet=config.pixels_to_feet(abs(axis(hi) - axis(lo))),
            is_combined=True,
            combined_from_count=ledger_1.combined_from_count + 1,
        )
        logger.debug("Combined collinear ledgers: %.2f ft", combined.length_feet)
        return combined

    lengths = list(ledger_1.original_lengths) or [ledger_1.length_feet]
    lengths.append(ledger_2.length_feet)
    combined = replace(
        ledger_1,
        length_feet=ledger_1.length_feet + ledger_2.length_feet,
        is_combined=True,
        is_l_shaped_combination=True,
        combined_from_count=ledger_1.combined_from_count + 1,
        original_lengths=lengths,
    )
    logger.debug("Combined non-collinear ledgers: %.2f ft total", combined.length_feet)
    return combined


def _beam_line(beam: Beam) -> Tuple[bool, float, float, float]:
    """(horizontal, reference coordinate, extent min, extent max) of a centerline."""
    a, b = beam.centerline_p1, beam.centerline_p2
    if beam.is_horizontal:
        return True, a.y, min(a.x, b.x), max(a.x, b.x)
    return False, a.x, min(a.y, b.y), max(a.y, b.y)


def should_merge_beams(beam_1: Beam, beam_2: Beam, config: FramingConfig = DEFAULT_CONFIG) -> bool:
    """
    Same size, compatible usage, same reference line and touching extents.
    """
    if beam_1.size != beam_2.size:
        return False
    if not beam_1.usage.can_merge_with(beam_2.usage):
        return False

    horizontal_1, ref_1, lo_1, hi_1 = _beam_line(beam_1)
    horizontal_2, ref_2, lo_2, hi_2 = _beam_line(beam_2)
    if horizontal_1 != horizontal_2:
        return False
    if abs(ref_1 - ref_2) > config.beam_line_tolerance_pixels:
        return False

    gap = max(lo_1, lo_2) - min(hi_1, hi_2)
    return gap <= config.beam_adjacency_tolerance_pixels


def group_beams(beams: Sequence[Beam], config: FramingConfig = DEFAULT_CONFIG) -> List[List[Beam]]:
    """
    Partition beams into merge groups.

    Groups are connected components of the pairwise merge relation, so
    a beam joins when it can merge with any member of the group. Groups
    and their members keep input order.
    """
    graph = nx.Graph()
    graph.add_nodes_from(range(len(beams)))
    for i in range(len(beams)):
        for j in range(i + 1, len(beams)):
            if should_merge_beams(beams[i], beams[j], config):
                graph.add_edge(i, j)

    components = sorted((sorted(c) for c in nx.connected_components(graph)), key=lambda c: c[0])
    return [[beams[i] for i in component] for component in components]


def _merged_centerline(group: Sequence[Beam]) -> Tuple[Point, Point]:
    horizontal, ref, _, _ = _beam_line(group[0])
    lo = min(_beam_line(b)[2] for b in group)
    hi = max(_beam_line(b)[3] for b in group)
    if horizontal:
        return Point(lo, ref), Point(hi, ref)
    return Point(ref, lo), Point(ref, hi)


@dataclass
class MergedBeams:
    """Beams after merging, with fresh supports under the merged ones."""

    beams: List[Beam] = field(default_factory=list)
    posts: List[Post] = field(default_factory=list)
    footings: List[Footing] = field(default_factory=list)

    replaced_lines: List[Tuple[Point, Point]] = field(default_factory=list)
    """Centerlines of the beams that were merged away."""

    def replace_supports(
        self,
        posts: Sequence[Post],
        footings: Sequence[Footing],
        tolerance: float,
    ) -> Tuple[List[Post], List[Footing]]:
        """Drop supports on replaced centerlines and add the merged beams' own."""

        def on_replaced_line(p: Point) -> bool:
            return any(
                point_to_segment_distance(p, a, b) <= tolerance
                for a, b in self.replaced_lines
            )

        kept_posts = [p for p in posts if not on_replaced_line(p.location)]
        kept_footings = [f for f in footings if not on_replaced_line(f.location)]
        return kept_posts + self.posts, kept_footings + self.footings


def merge_beams(
    beams: Sequence[Beam],
    outline: Outline,
    post_size: PostSize,
    deck_height_inches: float,
    footing_type: FootingType,
    config: FramingConfig = DEFAULT_CONFIG,
    solver: Optional[BeamPostSolver] = None,
) -> MergedBeams:
    """
    Merge collinear, adjacent beams.

    Each merged beam spans the union of its members' centerlines and is
    re-posted along that span; its stock ends sit one cantilever past the
    outermost new posts. Unmerged beams are returned as they are, so
    merging an already merged set changes nothing.
    """
    solver = solver or BeamPostSolver(config)
    result = MergedBeams()
    for group in group_beams(beams, config):
        if len(group) == 1:
            result.beams.append(group[0])
            continue

        start, end = _merged_centerline(group)
        joist_span = max(b.joist_span_feet for b in group)
        layout = solver.place_posts(
            start, end, outline, post_size, deck_height_inches, footing_type, joist_span,
        )
        merged = _merged_beam(group, start, end, layout.material_p1, layout.material_p2, config)
        result.beams.append(merged)
        result.replaced_lines.extend((b.centerline_p1, b.centerline_p2) for b in group)
        result.posts.extend(replace(p, section_id=merged.section_id) for p in layout.posts)
        result.footings.extend(replace(f, section_id=merged.section_id) for f in layout.footings)
        logger.debug(
            "Merged %d %s(s) from sections %s into %.2f ft",
            len(group), merged.usage.value, merged.original_sections, merged.length_feet,
        )
    return result


def _merged_beam(
    group: Sequence[Beam],
    start: Point,
    end: Point,
    material_p1: Point,
    material_p2: Point,
    config: FramingConfig,
) -> Beam:
    template = group[0]
    return replace(
        template,
        p1=material_p1,
        p2=material_p2,
        length_feet=config.pixels_to_feet(distance(material_p1, material_p2)),
        centerline_p1=start,
        centerline_p2=end,
        is_merged=True,
        joist_span_feet=max(b.joist_span_feet for b in group),
        merged_from_count=sum(b.merged_from_count for b in group),
        original_sections=[
            s for b in group for s in (b.original_sections or [b.section_id]) if s is not None
        ],
    )


def remove_duplicate_posts(posts: Sequence[Post], precision: int = 0) -> List[Post]:
    """Drop posts whose rounded location was already seen (first wins)."""
    seen = set()
    unique: List[Post] = []
    for post in posts:
        key = (round(post.x, precision), round(post.y, precision))
        if key in seen:
            continue
        seen.add(key)
        unique.append(post)
    if len(unique) < len(posts):
        logger.debug("Removed %d duplicate post(s)", len(posts) - len(unique))
    return unique


def remove_duplicate_footings(footings: Sequence[Footing], precision: int = 0) -> List[Footing]:
    """Drop footings whose rounded location was already seen (first wins)."""
    seen = set()
    unique: List[Footing] = []
    for footing in footings:
        key = (round(footing.x, precision), round(footing.y, precision))
        if key in seen:
            continue
        seen.add(key)
        unique.append(footing)
    if len(unique) < len(footings):
        logger.debug("Removed %d duplicate footing(s)", len(footings) - len(unique))
    return unique


# =============================================================================
# ORCHESTRATOR
# =============================================================================

@dataclass
class SectionResult:
    """A successfully framed section."""

    section_id: int
    section: RectangularSection
    dimensions: DeckDimensions
    structure: StructuralComponents
    is_floating: bool = False


@dataclass
class _Pool:
    ledger: Optional[Ledger] = None
    beams: List[Beam] = field(default_factory=list)
    joists: List[Joist] = field(default_factory=list)
    rim_joists: List[RimJoist] = field(default_factory=list)
    posts: List[Post] = field(default_factory=list)
    footings: List[Footing] = field(default_factory=list)
    mid_span_blocking: List[Blocking] = field(default_factory=list)
    picture_frame_blocking: List[Blocking] = field(default_factory=list)


class MultiSectionOrchestrator:
    """Frames a decomposed deck section by section and merges the results."""

    def __init__(
        self,
        config: FramingConfig = DEFAULT_CONFIG,
        tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
    ):
        self.config = config
        self.calculator = StructureCalculator(config, tables)
        self.beam_solver = BeamPostSolver(config)

    def calculate(
        self,
        sections: Sequence[RectangularSection],
        inputs: DeckInputSpec,
        selected_wall_indices: Union[int, Iterable[int], None],
        original_points: Sequence[Point],
    ) -> StructuralComponents:
        if not sections:
            return StructuralComponents().fail(create_section_error(
                "No rectangular sections provided for calculation",
                code=ErrorCode.SEC_NONE_PROVIDED,
            ))

        outline = list(original_points) or list(sections[0].corners)
        try:
            direction = determine_global_joist_direction(selected_wall_indices, outline)
        except ValueError as exc:
            return StructuralComponents().fail(create_input_error(
                str(exc),
                source="multi_section",
                code=ErrorCode.INP_WALL_INDEX_INVALID,
                actual=selected_wall_indices,
            ))
        logger.debug(
            "Joists run %s for all %d section(s)",
            "vertically" if direction.joists_run_vertically else "horizontally",
            len(sections),
        )

        failures = ErrorAggregator()
        results: List[SectionResult] = []
        for index, section in enumerate(sections):
            section_id = index + 1
            try:
                dims = section_dimensions(section)
            except ValueError as exc:
                logger.warning("Section %d skipped: %s", section_id, exc)
                failures.add(create_section_error(
                    str(exc), code=ErrorCode.INP_SECTION_INVALID, section_id=section_id,
                ))
                continue

            wall_index, section_inputs, is_floating = self._section_setup(section, inputs, direction)
            structure = self.calculator.calculate(section.corners, wall_index, section_inputs, dims)
            if structure.error is not None:
                logger.warning("Section %d calculation failed: %s", section_id, structure.error)
                failures.add(create_section_error(
                    structure.error,
                    section_id=section_id,
                    detail=structure.error_code.name if structure.error_code else "",
                ))
                continue
            results.append(SectionResult(section_id, section, dims, structure, is_floating))

        if not results:
            message = "All section calculations failed"
            if len(failures):
                message += ": " + failures.combined_message()
            failed = StructuralComponents().fail(create_section_error(
                message, code=ErrorCode.SEC_ALL_FAILED,
            ))
            failed.section_errors = failures.generate_report()
            return failed

        logger.info("Framed %d of %d section(s)", len(results), len(sections))
        if len(results) == 1:
            structure = results[0].structure
        else:
            structure = self.merge(results, inputs, outline)
        if len(failures):
            structure.section_errors = failures.generate_report()
        return structure

    def _section_setup(
        self,
        section: RectangularSection,
        inputs: DeckInputSpec,
        direction: GlobalJoistDirection,
    ) -> Tuple[int, DeckInputSpec, bool]:
        """Wall edge, inputs and floating flag for one section."""
        corners = section.corners
        wanted = direction.is_main_ledger_horizontal

        if section.is_ledger_rectangle and section.ledger_walls:
            index = find_ledger_edge_in_section(section, self.config.collinear_tolerance)
            edge_horizontal = is_horizontal(corners[index], corners[(index + 1) % len(corners)])
            if edge_horizontal != wanted:
                index = _first_edge_matching(corners, wanted, index)
                logger.debug("Section ledger re-picked as edge %d to match joist direction", index)
            return index, inputs, False

        if section.is_ledger_rectangle:
            return _first_edge_matching(corners, wanted, 0), inputs, False

        return _first_edge_matching(corners, wanted, 0), inputs.as_floating(), True

    def merge(
        self,
        results: Sequence[SectionResult],
        inputs: DeckInputSpec,
        original_points: Sequence[Point],
    ) -> StructuralComponents:
        """Combine framed sections into one plan."""
        cfg = self.config
        pool = _Pool()

        for result in results:
            sid = result.section_id
            s = result.structure
            if s.ledger is not None:
                tagged = replace(s.ledger, section_id=sid)
                pool.ledger = tagged if pool.ledger is None else extend_ledger(pool.ledger, tagged, cfg)
            pool.beams.extend(replace(b, section_id=sid) for b in s.beams)
            pool.joists.extend(replace(j, section_id=sid) for j in s.joists)
            pool.rim_joists.extend(replace(r, section_id=sid) for r in s.rim_joists)
            pool.posts.extend(replace(p, section_id=sid) for p in s.posts)
            pool.footings.extend(replace(f, section_id=sid) for f in s.footings)
            pool.mid_span_blocking.extend(replace(b, section_id=sid) for b in s.mid_span_blocking)
            pool.picture_frame_blocking.extend(replace(b, section_id=sid) for b in s.picture_frame_blocking)

        merged = merge_beams(
            pool.beams,
            outline_polygon(original_points),
            select_post_size(inputs.deck_height, cfg),
            inputs.deck_height,
            inputs.footing_type,
            cfg,
            self.beam_solver,
        )
        posts, footings = merged.replace_supports(pool.posts, pool.footings, cfg.edge_tolerance_pixels)

        merged_result = StructuralComponents(
            ledger=pool.ledger,
            beams=merged.beams,
            joists=pool.joists,
            posts=remove_duplicate_posts(posts, cfg.dedupe_precision),
            footings=remove_duplicate_footings(footings, cfg.dedupe_precision),
            rim_joists=pool.rim_joists,
            mid_span_blocking=pool.mid_span_blocking,
            picture_frame_blocking=pool.picture_frame_blocking,
            total_depth_feet=max(r.structure.total_depth_feet for r in results),
        )
        logger.info(
            "Merged %d sections: %d beam(s), %d post(s), %d footing(s)",
            len(results), len(merged_result.beams), len(merged_result.posts), len(merged_result.footings),
        )
        return merged_result


def calculate_multi_section_structure(
    sections: Sequence[RectangularSection],
    inputs: DeckInputSpec,
    selected_wall_indices: Union[int, Iterable[int], None],
    original_points: Sequence[Point],
    config: FramingConfig = DEFAULT_CONFIG,
    tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
) -> StructuralComponents:
    """Framing plan for a deck decomposed into rectangles."""
    return MultiSectionOrchestrator(config, tables).calculate(
        sections, inputs, selected_wall_indices, original_points,
    )
