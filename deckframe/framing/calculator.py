"""
framing/calculator.py - Single-rectangle structure calculator.

Sizes the joists, places the ledger and beams, then lays out joists,
rim joists and blocking for one rectangular deck. Failures are recorded
on the returned StructuralComponents; nothing is raised.
"""

from __future__ import annotations
from typing import Optional, Sequence
import logging

from ..core.config import FramingConfig, DEFAULT_CONFIG
from ..errors.taxonomy import (
    ErrorCode,
    create_beam_error,
    create_input_error,
    create_sizing_error,
)
from ..geometry.point import Point
from ..geometry.polygon import distance, is_horizontal
from ..spans.tables import SpanTableProvider, DEFAULT_SPAN_TABLES
from .beams import BeamPlacement, BeamPostSolver, beam_ply_for_post, select_post_size
from .blocking import BlockingEngine
from .enums import (
    AttachmentType,
    BeamType,
    BeamUsage,
    JoistUsage,
    LumberSize,
    PictureFrame,
)
from .inputs import DeckInputSpec
from .joists import JoistLayoutEngine, select_joist_size
from .models import Beam, DeckDimensions, Ledger, StructuralComponents
from .rims import RimJoistLayoutEngine

logger = logging.getLogger(__name__)

SOURCE = "structure_calculator"


class StructureCalculator:
    """
    Framing plan for one rectangular deck.

    The deck hangs from the wall edge picked by wall_index: joists run
    perpendicular to it, from the wall side to the outer edge.
    """

    def __init__(
        self,
        config: FramingConfig = DEFAULT_CONFIG,
        tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
    ):
        self.config = config
        self.tables = tables
        self.beam_solver = BeamPostSolver(config)
        self.joist_engine = JoistLayoutEngine(config)
        self.rim_engine = RimJoistLayoutEngine(config)
        self.blocking_engine = BlockingEngine(config)

    def calculate(
        self,
        shape_points: Sequence[Point],
        wall_index: int,
        inputs: DeckInputSpec,
        dims: Optional[DeckDimensions],
    ) -> StructuralComponents:
        cfg = self.config
        eps = cfg.epsilon
        result = StructuralComponents()

        if dims is None or not dims.has_extent(eps):
            return result.fail(create_input_error("Deck dimensions invalid.", source=SOURCE))
        n = len(shape_points)
        if n < 2 or not 0 <= wall_index < n:
            return result.fail(create_input_error(
                f"Wall index {wall_index} is not an edge of the deck outline.",
                source=SOURCE,
                code=ErrorCode.INP_WALL_INDEX_INVALID,
                actual=wall_index,
            ))

        # === ORIENTATION ===
        wall_p1 = shape_points[wall_index]
        wall_p2 = shape_points[(wall_index + 1) % n]
        horizontal = is_horizontal(wall_p1, wall_p2)

        if horizontal:
            result.total_depth_feet = cfg.pixels_to_feet(dims.max_y - dims.min_y)
        else:
            result.total_depth_feet = cfg.pixels_to_feet(dims.max_x - dims.min_x)
        depth = result.total_depth_feet
        height = inputs.deck_height

        # === JOIST SIZE ===
        sizing = select_joist_size(depth, inputs.joist_spacing, height, self.tables, cfg)
        if sizing.error is not None:
            return result.fail(sizing.error)

        requires_mid_beam = sizing.requires_mid_beam
        if requires_mid_beam:
            half = select_joist_size(
                depth / 2, inputs.joist_spacing, height, self.tables, cfg, allow_mid_beam=False,
            )
            if half.error is not None:
                return result.fail(half.error)
            joist_size = half.size
        else:
            joist_size = sizing.size

        if joist_size is None:
            return result.fail(create_sizing_error("Could not determine joist size.", source=SOURCE))

        # 2x8 joists in the 18-20 ft band run full depth on 20 ft stock
        force_single_span = (
            joist_size == LumberSize.ordered()[1]
            and requires_mid_beam
            and cfg.single_span_min_depth_feet + eps < depth <= cfg.single_span_max_depth_feet + eps
        )

        beam_size = joist_size
        post_size = select_post_size(height, cfg)
        ply = beam_ply_for_post(post_size)
        logger.debug(
            "Depth %.2f ft: %s joists, mid-beam=%s, single-span=%s, %s posts",
            depth, joist_size.value, requires_mid_beam, force_single_span, post_size.value,
        )

        # === EDGES ===
        center_x = (dims.min_x + dims.max_x) / 2
        center_y = (dims.min_y + dims.max_y) / 2
        wall_mid_x = (wall_p1.x + wall_p2.x) / 2
        wall_mid_y = (wall_p1.y + wall_p2.y) / 2
        extends_positive = center_y > wall_mid_y if horizontal else center_x > wall_mid_x
        sign = 1 if extends_positive else -1

        if horizontal:
            wall_edge = dims.min_y if extends_positive else dims.max_y
            outer_edge = dims.max_y if extends_positive else dims.min_y
        else:
            wall_edge = dims.min_x if extends_positive else dims.max_x
            outer_edge = dims.max_x if extends_positive else dims.min_x

        def coord(p: Point) -> float:
            return p.y if horizontal else p.x

        def place(position: float, usage: BeamUsage, beam_type: BeamType) -> Optional[Beam]:
            # A mid-beam halves the joist span bearing on the other beams
            joist_span = depth if usage == BeamUsage.MID or not requires_mid_beam else depth / 2
            placement: BeamPlacement = self.beam_solver.solve(
                position, horizontal, dims, beam_size, ply, post_size,
                height, inputs.footing_type, usage, beam_type,
                joist_span_feet=joist_span,
            )
            if placement.beam.length_feet <= eps:
                return None
            result.beams.append(placement.beam)
            result.posts.extend(placement.posts)
            result.footings.extend(placement.footings)
            return placement.beam

        drop = inputs.beam_type == BeamType.DROP
        setback = cfg.drop_beam_setback_pixels

        # === WALL SIDE ===
        wall_beam: Optional[Beam] = None
        if inputs.attachment_type == AttachmentType.FLOATING:
            position = wall_edge + sign * setback if drop else wall_edge
            wall_beam = place(position, BeamUsage.WALL_SIDE, inputs.beam_type)
        elif inputs.attachment_type == AttachmentType.HOUSE_RIM:
            result.ledger = Ledger(
                p1=wall_p1,
                p2=wall_p2,
                size=beam_size,
                length_feet=cfg.pixels_to_feet(distance(wall_p1, wall_p2)),
                ply=1,
            )

        # === OUTER BEAM ===
        outer_beam: Optional[Beam] = None
        if depth > eps or inputs.attachment_type == AttachmentType.FLOATING:
            position = outer_edge - sign * setback if drop else outer_edge
            outer_beam = place(position, BeamUsage.OUTER, inputs.beam_type)
            if outer_beam is None and inputs.attachment_type == AttachmentType.CONCRETE:
                return result.fail(create_beam_error(
                    "Outer beam calculation failed for non-ledger, non-floating deck.",
                    source=SOURCE,
                    code=ErrorCode.BEM_OUTER_BEAM_FAILED,
                ))

        # === MID BEAM ===
        mid_beam: Optional[Beam] = None
        if requires_mid_beam:
            if result.ledger is not None:
                span_start = coord(result.ledger.p1)
            elif wall_beam is not None:
                span_start = coord(wall_beam.centerline_p1)
            else:
                span_start = wall_edge
            span_end = coord(outer_beam.centerline_p1) if outer_beam is not None else outer_edge

            mid_beam = place(span_start + (span_end - span_start) / 2, BeamUsage.MID, BeamType.DROP)
            if mid_beam is None and not force_single_span:
                return result.fail(create_beam_error(
                    "Mid-beam required but could not be calculated.",
                    source=SOURCE,
                    code=ErrorCode.BEM_MID_BEAM_FAILED,
                ))

        # === JOIST SUPPORT LINES ===
        thickness = cfg.lumber_thickness_pixels
        if result.ledger is not None:
            joist_start = coord(result.ledger.p1)
        elif wall_beam is not None and wall_beam.is_flush:
            joist_start = wall_edge + sign * thickness
        else:
            joist_start = wall_edge

        if outer_beam is not None and outer_beam.is_flush:
            outer_support = outer_edge - sign * thickness
        else:
            outer_support = outer_edge

        end_2: Optional[float] = None
        if mid_beam is not None:
            end_1 = coord(mid_beam.centerline_p1)
            end_2 = outer_support
        else:
            end_1 = outer_support
            if force_single_span:
                end_2 = outer_edge

        # === JOISTS ===
        joist_spacing_pixels = cfg.inches_to_pixels(inputs.joist_spacing)
        has_picture_frame = inputs.picture_frame != PictureFrame.NONE
        pf_inset = 0.0
        if inputs.picture_frame == PictureFrame.SINGLE:
            pf_inset = cfg.inches_to_pixels(cfg.picture_frame_single_inset_inches)
        elif inputs.picture_frame == PictureFrame.DOUBLE:
            pf_inset = cfg.inches_to_pixels(cfg.picture_frame_double_inset_inches)

        result.joists = self.joist_engine.layout(
            horizontal, dims, joist_start, end_1, end_2, mid_beam is not None,
            joist_size, has_picture_frame, pf_inset, joist_spacing_pixels, force_single_span,
        )

        # === RIM JOISTS ===
        if horizontal:
            wall_side = (Point(dims.min_x, wall_edge), Point(dims.max_x, wall_edge))
            outer_side = (Point(dims.min_x, outer_edge), Point(dims.max_x, outer_edge))
        else:
            wall_side = (Point(wall_edge, dims.min_y), Point(wall_edge, dims.max_y))
            outer_side = (Point(outer_edge, dims.min_y), Point(outer_edge, dims.max_y))

        first_support = coord(mid_beam.centerline_p1) if mid_beam is not None else end_1
        rim_outer_support = end_2 if mid_beam is not None else None
        if force_single_span and mid_beam is None:
            rim_outer_support = outer_edge

        result.rim_joists = self.rim_engine.layout(
            horizontal, dims, joist_start, first_support, rim_outer_support,
            mid_beam is not None, joist_size, wall_side, outer_side,
            inputs.attachment_type, force_single_span,
        )

        # === BLOCKING ===
        mid_coord = coord(mid_beam.centerline_p1) if mid_beam is not None else None
        blocking_end = end_2 if mid_beam is not None else end_1
        if blocking_end is None:
            blocking_end = outer_edge
        result.mid_span_blocking = self.blocking_engine.mid_span(
            horizontal, dims, joist_start, mid_coord, blocking_end, joist_size,
        )

        if has_picture_frame:
            pf_joists = sorted(
                (j for j in result.joists if j.usage == JoistUsage.PICTURE_FRAME),
                key=lambda j: j.p1.x if horizontal else j.p1.y,
            )
            if pf_joists:
                result.picture_frame_blocking = self.blocking_engine.ladder(
                    horizontal, dims, extends_positive, wall_edge, outer_edge,
                    pf_joists[0], pf_joists[-1], joist_size, joist_spacing_pixels,
                )

        result.beams.sort(key=lambda b: b.usage.display_order)
        logger.info(
            "Framed %.1f ft deep deck: %d beam(s), %d joist(s), %d post(s)",
            depth, len(result.beams), len(result.joists), len(result.posts),
        )
        return result


def calculate_structure(
    shape_points: Sequence[Point],
    wall_index: int,
    inputs: DeckInputSpec,
    dims: Optional[DeckDimensions],
    config: FramingConfig = DEFAULT_CONFIG,
    tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
) -> StructuralComponents:
    """Framing plan for one rectangular deck."""
    return StructureCalculator(config, tables).calculate(shape_points, wall_index, inputs, dims)
