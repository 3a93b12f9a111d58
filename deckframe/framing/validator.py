"""
framing/validator.py - Boundary and span checks for a framing plan.

Re-checks every member of a StructuralComponents against the deck
outline it was computed for, and compares the widest post gap on each
beam with the tabulated maximum beam span. Findings are reported; the
plan itself is never modified.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import logging

from ..core.config import FramingConfig, DEFAULT_CONFIG
from ..geometry.point import Point
from ..geometry.polygon import (
    distance,
    is_point_in_polygon,
    is_point_on_polygon_edge,
    outline_polygon,
    point_to_segment_distance,
    Outline,
)
from ..spans.tables import SpanTableProvider, DEFAULT_SPAN_TABLES, validate_beam_span
from .models import Beam, Joist, Post, RimJoist, StructuralComponents

logger = logging.getLogger(__name__)


# =============================================================================
# REPORT
# =============================================================================

@dataclass
class ComponentIssues:
    """Problems found on one member."""

    index: int
    component: Dict[str, Any]
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "component": self.component,
            "issues": list(self.issues),
        }


@dataclass
class ValidationReport:
    """Result of validating a framing plan against its outline."""

    valid: bool = True
    joist_issues: List[ComponentIssues] = field(default_factory=list)
    beam_issues: List[ComponentIssues] = field(default_factory=list)
    rim_joist_issues: List[ComponentIssues] = field(default_factory=list)
    post_issues: List[ComponentIssues] = field(default_factory=list)

    span_issues: List[ComponentIssues] = field(default_factory=list)
    """Beams whose widest post gap exceeds the tabulated span."""

    summary: str = ""

    @property
    def boundary_issue_count(self) -> int:
        return (
            len(self.joist_issues)
            + len(self.beam_issues)
            + len(self.rim_joist_issues)
            + len(self.post_issues)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "joist_issues": [i.to_dict() for i in self.joist_issues],
            "beam_issues": [i.to_dict() for i in self.beam_issues],
            "rim_joist_issues": [i.to_dict() for i in self.rim_joist_issues],
            "post_issues": [i.to_dict() for i in self.post_issues],
            "span_issues": [i.to_dict() for i in self.span_issues],
            "summary": self.summary,
        }


def _fmt(p: Point) -> str:
    return f"({p.x:.1f}, {p.y:.1f})"


# =============================================================================
# VALIDATOR
# =============================================================================

class StructuralValidator:
    """
    Boundary checks per member kind.

    Joists and posts must sit inside the outline or on its edge, rims on
    or inside the perimeter, and beams may overhang the outline by the
    cantilever allowance.
    """

    # Extra tolerance per kind on top of the base tolerance
    RIM_TOLERANCE_FACTOR = 2.0
    POST_TOLERANCE_FACTOR = 3.0

    def __init__(
        self,
        config: FramingConfig = DEFAULT_CONFIG,
        tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
        tolerance_pixels: Optional[float] = None,
    ):
        self.config = config
        self.tables = tables
        if tolerance_pixels is None:
            tolerance_pixels = config.validation_tolerance_pixels
        self.tolerance = tolerance_pixels

    # =========================================================================
    # PER-KIND CHECKS
    # =========================================================================

    def _within(self, p: Point, outline: Outline, tolerance: float) -> bool:
        return is_point_in_polygon(p, outline) or is_point_on_polygon_edge(p, outline, tolerance)

    def check_joist(self, joist: Joist, outline: Outline) -> List[str]:
        issues: List[str] = []
        for name, p in (("p1", joist.p1), ("p2", joist.p2)):
            if not self._within(p, outline, self.tolerance):
                issues.append(f"Joist {name} {_fmt(p)} is outside deck boundary")

        length = distance(joist.p1, joist.p2)
        length_feet = self.config.pixels_to_feet(length)
        if length < self.tolerance:
            issues.append(f"Joist has near-zero length ({length_feet:.2f} ft)")
        elif length_feet > self.config.validation_max_joist_feet:
            issues.append(f"Joist is unusually long ({length_feet:.1f} ft) - possible calculation error")
        return issues

    def check_beam(self, beam: Beam, outline: Outline) -> List[str]:
        issues: List[str] = []
        cfg = self.config
        allowance = self.tolerance + cfg.feet_to_pixels(cfg.validation_cantilever_allowance_feet)
        for name, p in (("p1", beam.p1), ("p2", beam.p2)):
            if not self._within(p, outline, allowance):
                issues.append(f"Beam {name} {_fmt(p)} extends beyond deck boundary")

        length_feet = self.config.pixels_to_feet(distance(beam.p1, beam.p2))
        if length_feet > cfg.validation_max_beam_feet:
            issues.append(f"Beam is unusually long ({length_feet:.1f} ft) - possible calculation error")
        return issues

    def check_rim_joist(self, rim: RimJoist, outline: Outline) -> List[str]:
        tolerance = self.tolerance * self.RIM_TOLERANCE_FACTOR
        return [
            f"Rim joist {name} {_fmt(p)} is outside deck boundary"
            for name, p in (("p1", rim.p1), ("p2", rim.p2))
            if not self._within(p, outline, tolerance)
        ]

    def check_post(self, post: Post, outline: Outline) -> List[str]:
        tolerance = self.tolerance * self.POST_TOLERANCE_FACTOR
        if self._within(post.location, outline, tolerance):
            return []
        return [f"Post at {_fmt(post.location)} is outside deck boundary"]

    def check_beam_span(
        self,
        beam: Beam,
        posts: Sequence[Post],
        joist_span_feet: float,
    ) -> List[str]:
        """Compare the widest gap between this beam's posts with the table."""
        on_beam = [
            p for p in posts
            if point_to_segment_distance(p.location, beam.centerline_p1, beam.centerline_p2)
            <= self.config.edge_tolerance_pixels
        ]
        if len(on_beam) < 2:
            return []

        start = beam.centerline_p1
        on_beam.sort(key=lambda p: distance(start, p.location))
        widest = max(
            distance(a.location, b.location) for a, b in zip(on_beam, on_beam[1:])
        )
        check = validate_beam_span(
            self.config.pixels_to_feet(widest),
            beam.size,
            beam.ply,
            joist_span_feet,
            self.tables,
        )
        return [] if check.valid else [check.message]

    # =========================================================================
    # FULL PLAN
    # =========================================================================

    def validate(
        self,
        components: Optional[StructuralComponents],
        deck_points: Sequence[Point],
    ) -> ValidationReport:
        report = ValidationReport()
        if components is None or len(deck_points) < 3:
            report.valid = False
            report.summary = "Invalid components or deck points"
            return report

        outline = outline_polygon(deck_points)

        def collect(target: List[ComponentIssues], members, check) -> None:
            for i, member in enumerate(members):
                issues = check(member, outline)
                if issues:
                    target.append(ComponentIssues(i, member.to_dict(), issues))

        collect(report.joist_issues, components.joists, self.check_joist)
        collect(report.beam_issues, components.beams, self.check_beam)
        collect(report.rim_joist_issues, components.rim_joists, self.check_rim_joist)
        collect(report.post_issues, components.posts, self.check_post)

        if components.joists:
            joist_span = max(j.length_feet for j in components.joists)
        else:
            joist_span = components.total_depth_feet
        for i, beam in enumerate(components.beams):
            if beam.is_empty:
                continue
            findings = self.check_beam_span(beam, components.posts, joist_span)
            if findings:
                report.span_issues.append(ComponentIssues(i, beam.to_dict(), findings))

        total = report.boundary_issue_count
        report.valid = total == 0
        if report.valid:
            report.summary = "All structural components validated successfully"
        else:
            report.summary = (
                f"Found {total} component(s) with boundary issues: "
                f"{len(report.joist_issues)} joists, {len(report.beam_issues)} beams, "
                f"{len(report.rim_joist_issues)} rim joists, {len(report.post_issues)} posts"
            )
        if report.span_issues:
            report.summary += f"; {len(report.span_issues)} beam(s) exceed tabulated span"
            logger.warning("%d beam(s) exceed tabulated span", len(report.span_issues))
        if not report.valid:
            logger.warning(report.summary)
        return report


def validate_structure(
    components: Optional[StructuralComponents],
    deck_points: Sequence[Point],
    config: FramingConfig = DEFAULT_CONFIG,
    tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
) -> ValidationReport:
    """Boundary and span checks for a framing plan."""
    return StructuralValidator(config, tables).validate(components, deck_points)
