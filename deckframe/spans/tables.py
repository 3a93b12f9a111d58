"""
spans/tables.py - Joist and beam span tables.

SpanTableProvider is the interface the framing engines consume.
IRCSpanTables carries the default data: IRC R507.5 joist spans and
IRC R507.6 beam spans (Southern Pine #2, 40 psf live + 10 psf dead).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from ..framing.enums import LumberSize

logger = logging.getLogger(__name__)


# =============================================================================
# TABLE DATA
# =============================================================================

@dataclass(frozen=True)
class JoistSpanRule:
    """Maximum span for one joist size at one on-center spacing."""

    size: LumberSize
    spacing_inches: int
    max_span_feet: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size.value,
            "spacing_inches": self.spacing_inches,
            "max_span_feet": round(self.max_span_feet, 3),
        }


IRC_JOIST_SPANS: Tuple[JoistSpanRule, ...] = (
    JoistSpanRule(LumberSize.SIZE_2X6, 12, 9 + 10 / 12),
    JoistSpanRule(LumberSize.SIZE_2X6, 16, 9 + 1 / 12),
    JoistSpanRule(LumberSize.SIZE_2X8, 12, 13 + 2 / 12),
    JoistSpanRule(LumberSize.SIZE_2X8, 16, 10 + 6 / 12),
    JoistSpanRule(LumberSize.SIZE_2X10, 12, 16.0),
    JoistSpanRule(LumberSize.SIZE_2X10, 16, 15 + 2 / 12),
    JoistSpanRule(LumberSize.SIZE_2X12, 12, 16.0),
    JoistSpanRule(LumberSize.SIZE_2X12, 16, 16.0),
)


def _ft(feet: int, inches: int) -> float:
    return feet + inches / 12


# ply -> size -> ((joist_span_ft, max_beam_span_ft), ...) ascending by joist span
IRC_BEAM_SPANS: Dict[int, Dict[LumberSize, Tuple[Tuple[float, float], ...]]] = {
    2: {
        LumberSize.SIZE_2X6: ((6, _ft(6, 2)), (8, _ft(5, 4)), (10, _ft(4, 9)), (12, _ft(4, 4))),
        LumberSize.SIZE_2X8: ((6, _ft(8, 2)), (8, _ft(7, 1)), (10, _ft(6, 4)), (12, _ft(5, 9))),
        LumberSize.SIZE_2X10: ((6, _ft(10, 5)), (8, _ft(9, 0)), (10, _ft(8, 1)), (12, _ft(7, 4))),
        LumberSize.SIZE_2X12: ((6, _ft(12, 8)), (8, _ft(11, 0)), (10, _ft(9, 10)), (12, _ft(8, 11))),
    },
    3: {
        LumberSize.SIZE_2X6: ((6, _ft(7, 9)), (8, _ft(6, 9)), (10, _ft(6, 0)), (12, _ft(5, 6))),
        LumberSize.SIZE_2X8: ((6, _ft(10, 2)), (8, _ft(8, 10)), (10, _ft(7, 11)), (12, _ft(7, 3))),
        LumberSize.SIZE_2X10: ((6, _ft(13, 0)), (8, _ft(11, 3)), (10, _ft(10, 1)), (12, _ft(9, 2))),
        LumberSize.SIZE_2X12: ((6, _ft(15, 10)), (8, _ft(13, 8)), (10, _ft(12, 3)), (12, _ft(11, 2))),
    },
}

# Rounding allowance when checking an actual beam span against the table
BEAM_SPAN_TOLERANCE_FEET = 0.1


# =============================================================================
# PROVIDER INTERFACE
# =============================================================================

class SpanTableProvider(ABC):
    """Source of maximum joist and beam spans."""

    @abstractmethod
    def max_joist_span(self, size: LumberSize, spacing_inches: int) -> Optional[float]:
        """Maximum joist span in feet, or None when not tabulated."""
        pass

    @abstractmethod
    def max_beam_span(
        self,
        ply: int,
        size: LumberSize,
        tributary_feet: float,
    ) -> Optional[float]:
        """Maximum beam span in feet for a joist span the beam carries."""
        pass

    @abstractmethod
    def joist_span_rules(self) -> List[JoistSpanRule]:
        """All tabulated joist rules."""
        pass


class IRCSpanTables(SpanTableProvider):
    """
    Default span tables.

    Both tables can be replaced for testing or for other species and
    grades; an empty joist table is reported by the sizing step.
    """

    def __init__(
        self,
        joist_rules: Optional[Sequence[JoistSpanRule]] = None,
        beam_spans: Optional[Dict[int, Dict[LumberSize, Tuple[Tuple[float, float], ...]]]] = None,
    ):
        self._joist_rules = list(IRC_JOIST_SPANS if joist_rules is None else joist_rules)
        self._beam_spans = IRC_BEAM_SPANS if beam_spans is None else beam_spans

    def max_joist_span(self, size: LumberSize, spacing_inches: int) -> Optional[float]:
        for rule in self._joist_rules:
            if rule.size == size and rule.spacing_inches == spacing_inches:
                return rule.max_span_feet
        return None

    def max_beam_span(
        self,
        ply: int,
        size: LumberSize,
        tributary_feet: float,
    ) -> Optional[float]:
        ply_data = self._beam_spans.get(ply)
        if ply_data is None:
            logger.warning("No beam span data for %d-ply beams", ply)
            return None
        rows = ply_data.get(size)
        if not rows:
            logger.warning("No beam span data for %d-ply %s", ply, size.value)
            return None

        rows = sorted(rows)
        # Clamp outside the tabulated joist spans
        if tributary_feet <= rows[0][0]:
            return rows[0][1]
        if tributary_feet >= rows[-1][0]:
            return rows[-1][1]

        for (lo_span, lo_max), (hi_span, hi_max) in zip(rows, rows[1:]):
            if lo_span <= tributary_feet <= hi_span:
                ratio = (tributary_feet - lo_span) / (hi_span - lo_span)
                return lo_max + ratio * (hi_max - lo_max)
        return None

    def joist_span_rules(self) -> List[JoistSpanRule]:
        return list(self._joist_rules)


DEFAULT_SPAN_TABLES = IRCSpanTables()


# =============================================================================
# BEAM SPAN CHECKS
# =============================================================================

@dataclass
class BeamSpanCheck:
    """Result of checking an actual beam span against the table."""

    valid: bool
    max_span_feet: Optional[float]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "max_span_feet": round(self.max_span_feet, 2) if self.max_span_feet is not None else None,
            "message": self.message,
        }


@dataclass
class BeamRecommendation:
    """Smallest beam size covering a required post-to-post span."""

    size: LumberSize
    max_span_feet: Optional[float]
    needs_more_posts: bool = False
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size.value,
            "max_span_feet": round(self.max_span_feet, 2) if self.max_span_feet is not None else None,
            "needs_more_posts": self.needs_more_posts,
            "message": self.message,
        }


def validate_beam_span(
    actual_span_feet: float,
    size: LumberSize,
    ply: int,
    joist_span_feet: float,
    tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
) -> BeamSpanCheck:
    """Check a post-to-post beam span against the maximum for its load."""
    max_span = tables.max_beam_span(ply, size, joist_span_feet)
    if max_span is None:
        return BeamSpanCheck(
            valid=False,
            max_span_feet=None,
            message=(
                f"Cannot validate beam span: unknown configuration "
                f"({ply}-ply {size.value} with {joist_span_feet}' joist span)"
            ),
        )

    valid = actual_span_feet <= max_span + BEAM_SPAN_TOLERANCE_FEET
    if valid:
        message = f"Beam span {actual_span_feet:.1f}' is within IRC limit of {max_span:.1f}'"
    else:
        message = (
            f"Beam span {actual_span_feet:.1f}' exceeds IRC limit of {max_span:.1f}' "
            f"for {ply}-ply {size.value} with {joist_span_feet:.1f}' joist span"
        )
    return BeamSpanCheck(valid=valid, max_span_feet=max_span, message=message)


def recommend_beam_size(
    required_span_feet: float,
    joist_span_feet: float,
    ply: int,
    tables: SpanTableProvider = DEFAULT_SPAN_TABLES,
) -> BeamRecommendation:
    """Return the smallest beam size whose max span covers the requirement."""
    for size in LumberSize.ordered():
        max_span = tables.max_beam_span(ply, size, joist_span_feet)
        if max_span and max_span >= required_span_feet:
            return BeamRecommendation(size=size, max_span_feet=max_span)

    largest = LumberSize.ordered()[-1]
    largest_max = tables.max_beam_span(ply, largest, joist_span_feet)
    span_text = f"{largest_max:.1f}'" if largest_max is not None else "unknown"
    return BeamRecommendation(
        size=largest,
        max_span_feet=largest_max,
        needs_more_posts=True,
        message=f"Maximum {ply}-ply {largest.value} span is {span_text} - additional posts required",
    )
