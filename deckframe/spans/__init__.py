"""
spans/ - Span tables and footing sizing.
"""

from .tables import (
    JoistSpanRule,
    SpanTableProvider,
    IRCSpanTables,
    DEFAULT_SPAN_TABLES,
    IRC_JOIST_SPANS,
    IRC_BEAM_SPANS,
    BeamSpanCheck,
    BeamRecommendation,
    validate_beam_span,
    recommend_beam_size,
)
from .footings import (
    FootingSize,
    calculate_tributary_area,
    calculate_footing_diameter,
)

__all__ = [
    # Tables
    "JoistSpanRule",
    "SpanTableProvider",
    "IRCSpanTables",
    "DEFAULT_SPAN_TABLES",
    "IRC_JOIST_SPANS",
    "IRC_BEAM_SPANS",
    "BeamSpanCheck",
    "BeamRecommendation",
    "validate_beam_span",
    "recommend_beam_size",
    # Footings
    "FootingSize",
    "calculate_tributary_area",
    "calculate_footing_diameter",
]
