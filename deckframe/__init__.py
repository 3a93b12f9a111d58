"""
deckframe - Structural framing for residential decks.

Turns a deck outline drawn on a 24-units-per-foot grid into a framing
plan: ledger, beams, posts, footings, joists, rim joists and blocking,
sized against IRC span tables.
"""

__version__ = "0.1.0"

# framing must load before spans; the span tables import framing.enums
from .framing import (
    DeckInputSpec,
    DeckDimensions,
    RectangularSection,
    StructuralComponents,
    StructureCalculator,
    MultiSectionOrchestrator,
    StructuralValidator,
    calculate_structure,
    calculate_multi_section_structure,
    validate_structure,
)
from .spans import DEFAULT_SPAN_TABLES, IRCSpanTables, SpanTableProvider
from .core import FramingConfig, DEFAULT_CONFIG
from .geometry import Point
from .errors import FramingError, ErrorCode, ErrorAggregator

__all__ = [
    "__version__",
    "DeckInputSpec",
    "DeckDimensions",
    "RectangularSection",
    "StructuralComponents",
    "StructureCalculator",
    "MultiSectionOrchestrator",
    "StructuralValidator",
    "calculate_structure",
    "calculate_multi_section_structure",
    "validate_structure",
    "DEFAULT_SPAN_TABLES",
    "IRCSpanTables",
    "SpanTableProvider",
    "FramingConfig",
    "DEFAULT_CONFIG",
    "Point",
    "FramingError",
    "ErrorCode",
    "ErrorAggregator",
]
