"""
errors/ - Framing error taxonomy.

Structured error records and an aggregator used to collect failures
across deck sections.
"""

from .taxonomy import (
    ErrorSeverity,
    ErrorCategory,
    ErrorCode,
    FramingError,
    create_input_error,
    create_sizing_error,
    create_beam_error,
    create_section_error,
)

from .aggregator import (
    ErrorReport,
    ErrorAggregator,
)

__all__ = [
    # Taxonomy
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorCode",
    "FramingError",
    "create_input_error",
    "create_sizing_error",
    "create_beam_error",
    "create_section_error",
    # Aggregator
    "ErrorReport",
    "ErrorAggregator",
]
