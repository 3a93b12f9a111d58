"""
errors/taxonomy.py - Framing error classification.

Framing failures are reported as data on the result. Each failure is
built here as a FramingError so sections can be aggregated before being
flattened into the result's error string.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
import uuid


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""
    # Input errors (1xxx)
    INPUT = "input"

    # Sizing errors (2xxx)
    SIZING = "sizing"

    # Beam placement errors (3xxx)
    BEAM = "beam"

    # Multi-section errors (4xxx)
    SECTION = "section"


class ErrorCode(Enum):
    """Specific error codes."""

    # Input (1xxx)
    INP_DIMENSIONS_INVALID = 1001
    INP_SECTION_INVALID = 1002
    INP_WALL_INDEX_INVALID = 1003

    # Sizing (2xxx)
    SIZ_NO_JOIST = 2001
    SIZ_NO_SPAN_DATA = 2002

    # Beam (3xxx)
    BEM_MID_BEAM_FAILED = 3001
    BEM_OUTER_BEAM_FAILED = 3002

    # Section (4xxx)
    SEC_NONE_PROVIDED = 4001
    SEC_ALL_FAILED = 4002
    SEC_FAILED = 4003


@dataclass
class FramingError:
    """Structured error representation."""

    error_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    code: ErrorCode = ErrorCode.INP_DIMENSIONS_INVALID
    category: ErrorCategory = ErrorCategory.INPUT
    severity: ErrorSeverity = ErrorSeverity.ERROR

    message: str = ""
    detail: str = ""

    # Engine or section that produced the error
    source: str = ""
    section_id: Optional[int] = None

    # Values
    actual_value: Any = None
    expected_value: Any = None

    recovery_options: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
            "section_id": self.section_id,
        }


def create_input_error(
    message: str,
    source: str,
    code: ErrorCode = ErrorCode.INP_DIMENSIONS_INVALID,
    actual: Any = None,
) -> FramingError:
    """Factory for input errors."""
    return FramingError(
        code=code,
        category=ErrorCategory.INPUT,
        severity=ErrorSeverity.ERROR,
        message=message,
        source=source,
        actual_value=actual,
    )


def create_sizing_error(
    message: str,
    source: str,
    code: ErrorCode = ErrorCode.SIZ_NO_JOIST,
    actual: Any = None,
    expected: Any = None,
) -> FramingError:
    """Factory for joist sizing errors."""
    return FramingError(
        code=code,
        category=ErrorCategory.SIZING,
        severity=ErrorSeverity.ERROR,
        message=message,
        source=source,
        actual_value=actual,
        expected_value=expected,
        recovery_options=["reduce_span", "reduce_joist_spacing", "add_beam"],
    )


def create_beam_error(
    message: str,
    source: str,
    code: ErrorCode = ErrorCode.BEM_MID_BEAM_FAILED,
) -> FramingError:
    """Factory for beam placement errors."""
    return FramingError(
        code=code,
        category=ErrorCategory.BEAM,
        severity=ErrorSeverity.ERROR,
        message=message,
        source=source,
    )


def create_section_error(
    message: str,
    source: str = "multi_section",
    code: ErrorCode = ErrorCode.SEC_FAILED,
    section_id: Optional[int] = None,
    detail: str = "",
) -> FramingError:
    """Factory for multi-section errors."""
    severity = ErrorSeverity.CRITICAL if code == ErrorCode.SEC_ALL_FAILED else ErrorSeverity.ERROR
    return FramingError(
        code=code,
        category=ErrorCategory.SECTION,
        severity=severity,
        message=message,
        detail=detail,
        source=source,
        section_id=section_id,
    )
