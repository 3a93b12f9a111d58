"""
errors/aggregator.py - Collect and report per-section framing failures.

A multi-section deck keeps framing the sections that succeed; the ones
that fail are collected here and reported on the combined result.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List
import uuid

from .taxonomy import FramingError


@dataclass
class ErrorReport:
    """Section failures collected while framing one deck."""

    report_id: str = ""

    # Counts
    total_errors: int = 0
    by_code: Dict[str, int] = field(default_factory=dict)
    failed_sections: List[int] = field(default_factory=list)

    # Summary
    summary: str = ""

    all_errors: List[FramingError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "total_errors": self.total_errors,
            "by_code": dict(self.by_code),
            "failed_sections": list(self.failed_sections),
            "summary": self.summary,
            "errors": [e.to_dict() for e in self.all_errors],
        }


class ErrorAggregator:
    """Collects errors from the sections of one deck."""

    def __init__(self):
        self._errors: List[FramingError] = []

    def __len__(self) -> int:
        return len(self._errors)

    @property
    def errors(self) -> List[FramingError]:
        return list(self._errors)

    def add(self, error: FramingError) -> None:
        self._errors.append(error)

    def combined_message(self, separator: str = "; ") -> str:
        """Join messages, prefixing each with its section when known."""
        parts = []
        for e in self._errors:
            if e.section_id is not None:
                parts.append(f"Section {e.section_id}: {e.message}")
            else:
                parts.append(e.message)
        return separator.join(parts)

    def generate_report(self) -> ErrorReport:
        """Counts by error code and the sections that failed."""
        report = ErrorReport(
            report_id=str(uuid.uuid4())[:8],
            total_errors=len(self._errors),
        )

        for e in self._errors:
            report.by_code[e.code.name] = report.by_code.get(e.code.name, 0) + 1
        report.failed_sections = sorted({e.section_id for e in self._errors if e.section_id is not None})

        if not self._errors:
            report.summary = "No section failures"
        elif report.failed_sections:
            sections = ", ".join(str(s) for s in report.failed_sections)
            report.summary = f"{report.total_errors} error(s) in section(s) {sections}"
        else:
            report.summary = f"{report.total_errors} error(s)"

        report.all_errors = self._errors.copy()
        return report
