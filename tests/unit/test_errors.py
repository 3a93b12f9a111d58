"""
tests/unit/test_errors.py - Tests for the framing error taxonomy and aggregator.
"""

from deckframe.errors.aggregator import ErrorAggregator
from deckframe.errors.taxonomy import (
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    FramingError,
    create_beam_error,
    create_input_error,
    create_section_error,
    create_sizing_error,
)


class TestErrorTaxonomy:
    """Test error taxonomy."""

    def test_error_severity_enum(self):
        """Test ErrorSeverity enum."""
        assert ErrorSeverity.ERROR.value == "error"
        assert ErrorSeverity.CRITICAL.value == "critical"

    def test_error_code_enum(self):
        """Test ErrorCode values."""
        assert ErrorCode.INP_DIMENSIONS_INVALID.value == 1001
        assert ErrorCode.SIZ_NO_JOIST.value == 2001
        assert ErrorCode.BEM_OUTER_BEAM_FAILED.value == 3002
        assert ErrorCode.INP_WALL_INDEX_INVALID.value == 1003
        assert ErrorCode.SEC_ALL_FAILED.value == 4002

    def test_framing_error_creation(self):
        """Test FramingError defaults."""
        error = FramingError(message="Deck dimensions invalid.")
        assert len(error.error_id) == 8
        assert error.severity == ErrorSeverity.ERROR
        assert error.section_id is None

    def test_to_dict(self):
        """Test serialization."""
        error = create_section_error("failed", section_id=2)
        data = error.to_dict()
        assert data["code"] == 4003
        assert data["category"] == "section"
        assert data["section_id"] == 2


class TestErrorFactories:
    """Test error factory functions."""

    def test_input_error(self):
        """Test create_input_error."""
        error = create_input_error("bad", source="calc", actual=7)
        assert error.category == ErrorCategory.INPUT
        assert error.actual_value == 7

    def test_sizing_error_recovery(self):
        """Test sizing errors carry recovery options."""
        error = create_sizing_error("No joist", source="joist_sizing", actual=20.0, expected=16.0)
        assert error.category == ErrorCategory.SIZING
        assert "add_beam" in error.recovery_options
        assert error.expected_value == 16.0

    def test_beam_error(self):
        """Test create_beam_error."""
        error = create_beam_error("missing", source="calc", code=ErrorCode.BEM_OUTER_BEAM_FAILED)
        assert error.category == ErrorCategory.BEAM
        assert error.code == ErrorCode.BEM_OUTER_BEAM_FAILED

    def test_all_failed_is_critical(self):
        """Test only the all-failed section error is critical."""
        assert create_section_error("x", code=ErrorCode.SEC_ALL_FAILED).severity == ErrorSeverity.CRITICAL
        assert create_section_error("x").severity == ErrorSeverity.ERROR


class TestErrorAggregator:
    """Test error aggregator."""

    def test_add_and_count(self):
        """Test adding errors and counting."""
        agg = ErrorAggregator()
        agg.add(create_section_error("failed", section_id=1))
        agg.add(create_input_error("bad", source="calc"))
        assert len(agg) == 2
        assert [e.message for e in agg.errors] == ["failed", "bad"]

    def test_generate_report(self):
        """Test counts by code and failed sections."""
        agg = ErrorAggregator()
        agg.add(create_section_error("No joist", section_id=3))
        agg.add(create_section_error("Invalid", code=ErrorCode.INP_SECTION_INVALID, section_id=1))
        agg.add(create_section_error("Also invalid", code=ErrorCode.INP_SECTION_INVALID, section_id=3))

        report = agg.generate_report()

        assert report.total_errors == 3
        assert report.by_code == {"SEC_FAILED": 1, "INP_SECTION_INVALID": 2}
        assert report.failed_sections == [1, 3]
        assert report.summary == "3 error(s) in section(s) 1, 3"
        assert len(report.all_errors) == 3
        assert len(report.report_id) == 8

    def test_report_without_sections(self):
        """Test errors without a section id are counted but not listed."""
        agg = ErrorAggregator()
        agg.add(create_input_error("bad", source="calc"))
        report = agg.generate_report()
        assert report.failed_sections == []
        assert report.summary == "1 error(s)"

    def test_empty_report(self):
        """Test an empty aggregator reports no failures."""
        assert ErrorAggregator().generate_report().summary == "No section failures"

    def test_report_to_dict(self):
        """Test report serialization includes each error."""
        agg = ErrorAggregator()
        agg.add(create_section_error("failed", section_id=2))
        data = agg.generate_report().to_dict()
        assert data["by_code"] == {"SEC_FAILED": 1}
        assert data["failed_sections"] == [2]
        assert data["errors"][0]["section_id"] == 2

    def test_combined_message(self):
        """Test section ids prefix messages."""
        agg = ErrorAggregator()
        agg.add(create_section_error("Deck dimensions invalid.", section_id=1))
        agg.add(create_input_error("Bad wall", source="calc"))
        assert agg.combined_message() == "Section 1: Deck dimensions invalid.; Bad wall"
