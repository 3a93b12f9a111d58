"""
tests/unit/test_spans.py - Tests for span tables and footing sizing.
"""

import pytest

from deckframe.core.config import FramingConfig
from deckframe.framing.enums import LumberSize
from deckframe.spans.footings import calculate_footing_diameter, calculate_tributary_area
from deckframe.spans.tables import (
    DEFAULT_SPAN_TABLES,
    IRCSpanTables,
    JoistSpanRule,
    recommend_beam_size,
    validate_beam_span,
)


class TestJoistSpans:
    """Tests for joist span lookup."""

    def test_lookup(self):
        """Test tabulated joist spans."""
        assert DEFAULT_SPAN_TABLES.max_joist_span(LumberSize.SIZE_2X8, 16) == pytest.approx(10.5)
        assert DEFAULT_SPAN_TABLES.max_joist_span(LumberSize.SIZE_2X12, 12) == pytest.approx(16.0)

    def test_unknown_spacing(self):
        """Test untabulated spacing returns None."""
        assert DEFAULT_SPAN_TABLES.max_joist_span(LumberSize.SIZE_2X8, 24) is None

    def test_larger_size_never_spans_less(self):
        """Test spans are non-decreasing with size at each spacing."""
        for spacing in (12, 16):
            spans = [DEFAULT_SPAN_TABLES.max_joist_span(s, spacing) for s in LumberSize.ordered()]
            assert spans == sorted(spans)

    def test_custom_rules(self):
        """Test a replacement joist table."""
        tables = IRCSpanTables(joist_rules=[JoistSpanRule(LumberSize.SIZE_2X10, 16, 12.0)])
        assert tables.max_joist_span(LumberSize.SIZE_2X10, 16) == 12.0
        assert tables.max_joist_span(LumberSize.SIZE_2X8, 16) is None
        assert len(tables.joist_span_rules()) == 1


class TestBeamSpans:
    """Tests for beam span interpolation."""

    def test_tabulated_point(self):
        """Test an exact table row."""
        assert DEFAULT_SPAN_TABLES.max_beam_span(2, LumberSize.SIZE_2X8, 6) == pytest.approx(8 + 2 / 12)

    def test_interpolates(self):
        """Test linear interpolation between rows."""
        expected = ((8 + 2 / 12) + (7 + 1 / 12)) / 2
        assert DEFAULT_SPAN_TABLES.max_beam_span(2, LumberSize.SIZE_2X8, 7) == pytest.approx(expected)

    def test_clamps_outside_table(self):
        """Test joist spans outside the table clamp to the end rows."""
        assert DEFAULT_SPAN_TABLES.max_beam_span(2, LumberSize.SIZE_2X8, 4) == pytest.approx(8 + 2 / 12)
        assert DEFAULT_SPAN_TABLES.max_beam_span(2, LumberSize.SIZE_2X8, 14) == pytest.approx(5.75)

    def test_unknown_ply(self):
        """Test an untabulated ply returns None."""
        assert DEFAULT_SPAN_TABLES.max_beam_span(4, LumberSize.SIZE_2X8, 8) is None

    def test_three_ply_spans_more(self):
        """Test a 3-ply beam spans further than a 2-ply beam."""
        for size in LumberSize.ordered():
            two = DEFAULT_SPAN_TABLES.max_beam_span(2, size, 10)
            three = DEFAULT_SPAN_TABLES.max_beam_span(3, size, 10)
            assert three > two


class TestBeamSpanChecks:
    """Tests for validate_beam_span and recommend_beam_size."""

    def test_within_limit(self):
        """Test a span inside the limit."""
        check = validate_beam_span(5.0, LumberSize.SIZE_2X8, 2, 10)
        assert check.valid
        assert check.message == "Beam span 5.0' is within IRC limit of 6.3'"

    def test_tolerance(self):
        """Test the rounding allowance above the limit."""
        assert validate_beam_span(6.4, LumberSize.SIZE_2X8, 2, 10).valid
        assert not validate_beam_span(6.5, LumberSize.SIZE_2X8, 2, 10).valid

    def test_exceeds_limit(self):
        """Test an over-limit message."""
        check = validate_beam_span(10.0, LumberSize.SIZE_2X8, 2, 10)
        assert not check.valid
        assert check.message == "Beam span 10.0' exceeds IRC limit of 6.3' for 2-ply 2x8 with 10.0' joist span"

    def test_unknown_configuration(self):
        """Test an untabulated ply cannot be validated."""
        check = validate_beam_span(5.0, LumberSize.SIZE_2X8, 4, 10)
        assert not check.valid
        assert check.max_span_feet is None
        assert check.message.startswith("Cannot validate beam span: unknown configuration")

    def test_recommend_smallest(self):
        """Test the smallest adequate size is recommended."""
        rec = recommend_beam_size(9.0, 10, 2)
        assert rec.size == LumberSize.SIZE_2X12
        assert not rec.needs_more_posts

        rec = recommend_beam_size(5.0, 10, 2)
        assert rec.size == LumberSize.SIZE_2X8

    def test_recommend_needs_more_posts(self):
        """Test the largest size is returned with a warning when nothing fits."""
        rec = recommend_beam_size(12.0, 10, 2)
        assert rec.size == LumberSize.SIZE_2X12
        assert rec.needs_more_posts
        assert rec.message == "Maximum 2-ply 2x12 span is 9.8' - additional posts required"


class TestFootings:
    """Tests for footing sizing."""

    def test_tributary_area(self):
        """Test interior and corner tributary areas."""
        assert calculate_tributary_area(8, 10) == pytest.approx(40.0)
        assert calculate_tributary_area(8, 10, is_corner=True) == pytest.approx(20.0)

    def test_standard_diameter(self):
        """Test rounding up to a standard diameter."""
        footing = calculate_footing_diameter(40.0)
        assert footing.load_lbs == pytest.approx(2000.0)
        assert footing.calculated_diameter_inches == pytest.approx(15.64, abs=0.01)
        assert footing.diameter_inches == 16
        assert footing.warning is None
        assert not footing.exceeds_standard

    def test_exceeds_largest(self):
        """Test loads beyond the largest standard footing warn."""
        footing = calculate_footing_diameter(400.0)
        assert footing.diameter_inches == 24
        assert footing.exceeds_standard
        assert footing.warning.startswith("Load exceeds standard footing capacity.")

    def test_better_soil_smaller_footing(self):
        """Test higher bearing capacity never needs a larger footing."""
        weak = calculate_footing_diameter(60.0, soil_bearing_capacity_psf=1500)
        strong = calculate_footing_diameter(60.0, soil_bearing_capacity_psf=3000)
        assert strong.diameter_inches <= weak.diameter_inches

    def test_invalid_soil(self):
        """Test non-positive bearing capacity raises."""
        with pytest.raises(ValueError):
            calculate_footing_diameter(40.0, soil_bearing_capacity_psf=0)

    def test_soil_capacity_from_config(self):
        """Test the configured bearing capacity is used when none is given."""
        footing = calculate_footing_diameter(40.0, config=FramingConfig(soil_bearing_capacity_psf=3000.0))
        assert footing.calculated_diameter_inches == pytest.approx(11.06, abs=0.01)
        assert footing.diameter_inches == 12

    def test_design_load_from_config(self):
        """Test the configured design load sets the footing load."""
        footing = calculate_footing_diameter(40.0, config=FramingConfig(deck_design_load_psf=40.0))
        assert footing.load_lbs == pytest.approx(1600.0)

    def test_stocked_diameters_from_config(self):
        """Test the configured diameters bound the selection."""
        footing = calculate_footing_diameter(40.0, config=FramingConfig(standard_footing_diameters_inches=(10, 14)))
        assert footing.diameter_inches == 14
        assert footing.exceeds_standard
