"""
tests/unit/test_config.py - Tests for framing configuration, inputs and enums.
"""

import dataclasses

import pytest
from pydantic import ValidationError

from deckframe.core.config import DEFAULT_CONFIG, FramingConfig
from deckframe.framing.enums import (
    AttachmentType,
    BeamType,
    BeamUsage,
    FootingType,
    LumberSize,
    PictureFrame,
)
from deckframe.framing.inputs import DeckInputSpec
from deckframe.framing.models import DeckDimensions
from deckframe.geometry.point import Point


class TestFramingConfig:
    """Tests for FramingConfig."""

    def test_scale(self):
        """Test unit conversions at 24 units per foot."""
        assert DEFAULT_CONFIG.feet_to_pixels(1) == 24
        assert DEFAULT_CONFIG.inches_to_pixels(16) == pytest.approx(32.0)
        assert DEFAULT_CONFIG.pixels_to_feet(240) == pytest.approx(10.0)

    def test_derived_lengths(self):
        """Test derived pixel lengths."""
        assert DEFAULT_CONFIG.lumber_thickness_pixels == pytest.approx(3.0)
        assert DEFAULT_CONFIG.half_lumber_thickness_pixels == pytest.approx(1.5)
        assert DEFAULT_CONFIG.post_inset_pixels == pytest.approx(24.0)
        assert DEFAULT_CONFIG.beam_adjacency_tolerance_pixels == pytest.approx(24.0)

    def test_custom_scale(self):
        """Test a different drawing scale."""
        cfg = FramingConfig(pixels_per_foot=12.0)
        assert cfg.post_inset_pixels == pytest.approx(12.0)
        assert cfg.inches_to_pixels(16) == pytest.approx(16.0)

    def test_frozen(self):
        """Test configuration is immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.epsilon = 1.0

    def test_dict_round_trip(self):
        """Test to_dict / from_dict."""
        cfg = FramingConfig(max_post_spacing_feet=6.0)
        assert FramingConfig.from_dict(cfg.to_dict()) == cfg

    def test_footing_and_validation_defaults(self):
        """Test footing and validation limits seed from the constants."""
        assert DEFAULT_CONFIG.soil_bearing_capacity_psf == 1500.0
        assert DEFAULT_CONFIG.deck_design_load_psf == 50.0
        assert DEFAULT_CONFIG.standard_footing_diameters_inches == (12, 16, 18, 20, 24)
        assert DEFAULT_CONFIG.validation_tolerance_pixels == 5.0
        assert DEFAULT_CONFIG.validation_max_beam_feet == 40.0

    def test_from_dict_diameters_list(self):
        """Test diameters given as a list are stored as a tuple."""
        cfg = FramingConfig.from_dict({"standard_footing_diameters_inches": [12, 18]})
        assert cfg.standard_footing_diameters_inches == (12, 18)

    def test_from_dict_ignores_unknown(self):
        """Test unknown keys are dropped."""
        cfg = FramingConfig.from_dict({"epsilon": 0.5, "not_a_field": 1})
        assert cfg.epsilon == 0.5


class TestDeckInputSpec:
    """Tests for DeckInputSpec."""

    def test_defaults(self):
        """Test default options."""
        deck_inputs = DeckInputSpec(deck_height=36)
        assert deck_inputs.joist_spacing == 16
        assert deck_inputs.attachment_type == AttachmentType.HOUSE_RIM
        assert deck_inputs.beam_type == BeamType.DROP
        assert deck_inputs.footing_type == FootingType.GH_LEVELLERS
        assert deck_inputs.picture_frame == PictureFrame.NONE
        assert not deck_inputs.has_picture_frame

    def test_aliases(self):
        """Test camelCase keys."""
        deck_inputs = DeckInputSpec.model_validate({
            "deckHeight": 48,
            "joistSpacing": 12,
            "pictureFrame": "double",
            "footingType": "helical",
        })
        assert deck_inputs.deck_height == 48
        assert deck_inputs.joist_spacing == 12
        assert deck_inputs.picture_frame == PictureFrame.DOUBLE
        assert deck_inputs.footing_type == FootingType.HELICAL
        assert deck_inputs.has_picture_frame

    def test_rejects_bad_spacing(self):
        """Test only 12 and 16 in spacing are accepted."""
        with pytest.raises(ValidationError):
            DeckInputSpec(deck_height=36, joist_spacing=24)

    def test_rejects_negative_height(self):
        """Test negative heights are rejected."""
        with pytest.raises(ValidationError):
            DeckInputSpec(deck_height=-1)

    def test_as_floating(self):
        """Test the floating copy leaves the original alone."""
        deck_inputs = DeckInputSpec(deck_height=36, beam_type=BeamType.FLUSH)
        floating = deck_inputs.as_floating()
        assert floating.attachment_type == AttachmentType.FLOATING
        assert floating.beam_type == BeamType.FLUSH
        assert deck_inputs.attachment_type == AttachmentType.HOUSE_RIM

    def test_frozen(self):
        """Test inputs are immutable."""
        deck_inputs = DeckInputSpec(deck_height=36)
        with pytest.raises(ValidationError):
            deck_inputs.deck_height = 12


class TestEnums:
    """Tests for framing enums."""

    def test_lumber_order(self):
        """Test lumber sizes rank smallest first."""
        assert [s.value for s in LumberSize.ordered()] == ["2x6", "2x8", "2x10", "2x12"]
        assert LumberSize.SIZE_2X10.rank == 2

    def test_beam_usage_order(self):
        """Test beam display order."""
        ordered = sorted(BeamUsage, key=lambda u: u.display_order)
        assert ordered == [BeamUsage.WALL_SIDE, BeamUsage.MID, BeamUsage.OUTER]

    def test_beam_usage_merge(self):
        """Test which beam roles may merge."""
        assert BeamUsage.WALL_SIDE.can_merge_with(BeamUsage.OUTER)
        assert BeamUsage.MID.can_merge_with(BeamUsage.MID)
        assert not BeamUsage.MID.can_merge_with(BeamUsage.OUTER)


class TestDeckDimensions:
    """Tests for DeckDimensions."""

    def test_from_points(self):
        """Test bounding box and outline."""
        points = [Point(0, 0), Point(288, 0), Point(288, 240), Point(0, 240)]
        dims = DeckDimensions.from_points(points)
        assert dims.is_valid
        assert dims.width_feet() == pytest.approx(12.0)
        assert dims.depth_feet() == pytest.approx(10.0)
        assert dims.outline == points

    def test_outline_falls_back_to_box(self):
        """Test a missing outline uses the bounding rectangle."""
        dims = DeckDimensions(min_x=0, max_x=10, min_y=0, max_y=5)
        assert dims.outline == [Point(0, 0), Point(10, 0), Point(10, 5), Point(0, 5)]

    def test_invalid(self):
        """Test missing, inverted and non-finite boxes are invalid."""
        assert not DeckDimensions().is_valid
        assert not DeckDimensions(min_x=10, max_x=0, min_y=0, max_y=5).is_valid
        assert not DeckDimensions(min_x=0, max_x=float("inf"), min_y=0, max_y=5).is_valid

    def test_zero_extent_invalid(self):
        """Test a box with no width or no depth is invalid."""
        assert not DeckDimensions(min_x=0, max_x=0, min_y=0, max_y=240).is_valid
        assert not DeckDimensions(min_x=0, max_x=288, min_y=240, max_y=240).is_valid
        assert not DeckDimensions(min_x=0, max_x=0.005, min_y=0, max_y=240).has_extent(0.01)
        assert DeckDimensions(min_x=0, max_x=1, min_y=0, max_y=1).has_extent(0.01)

    def test_shape(self):
        """Test the outline polygon follows the outline points."""
        dims = DeckDimensions(min_x=0, max_x=288, min_y=0, max_y=240)
        assert dims.shape.area == pytest.approx(288 * 240)
