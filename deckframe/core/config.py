"""
core/config.py - Framing configuration.

One injected configuration value carrying the drawing scale, code limits
and geometric tolerances used by every framing engine.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple
import logging

from . import constants as c

__all__ = [
    'FramingConfig',
    'DEFAULT_CONFIG',
]

logger = logging.getLogger(__name__)


# =============================================================================
# FRAMING CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class FramingConfig:
    """
    Configuration for framing calculations.

    All lengths ending in _pixels are model units; everything else is in
    the unit named by its suffix.
    """

    # =========================================================================
    # SCALE
    # =========================================================================

    # Model units per foot
    pixels_per_foot: float = c.PIXELS_PER_FOOT

    # Float comparison tolerance (model units)
    epsilon: float = c.EPSILON

    # =========================================================================
    # BEAMS & POSTS
    # =========================================================================

    post_inset_feet: float = c.POST_INSET_FEET
    max_post_spacing_feet: float = c.MAX_POST_SPACING_FEET
    beam_cantilever_feet: float = c.BEAM_CANTILEVER_FEET
    drop_beam_setback_feet: float = c.DROP_BEAM_CENTERLINE_SETBACK_FEET
    six_by_six_min_height_inches: float = c.SIX_BY_SIX_MIN_HEIGHT_INCHES

    # =========================================================================
    # JOISTS & BLOCKING
    # =========================================================================

    min_height_for_no_2x6_inches: float = c.MIN_HEIGHT_FOR_NO_2X6_INCHES
    max_blocking_spacing_feet: float = c.MAX_BLOCKING_SPACING_FEET
    picture_frame_single_inset_inches: float = c.PICTURE_FRAME_SINGLE_INSET_INCHES
    picture_frame_double_inset_inches: float = c.PICTURE_FRAME_DOUBLE_INSET_INCHES
    actual_lumber_thickness_inches: float = c.ACTUAL_2X_THICKNESS_INCHES

    # Depth band (ft, exclusive min / inclusive max) for continuous joists
    single_span_min_depth_feet: float = c.SINGLE_SPAN_MIN_DEPTH_FEET
    single_span_max_depth_feet: float = c.SINGLE_SPAN_MAX_DEPTH_FEET

    # =========================================================================
    # TOLERANCES
    # =========================================================================

    # Distance at which a point counts as lying on a polygon edge
    edge_tolerance_pixels: float = c.EDGE_TOLERANCE_PIXELS

    # Cross-product threshold for collinear edges and ledgers
    collinear_tolerance: float = c.COLLINEAR_TOLERANCE

    # Beams on the same reference line within this offset can merge
    beam_line_tolerance_pixels: float = c.BEAM_LINE_TOLERANCE_PIXELS

    # Collinear beams with a gap up to this length can merge
    beam_adjacency_tolerance_feet: float = c.BEAM_ADJACENCY_TOLERANCE_FEET

    # Decimal places used when deduplicating posts and footings
    dedupe_precision: int = 0

    # =========================================================================
    # FOOTINGS
    # =========================================================================

    soil_bearing_capacity_psf: float = c.DEFAULT_SOIL_BEARING_CAPACITY_PSF
    deck_design_load_psf: float = c.DECK_DESIGN_LOAD_PSF

    # Ascending; the largest is used when the load needs more
    standard_footing_diameters_inches: Tuple[int, ...] = c.STANDARD_FOOTING_DIAMETERS_INCHES

    # =========================================================================
    # VALIDATION
    # =========================================================================

    validation_tolerance_pixels: float = c.VALIDATION_TOLERANCE_PIXELS

    # Beam ends may overhang the outline by this much plus the tolerance
    validation_cantilever_allowance_feet: float = c.VALIDATION_CANTILEVER_ALLOWANCE_FEET

    # Longer members are reported as likely calculation errors
    validation_max_joist_feet: float = c.VALIDATION_MAX_JOIST_FEET
    validation_max_beam_feet: float = c.VALIDATION_MAX_BEAM_FEET

    # =========================================================================
    # DERIVED
    # =========================================================================

    def feet_to_pixels(self, feet: float) -> float:
        return feet * self.pixels_per_foot

    def inches_to_pixels(self, inches: float) -> float:
        return inches / c.INCHES_PER_FOOT * self.pixels_per_foot

    def pixels_to_feet(self, pixels: float) -> float:
        return pixels / self.pixels_per_foot

    @property
    def lumber_thickness_pixels(self) -> float:
        return self.inches_to_pixels(self.actual_lumber_thickness_inches)

    @property
    def half_lumber_thickness_pixels(self) -> float:
        return self.lumber_thickness_pixels / 2

    @property
    def post_inset_pixels(self) -> float:
        return self.feet_to_pixels(self.post_inset_feet)

    @property
    def beam_cantilever_pixels(self) -> float:
        return self.feet_to_pixels(self.beam_cantilever_feet)

    @property
    def drop_beam_setback_pixels(self) -> float:
        return self.feet_to_pixels(self.drop_beam_setback_feet)

    @property
    def beam_adjacency_tolerance_pixels(self) -> float:
        return self.feet_to_pixels(self.beam_adjacency_tolerance_feet)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FramingConfig":
        """Deserialize from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        unknown = set(data) - known_fields
        if unknown:
            logger.warning("Ignoring unknown framing config keys: %s", sorted(unknown))
        filtered = {k: v for k, v in data.items() if k in known_fields}
        if "standard_footing_diameters_inches" in filtered:
            filtered["standard_footing_diameters_inches"] = tuple(filtered["standard_footing_diameters_inches"])
        return cls(**filtered)


# =============================================================================
# DEFAULT CONFIGURATION
# =============================================================================

DEFAULT_CONFIG = FramingConfig()
