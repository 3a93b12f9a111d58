"""
spans/footings.py - Footing sizing (IRC R403.1).

A footing must spread the post load over enough soil that the soil
bearing capacity is not exceeded. Diameters are rounded up to the
standard sizes stocked for round footings.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import math

from ..core.config import FramingConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)

SQ_INCHES_PER_SQ_FOOT = 144.0


@dataclass
class FootingSize:
    """Footing sized for one post."""

    diameter_inches: int
    """Selected standard diameter"""

    load_lbs: float
    """Design load carried by the footing"""

    required_area_sq_ft: float
    calculated_diameter_inches: float
    """Diameter before rounding up to a standard size"""

    warning: Optional[str] = None

    @property
    def exceeds_standard(self) -> bool:
        return self.warning is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "diameter_inches": self.diameter_inches,
            "load_lbs": round(self.load_lbs, 1),
            "required_area_sq_ft": round(self.required_area_sq_ft, 3),
            "calculated_diameter_inches": round(self.calculated_diameter_inches, 2),
            "warning": self.warning,
        }


def calculate_tributary_area(
    post_spacing_feet: float,
    joist_span_feet: float,
    is_corner: bool = False,
) -> float:
    """
    Deck area (sq ft) carried by one post.

    Corner posts carry half the post spacing by half the joist span;
    every other post carries a full post spacing by half the joist span.
    """
    half_joist_span = joist_span_feet / 2
    if is_corner:
        return (post_spacing_feet / 2) * half_joist_span
    return post_spacing_feet * half_joist_span


def calculate_footing_diameter(
    tributary_area_sq_ft: float,
    soil_bearing_capacity_psf: Optional[float] = None,
    config: FramingConfig = DEFAULT_CONFIG,
) -> FootingSize:
    """
    Size a round footing for the given tributary area.

    The design load and stocked diameters come from the config, as does
    the soil bearing capacity unless one is given.
    """
    if soil_bearing_capacity_psf is None:
        soil_bearing_capacity_psf = config.soil_bearing_capacity_psf
    if soil_bearing_capacity_psf <= 0:
        raise ValueError("Soil bearing capacity must be positive")

    load = tributary_area_sq_ft * config.deck_design_load_psf
    required_area = load / soil_bearing_capacity_psf
    required_diameter = math.sqrt(4 * required_area * SQ_INCHES_PER_SQ_FOOT / math.pi)

    diameters = config.standard_footing_diameters_inches
    largest = diameters[-1]
    selected = largest
    for diameter in diameters:
        if diameter >= required_diameter:
            selected = diameter
            break

    warning = None
    if required_diameter > largest:
        warning = (
            f'Load exceeds standard footing capacity. Required: {required_diameter:.1f}". '
            f'Using {largest}" but consult engineer.'
        )
        logger.warning(warning)

    return FootingSize(
        diameter_inches=selected,
        load_lbs=load,
        required_area_sq_ft=required_area,
        calculated_diameter_inches=required_diameter,
        warning=warning,
    )
