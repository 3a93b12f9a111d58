"""
core/constants.py - Framing constants and lumber dimensions.

Default values for drawing scale, code limits and actual lumber sizes.
These seed FramingConfig; engines read them through the config, never
directly.
"""

from typing import Dict

# ==================== Drawing Scale ====================

PIXELS_PER_FOOT = 24.0  # 24 model units = 1 ft
INCHES_PER_FOOT = 12.0

# Float comparison tolerance (model units)
EPSILON = 0.01

# ==================== Actual Lumber Dimensions ====================

ACTUAL_2X_THICKNESS_INCHES = 1.5

ACTUAL_WIDTH_INCHES: Dict[str, float] = {
    "2x6": 5.5,
    "2x8": 7.25,
    "2x10": 9.25,
    "2x12": 11.25,
    "4x4": 3.5,
    "6x6": 5.5,
}

# ==================== Beams & Posts ====================

BEAM_CANTILEVER_FEET = 1.0
POST_INSET_FEET = 1.0
MAX_POST_SPACING_FEET = 8.0
DROP_BEAM_CENTERLINE_SETBACK_FEET = 1.0

# Decks at or above this height get 6x6 posts and 3-ply beams
SIX_BY_SIX_MIN_HEIGHT_INCHES = 60.0

# ==================== Joists & Blocking ====================

MIN_HEIGHT_FOR_NO_2X6_INCHES = 24.0
MAX_BLOCKING_SPACING_FEET = 8.0
PICTURE_FRAME_SINGLE_INSET_INCHES = 5.0
PICTURE_FRAME_DOUBLE_INSET_INCHES = 10.0

# Depth band (ft) where 2x8 joists run full depth on 20' stock
SINGLE_SPAN_MIN_DEPTH_FEET = 18.0
SINGLE_SPAN_MAX_DEPTH_FEET = 20.0

# ==================== Geometric Tolerances ====================

EDGE_TOLERANCE_PIXELS = 2.0
COLLINEAR_TOLERANCE = 0.01
BEAM_LINE_TOLERANCE_PIXELS = 1.0
BEAM_ADJACENCY_TOLERANCE_FEET = 1.0

# ==================== Footings (IRC R403.1) ====================

STANDARD_FOOTING_DIAMETERS_INCHES = (12, 16, 18, 20, 24)
DEFAULT_SOIL_BEARING_CAPACITY_PSF = 1500.0
DECK_DESIGN_LOAD_PSF = 50.0  # 40 live + 10 dead

# ==================== Boundary Validation ====================

VALIDATION_TOLERANCE_PIXELS = 5.0
VALIDATION_CANTILEVER_ALLOWANCE_FEET = 2.0
VALIDATION_MAX_JOIST_FEET = 30.0
VALIDATION_MAX_BEAM_FEET = 40.0
