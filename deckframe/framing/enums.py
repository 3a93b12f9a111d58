"""
framing/enums.py - Framing enumerations.

Lumber sizes, user choices and the closed set of member roles.
"""

from enum import Enum
from typing import List


class LumberSize(Enum):
    """Nominal dimensional lumber used for joists, beams and ledgers."""
    SIZE_2X6 = "2x6"
    SIZE_2X8 = "2x8"
    SIZE_2X10 = "2x10"
    SIZE_2X12 = "2x12"

    @classmethod
    def ordered(cls) -> List["LumberSize"]:
        """Smallest to largest."""
        return [cls.SIZE_2X6, cls.SIZE_2X8, cls.SIZE_2X10, cls.SIZE_2X12]

    @property
    def rank(self) -> int:
        return LumberSize.ordered().index(self)


class PostSize(Enum):
    """Post stock."""
    SIZE_4X4 = "4x4"
    SIZE_6X6 = "6x6"


class AttachmentType(Enum):
    """How the deck meets the existing structure."""
    HOUSE_RIM = "house_rim"
    CONCRETE = "concrete"
    FLOATING = "floating"


class BeamType(Enum):
    """Beam style."""
    FLUSH = "flush"  # Joists hang from the beam face
    DROP = "drop"    # Joists bear on top of the beam


class FootingType(Enum):
    """Footing product."""
    GH_LEVELLERS = "gh_levellers"
    PYLEX = "pylex"
    HELICAL = "helical"


class PictureFrame(Enum):
    """Picture-frame border option."""
    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"


class LedgerUsage(Enum):
    LEDGER = "Ledger"


class BeamUsage(Enum):
    """Beam roles, in display order."""
    WALL_SIDE = "Wall-Side Beam"
    MID = "Mid Beam"
    OUTER = "Outer Beam"

    @property
    def is_perimeter(self) -> bool:
        """Wall-side and outer beams both sit on a deck edge."""
        return self in (BeamUsage.WALL_SIDE, BeamUsage.OUTER)

    @property
    def display_order(self) -> int:
        return {
            BeamUsage.WALL_SIDE: 1,
            BeamUsage.MID: 2,
            BeamUsage.OUTER: 3,
        }[self]

    def can_merge_with(self, other: "BeamUsage") -> bool:
        return self == other or (self.is_perimeter and other.is_perimeter)


class JoistUsage(Enum):
    JOIST = "Joist"
    PICTURE_FRAME = "Picture Frame Joist"


class RimJoistUsage(Enum):
    END_JOIST = "End Joist"
    OUTER_RIM = "Outer Rim Joist"
    WALL_RIM = "Wall Rim Joist"


class BlockingUsage(Enum):
    MID_SPAN = "Mid-Span Blocking"
    LADDER_SIDE_1 = "Ladder Blocking (Side 1)"
    LADDER_SIDE_2 = "Ladder Blocking (Side 2)"
