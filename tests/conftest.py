"""
deckframe Test Configuration and Fixtures

Deck outlines on the 24-units-per-foot grid and the standard framing
inputs shared by unit and integration tests.
"""

import pytest
from typing import List

from deckframe.core.config import FramingConfig
from deckframe.framing.inputs import DeckInputSpec
from deckframe.framing.models import DeckDimensions, RectangularSection, WallSegment
from deckframe.geometry.point import Point

PPF = 24.0


def rectangle(width_feet: float, depth_feet: float) -> List[Point]:
    """
    Rectangle with its top-left corner at the origin.

    Edge 0 runs along the top (the house wall in most tests).
    """
    w = width_feet * PPF
    d = depth_feet * PPF
    return [Point(0, 0), Point(w, 0), Point(w, d), Point(0, d)]


def dims_for(points: List[Point]) -> DeckDimensions:
    return DeckDimensions.from_points(points)


@pytest.fixture
def config():
    """Default framing configuration."""
    return FramingConfig()


@pytest.fixture
def inputs():
    """Ledger deck at 36 in, 16 in OC, drop beams, no picture frame."""
    return DeckInputSpec(deck_height=36)


@pytest.fixture
def l_shape_points():
    """
    20' x 20' L with the notch at the bottom right.

    Edge 0 is the 20' house wall along the top.
    """
    return [
        Point(0, 0),
        Point(480, 0),
        Point(480, 240),
        Point(240, 240),
        Point(240, 480),
        Point(0, 480),
    ]


@pytest.fixture
def l_shape_sections():
    """The L split into a 20' x 10' ledger rectangle and a 10' x 10' free rectangle."""
    top = RectangularSection(
        corners=[Point(0, 0), Point(480, 0), Point(480, 240), Point(0, 240)],
        is_ledger_rectangle=True,
        ledger_walls=[WallSegment(Point(0, 0), Point(480, 0))],
    )
    bottom = RectangularSection(
        corners=[Point(0, 240), Point(240, 240), Point(240, 480), Point(0, 480)],
        is_ledger_rectangle=False,
    )
    return [top, bottom]
