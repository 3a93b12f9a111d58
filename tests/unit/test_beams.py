"""
tests/unit/test_beams.py - Tests for beam and post placement.
"""

import pytest

from deckframe.framing.beams import BeamPostSolver, beam_ply_for_post, select_post_size
from deckframe.framing.enums import BeamType, BeamUsage, FootingType, LumberSize, PostSize
from deckframe.geometry.point import Point
from deckframe.geometry.polygon import distance

from conftest import dims_for, rectangle


@pytest.fixture
def solver(config):
    return BeamPostSolver(config)


def _xs(layout):
    return [round(p.x, 6) for p in layout.posts]


class TestPostSizing:
    """Tests for post size and beam ply selection."""

    def test_post_size_threshold(self):
        """Test 6x6 posts from 60 in up."""
        assert select_post_size(36) == PostSize.SIZE_4X4
        assert select_post_size(59.9) == PostSize.SIZE_4X4
        assert select_post_size(60) == PostSize.SIZE_6X6

    def test_ply_follows_post(self):
        """Test beam ply for each post size."""
        assert beam_ply_for_post(PostSize.SIZE_4X4) == 2
        assert beam_ply_for_post(PostSize.SIZE_6X6) == 3


class TestPlacePosts:
    """Tests for BeamPostSolver.place_posts."""

    def test_short_beam_single_post(self, solver):
        """Test a beam shorter than two insets gets one centered post."""
        outline = rectangle(12, 10)
        layout = solver.place_posts(
            Point(0, 120), Point(36, 120), outline, PostSize.SIZE_4X4, 36, FootingType.PYLEX,
        )
        assert _xs(layout) == [18.0]
        assert layout.material_p1.x == pytest.approx(-6.0)
        assert layout.material_p2.x == pytest.approx(42.0)

    def test_end_posts_inset(self, solver):
        """Test end posts sit one inset in from each end."""
        outline = rectangle(12, 10)
        layout = solver.place_posts(
            Point(0, 216), Point(240, 216), outline, PostSize.SIZE_4X4, 36, FootingType.PYLEX,
        )
        # 8 ft between end posts needs no intermediate post
        assert _xs(layout) == [24.0, 216.0]

    def test_intermediate_posts(self, solver):
        """Test intermediate posts split an over-long span evenly."""
        outline = rectangle(12, 10)
        layout = solver.place_posts(
            Point(0, 216), Point(288, 216), outline, PostSize.SIZE_4X4, 36, FootingType.PYLEX,
        )
        assert _xs(layout) == [24.0, 144.0, 264.0]
        assert layout.material_p1 == Point(0, 216)
        assert layout.material_p2 == Point(288, 216)

    def test_post_spacing_never_exceeds_max(self, solver, config):
        """Test gaps between posts stay within the maximum spacing."""
        outline = rectangle(60, 10)
        for feet in range(3, 60):
            end = Point(feet * 24.0, 120)
            layout = solver.place_posts(
                Point(0, 120), end, outline, PostSize.SIZE_4X4, 36, FootingType.PYLEX,
            )
            gaps = [
                config.pixels_to_feet(distance(a.location, b.location))
                for a, b in zip(layout.posts, layout.posts[1:])
            ]
            assert all(g <= config.max_post_spacing_feet + 1e-9 for g in gaps)

    def test_reverse_direction_sorted(self, solver):
        """Test posts are sorted along the axis whatever the direction."""
        outline = rectangle(12, 10)
        layout = solver.place_posts(
            Point(288, 216), Point(0, 216), outline, PostSize.SIZE_4X4, 36, FootingType.PYLEX,
        )
        assert _xs(layout) == [24.0, 144.0, 264.0]
        assert layout.material_p1 == Point(288, 216)
        assert layout.material_p2 == Point(0, 216)

    def test_footings_only_inside_outline(self, solver, l_shape_points):
        """Test posts over the notch of an L get no footing."""
        layout = solver.place_posts(
            Point(0, 360), Point(480, 360), l_shape_points, PostSize.SIZE_4X4, 36, FootingType.HELICAL,
        )
        assert len(layout.posts) == 4
        assert sorted(f.x for f in layout.footings) == pytest.approx([24.0, 168.0])
        assert all(f.type == FootingType.HELICAL for f in layout.footings)

    def test_post_height(self, solver):
        """Test post height is the deck height in feet."""
        layout = solver.place_posts(
            Point(0, 0), Point(240, 0), rectangle(10, 10), PostSize.SIZE_4X4, 30, FootingType.PYLEX,
        )
        assert all(p.height_feet == pytest.approx(2.5) for p in layout.posts)

    def test_footings_unsized_without_joist_span(self, solver):
        """Test footings carry no diameter when the joist span is unknown."""
        layout = solver.place_posts(
            Point(0, 216), Point(288, 216), rectangle(12, 10), PostSize.SIZE_4X4, 36, FootingType.PYLEX,
        )
        assert all(f.diameter_inches is None for f in layout.footings)

    def test_footings_sized_by_tributary_area(self, solver):
        """Test end posts carry half the area of an interior post."""
        layout = solver.place_posts(
            Point(0, 216), Point(288, 216), rectangle(12, 10), PostSize.SIZE_4X4, 36, FootingType.PYLEX, 10.0,
        )
        assert [f.design_load_lbs for f in layout.footings] == pytest.approx([625.0, 1250.0, 625.0])
        assert [f.diameter_inches for f in layout.footings] == [12, 16, 12]

    def test_single_post_footing_uses_beam_length(self, solver):
        """Test a lone post carries the whole beam length."""
        layout = solver.place_posts(
            Point(0, 120), Point(36, 120), rectangle(12, 10), PostSize.SIZE_4X4, 36, FootingType.PYLEX, 10.0,
        )
        assert layout.footings[0].design_load_lbs == pytest.approx(375.0)
        assert layout.footings[0].diameter_inches == 12


class TestSolve:
    """Tests for BeamPostSolver.solve."""

    def test_outer_beam(self, solver):
        """Test a full-width beam across a rectangle."""
        points = rectangle(12, 10)
        placement = solver.solve(
            216, True, dims_for(points), LumberSize.SIZE_2X8, 2, PostSize.SIZE_4X4,
            36, FootingType.GH_LEVELLERS, BeamUsage.OUTER, BeamType.DROP,
        )
        beam = placement.beam
        assert beam.centerline_p1 == Point(0, 216)
        assert beam.centerline_p2 == Point(288, 216)
        assert beam.length_feet == pytest.approx(12.0)
        assert beam.ply == 2
        assert not beam.is_flush
        assert beam.is_horizontal
        assert len(placement.posts) == 3
        assert len(placement.footings) == 3

    def test_vertical_wall(self, solver):
        """Test a beam parallel to a vertical wall runs along y."""
        points = rectangle(10, 12)
        placement = solver.solve(
            216, False, dims_for(points), LumberSize.SIZE_2X10, 3, PostSize.SIZE_6X6,
            72, FootingType.PYLEX, BeamUsage.OUTER, BeamType.FLUSH,
        )
        assert not placement.beam.is_horizontal
        assert placement.beam.is_flush
        assert placement.beam.ply == 3
        assert all(p.x == pytest.approx(216) for p in placement.posts)
        assert all(p.size == PostSize.SIZE_6X6 for p in placement.posts)

    def test_axis_outside_outline(self, solver):
        """Test an axis that misses the deck yields an empty beam."""
        points = rectangle(12, 10)
        placement = solver.solve(
            1000, True, dims_for(points), LumberSize.SIZE_2X8, 2, PostSize.SIZE_4X4,
            36, FootingType.PYLEX, BeamUsage.OUTER, BeamType.DROP,
        )
        assert placement.is_empty
        assert placement.beam.is_empty
        assert placement.beam.p1 == placement.beam.p2
        assert placement.posts == []

    def test_longest_piece_only(self, solver, l_shape_points):
        """Test a beam across the notch uses the longest inside piece."""
        placement = solver.solve(
            360, True, dims_for(l_shape_points), LumberSize.SIZE_2X8, 2, PostSize.SIZE_4X4,
            36, FootingType.PYLEX, BeamUsage.OUTER, BeamType.DROP,
        )
        assert placement.beam.centerline_p1 == Point(0, 360)
        assert placement.beam.centerline_p2.x == pytest.approx(240.0)

    def test_footings_subset_of_posts(self, solver):
        """Test every footing sits under a post."""
        points = rectangle(30, 10)
        placement = solver.solve(
            216, True, dims_for(points), LumberSize.SIZE_2X8, 2, PostSize.SIZE_4X4,
            36, FootingType.PYLEX, BeamUsage.OUTER, BeamType.DROP,
        )
        post_locations = {(p.x, p.y) for p in placement.posts}
        assert all((f.x, f.y) in post_locations for f in placement.footings)
