"""Tests for input coercion and seed triangle selection."""

import numpy as np
import pytest

from py_delaunator.core.seed import (
    as_points,
    check_seed_triangle,
    collinear_hull,
    find_seed_triangle,
    seed_center,
    sort_by_distance,
)


class TestAsPoints:
    """Test coercion of user input to an (n, 2) array."""

    def test_list_of_tuples(self):
        arr = as_points([(0, 0), (1, 2)])
        assert arr.shape == (2, 2)
        assert arr.dtype == np.float64
        assert arr.tolist() == [[0.0, 0.0], [1.0, 2.0]]

    def test_empty(self):
        assert as_points([]).shape == (0, 2)
        assert as_points(np.empty((0, 2))).shape == (0, 2)

    @pytest.mark.parametrize("bad", [
        [1, 2, 3],
        [[1, 2, 3], [4, 5, 6]],
        [[[0, 0]]],
    ])
    def test_wrong_shape(self, bad):
        with pytest.raises(ValueError, match="shape"):
            as_points(bad)

    def test_non_numeric(self):
        with pytest.raises(ValueError):
            as_points([("a", "b"), ("c", "d")])

    @pytest.mark.parametrize("value", [np.nan, np.inf, -np.inf])
    def test_non_finite(self, value):
        points = [(0, 0), (1, 0), (0, value)]
        with pytest.raises(ValueError, match="Point 2"):
            as_points(points)


class TestFindSeedTriangle:
    """Test seed triangle selection."""

    def test_square(self, square_points):
        assert find_seed_triangle(square_points) == (0, 1, 2)

    def test_starts_from_point_nearest_centroid(self, square_with_center):
        i0, i1, i2 = find_seed_triangle(square_with_center)
        assert i0 == 4
        assert i1 == 0

    def test_result_is_counter_clockwise(self):
        # natural pick (0, 1, 2) is clockwise and must be swapped
        points = np.array([[0, 0], [1, 0], [0, -1]], dtype=float)
        assert find_seed_triangle(points) == (0, 2, 1)

    @pytest.mark.parametrize("points", [
        [],
        [(0, 0)],
        [(0, 0), (1, 1)],
        [(0, 0), (1, 1), (2, 2), (3, 3)],
        [(2, 2)] * 5,
        [(0, 0), (0, 0), (1, 0), (1, 0)],
    ])
    def test_degenerate_input(self, points):
        assert find_seed_triangle(as_points(points)) is None

    def test_skips_coincident_neighbour(self):
        points = as_points([(0, 0), (0, 0), (1, 0), (0, 1)])
        seed = find_seed_triangle(points)
        assert seed is not None
        assert len({tuple(points[i]) for i in seed}) == 3


class TestCheckSeedTriangle:
    """Test validation of caller supplied seed triangles."""

    def test_keeps_counter_clockwise(self, square_points):
        assert check_seed_triangle(square_points, (0, 1, 2)) == (0, 1, 2)

    def test_swaps_clockwise(self, square_points):
        assert check_seed_triangle(square_points, (0, 2, 1)) == (0, 1, 2)

    def test_wrong_length(self, square_points):
        with pytest.raises(ValueError, match="3 indices"):
            check_seed_triangle(square_points, (0, 1))

    def test_out_of_range(self, square_points):
        with pytest.raises(ValueError, match="out of range"):
            check_seed_triangle(square_points, (0, 1, 4))
        with pytest.raises(ValueError, match="out of range"):
            check_seed_triangle(square_points, (-1, 1, 2))

    def test_repeated_index(self, square_points):
        with pytest.raises(ValueError, match="distinct"):
            check_seed_triangle(square_points, (0, 1, 1))

    def test_collinear(self):
        points = as_points([(0, 0), (1, 1), (2, 2), (0, 1)])
        with pytest.raises(ValueError, match="degenerate"):
            check_seed_triangle(points, (0, 1, 2))


def test_seed_center(square_points):
    assert seed_center(square_points, (0, 1, 2)) == pytest.approx((0.5, 0.5))


def test_sort_by_distance_breaks_ties_by_index(square_with_center):
    order = sort_by_distance(square_with_center, (0.5, 0.5))
    assert order.tolist() == [4, 0, 1, 2, 3]


class TestCollinearHull:
    """Test ordering of points that cannot be triangulated."""

    def test_horizontal(self):
        points = as_points([(2, 0), (0, 0), (3, 0), (1, 0)])
        assert collinear_hull(points).tolist() == [1, 3, 0, 2]

    def test_vertical(self):
        points = as_points([(0, 0), (0, 2), (0, 1)])
        assert collinear_hull(points).tolist() == [0, 2, 1]

    def test_drops_duplicates(self):
        points = as_points([(0, 0), (0, 0), (1, 0)])
        assert collinear_hull(points).tolist() == [0, 2]

    def test_single_point(self):
        assert collinear_hull(as_points([(5, 5)])).tolist() == [0]

    def test_empty(self):
        assert collinear_hull(as_points([])).tolist() == []
