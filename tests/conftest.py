"""Shared fixtures for triangulation tests."""

import numpy as np
import pytest

from helpers import get_jittered_grid


@pytest.fixture
def square_points():
    return np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)


@pytest.fixture
def square_with_center():
    return np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0.5, 0.5]], dtype=float)


@pytest.fixture
def diamond_points():
    #        /|\ 2
    #     3 /_|_\ 1
    #       \0| /
    #        \|/ 4
    return np.array([[0, 0], [1, 0], [0, 1], [-1, 0], [0, -1]], dtype=float)


@pytest.fixture
def random_points():
    rng = np.random.default_rng(42)
    return rng.random((300, 2))


@pytest.fixture
def jittered_points():
    return get_jittered_grid(100, 100, 10, seed=7)


@pytest.fixture
def integer_grid():
    xs, ys = np.meshgrid(np.arange(10), np.arange(10))
    return np.column_stack([xs.ravel(), ys.ravel()]).astype(float)
