"""Escape-time evaluation and pixel mapping."""

import numpy as np
import pytest

from mandelbrot_plane.computation import NO_ESCAPE, escape_grid, escape_time, pixel_to_point
from mandelbrot_plane.config import RenderConfig

OUTSIDE_POINTS = [100 + 0j, 3 + 0j, -2.5 + 0j, 1.5 + 1.5j, -10j]
ESCAPING_POINTS = [0.26 + 0j, 1 + 1j, -0.75 + 0.1j, 0.5 + 0j]


@pytest.mark.parametrize("c", OUTSIDE_POINTS, ids=str)
@pytest.mark.parametrize("limit", [1, 2, 255])
def test_points_outside_radius_escape_immediately(c, limit):
    assert escape_time(c, limit) == 0


@pytest.mark.parametrize("limit", [0, 1, 10, 1000])
def test_origin_never_escapes(limit):
    assert escape_time(0j, limit) is None


@pytest.mark.parametrize("c", OUTSIDE_POINTS + ESCAPING_POINTS + [0j], ids=str)
def test_zero_limit_is_membership(c):
    assert escape_time(c, 0) is None


@pytest.mark.parametrize("c", ESCAPING_POINTS, ids=str)
def test_escape_is_stable_once_observed(c):
    i = escape_time(c, 1000)
    assert i is not None
    assert escape_time(c, i) is None
    for limit in (i + 1, i + 2, 2 * i + 5, 1000):
        assert escape_time(c, limit) == i


def test_threshold_is_strict():
    # |z| reaches exactly 2 on the first step and exceeds it on the second
    assert escape_time(2 + 0j, 10) == 1
    # orbit of -2 sits on the radius forever
    assert escape_time(-2 + 0j, 100) is None


@pytest.mark.parametrize("c", [-1 + 0j, 1j, -0.12 + 0.75j], ids=str)
def test_bounded_orbits(c):
    assert escape_time(c, 500) is None


def test_escape_time_accepts_real_numbers():
    assert escape_time(5, 3) == 0
    assert escape_time(0.0, 3) is None


def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        escape_time(0j, -1)


def test_pixel_to_point_reference():
    answer = pixel_to_point((100, 100), (25, 75), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert answer == complex(-0.5, -0.5)


@pytest.mark.parametrize(
    "bounds, upper_left, lower_right",
    [
        ((100, 100), -1 + 1j, 1 - 1j),
        ((1000, 750), -1.2 + 0.35j, -1.0 + 0.2j),
        ((7, 13), -2.2 + 1.3j, 0.75 - 1.3j),
    ],
)
def test_pixel_to_point_corners(bounds, upper_left, lower_right):
    assert pixel_to_point(bounds, (0, 0), upper_left, lower_right) == upper_left
    assert pixel_to_point(bounds, bounds, upper_left, lower_right) == pytest.approx(lower_right)


def test_pixel_to_point_extrapolates_outside_bounds():
    point = pixel_to_point((10, 10), (20, 15), -1 + 1j, 1 - 1j)
    assert point == pytest.approx(3 - 2j)


def test_pixel_to_point_inverted_viewport_mirrors():
    point = pixel_to_point((4, 4), (1, 1), 1 - 1j, -1 + 1j)
    assert point == pytest.approx(0.5 - 0.5j)


def test_pixel_to_point_degenerate_viewport_collapses():
    point = pixel_to_point((4, 4), (3, 2), 0.5 + 0.5j, 0.5 + 0.5j)
    assert point == 0.5 + 0.5j


@pytest.mark.parametrize("bounds", [(0, 100), (100, 0), (-1, 5)])
def test_pixel_to_point_rejects_empty_bounds(bounds):
    with pytest.raises(ValueError):
        pixel_to_point(bounds, (0, 0), -1 + 1j, 1 - 1j)


def test_escape_grid_matches_pointwise_evaluation():
    config = RenderConfig(width=8, height=6, limit=50, upper_left=-2 + 1j, lower_right=1 - 1j)
    grid = escape_grid(config)

    assert grid.shape == (8, 6)
    assert grid.dtype == np.int64
    for column in range(config.width):
        for row in range(config.height):
            point = pixel_to_point(config.bounds, (column, row), config.upper_left, config.lower_right)
            expected = escape_time(point, config.limit)
            assert grid[column, row] == (NO_ESCAPE if expected is None else expected)


def test_escape_grid_zero_limit_is_all_members():
    grid = escape_grid(RenderConfig(width=5, height=4, limit=0))
    np.testing.assert_array_equal(grid, np.full((5, 4), NO_ESCAPE))
