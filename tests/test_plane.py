import math

import numpy as np
import pytest

from mandelbrot.plane import pixel_grid, pixel_to_point


def test_pixel_to_point():
    point = pixel_to_point((100, 200), (25, 175), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert point == complex(-0.5, -0.75)


def test_origin_pixel_is_upper_left():
    upper_left = complex(-2.25, 1.5)
    assert pixel_to_point((640, 480), (0, 0), upper_left, complex(0.75, -1.5)) == upper_left


def test_last_pixel_stops_one_step_short_of_lower_right():
    bounds = (4, 3)
    upper_left, lower_right = complex(-1.0, 1.0), complex(1.0, -1.0)
    point = pixel_to_point(bounds, (3, 2), upper_left, lower_right)
    assert point.real == pytest.approx(lower_right.real - 2.0 / 4)
    assert point.imag == pytest.approx(lower_right.imag + 2.0 / 3)


def test_out_of_range_pixel_extrapolates():
    point = pixel_to_point((10, 10), (20, 20), complex(0.0, 0.0), complex(1.0, -1.0))
    assert point == complex(2.0, -2.0)


def test_inverted_viewport_mirrors():
    point = pixel_to_point((4, 4), (1, 1), complex(1.0, -1.0), complex(-1.0, 1.0))
    assert point == complex(0.5, -0.5)


def test_zero_bounds_give_non_finite_values():
    point = pixel_to_point((0, 0), (1, 0), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert math.isinf(point.real)
    assert math.isnan(point.imag)


def test_pixel_grid_matches_pixel_to_point():
    bounds = (7, 5)
    upper_left, lower_right = complex(-1.2, 0.35), complex(-1.0, 0.2)
    re, im = pixel_grid(bounds, upper_left, lower_right)

    assert re.shape == (7,)
    assert im.shape == (5,)
    for row in range(bounds[1]):
        for col in range(bounds[0]):
            point = pixel_to_point(bounds, (col, row), upper_left, lower_right)
            assert re[col] == point.real
            assert im[row] == point.imag


def test_pixel_grid_dtype():
    re, im = pixel_grid((3, 2), complex(-2.0, 1.0), complex(1.0, -1.0))
    assert re.dtype == np.float64
    assert im.dtype == np.float64
