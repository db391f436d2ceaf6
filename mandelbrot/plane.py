"""Mapping between output pixels and points of the complex plane."""

from __future__ import annotations

import numpy as np


def pixel_to_point(
    bounds: tuple[int, int],
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the point of the plane sampled by ``pixel``.

    ``bounds`` is the ``(width, height)`` of the image and ``pixel`` its
    ``(column, row)`` coordinate. Columns grow towards ``lower_right.real``
    and rows grow towards ``lower_right.imag``, so the imaginary axis points
    up. Each pixel samples its upper-left corner: pixel ``(0, 0)`` maps to
    ``upper_left`` exactly and the last pixel stops one step short of
    ``lower_right``.

    Nothing is validated. A zero bound yields infinities or NaNs and a pixel
    outside the image extrapolates past the viewport.
    """

    width = np.float64(lower_right.real) - np.float64(upper_left.real)
    height = np.float64(upper_left.imag) - np.float64(lower_right.imag)

    with np.errstate(divide="ignore", invalid="ignore"):
        re = np.float64(upper_left.real) + np.float64(pixel[0]) * width / np.float64(bounds[0])
        im = np.float64(upper_left.imag) - np.float64(pixel[1]) * height / np.float64(bounds[1])
    return complex(float(re), float(im))


def pixel_grid(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> tuple[np.ndarray, np.ndarray]:
    """Sample every column and row of the image at once.

    Returns the real axis (one value per column) and the imaginary axis (one
    value per row), each computed exactly as :func:`pixel_to_point` does.
    """

    width = np.float64(lower_right.real) - np.float64(upper_left.real)
    height = np.float64(upper_left.imag) - np.float64(lower_right.imag)
    cols = np.arange(bounds[0], dtype=np.float64)
    rows = np.arange(bounds[1], dtype=np.float64)

    with np.errstate(divide="ignore", invalid="ignore"):
        re = np.float64(upper_left.real) + cols * width / np.float64(bounds[0])
        im = np.float64(upper_left.imag) - rows * height / np.float64(bounds[1])
    return re, im
