"""Escape-time evaluation and rendering of Mandelbrot regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableSequence, Optional

import numpy as np
import tensorflow as tf

from .plane import pixel_grid, pixel_to_point

# Squared radius of the escape disk. Any orbit value with modulus above 2
# diverges, so comparing the squared magnitude against 4 avoids a sqrt.
HORIZON = 4.0
ESCAPE_LIMIT = 255
MAX_INTENSITY = 255


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set."""

    width: int
    height: int
    upper_left: complex
    lower_right: complex
    limit: int = ESCAPE_LIMIT

    @property
    def bounds(self) -> tuple[int, int]:
        return self.width, self.height


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Count the iterations ``c`` needs to leave the radius-2 disk.

    Returns ``None`` when the orbit of ``c`` stays inside the disk for
    ``limit`` iterations, in which case ``c`` is assumed to be a member of
    the set.
    """

    z = 0j
    for i in range(limit):
        if z.real * z.real + z.imag * z.imag > HORIZON:
            return i
        z = z * z + c
    return None


def intensity(count: Optional[int], limit: int = ESCAPE_LIMIT, depth: int = MAX_INTENSITY) -> int:
    """Map an escape count onto a grayscale value in ``[0, depth]``.

    Members of the set are black. Escaping points fade from ``depth`` (escaped
    immediately) towards black as their count approaches ``limit``; with the
    default limit of 255 this is ``255 - count``.
    """

    if count is None:
        return 0
    return depth - count * depth // limit


def pixel_value(
    bounds: tuple[int, int],
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    limit: int = ESCAPE_LIMIT,
) -> int:
    """Grayscale value of a single pixel. Depends on nothing but its arguments."""

    point = pixel_to_point(bounds, pixel, upper_left, lower_right)
    return intensity(escape_time(point, limit), limit)


def row_bands(height: int, count: int) -> list[range]:
    """Split ``range(height)`` into at most ``count`` contiguous bands."""

    if height <= 0:
        return []
    count = max(1, min(count, height))
    rows_per_band = -(-height // count)
    return [range(top, min(top + rows_per_band, height)) for top in range(0, height, rows_per_band)]


def render_rows(
    buffer: MutableSequence[int],
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    rows: range,
    *,
    limit: int = ESCAPE_LIMIT,
) -> None:
    """Fill the given rows of ``buffer``, leaving every other row untouched."""

    width, height = bounds
    assert len(buffer) == width * height, (
        f"buffer holds {len(buffer)} bytes, expected {width}x{height}"
    )

    for row in rows:
        offset = row * width
        for col in range(width):
            buffer[offset + col] = pixel_value(bounds, (col, row), upper_left, lower_right, limit)


def render(
    buffer: MutableSequence[int],
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    *,
    limit: int = ESCAPE_LIMIT,
) -> None:
    """Render the viewport into ``buffer`` in row-major order, one byte per pixel."""

    render_rows(buffer, bounds, upper_left, lower_right, range(bounds[1]), limit=limit)


@tf.function
def _escape_step(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every orbit that has not escaped by one iteration."""

    norm = zr * zr + zi * zi
    horizon = tf.constant(HORIZON, dtype=norm.dtype)
    # NaN orbits never escape in the scalar loop, so they stay bounded here.
    bounded = tf.logical_or(norm <= horizon, tf.math.is_nan(norm))
    active = tf.logical_and(active, bounded)
    cross = zr * zi
    zr_new = zr * zr - zi * zi + cr
    zi_new = cross + cross + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    counts = counts + tf.cast(active, tf.int64)
    return zr, zi, counts, active


@tf.function
def _escape_run(
    cr: tf.Tensor,
    ci: tf.Tensor,
    limit: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Iterate all orbits with a TensorFlow while loop until none is active."""

    limit = tf.cast(limit, tf.int64)
    i = tf.constant(0, dtype=tf.int64)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    counts = tf.zeros_like(cr, tf.int64)
    active = tf.ones_like(cr, tf.bool)

    def cond(i, zr, zi, counts, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, zr, zi, counts, active):
        zr, zi, counts, active = _escape_step(zr, zi, cr, ci, counts, active)
        return i + 1, zr, zi, counts, active

    return tf.while_loop(cond, body, (i, zr, zi, counts, active))


def render_frame(params: RenderParameters, *, device: Optional[str] = None) -> np.ndarray:
    """Render every pixel at once and return the flat ``uint8`` buffer.

    Produces the same bytes as :func:`render` for the same parameters.
    """

    re, im = pixel_grid(params.bounds, params.upper_left, params.lower_right)
    limit = tf.constant(params.limit, dtype=tf.int64)

    with tf.device(device if device is not None else "/CPU:0"):
        re_tf = tf.convert_to_tensor(re, dtype=tf.float64)
        im_tf = tf.convert_to_tensor(im, dtype=tf.float64)
        CR, CI = tf.meshgrid(re_tf, im_tf)

        _, _, _, counts, active = _escape_run(CR, CI, limit)

        depth = tf.constant(MAX_INTENSITY, dtype=tf.int64)
        scaled = depth - counts * depth // tf.cast(params.limit, tf.int64)
        pixels = tf.where(active, tf.zeros_like(scaled), scaled)

    return pixels.numpy().astype(np.uint8).reshape(-1)
