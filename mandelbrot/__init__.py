"""Public API for Mandelbrot rendering utilities."""

from .image import to_image, write_image
from .parsing import parse_bounds, parse_complex, parse_pair
from .plane import pixel_grid, pixel_to_point
from .renderer import (
    ESCAPE_LIMIT,
    RenderParameters,
    escape_time,
    intensity,
    pixel_value,
    render,
    render_frame,
    render_rows,
    row_bands,
)

__all__ = [
    "ESCAPE_LIMIT",
    "RenderParameters",
    "escape_time",
    "intensity",
    "parse_bounds",
    "parse_complex",
    "parse_pair",
    "pixel_grid",
    "pixel_to_point",
    "pixel_value",
    "render",
    "render_frame",
    "render_rows",
    "row_bands",
    "to_image",
    "write_image",
]
