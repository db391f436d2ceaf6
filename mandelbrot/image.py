"""Encoding of rendered pixel buffers as grayscale image files."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import PIL.Image


def _pil_format_name(ext: str) -> str:
    upper = ext.upper().lstrip(".")
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def to_image(buffer: Sequence[int], bounds: tuple[int, int]) -> PIL.Image.Image:
    """Wrap a row-major byte buffer as an 8-bit single-channel image."""

    width, height = bounds
    pixels = np.frombuffer(bytes(buffer), dtype=np.uint8).reshape(height, width)
    return PIL.Image.fromarray(pixels)


def write_image(
    buffer: Sequence[int],
    bounds: tuple[int, int],
    output_path: Path,
    image_format: str = "png",
) -> None:
    """Write ``buffer`` to ``output_path`` using the provided format."""

    image = to_image(buffer, bounds)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=_pil_format_name(image_format))
