import numpy as np
import PIL.Image

from mandelbrot.image import to_image, write_image


def test_to_image_layout():
    buffer = bytearray(range(6))
    image = to_image(buffer, (3, 2))
    assert image.mode == "L"
    assert image.size == (3, 2)
    assert image.getpixel((0, 0)) == 0
    assert image.getpixel((2, 0)) == 2
    assert image.getpixel((0, 1)) == 3
    assert image.getpixel((2, 1)) == 5


def test_write_image_png(tmp_path):
    buffer = np.arange(12, dtype=np.uint8) * 20
    output = tmp_path / "nested" / "out.png"
    write_image(buffer, (4, 3), output)

    with PIL.Image.open(output) as image:
        assert image.format == "PNG"
        assert image.mode == "L"
        assert image.tobytes() == buffer.tobytes()


def test_write_image_format_aliases(tmp_path):
    output = tmp_path / "out.tif"
    write_image(bytearray(4), (2, 2), output, "tif")

    with PIL.Image.open(output) as image:
        assert image.format == "TIFF"
