import os
import sys
import time
import warnings
from dataclasses import dataclass
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from argparse import ArgumentParser

from mandelbrot import ESCAPE_LIMIT, RenderParameters, render, render_frame, write_image
from mandelbrot.parsing import bounds_arg, complex_arg


@dataclass
class OutputConfig:
    image_path: Path
    image_format: str


def build_parser():
    parser = ArgumentParser(
        description='Render a grayscale image of the Mandelbrot set.',
        epilog='Corners starting with a minus sign go after "--", e.g. %(prog)s mandel.png 1000x750 -- -1.20,0.35 -1,0.20',
    )

    parser.add_argument('file', metavar='FILE',
                        help='destination image file')

    parser.add_argument('bounds', type=bounds_arg, metavar='PIXELS',
                        help='image size in pixels, as WIDTHxHEIGHT')

    parser.add_argument('upper_left', type=complex_arg, metavar='UPPERLEFT',
                        help='upper-left corner of the viewport, as RE,IM')

    parser.add_argument('lower_right', type=complex_arg, metavar='LOWERRIGHT',
                        help='lower-right corner of the viewport, as RE,IM')

    parser.add_argument('--limit', type=int,
                        dest='limit', help='maximum number of iterations before a point counts as a member of the set',
                        metavar='LIMIT', default=ESCAPE_LIMIT)

    parser.add_argument('--backend', choices=['tensor', 'python'], default='tensor',
                        help='"tensor" evaluates all pixels at once with TensorFlow; "python" runs the scalar reference loop.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for the image. Can be any extension supported by Pillow. Default: taken from FILE, else "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('--gpu', action='store_true',
                        help='Run the tensor backend on the first visible GPU when one is available.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    output_path = Path(opt.file).expanduser()
    if str(opt.file).endswith(tuple(filter(None, {os.sep, os.altsep}))):
        parser.error("FILE must be a file path, not a directory.")
    if output_path.exists() and output_path.is_dir():
        parser.error("FILE must point to a file, not a directory.")

    explicit_format = (opt.format or "").lower().lstrip(".")
    suffix = output_path.suffix.lower().lstrip(".")

    if explicit_format:
        if suffix and suffix != explicit_format:
            parser.error(f"FILE extension .{suffix} does not match --format {explicit_format}.")
        image_format = explicit_format
    else:
        image_format = suffix or "png"

    if not suffix:
        output_path = output_path.with_suffix(f".{image_format}")

    return OutputConfig(image_path=output_path.resolve(), image_format=image_format)


def select_device(use_gpu: bool) -> str:
    if not use_gpu:
        return '/CPU:0'
    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    width, height = opt.bounds
    if width <= 0 or height <= 0:
        parser.error(f"image dimensions must be positive, got {width}x{height}.")
    if opt.limit <= 0:
        parser.error("--limit must be a positive integer.")

    output_config = resolve_output_config(opt, parser)

    log("TensorFlow version: %s" % tf.__version__)

    params = RenderParameters(
        width=width,
        height=height,
        upper_left=opt.upper_left,
        lower_right=opt.lower_right,
        limit=opt.limit,
    )

    start = time.perf_counter()
    if opt.backend == 'tensor':
        device = select_device(opt.gpu)
        log("Rendering %dx%d on %s" % (width, height, device))
        pixels = render_frame(params, device=device)
    else:
        log("Rendering %dx%d with the scalar loop" % (width, height))
        pixels = bytearray(width * height)
        render(pixels, params.bounds, params.upper_left, params.lower_right, limit=params.limit)
    log("Rendered in %.3fs" % (time.perf_counter() - start))

    write_image(pixels, params.bounds, output_config.image_path, output_config.image_format)
    log("Wrote %s" % output_config.image_path)


if __name__ == '__main__':
    main()
