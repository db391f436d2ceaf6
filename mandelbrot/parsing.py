"""Parsing of the textual image dimensions and plane coordinates."""

from __future__ import annotations

from argparse import ArgumentTypeError
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def parse_pair(s: str, separator: str, kind: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Parse ``s`` as ``<left><separator><right>``.

    Both sides are converted with ``kind``. Returns ``None`` when the
    separator is missing or either side does not convert.
    """

    left, found, right = s.partition(separator)
    if not found:
        return None
    try:
        return kind(left), kind(right)
    except ValueError:
        return None


def _parse_dimension(s: str) -> int:
    # int() tolerates surrounding whitespace and signs, dimensions do not.
    if not s.isdigit():
        raise ValueError(f"invalid dimension: {s!r}")
    return int(s)


def _parse_component(s: str) -> float:
    # float() also accepts surrounding whitespace and digit separators.
    if s != s.strip() or "_" in s:
        raise ValueError(f"invalid coordinate: {s!r}")
    return float(s)


def parse_bounds(s: str) -> Optional[tuple[int, int]]:
    """Parse ``WIDTHxHEIGHT`` into a pair of ints."""

    return parse_pair(s, "x", _parse_dimension)


def parse_complex(s: str) -> Optional[complex]:
    """Parse ``RE,IM`` into a complex number."""

    pair = parse_pair(s, ",", _parse_component)
    if pair is None:
        return None
    re, im = pair
    return complex(re, im)


def bounds_arg(value: str) -> tuple[int, int]:
    bounds = parse_bounds(value)
    if bounds is None:
        raise ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}")
    return bounds


def complex_arg(value: str) -> complex:
    point = parse_complex(value)
    if point is None:
        raise ArgumentTypeError(f"expected RE,IM, got {value!r}")
    return point
