from argparse import ArgumentTypeError

import pytest

from mandelbrot.parsing import bounds_arg, complex_arg, parse_bounds, parse_complex, parse_pair


def test_parse_pair():
    assert parse_pair("", ",", int) is None
    assert parse_pair("10,", ",", int) is None
    assert parse_pair(",10", ",", int) is None
    assert parse_pair("10,20", ",", int) == (10, 20)
    assert parse_pair("10,20xy", ",", int) is None
    assert parse_pair("0.5x", "x", float) is None
    assert parse_pair("0.5x1.5", "x", float) == (0.5, 1.5)


def test_parse_pair_splits_at_first_separator():
    assert parse_pair("1,2,3", ",", int) is None
    assert parse_pair("1,2,3", ",", str) == ("1", "2,3")


def test_parse_complex():
    assert parse_complex("1.25,-0.0625") == complex(1.25, -0.0625)
    assert parse_complex("-1.20,0.35") == complex(-1.2, 0.35)
    assert parse_complex(",-0.0625") is None
    assert parse_complex("1.25") is None
    assert parse_complex("a,b") is None


def test_parse_complex_is_strict():
    assert parse_complex(" 1.0, 2.0 ") is None
    assert parse_complex("1.0 ,2.0") is None
    assert parse_complex("1_0,2") is None
    assert parse_complex("1e3,+.5") == complex(1000.0, 0.5)


def test_parse_bounds():
    assert parse_bounds("1000x750") == (1000, 750)
    assert parse_bounds("4x3") == (4, 3)
    assert parse_bounds("1000,750") is None
    assert parse_bounds("x750") is None
    assert parse_bounds("-4x3") is None
    assert parse_bounds("4.5x3") is None


def test_argument_adapters():
    assert bounds_arg("8x6") == (8, 6)
    assert complex_arg("-1,0.2") == complex(-1.0, 0.2)
    with pytest.raises(ArgumentTypeError):
        bounds_arg("8by6")
    with pytest.raises(ArgumentTypeError):
        complex_arg("1;2")
