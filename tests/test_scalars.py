"""Tests for scalar rendering and strict parsing."""

import math

import pytest

from vdfcodec.scalars import ScalarKind, parse_scalar, render_scalar


# ---------------------------------------------------------------------------
# render_scalar
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "kind, value, expected",
    [
        (ScalarKind.BOOL, True, "1"),
        (ScalarKind.BOOL, False, "0"),
        (ScalarKind.I8, -128, "-128"),
        (ScalarKind.U64, 2**64 - 1, "18446744073709551615"),
        (ScalarKind.F64, 420.1337, "420.1337"),
        (ScalarKind.F64, 3, "3.0"),
        (ScalarKind.F32, 0.3, "0.3"),
        (ScalarKind.CHAR, "x", "x"),
        (ScalarKind.STR, "", ""),
        (ScalarKind.STR, "sample text", "sample text"),
    ],
)
def test_render(kind, value, expected):
    assert render_scalar(kind, value) == expected

def test_render_float_round_trips_exactly():
    value = 0.1 + 0.2
    assert float(render_scalar(ScalarKind.F64, value)) == value

@pytest.mark.parametrize(
    "kind, value",
    [
        (ScalarKind.U8, 256),
        (ScalarKind.U8, -1),
        (ScalarKind.I16, 2**15),
        (ScalarKind.I64, True),
        (ScalarKind.I32, "5"),
        (ScalarKind.BOOL, 1),
        (ScalarKind.F32, 1e39),
        (ScalarKind.F64, "1.5"),
        (ScalarKind.CHAR, "ab"),
        (ScalarKind.CHAR, ""),
        (ScalarKind.STR, 5),
    ],
)
def test_render_rejects_values_that_do_not_fit(kind, value):
    with pytest.raises(ValueError):
        render_scalar(kind, value)


# ---------------------------------------------------------------------------
# parse_scalar
# ---------------------------------------------------------------------------

def test_parse_bool():
    assert parse_scalar(ScalarKind.BOOL, "1") is True
    assert parse_scalar(ScalarKind.BOOL, "0") is False

@pytest.mark.parametrize("text", ["yes", "true", "", " 1", "01", "2"])
def test_parse_bool_is_strict(text):
    with pytest.raises(ValueError):
        parse_scalar(ScalarKind.BOOL, text)

def test_parse_integers():
    assert parse_scalar(ScalarKind.I8, "-128") == -128
    assert parse_scalar(ScalarKind.U8, "+255") == 255
    assert parse_scalar(ScalarKind.U64, "18446744073709551615") == 2**64 - 1

@pytest.mark.parametrize(
    "kind, text",
    [
        (ScalarKind.U8, "256"),
        (ScalarKind.U8, "-1"),
        (ScalarKind.I8, "128"),
        (ScalarKind.I64, "9223372036854775808"),
        (ScalarKind.I32, "1_000"),
        (ScalarKind.I32, " 7"),
        (ScalarKind.I32, "1.0"),
        (ScalarKind.I32, "abc"),
        (ScalarKind.I32, ""),
    ],
)
def test_parse_integer_failures(kind, text):
    with pytest.raises(ValueError):
        parse_scalar(kind, text)

def test_parse_floats():
    assert parse_scalar(ScalarKind.F64, "420.1337") == 420.1337
    assert parse_scalar(ScalarKind.F64, "1e3") == 1000.0
    assert parse_scalar(ScalarKind.F64, ".5") == 0.5
    assert parse_scalar(ScalarKind.F64, "-7") == -7.0
    assert parse_scalar(ScalarKind.F32, "inf") == math.inf
    assert math.isnan(parse_scalar(ScalarKind.F64, "NaN"))

@pytest.mark.parametrize("text", ["", "1.2.3", "0x10", "1_0.5", "one", "1e"])
def test_parse_float_failures(text):
    with pytest.raises(ValueError):
        parse_scalar(ScalarKind.F64, text)

def test_parse_f32_overflow():
    with pytest.raises(ValueError, match="f32"):
        parse_scalar(ScalarKind.F32, "1e39")
    assert parse_scalar(ScalarKind.F64, "1e39") == 1e39

def test_parse_char():
    assert parse_scalar(ScalarKind.CHAR, "é") == "é"
    with pytest.raises(ValueError):
        parse_scalar(ScalarKind.CHAR, "ab")

def test_parse_str_is_verbatim():
    assert parse_scalar(ScalarKind.STR, " padded ") == " padded "
