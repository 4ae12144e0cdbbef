"""
Tests for number formatting and arithmetic
"""
import math

import pytest

import config
import operations as ops
from operations import DomainError


# ── Editing ──────────────────────────────────────────────────────────────────

def test_append_decimal_is_idempotent():
    assert ops.append_decimal("12") == "12."
    assert ops.append_decimal("12.") == "12."
    assert ops.append_decimal("1.5") == "1.5"


def test_append_digit_replaces_lone_zero():
    assert ops.append_digit("0", "7") == "7"
    assert ops.append_digit("7", "0") == "70"
    assert ops.append_digit("0.", "5") == "0.5"


def test_append_digit_stops_at_sixteen_digits():
    display = "0"
    for _ in range(20):
        display = ops.append_digit(display, "9")
    assert ops.count_digits(display) == config.MAX_SIG_DIGITS
    assert ops.append_digit(display, "1") == display


def test_append_digit_cap_ignores_separators_and_sign():
    display = "-1 234 567 890 123.456"
    assert ops.count_digits(display) == 16
    assert ops.append_digit(display, "7") == display


@pytest.mark.parametrize("display, expected", [
    ("5", "0"),
    ("-5", "0"),
    ("12", "1"),
    ("1.", "1"),
    ("-12", "-1"),
    ("", "0"),
])
def test_backspace(display, expected):
    assert ops.backspace(display) == expected


@pytest.mark.parametrize("s", ["5", "-5", "1 234.5", "0.25", "-0.001"])
def test_negate_string_is_its_own_inverse(s):
    assert ops.negate_string(ops.negate_string(s)) == s


def test_negate_string_leaves_zero_alone():
    assert ops.negate_string("0") == "0"
    assert ops.negate_string("12") == "-12"
    assert ops.negate_string("-12") == "12"


@pytest.mark.parametrize("token, expected", [
    ("0", True), ("9", True), ("10", False), ("", False), ("a", False), (".", False),
])
def test_is_digit(token, expected):
    assert ops.is_digit(token) is expected


# ── Arithmetic ───────────────────────────────────────────────────────────────

def test_compute_basic_operators():
    assert ops.compute(2, "+", 3).value == 5
    assert ops.compute(2, "-", 3).value == -1
    assert ops.compute(2, "*", 3).value == 6
    assert ops.compute(3, "/", 2).value == 1.5
    assert ops.compute(6, "^", 2).value == 36
    assert ops.compute(6, "^", 2).ok


def test_compute_divide_by_zero():
    result = ops.compute(10, "/", 0)
    assert result.error is DomainError.DIVIDE_BY_ZERO
    assert not result.ok
    assert math.isnan(result.value)


def test_compute_treats_tiny_divisor_as_zero():
    assert ops.compute(1, "/", 1e-16).error is DomainError.DIVIDE_BY_ZERO
    assert ops.compute(1, "/", 1e-14).ok


def test_compute_unknown_operator_returns_left():
    result = ops.compute(7, "?", 3)
    assert result.value == 7
    assert result.ok


def test_compute_overflow_is_out_of_range():
    assert ops.compute(1e308, "*", 10).error is DomainError.OUT_OF_RANGE
    assert ops.compute(10, "^", 400).error is DomainError.OUT_OF_RANGE
    assert ops.compute(-8, "^", 0.5).error is DomainError.OUT_OF_RANGE


def test_percent_transform():
    assert ops.percent_transform(100, "+", 50) == 50
    assert ops.percent_transform(200, "-", 10) == 20
    assert ops.percent_transform(100, "*", 50) == 0.5
    assert ops.percent_transform(100, "/", 50) == 0.5
    assert ops.percent_transform(100, None, 50) == 0.5


def test_unary_operations():
    assert ops.reciprocal(4).text == "0.25"
    assert ops.reciprocal(0).error is DomainError.ZERO_RECIPROCAL
    assert ops.sqrt(16).text == "4"
    assert ops.sqrt(-1).error is DomainError.NEGATIVE_ROOT
    assert ops.sqrt(-1).text == config.ERROR_TEXT
    assert ops.square(12) == "144"
    assert ops.square(-3) == "9"


# ── Formatting ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize("digits, expected", [
    ("", ""),
    ("1", "1"),
    ("123", "123"),
    ("1234", "1 234"),
    ("1234567", "1 234 567"),
])
def test_add_thousands(digits, expected):
    assert ops.add_thousands(digits) == expected


@pytest.mark.parametrize("x, expected", [
    (0, "0"),
    (-0.0, "0"),
    (168, "168"),
    (1234567, "1 234 567"),
    (-1234.5, "-1 234.5"),
    (0.25, "0.25"),
    (1 / 3, "0.3333333333333333"),
    (12345678901234, "12345678901234"),
    (1e20, "1E+20"),
    (1e-5, "1E-05"),
])
def test_format_number(x, expected):
    assert ops.format_number(x) == expected


def test_format_number_non_finite_is_error_marker():
    assert ops.format_number(math.nan) == "Chyba"
    assert ops.format_number(math.inf) == "Chyba"
    assert ops.format_number(-math.inf) == "Chyba"


@pytest.mark.parametrize("x", [1234.5678, -98765.4321, 0.001, 42.0, 999999999999.5])
def test_format_number_round_trips(x):
    text = ops.format_number(x)
    assert "E" not in text
    assert ops.try_parse(text) == x


def test_needs_scientific():
    assert ops.needs_scientific("1e+20")
    assert not ops.needs_scientific("123.5")
    assert not ops.needs_scientific("-123456789012.0")
    assert ops.needs_scientific("1234567890123.45")


@pytest.mark.parametrize("s, expected", [
    ("", "0"),
    ("1234", "1 234"),
    ("1 2345", "12 345"),
    ("-1234", "-1 234"),
    ("1234.50", "1 234.50"),
    ("1234.", "1 234."),
    ("0.000", "0.000"),
    ("1E+20", "1E+20"),
    ("-1E+20", "-1E+20"),
    ("1234.5E-05", "1 234.5E-05"),
])
def test_format_user_typing(s, expected):
    assert ops.format_user_typing(s) == expected


# ── Parsing ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("s, expected", [
    ("168", 168.0),
    ("1 234.5", 1234.5),
    ("1\u00a0234.5", 1234.5),
    ("1 234,5", 1234.5),
    ("-0.25", -0.25),
    ("1E+20", 1e20),
])
def test_try_parse(s, expected):
    assert ops.try_parse(s) == expected


@pytest.mark.parametrize("s", [
    "", "Chyba", "abc", "1.2.3", "nan", "inf", "infinity", "1_000", "1\t", "\n1",
])
def test_try_parse_rejects(s):
    assert ops.try_parse(s) is None


@pytest.mark.parametrize("display, expected", [
    ("1E-05", "1E-0"),
    ("1E-0", "1"),
    ("-1E+2", "-1"),
    ("2.5E+1", "2.5"),
])
def test_backspace_never_leaves_a_bare_exponent(display, expected):
    assert ops.backspace(display) == expected
    assert ops.try_parse(ops.backspace(display)) is not None


def test_append_decimal_ignores_scientific_display():
    assert ops.append_decimal("1E-05") == "1E-05"
