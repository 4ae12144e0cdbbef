"""
Tests for token parsing and keyboard mapping
"""
import pytest

from tokens import OPERATORS, Key, key_from_event, parse_token


def test_parse_token():
    assert parse_token("x2") is Key.SQUARE
    assert parse_token("+/-") is Key.NEGATE
    assert parse_token("7") is Key.SEVEN
    assert parse_token(Key.MEMORY_ADD) is Key.MEMORY_ADD
    assert parse_token("foo") is None
    assert parse_token("") is None


def test_vocabulary_is_complete():
    expected = set("0123456789") | {
        ".", "+", "-", "*", "/", "^", "=", "C", "CE", "BS", "+/-", "%",
        "1/x", "x2", "sqrt", "MC", "MR", "M+", "M-",
    }
    assert {k.value for k in Key} == expected


def test_key_properties():
    assert Key.FIVE.is_digit
    assert not Key.DECIMAL.is_digit
    assert Key.POWER.is_operator
    assert not Key.EQUALS.is_operator
    assert len(OPERATORS) == 5


@pytest.mark.parametrize("keysym, char, expected", [
    ("Return", "\r", Key.EQUALS),
    ("KP_Enter", "\r", Key.EQUALS),
    ("BackSpace", "\b", Key.BACKSPACE),
    ("Delete", "\x7f", Key.CLEAR_ENTRY),
    ("Escape", "\x1b", Key.CLEAR),
    ("F9", "", Key.NEGATE),
    ("KP_7", "7", Key.SEVEN),
    ("KP_Add", "+", Key.ADD),
    ("3", "3", Key.THREE),
    ("comma", ",", Key.DECIMAL),
    ("period", ".", Key.DECIMAL),
    ("asciicircum", "^", Key.POWER),
    ("percent", "%", Key.PERCENT),
    ("equal", "=", Key.EQUALS),
    ("slash", "/", Key.DIVIDE),
])
def test_key_from_event(keysym, char, expected):
    assert key_from_event(keysym, char) is expected


@pytest.mark.parametrize("keysym, char", [("a", "a"), ("Shift_L", ""), ("F1", "")])
def test_key_from_event_ignores_other_keys(keysym, char):
    assert key_from_event(keysym, char) is None
