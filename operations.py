"""
Number formatting and arithmetic for DeskCalc
Pure functions only: no calculator state lives here
"""
import math
from enum import Enum
from typing import NamedTuple, Optional

import config


class DomainError(Enum):
    DIVIDE_BY_ZERO = "division by zero"
    ZERO_RECIPROCAL = "reciprocal of zero"
    NEGATIVE_ROOT = "square root of a negative number"
    OUT_OF_RANGE = "result out of range"


class OpResult(NamedTuple):
    """Outcome of a binary operation"""
    value: float
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class UnaryResult(NamedTuple):
    """Outcome of a unary key (1/x, sqrt) already rendered for the display"""
    text: str
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ── Editing the typed number ───────────────────────────────────────────────────

def append_decimal(display: str) -> str:
    """Add the decimal point unless one is already there"""
    if config.DECIMAL_SEP in display or _exponent_at(display) >= 0:
        return display
    return display + config.DECIMAL_SEP


def append_digit(display: str, digit: str) -> str:
    """Append a digit, refusing once the significant-digit cap is reached"""
    if count_digits(display) >= config.MAX_SIG_DIGITS:
        return display
    return digit if display == "0" else display + digit


def backspace(display: str) -> str:
    if len(display) <= 1 or (len(display) == 2 and display.startswith("-")):
        return "0"
    out = display[:-1]
    if _exponent_at(out) >= 0:
        # never leave a dangling "E" or "E-"
        out = out.rstrip("+-").rstrip("Ee")
    return out or "0"


def negate_string(display: str) -> str:
    if display == "0":
        return "0"
    return display[1:] if display.startswith("-") else "-" + display


def count_digits(s: str) -> int:
    return sum(1 for ch in s if ch.isdigit())


def is_digit(token) -> bool:
    return isinstance(token, str) and len(token) == 1 and "0" <= token <= "9"


# ── Arithmetic ─────────────────────────────────────────────────────────────────

def compute(left: float, op: str, right: float) -> OpResult:
    """Apply a binary operator (+ - * / ^); unknown operators return left"""
    op = getattr(op, "value", op)
    if op == "+":
        return _checked(left + right)
    if op == "-":
        return _checked(left - right)
    if op == "*":
        return _checked(left * right)
    if op == "/":
        if abs(right) < config.ZERO_EPSILON:
            return OpResult(math.nan, DomainError.DIVIDE_BY_ZERO)
        return _checked(left / right)
    if op == "^":
        return _power(left, right)
    return OpResult(left)


def _power(left: float, right: float) -> OpResult:
    try:
        value = math.pow(left, right)
    except OverflowError:
        return OpResult(math.inf, DomainError.OUT_OF_RANGE)
    except ValueError:
        # negative base with a fractional exponent, or 0 to a negative power
        return OpResult(math.nan, DomainError.OUT_OF_RANGE)
    return _checked(value)


def _checked(value: float) -> OpResult:
    if math.isinf(value) or math.isnan(value):
        return OpResult(value, DomainError.OUT_OF_RANGE)
    return OpResult(value)


def percent_transform(acc: float, pending_op, b: float) -> float:
    """Percent key: a share of the accumulator for + and -, plain b/100 otherwise"""
    pending_op = getattr(pending_op, "value", pending_op)
    if pending_op in ("+", "-"):
        return acc * (b / 100.0)
    return b / 100.0


def reciprocal(x: float) -> UnaryResult:
    if abs(x) < config.ZERO_EPSILON:
        return UnaryResult(config.ERROR_TEXT, DomainError.ZERO_RECIPROCAL)
    return UnaryResult(format_number(1.0 / x))


def sqrt(x: float) -> UnaryResult:
    if x < 0:
        return UnaryResult(config.ERROR_TEXT, DomainError.NEGATIVE_ROOT)
    return UnaryResult(format_number(math.sqrt(x)))


def square(x: float) -> str:
    return format_number(x * x)


# ── Formatting ─────────────────────────────────────────────────────────────────

def format_number(x: float) -> str:
    """
    Render a number for the display.

    Fixed-point with thousands grouping when it fits in MAX_DISPLAY_CHARS,
    otherwise general notation rounded to MAX_SIG_DIGITS, uppercased.
    """
    if math.isnan(x) or math.isinf(x):
        return config.ERROR_TEXT
    if x == 0:
        x = 0.0  # no "-0"
    raw = repr(float(x))
    if needs_scientific(raw):
        return format(x, ".%dg" % config.MAX_SIG_DIGITS).upper()
    return _group(raw)


def format_user_typing(s: str) -> str:
    """Re-group a number still being typed; fraction digits are kept verbatim"""
    if not s:
        return "0"
    negative = s.startswith("-")
    t = _strip_grouping(s[1:] if negative else s)

    exp_at = _exponent_at(t)
    exponent = t[exp_at:] if exp_at >= 0 else ""
    if exponent:
        t = t[:exp_at]

    if config.DECIMAL_SEP in t:
        int_part, _, frac_part = t.partition(config.DECIMAL_SEP)
        tail = config.DECIMAL_SEP + frac_part
    else:
        int_part, tail = t, ""

    out = ("-" if negative else "") + add_thousands(int_part) + tail + exponent
    return out or "0"


def add_thousands(digits: str) -> str:
    """Insert THOUSANDS_SEP between every group of three digits, from the right"""
    chars = []
    count = 0
    for i in range(len(digits) - 1, -1, -1):
        chars.append(digits[i])
        count += 1
        if count == 3 and i > 0:
            chars.append(config.THOUSANDS_SEP)
            count = 0
    return "".join(reversed(chars))


def needs_scientific(raw: str) -> bool:
    """True when raw has an exponent or its grouped fixed form is too wide"""
    if "e" in raw or "E" in raw:
        return True
    int_part, frac = _split_raw(raw.lstrip("-"))
    total = len(add_thousands(int_part)) + (1 + len(frac) if frac else 0)
    return total > config.MAX_DISPLAY_CHARS


def _group(raw: str) -> str:
    negative = raw.startswith("-")
    int_part, frac = _split_raw(raw[1:] if negative else raw)
    out = ("-" if negative else "") + add_thousands(int_part)
    if frac:
        out += config.DECIMAL_SEP + frac
    return out


def _split_raw(raw: str):
    int_part, _, frac = raw.partition(".")
    return int_part, frac.rstrip("0")


def _strip_grouping(s: str) -> str:
    return s.replace(config.THOUSANDS_SEP, "").replace(config.NBSP, "")


def _exponent_at(s: str) -> int:
    """Index of the exponent marker in s, or -1"""
    return max(s.find("E"), s.find("e"))


# ── Parsing ────────────────────────────────────────────────────────────────────

def try_parse(s: str) -> Optional[float]:
    """Tolerant parse of display text; returns None when it is not a number"""
    if not s:
        return None
    t = _strip_grouping(s).replace(" ", "").replace(",", ".")
    if "_" in t or any(ch.isspace() for ch in t):
        return None
    try:
        value = float(t)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value
