"""
Input keys for DeskCalc
Closed set of tokens the calculator understands, plus keyboard mapping
"""
from enum import Enum


class Key(str, Enum):
    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    DECIMAL = "."
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    EQUALS = "="
    CLEAR = "C"
    CLEAR_ENTRY = "CE"
    BACKSPACE = "BS"
    NEGATE = "+/-"
    PERCENT = "%"
    RECIPROCAL = "1/x"
    SQUARE = "x2"
    SQRT = "sqrt"
    MEMORY_CLEAR = "MC"
    MEMORY_RECALL = "MR"
    MEMORY_ADD = "M+"
    MEMORY_SUBTRACT = "M-"

    @property
    def is_digit(self):
        return self.value.isdigit()

    @property
    def is_operator(self):
        return self in OPERATORS


OPERATORS = frozenset({Key.ADD, Key.SUBTRACT, Key.MULTIPLY, Key.DIVIDE, Key.POWER})
CLEAR_KEYS = frozenset({Key.CLEAR, Key.CLEAR_ENTRY})

_BY_TEXT = {k.value: k for k in Key}


def parse_token(text):
    """Map a raw token string onto a Key, or None if it is not one"""
    if isinstance(text, Key):
        return text
    return _BY_TEXT.get(text)


# Tk keysyms that do not arrive as printable characters
_KEYSYMS = {
    "Return": Key.EQUALS,
    "KP_Enter": Key.EQUALS,
    "BackSpace": Key.BACKSPACE,
    "Delete": Key.CLEAR_ENTRY,
    "Escape": Key.CLEAR,
    "F9": Key.NEGATE,
    "KP_Add": Key.ADD,
    "KP_Subtract": Key.SUBTRACT,
    "KP_Multiply": Key.MULTIPLY,
    "KP_Divide": Key.DIVIDE,
    "KP_Decimal": Key.DECIMAL,
}

# Printable characters typed on the keyboard
_CHARS = {
    "+": Key.ADD,
    "-": Key.SUBTRACT,
    "*": Key.MULTIPLY,
    "/": Key.DIVIDE,
    "^": Key.POWER,
    "%": Key.PERCENT,
    "=": Key.EQUALS,
    ".": Key.DECIMAL,
    ",": Key.DECIMAL,
}


def key_from_event(keysym, char=""):
    """Translate a keyboard event (keysym + typed char) into a Key or None"""
    if keysym in _KEYSYMS:
        return _KEYSYMS[keysym]
    if keysym.startswith("KP_") and keysym[3:].isdigit():
        return _BY_TEXT[keysym[3:]]
    if len(char) == 1 and "0" <= char <= "9":
        return _BY_TEXT[char]
    return _CHARS.get(char)
