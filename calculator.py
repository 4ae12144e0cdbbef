"""
Calculator Engine for DeskCalc
Desk-calculator state machine: one token in, updated display out
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

import config
import operations as ops
from tokens import CLEAR_KEYS, OPERATORS, Key, parse_token

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    accumulator: float = 0.0
    display: str = "0"
    equation_top: Optional[str] = None
    error: bool = False
    entering: bool = False
    pending_op: Optional[Key] = None
    last_op: Optional[Key] = None
    last_operand: float = 0.0
    memory: float = 0.0


class Calculator:
    def __init__(self):
        self.state = SessionState()
        self._handlers = {
            Key.DECIMAL: self.add_decimal,
            Key.EQUALS: self.evaluate,
            Key.CLEAR: self.clear,
            Key.CLEAR_ENTRY: self.clear_entry,
            Key.BACKSPACE: self.backspace,
            Key.NEGATE: self.negate,
            Key.PERCENT: self.percent,
            Key.RECIPROCAL: self.reciprocal,
            Key.SQUARE: self.square,
            Key.SQRT: self.sqrt,
            Key.MEMORY_CLEAR: self.clear_memory,
            Key.MEMORY_RECALL: self.recall_memory,
            Key.MEMORY_ADD: self.add_to_memory,
            Key.MEMORY_SUBTRACT: self.subtract_from_memory,
        }
        for op in OPERATORS:
            self._handlers[op] = lambda op=op: self.add_operator(op)
        for key in Key:
            if key.is_digit:
                self._handlers[key] = lambda key=key: self.add_digit(key.value)
        missing = set(Key) - set(self._handlers)
        if missing:
            raise RuntimeError("unhandled keys: %s" % sorted(k.value for k in missing))

    # ── Input ──────────────────────────────────────────────────────────────────

    def process_token(self, token):
        """Consume one token (Key or raw string); unknown tokens are ignored"""
        key = parse_token(token)
        if key is None:
            logger.debug("Ignoring unknown token %r", token)
            return
        if self.state.error and key not in CLEAR_KEYS:
            return
        self._handlers[key]()

    def feed(self, tokens):
        """Process an iterable of tokens in order"""
        for token in tokens:
            self.process_token(token)
        return self

    def add_digit(self, digit):
        """Type a digit into the current operand"""
        s = self.state
        self._start_if_needed()
        s.display = ops.format_user_typing(ops.append_digit(s.display, digit))

    def add_decimal(self):
        s = self.state
        self._start_if_needed()
        s.display = ops.format_user_typing(ops.append_decimal(s.display))

    def add_operator(self, op):
        """Make op the pending operator, first resolving the previous one"""
        s = self.state
        if s.pending_op is not None and s.entering:
            if not self._apply_pending():
                return
        elif s.pending_op is None:
            value = self._display_value()
            if value is not None:
                s.accumulator = value
        s.pending_op = op
        s.entering = False
        s.equation_top = None

    def evaluate(self):
        """The = key, including repeat of the last operation"""
        s = self.state
        if s.pending_op is not None:
            if s.entering:
                right = self._display_value()
                if right is None:
                    return
            else:
                right = s.accumulator
            s.last_op = s.pending_op
            s.last_operand = right
            s.pending_op = None
        elif s.last_op is None:
            return

        left = s.accumulator
        result = ops.compute(left, s.last_op, s.last_operand)
        s.entering = False
        if not result.ok:
            self._set_error(result.error)
            return
        s.accumulator = result.value
        s.display = ops.format_number(s.accumulator)
        s.equation_top = "%s %s %s =" % (
            ops.format_number(left), s.last_op.value, ops.format_number(s.last_operand))

    def clear(self):
        """C: back to the start-up state"""
        self.state = SessionState()

    def clear_entry(self):
        s = self.state
        s.display = "0"
        s.entering = True
        s.error = False

    def backspace(self):
        s = self.state
        if s.entering:
            s.display = ops.backspace(s.display)
        s.display = ops.format_user_typing(s.display)

    def negate(self):
        s = self.state
        s.display = ops.format_user_typing(ops.negate_string(s.display))

    def percent(self):
        s = self.state
        if s.pending_op is None:
            return
        b = self._display_value()
        if b is None:
            return
        value = ops.percent_transform(s.accumulator, s.pending_op, b)
        if not math.isfinite(value):
            self._set_error(ops.DomainError.OUT_OF_RANGE)
            return
        s.display = ops.format_number(value)
        s.entering = True
        s.equation_top = None

    # ── Unary keys ─────────────────────────────────────────────────────────────

    def reciprocal(self):
        self._unary(ops.reciprocal)

    def sqrt(self):
        self._unary(ops.sqrt)

    def square(self):
        self._unary(lambda x: ops.UnaryResult(ops.square(x)))

    def _unary(self, fn):
        s = self.state
        x = self._display_value()
        if x is not None:
            result = fn(x)
            if result.ok and result.text == config.ERROR_TEXT:
                result = ops.UnaryResult(result.text, ops.DomainError.OUT_OF_RANGE)
            if result.ok:
                s.display = result.text
            else:
                self._set_error(result.error)
        s.entering = True
        s.equation_top = None

    # ── Memory ─────────────────────────────────────────────────────────────────

    def add_to_memory(self):
        """M+"""
        value = self._display_value()
        if value is not None:
            self._store_memory(self.state.memory + value)

    def subtract_from_memory(self):
        """M-"""
        value = self._display_value()
        if value is not None:
            self._store_memory(self.state.memory - value)

    def _store_memory(self, value):
        if not math.isfinite(value):
            self._set_error(ops.DomainError.OUT_OF_RANGE)
            return
        self.state.memory = value

    def recall_memory(self):
        """MR"""
        self.state.display = ops.format_number(self.state.memory)
        self.state.entering = True

    def clear_memory(self):
        """MC"""
        self.state.memory = 0.0

    # ── Queries ────────────────────────────────────────────────────────────────

    def get_display(self):
        return config.ERROR_TEXT if self.state.error else self.state.display

    def get_top_line(self):
        s = self.state
        if s.error:
            return ""
        if s.equation_top:
            return s.equation_top
        if s.pending_op is not None:
            return "%s %s" % (ops.format_number(s.accumulator), s.pending_op.value)
        return ""

    def has_memory(self):
        return abs(self.state.memory) > 0

    def snapshot(self):
        """The three display queries plus the error flag, as a dict"""
        return {
            'display': self.get_display(),
            'top_line': self.get_top_line(),
            'has_memory': self.has_memory(),
            'error': self.state.error,
        }

    # ── Internals ──────────────────────────────────────────────────────────────

    def _start_if_needed(self):
        s = self.state
        if not s.entering:
            s.display = "0"
            s.entering = True
            s.equation_top = None

    def _apply_pending(self):
        s = self.state
        right = self._display_value()
        if right is None:
            return False
        result = ops.compute(s.accumulator, s.pending_op, right)
        if not result.ok:
            self._set_error(result.error)
            return False
        s.accumulator = result.value
        s.display = ops.format_number(s.accumulator)
        s.entering = False
        return True

    def _display_value(self):
        return ops.try_parse(self.state.display)

    def _set_error(self, kind):
        logger.info("Calculation error: %s", kind.value)
        self.state.display = config.ERROR_TEXT
        self.state.error = True
