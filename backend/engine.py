import logging
import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional, Union

from backend.signals import Signal

logger = logging.getLogger(__name__)

# Longest text the display can hold before it overflows into an error.
MAX_DISPLAY_LENGTH = 15

DIGITS = "0123456789"


class OperatorError(ValueError):
    pass


class ErrorKind(Enum):
    """Error states and the marker each one puts on the display."""

    OUT_OF_BOUNDS = "Error: OB"
    DIVIDE_BY_ZERO = "Error: DIV 0"
    NEGATIVE_SQUARE_ROOT = "Error: √-"
    INFINITY = "Error: Inf"


class Operation(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    SQRT = "sqrt"
    SQUARE = "square"
    PERCENT = "percent"
    CALCULATE = "calculate"

    @property
    def is_binary(self) -> bool:
        return self in BINARY_OPERATIONS

    @property
    def is_unary(self) -> bool:
        return self in UNARY_OPERATIONS

    @classmethod
    def parse(cls, token: Union["Operation", str]) -> "Operation":
        """Turn a button token such as "add" into an Operation."""
        if isinstance(token, cls):
            return token
        try:
            return cls(token)
        except ValueError:
            raise OperatorError(f"Unknown operator: {token!r}")


BINARY_OPERATIONS = frozenset(
    {Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE}
)
UNARY_OPERATIONS = frozenset({Operation.SQRT, Operation.SQUARE, Operation.PERCENT})


def format_number(value: float) -> str:
    """
    Shortest text that parses back to the same float (repr), without the
    trailing ".0" on integral values: 10.0 -> "10", 0.5 -> "0.5", 1e+20 stays.
    """
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def parse_operand(text: str) -> float:
    # Text that is not a number (e.g. "1e+" left by backspacing) counts as zero
    try:
        return float(text)
    except ValueError:
        return 0.0


@dataclass
class CalculatorState:
    display_text: str = "0"
    has_error: bool = False
    has_cleared: bool = True      # next digit replaces the display
    start_new_number: bool = False  # next digit starts a fresh operand
    is_first_input: bool = True   # operators are ignored until a number is entered
    last_operand: float = 0.0
    pending_operation: Optional[Operation] = None
    current_operator: Optional[Operation] = None

    def reset(self) -> None:
        """Restore every field to its construction value, in place."""
        for f in fields(self):
            setattr(self, f.name, f.default)


class CalculatorEngine:
    """
    Input-and-arithmetic state machine for a basic calculator.

    Callers drive it with the action methods (clear, delete_digit,
    handle_digit, handle_dot, handle_operator) and observe `display_text`
    and `current_operator` through the two signals. Calculator errors
    (overflow, division by zero, ...) never raise: they show a marker on
    the display and freeze the engine until clear() is called.
    """

    def __init__(self):
        self._state = CalculatorState()
        self.display_text_changed = Signal("display_text_changed")
        self.current_operator_changed = Signal("current_operator_changed")

    # -------------------------
    # Observable / read-only state
    # -------------------------
    @property
    def display_text(self) -> str:
        return self._state.display_text

    @property
    def current_operator(self) -> str:
        op = self._state.current_operator
        return op.value if op is not None else ""

    @property
    def pending_operation(self) -> str:
        op = self._state.pending_operation
        return op.value if op is not None else ""

    @property
    def last_operand(self) -> float:
        return self._state.last_operand

    @property
    def has_error(self) -> bool:
        return self._state.has_error

    @property
    def max_display_length(self) -> int:
        return MAX_DISPLAY_LENGTH

    # -------------------------
    # Actions
    # -------------------------
    def clear(self):
        """Reset to the startup state. Works in the error state too."""
        self._state.reset()
        logger.debug("clear")
        self.current_operator_changed.emit()
        self.display_text_changed.emit()

    def delete_digit(self):
        if self._state.has_error:
            return
        text = self._state.display_text
        if len(text) == 1 or (text.startswith("-") and len(text) == 2):
            self._update_display("0")
            return
        if text.endswith("."):
            text = text[:-1]
        self._update_display(text[:-1])

    def handle_digit(self, digit: Union[str, int]):
        if isinstance(digit, int) and not isinstance(digit, bool) and 0 <= digit <= 9:
            digit = str(digit)
        if not isinstance(digit, str) or len(digit) != 1 or digit not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")

        state = self._state
        if state.has_error:
            return
        state.is_first_input = False

        text = state.display_text
        if state.start_new_number or state.has_cleared or text == "0":
            text = digit
            state.start_new_number = False
            state.has_cleared = False
        elif len(text) < MAX_DISPLAY_LENGTH:
            text += digit
        self._update_display(text)

    def handle_dot(self):
        state = self._state
        if state.has_error:
            return
        state.is_first_input = False

        text = state.display_text
        if state.start_new_number:
            text = "0."
            state.start_new_number = False
        elif "." not in text:
            text += "."
        state.has_cleared = False
        self._update_display(text)

    def handle_operator(self, op: Union[Operation, str]):
        """
        Apply an operator button. Binary operators (add, subtract, multiply,
        divide) are armed and resolved when the next operator or calculate
        arrives; sqrt, square and percent act on the display immediately.
        """
        operation = Operation.parse(op)
        state = self._state
        if state.has_error or state.is_first_input:
            return
        logger.debug("operator %s (pending=%s)", operation.value, self.pending_operation or "-")

        if operation.is_unary:
            self._refresh(self._evaluate(operation))

        elif operation.is_binary:
            if state.pending_operation is not None and not state.start_new_number:
                # a second operand was typed: resolve the chain before arming the new operator
                self._refresh(self._evaluate(state.pending_operation))
            else:
                state.last_operand = parse_operand(state.display_text)
            state.pending_operation = operation
            state.current_operator = operation
            self.current_operator_changed.emit()
            state.start_new_number = True

        else:
            self._refresh(self._evaluate(state.pending_operation))
            state.start_new_number = True
            state.current_operator = None
            state.pending_operation = None
            self.current_operator_changed.emit()

    # -------------------------
    # Internals
    # -------------------------
    def _evaluate(self, operation: Optional[Operation]) -> Optional[str]:
        """
        Compute the text for `operation` applied to the displayed number.
        Returns None when the computation put the engine into an error state.
        """
        state = self._state
        operand = parse_operand(state.display_text)

        if operation is Operation.SQUARE:
            return format_number(operand * operand)

        if operation is Operation.SQRT:
            if operand < 0:
                self._set_error(ErrorKind.NEGATIVE_SQUARE_ROOT)
                return None
            return format_number(math.sqrt(operand))

        if operation is Operation.PERCENT:
            # percent of the first operand while a binary operation is pending
            if state.pending_operation is not None:
                operand = state.last_operand * operand / 100.0
            else:
                operand = operand / 100.0
            return format_number(operand)

        pending = state.pending_operation
        if pending is Operation.ADD:
            result = state.last_operand + operand
        elif pending is Operation.SUBTRACT:
            result = state.last_operand - operand
        elif pending is Operation.MULTIPLY:
            result = state.last_operand * operand
        elif pending is Operation.DIVIDE:
            if operand == 0.0:
                self._set_error(ErrorKind.DIVIDE_BY_ZERO)
                return None
            result = state.last_operand / operand
        else:
            result = operand

        state.last_operand = result
        state.pending_operation = None
        return format_number(result)

    def _refresh(self, text: Optional[str]):
        if text is not None:
            self._update_display(text)

    def _update_display(self, text: str):
        if len(text) > MAX_DISPLAY_LENGTH:
            self._set_error(ErrorKind.OUT_OF_BOUNDS)
        elif text == "inf":
            self._set_error(ErrorKind.INFINITY)
        else:
            self._state.display_text = text
            self.display_text_changed.emit()

    def _set_error(self, kind: ErrorKind):
        logger.warning("calculator error: %s", kind.name)
        self._state.display_text = kind.value
        self._state.has_error = True
        self.display_text_changed.emit()
