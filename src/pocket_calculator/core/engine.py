"""Keypad calculator engine with continuous calculation."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_FLOOR, Decimal, localcontext
from enum import Enum

from pocket_calculator.core.display import (
    format_display,
    integer_digits,
    normalize_result,
    split_buffer,
)
from pocket_calculator.core.tokens import POINT, Operator, Token, TokenKind, classify_token
from pocket_calculator.schemas.config import EngineConfig
from pocket_calculator.schemas.status import EngineSnapshot

logger = logging.getLogger(__name__)


class CalcError(str, Enum):
    """Result codes returned by CalculatorEngine.input."""

    NO_ERROR = "no_error"
    INPUT_OVERFLOW = "input_overflow"
    NEGATIVE_VALUE = "negative_value"
    CALCULATE_OVERFLOW = "calculate_overflow"
    FATAL = "fatal"
    UNRECOGNIZED_TOKEN = "unrecognized_token"


class CalculationError(Exception):
    """Error raised inside the compute step."""

    code = CalcError.FATAL


class NegativeValueError(CalculationError):
    """A chained computation went below zero."""

    code = CalcError.NEGATIVE_VALUE


class CalculateOverflowError(CalculationError):
    """A computed result has too many integer digits."""

    code = CalcError.CALCULATE_OVERFLOW


class FatalEngineError(CalculationError):
    """Internal inconsistency, such as an unknown pending operator."""

    code = CalcError.FATAL


class CalculatorEngine:
    """State machine driving a four-function pocket calculator.

    Keys are fed one at a time through input(). Pressing an operator
    evaluates any pending operation first, so "10 + 5 -" shows 15 before
    the next operand is typed. Errors come back as CalcError codes.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        initial_value: int | None = None,
    ):
        """Initialize the engine.

        Args:
            config: Digit limits and policy flags
            initial_value: Optional integer shown until the first key

        Raises:
            ValueError: If initial_value has more integer digits than allowed
        """
        self._config = config or EngineConfig()
        self._buffer = "0"
        self._accumulator = Decimal(0)
        self._pending: Operator | None = None
        self._entering = False
        # Two full-width operands multiplied, fractions included, fit exactly
        fraction_digits = max(
            self._config.entry_fraction_digits, self._config.result_fraction_digits
        )
        self._precision = 2 * (self._config.integer_digit_limit + fraction_digits) + 2

        if initial_value is not None:
            seed = str(initial_value)
            if integer_digits(seed) > self._config.integer_digit_limit:
                raise ValueError(
                    f"Initial value {seed} exceeds "
                    f"{self._config.integer_digit_limit} integer digits"
                )
            self._buffer = seed

    @classmethod
    def from_int(cls, value: int, config: EngineConfig | None = None) -> CalculatorEngine:
        """Create an engine whose display is seeded with an integer."""
        return cls(config=config, initial_value=value)

    @property
    def config(self) -> EngineConfig:
        """Get the engine configuration."""
        return self._config

    def reset(self) -> None:
        """Return every mutable field to its initial value."""
        self._buffer = "0"
        self._accumulator = Decimal(0)
        self._pending = None
        self._entering = False

    def input(self, text: str) -> CalcError:
        """Process a single key.

        Args:
            text: A digit, "00", one of "+-*/=", "." or "C"

        Returns:
            CalcError.NO_ERROR on success, otherwise the error code. On
            NEGATIVE_VALUE and CALCULATE_OVERFLOW the engine has already
            been reset.
        """
        token = classify_token(text)

        if token.kind == TokenKind.DIGIT:
            error = self._input_digit(token.text)
        elif token.kind == TokenKind.DOUBLE_ZERO:
            error = self._input_double_zero()
        elif token.kind == TokenKind.OPERATOR:
            error = self._input_operator(token)
        elif token.kind == TokenKind.POINT:
            error = self._input_point()
        elif token.kind == TokenKind.CLEAR:
            self.reset()
            logger.debug("Cleared")
            error = CalcError.NO_ERROR
        else:
            error = self._input_unknown(token)

        if error != CalcError.NO_ERROR:
            logger.debug("Key %r rejected: %s", text, error.value)
        return error

    def display_string(self) -> str:
        """Get the buffer formatted for display."""
        return format_display(self._buffer, self._config.entry_fraction_digits)

    def double_value(self) -> float:
        """Get the buffer as a float."""
        return float(Decimal(self._buffer))

    def int_value(self) -> int:
        """Get the buffer floored to an integer."""
        return math.floor(Decimal(self._buffer))

    def in_operation(self) -> bool:
        """Check if an operator is pending."""
        return self._pending is not None

    def snapshot(self) -> EngineSnapshot:
        """Capture the current state."""
        return EngineSnapshot(
            display=self.display_string(),
            buffer=self._buffer,
            accumulator=normalize_result(self._accumulator),
            pending_operator=self._pending.value if self._pending else None,
            entering=self._entering,
        )

    def _input_digit(self, digit: str) -> CalcError:
        if not self._entering:
            if digit == "0" and self._pending is None:
                self.reset()
                return CalcError.NO_ERROR
            self._buffer = digit
            self._entering = True
            return CalcError.NO_ERROR

        integer, fraction = split_buffer(self._buffer)
        if fraction is None:
            segment, limit = integer, self._config.integer_digit_limit
        else:
            segment, limit = fraction, self._config.entry_fraction_digits
        if len(segment) >= limit:
            return CalcError.INPUT_OVERFLOW

        self._buffer += digit
        return CalcError.NO_ERROR

    def _input_double_zero(self) -> CalcError:
        error = self._input_digit("0")
        if error == CalcError.NO_ERROR:
            # The second zero may hit the digit limit without failing the key
            self._input_digit("0")
        return error

    def _input_point(self) -> CalcError:
        if not self._entering:
            self._buffer = "0" + POINT
            self._entering = True
        elif POINT not in self._buffer:
            self._buffer += POINT
        return CalcError.NO_ERROR

    def _input_unknown(self, token: Token) -> CalcError:
        if self._config.reject_unknown_tokens:
            return CalcError.UNRECOGNIZED_TOKEN
        logger.debug("Ignoring unknown key %s", token)
        return CalcError.NO_ERROR

    def _input_operator(self, token: Token) -> CalcError:
        try:
            self._calculate(token.operator)
        except CalculationError as e:
            logger.debug("Calculation failed: %s", e)
            return e.code
        return CalcError.NO_ERROR

    def _calculate(self, operator: Operator | None) -> None:
        """Evaluate the pending operation and remember the pressed operator.

        Raises:
            NegativeValueError: Result below zero while negatives are disallowed
            CalculateOverflowError: Result integer part exceeds the digit limit
            FatalEngineError: Operator is not a known operator key
        """
        if operator is None:
            raise FatalEngineError("Operator key without an operator")

        value = Decimal(self._buffer)

        if not self._entering:
            self._accumulator = value
        else:
            if self._pending is None:
                result = value
            else:
                result = self._apply(self._pending, self._accumulator, value)
                if not self._config.allow_negative and result < 0:
                    self.reset()
                    raise NegativeValueError(f"Negative result: {result}")

            if result.adjusted() >= self._config.integer_digit_limit:
                self.reset()
                raise CalculateOverflowError(f"Result too large: {result}")

            result = self._floor(result)
            buffer = normalize_result(result)
            if integer_digits(buffer) > self._config.integer_digit_limit:
                self.reset()
                raise CalculateOverflowError(f"Result too large: {buffer}")

            self._accumulator = result
            self._buffer = buffer

        self._pending = None if operator == Operator.EQUALS else operator
        self._entering = False

    def _apply(self, operator: Operator, left: Decimal, right: Decimal) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = self._precision
            # Inexact quotients round down so the later floor stays correct
            ctx.rounding = ROUND_FLOOR
            if operator == Operator.PLUS:
                return left + right
            if operator == Operator.MINUS:
                return left - right
            if operator == Operator.TIMES:
                return left * right
            if operator == Operator.DIVIDE:
                return left / right if right else Decimal(0)
        raise FatalEngineError(f"Unsupported pending operator: {operator!r}")

    def _floor(self, value: Decimal) -> Decimal:
        exponent = Decimal(1).scaleb(-self._config.result_fraction_digits)
        with localcontext() as ctx:
            ctx.prec = self._precision
            return value.quantize(exponent, rounding=ROUND_FLOOR)
