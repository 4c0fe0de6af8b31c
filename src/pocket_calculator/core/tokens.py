"""Keypad tokens and their classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DIGITS = "0123456789"
DOUBLE_ZERO = "00"
POINT = "."
CLEAR = "C"


class TokenKind(str, Enum):
    """Kinds of keypad token accepted by the engine."""

    DIGIT = "digit"
    DOUBLE_ZERO = "double_zero"
    OPERATOR = "operator"
    POINT = "point"
    CLEAR = "clear"
    UNKNOWN = "unknown"


class Operator(str, Enum):
    """Operator keys, including the equals key."""

    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    EQUALS = "="


@dataclass(frozen=True)
class Token:
    """A classified keypad token."""

    kind: TokenKind
    text: str
    operator: Operator | None = None

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.text!r}"


_OPERATORS: dict[str, Operator] = {op.value: op for op in Operator}


def classify_token(text: str) -> Token:
    """Classify a raw key string.

    Args:
        text: Key as typed, e.g. "7", "00", "+", "." or "C"

    Returns:
        Token tagged with its kind. Anything outside the keypad
        alphabet is UNKNOWN.
    """
    if text == DOUBLE_ZERO:
        return Token(TokenKind.DOUBLE_ZERO, text)
    if len(text) != 1:
        return Token(TokenKind.UNKNOWN, text)
    if text in DIGITS:
        return Token(TokenKind.DIGIT, text)
    if text in _OPERATORS:
        return Token(TokenKind.OPERATOR, text, _OPERATORS[text])
    if text == POINT:
        return Token(TokenKind.POINT, text)
    if text == CLEAR:
        return Token(TokenKind.CLEAR, text)
    return Token(TokenKind.UNKNOWN, text)
