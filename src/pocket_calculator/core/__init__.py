"""Calculator engine, keypad tokens and display formatting."""

from pocket_calculator.core.engine import CalcError, CalculatorEngine
from pocket_calculator.core.tokens import Operator, Token, TokenKind, classify_token

__all__ = [
    "CalcError",
    "CalculatorEngine",
    "Operator",
    "Token",
    "TokenKind",
    "classify_token",
]
