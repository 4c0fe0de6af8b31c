"""Feeding key sequences to a calculator engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pocket_calculator.core.engine import CalcError

if TYPE_CHECKING:
    from pocket_calculator.core.engine import CalculatorEngine


@dataclass
class KeyResult:
    """Outcome of a single key press."""

    key: str
    error: CalcError
    display: str

    @property
    def ok(self) -> bool:
        """Check if the key was accepted without error."""
        return self.error == CalcError.NO_ERROR


def split_keys(text: str) -> list[str]:
    """Split typed text into keys.

    Whitespace-separated text is split on whitespace, which is the only
    way to send "00" as one key. Otherwise every character is a key.

    Examples:
        >>> split_keys("12+3=")
        ['1', '2', '+', '3', '=']
        >>> split_keys("1 00 + 5 =")
        ['1', '00', '+', '5', '=']
    """
    if any(c.isspace() for c in text):
        return text.split()
    return list(text)


def run_keys(engine: CalculatorEngine, keys: Iterable[str]) -> list[KeyResult]:
    """Press each key in order, continuing past errors.

    Args:
        engine: Engine to drive
        keys: Keys to press

    Returns:
        One KeyResult per key, with the display after that key
    """
    results: list[KeyResult] = []
    for key in keys:
        error = engine.input(key)
        results.append(KeyResult(key=key, error=error, display=engine.display_string()))
    return results


def first_error(results: Iterable[KeyResult]) -> CalcError:
    """Get the first error code in a run, or NO_ERROR."""
    for result in results:
        if not result.ok:
            return result.error
    return CalcError.NO_ERROR
