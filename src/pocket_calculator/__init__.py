"""Pocket Calculator.

A keypad-driven four-function calculator engine with continuous
calculation, digit-count limits and formatted display output.
"""

__version__ = "0.1.0"
