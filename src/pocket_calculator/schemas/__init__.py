"""Pydantic schemas for configuration and engine state."""

from pocket_calculator.schemas.config import CalculatorConfig, EngineConfig
from pocket_calculator.schemas.status import EngineSnapshot

__all__ = ["CalculatorConfig", "EngineConfig", "EngineSnapshot"]
