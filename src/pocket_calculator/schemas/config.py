"""Pydantic models for pocket-calc.yaml configuration."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineConfig(BaseModel):
    """Digit limits and policy flags for a calculator engine."""

    model_config = ConfigDict(frozen=True)

    integer_digit_limit: int = Field(
        default=14, ge=1, description="Max integer digits, typed or computed"
    )
    entry_fraction_digits: int = Field(
        default=3, ge=0, description="Max fraction digits while typing"
    )
    result_fraction_digits: int = Field(
        default=0, ge=0, description="Fraction digits kept after a calculation (floored)"
    )
    allow_negative: bool = Field(
        default=False, description="Whether calculations may produce negative results"
    )
    reject_unknown_tokens: bool = Field(
        default=False, description="Return an error for keys outside the keypad"
    )


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="WARNING")
    json_format: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure level is a standard logging level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


class CalculatorConfig(BaseModel):
    """Complete configuration for pocket-calc.yaml."""

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: str | Path) -> "CalculatorConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.model_validate(data)

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(
                self.model_dump(exclude_none=True),
                f,
                default_flow_style=False,
                sort_keys=False,
            )
