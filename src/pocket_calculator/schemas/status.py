"""Pydantic models describing calculator engine state."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EngineSnapshot(BaseModel):
    """Read-only copy of a calculator engine's state."""

    display: str = Field(..., description="Formatted display string")
    buffer: str = Field(..., description="Raw display buffer")
    accumulator: str = Field(..., description="Left-hand operand of the pending operation")
    pending_operator: str | None = Field(
        default=None, description="Operator waiting for its right-hand operand"
    )
    entering: bool = Field(..., description="Whether an operand is being typed")
