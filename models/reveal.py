"""Typewriter reveal models for progressive rendering of clean text."""
from typing import List

from pydantic import BaseModel, Field


class RevealOptions(BaseModel):
    """Timing options for a progressive ("typewriter") reveal."""
    speed: int = Field(
        default=30,
        ge=0,
        description="Milliseconds between consecutive chunks"
    )
    delay: int = Field(
        default=0,
        ge=0,
        description="Milliseconds to wait before the first chunk"
    )


class RevealPlan(BaseModel):
    """Ordered chunks of clean text plus the timing to reveal them with.

    The chunks concatenate to exactly the clean text they were split from.
    """
    chunks: List[str] = Field(
        description="Non-empty chunks in reveal order"
    )
    speed: int = Field(
        description="Milliseconds between consecutive chunks"
    )
    delay: int = Field(
        description="Milliseconds to wait before the first chunk"
    )
    duration_ms: int = Field(
        description="Total time until the last chunk is shown"
    )
