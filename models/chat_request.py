"""Chat proxy request model."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for the AI chat proxy endpoint.

    ``messages`` accepts any value: a missing or non-array value is
    rejected by the router with HTTP 400 rather than by schema validation.
    Extra fields are accepted and ignored.
    """
    model_config = ConfigDict(extra="ignore")

    messages: Any = Field(
        default=None,
        description="Chat messages to forward to the upstream AI service"
    )
