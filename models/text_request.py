"""
Text Cleaning Request/Response Models

This module defines the Pydantic models for the text endpoints.
These models handle validation and serialization for the
POST /api/text/clean and POST /api/text/render APIs.
"""

from typing import Optional
from pydantic import BaseModel, Field

from models.pipeline_config import PipelineConfig
from models.reveal import RevealPlan


class TextCleanRequest(BaseModel):
    """
    Request body for the text cleaning endpoint.

    Attributes:
        text: Raw text to clean (may be empty)
        options: Optional pipeline configuration overriding the defaults
    """
    text: str = Field(
        ...,
        description="Raw text to clean"
    )
    options: Optional[PipelineConfig] = Field(
        default=None,
        description="Optional pipeline configuration"
    )


class TextCleanResponse(BaseModel):
    """
    Response from the text cleaning endpoint.

    Attributes:
        raw_text: Original text that was submitted
        cleaned_text: Reconstructed text
        changed: Whether the pipeline modified the text
        request_id: Unique identifier for this request
    """
    raw_text: str = Field(
        ...,
        description="Original text that was submitted"
    )
    cleaned_text: str = Field(
        ...,
        description="Reconstructed text"
    )
    changed: bool = Field(
        ...,
        description="Whether the pipeline modified the text"
    )
    request_id: str = Field(
        ...,
        description="Unique identifier for this request"
    )


class TextRenderRequest(BaseModel):
    """
    Request body for the text rendering endpoint.

    Attributes:
        text: Raw text to clean and render
        animate: Return a typewriter reveal plan instead of markup
        speed: Milliseconds between reveal chunks
        delay: Milliseconds before the first reveal chunk
        options: Optional pipeline configuration overriding the defaults
    """
    text: str = Field(
        ...,
        description="Raw text to clean and render"
    )
    animate: bool = Field(
        default=True,
        description="Return a typewriter reveal plan instead of markup"
    )
    speed: int = Field(
        default=30,
        ge=0,
        description="Milliseconds between reveal chunks"
    )
    delay: int = Field(
        default=0,
        ge=0,
        description="Milliseconds before the first reveal chunk"
    )
    options: Optional[PipelineConfig] = Field(
        default=None,
        description="Optional pipeline configuration"
    )


class TextRenderResponse(BaseModel):
    """
    Response from the text rendering endpoint.

    Exactly one of html and reveal is set, depending on the request's
    animate flag.
    """
    cleaned_text: str = Field(
        ...,
        description="Reconstructed text that was rendered"
    )
    html: Optional[str] = Field(
        default=None,
        description="Sanitized HTML markup (animate=false)"
    )
    reveal: Optional[RevealPlan] = Field(
        default=None,
        description="Typewriter reveal plan (animate=true)"
    )
    request_id: str = Field(
        ...,
        description="Unique identifier for this request"
    )
