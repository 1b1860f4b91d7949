"""Data models for the text reconstruction service."""
from .pipeline_config import (
    PipelineConfig,
    SpanKind,
    DEFAULT_PIPELINE_CONFIG,
    DEFAULT_DUPLICATE_CHAR_WHITELIST,
    PROTECTED_SPAN_KINDS,
)
from .segment import Segment
from .reveal import RevealOptions, RevealPlan
from .request_context import RequestContext

__all__ = [
    # Pipeline configuration
    "PipelineConfig",
    "SpanKind",
    "DEFAULT_PIPELINE_CONFIG",
    "DEFAULT_DUPLICATE_CHAR_WHITELIST",
    "PROTECTED_SPAN_KINDS",
    # Scanner output
    "Segment",
    # Rendering
    "RevealOptions",
    "RevealPlan",
    # Request context
    "RequestContext",
]
