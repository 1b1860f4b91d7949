"""PipelineConfig model for the text reconstruction pipeline.

The pipeline is a pure transform, so all of its tunables travel with each
call instead of living in module-level state.
"""
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from wordfreq import zipf_frequency


class SpanKind(str, Enum):
    """Kinds of substrings the pipeline must never rewrite."""
    text = "text"
    fence = "fence"
    inline_code = "inline_code"
    url = "url"


PROTECTED_SPAN_KINDS = frozenset({SpanKind.fence, SpanKind.inline_code, SpanKind.url})

# Letters that legitimately appear doubled in English words ("ball", "boss",
# "book", "keep"). Runs of three or more are reduced to two for these letters.
DEFAULT_DUPLICATE_CHAR_WHITELIST = frozenset("bcdefglmnoprstz")


class PipelineConfig(BaseModel):
    """Per-call configuration for the text reconstruction pipeline."""
    model_config = ConfigDict(frozen=True)

    protected_span_markers: FrozenSet[SpanKind] = Field(
        default=PROTECTED_SPAN_KINDS,
        description="Span kinds exempt from whitespace and duplication correction"
    )
    duplicate_char_whitelist: FrozenSet[str] = Field(
        default=DEFAULT_DUPLICATE_CHAR_WHITELIST,
        description="Lower-case letters that may legitimately appear doubled"
    )
    min_chunk_length: int = Field(
        default=3,
        ge=1,
        description="Minimum length of a typewriter reveal chunk"
    )
    short_text_threshold: int = Field(
        default=10,
        ge=0,
        description="Texts shorter than this are revealed one character at a time"
    )
    lexicon_language: Optional[str] = Field(
        default="en",
        description="Language used to rank ambiguous spellings by word frequency, "
                    "or null to always keep whitelisted letters doubled"
    )
    replace_garbage_text: bool = Field(
        default=False,
        description="Replace degenerate output with a generic error message "
                    "instead of returning it cleaned"
    )

    @field_validator("protected_span_markers")
    @classmethod
    def markers_must_be_protectable(cls, v: FrozenSet[SpanKind]) -> FrozenSet[SpanKind]:
        """Plain text is not a protected span kind."""
        if SpanKind.text in v:
            raise ValueError("'text' is not a protected span kind")
        return v

    @field_validator("duplicate_char_whitelist")
    @classmethod
    def whitelist_must_be_letters(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        """Validate and lower-case whitelist entries."""
        letters = set()
        for entry in v:
            if len(entry) != 1 or not entry.isalpha():
                raise ValueError(f"whitelist entries must be single letters, got {entry!r}")
            letters.add(entry.lower())
        return frozenset(letters)

    @field_validator("lexicon_language")
    @classmethod
    def lexicon_must_be_available(cls, v: Optional[str]) -> Optional[str]:
        """Reject language tags wordfreq cannot parse or has no wordlist for."""
        if v is None:
            return v
        try:
            zipf_frequency("the", v)
        except (LookupError, ValueError, ImportError) as e:
            raise ValueError(f"unsupported lexicon language {v!r}: {e}")
        return v


DEFAULT_PIPELINE_CONFIG = PipelineConfig()
