"""
Unit Tests for PipelineConfig

Tests defaults and validation of the per-call pipeline configuration.
"""

import pytest
from pydantic import ValidationError

from models.pipeline_config import (
    DEFAULT_DUPLICATE_CHAR_WHITELIST,
    PROTECTED_SPAN_KINDS,
    PipelineConfig,
    SpanKind,
)


class TestPipelineConfig:
    """Tests for the PipelineConfig model."""

    def test_defaults(self):
        config = PipelineConfig()

        assert config.protected_span_markers == PROTECTED_SPAN_KINDS
        assert config.duplicate_char_whitelist == DEFAULT_DUPLICATE_CHAR_WHITELIST
        assert config.min_chunk_length == 3
        assert config.short_text_threshold == 10
        assert config.lexicon_language == "en"

    def test_whitelist_lower_cased(self):
        config = PipelineConfig(duplicate_char_whitelist=frozenset({"L", "o"}))
        assert config.duplicate_char_whitelist == frozenset({"l", "o"})

    @pytest.mark.parametrize("entry", ["ab", "1", "", "!"])
    def test_whitelist_rejects_non_letters(self, entry):
        with pytest.raises(ValidationError):
            PipelineConfig(duplicate_char_whitelist=frozenset({entry}))

    def test_text_is_not_a_protected_kind(self):
        with pytest.raises(ValidationError):
            PipelineConfig(protected_span_markers=frozenset({SpanKind.text}))

    def test_markers_from_json_values(self):
        config = PipelineConfig.model_validate({"protected_span_markers": ["fence", "url"]})
        assert config.protected_span_markers == frozenset({SpanKind.fence, SpanKind.url})

    def test_min_chunk_length_must_be_positive(self):
        with pytest.raises(ValidationError):
            PipelineConfig(min_chunk_length=0)

    @pytest.mark.parametrize("language", ["en", "fr", None])
    def test_lexicon_language_accepted(self, language):
        assert PipelineConfig(lexicon_language=language).lexicon_language == language

    @pytest.mark.parametrize("language", ["klingon", "zz", "e!", "123"])
    def test_lexicon_language_rejected(self, language):
        with pytest.raises(ValidationError):
            PipelineConfig(lexicon_language=language)

    def test_garbage_replacement_off_by_default(self):
        assert PipelineConfig().replace_garbage_text is False

    def test_frozen(self):
        config = PipelineConfig()
        with pytest.raises(ValidationError):
            config.min_chunk_length = 5
