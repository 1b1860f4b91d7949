"""TextPipelineService for reconstructing clean text from raw AI responses.

The pipeline runs Normalizer -> Duplication Corrector -> Structural
Re-flower over a single scan of the raw text, so every protected span in the
input (fenced code, inline code, URLs) reaches the output byte-for-byte.
"""
import logging
from typing import Any, Dict, List, Optional

from models.pipeline_config import DEFAULT_PIPELINE_CONFIG, PipelineConfig
from models.segment import Segment
from utils.deduplicator import dedupe_segments
from utils.garbage_detector import GARBAGE_TEXT_MESSAGE, contains_garbage_patterns
from utils.normalizer import normalize_segments
from utils.reflow import reflow_segments
from utils.span_scanner import join_segments, scan_segments

logger = logging.getLogger(__name__)


class TextPipelineService:
    """Service that turns RawText into CleanText.

    The transform is pure and holds no mutable state, so one instance may be
    shared between concurrent requests.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        """Initialize with an optional pipeline configuration."""
        self.config = config or DEFAULT_PIPELINE_CONFIG

    def reconstruct(self, raw: Optional[str]) -> Optional[str]:
        """
        Reconstruct clean text from a raw AI response.

        Args:
            raw: Raw text from the upstream AI service. None and empty
                strings are returned as given.

        Returns:
            Clean text, the raw text unmodified if any stage fails, or
            GARBAGE_TEXT_MESSAGE when garbage replacement is enabled and the
            text is degenerate before or after cleaning
        """
        if not raw:
            return raw

        try:
            segments = scan_segments(raw, self.config.protected_span_markers)
            if self._is_garbage(segments):
                return GARBAGE_TEXT_MESSAGE
            segments = normalize_segments(segments)
            segments = dedupe_segments(segments, self.config)
            if self._is_garbage(segments):
                return GARBAGE_TEXT_MESSAGE
            segments = reflow_segments(segments)
            if self._is_garbage(segments):
                return GARBAGE_TEXT_MESSAGE
            cleaned = join_segments(segments)
        except Exception as e:
            logger.error(
                f"Text reconstruction failed, returning original: "
                f"length={len(raw)}, error={type(e).__name__}: {str(e)}",
                exc_info=True
            )
            return raw

        if cleaned != raw:
            logger.debug(
                f"Text reconstructed: before={len(raw)} chars, after={len(cleaned)} chars"
            )
        return cleaned

    def _is_garbage(self, segments: List[Segment]) -> bool:
        """Check the unprotected text for garbage patterns when enabled."""
        if not self.config.replace_garbage_text:
            return False
        prose = join_segments(s for s in segments if not s.is_protected)
        if contains_garbage_patterns(prose):
            logger.warning(f"Garbage text detected, replacing response: length={len(prose)}")
            return True
        return False

    def clean_completion(self, payload: Dict[str, Any]) -> int:
        """
        Clean the textual content of a chat-completion response in place.

        Only string ``choices[*].message.content`` values are processed;
        missing content means there is no RawText and the pipeline is not
        invoked.

        Args:
            payload: Chat-completion-style JSON as a dict

        Returns:
            Number of choices whose content was modified
        """
        choices = payload.get("choices") if isinstance(payload, dict) else None
        if not isinstance(choices, list):
            return 0

        modified = 0
        for choice in choices:
            message = choice.get("message") if isinstance(choice, dict) else None
            if not isinstance(message, dict):
                continue
            content = message.get("content")
            if not isinstance(content, str):
                continue
            cleaned = self.reconstruct(content)
            if cleaned != content:
                message["content"] = cleaned
                modified += 1
        return modified


def reconstruct_text(raw: Optional[str], config: Optional[PipelineConfig] = None) -> Optional[str]:
    """Run the full pipeline once with the given configuration."""
    return TextPipelineService(config).reconstruct(raw)
