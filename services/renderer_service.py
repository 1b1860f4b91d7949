"""RendererService for presenting clean text.

Clean text is either converted to sanitized HTML in one pass, or split into
an ordered sequence of chunks for a progressive ("typewriter") reveal.
"""
import logging
from typing import List, Optional

import mistune

from models.pipeline_config import DEFAULT_PIPELINE_CONFIG, PipelineConfig
from models.reveal import RevealOptions, RevealPlan

logger = logging.getLogger(__name__)

CHUNK_BREAK_PUNCTUATION = frozenset(".,!?;:")


def split_chunks(
    text: str,
    min_chunk_length: int = 3,
    short_text_threshold: int = 10
) -> List[str]:
    """
    Split text into word-paced reveal chunks.

    A chunk ends after whitespace or punctuation once it holds at least
    min_chunk_length characters. The trailing partial chunk is always
    emitted. Texts shorter than short_text_threshold are revealed one
    character at a time.

    Args:
        text: Clean text to split
        min_chunk_length: Minimum length before a chunk may end
        short_text_threshold: Length below which text is split per character

    Returns:
        Non-empty chunks that concatenate to exactly the input
    """
    if not text:
        return []
    if len(text) < short_text_threshold:
        return list(text)

    min_chunk_length = max(min_chunk_length, 1)
    chunks: List[str] = []
    start = 0
    for index, char in enumerate(text):
        at_break = char.isspace() or char in CHUNK_BREAK_PUNCTUATION
        if at_break and index + 1 - start >= min_chunk_length:
            chunks.append(text[start:index + 1])
            start = index + 1

    if start < len(text):
        chunks.append(text[start:])
    return chunks


class RendererService:
    """Service for turning clean text into markup or a reveal plan."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        """Initialize the markdown renderer.

        Raw HTML in the text is escaped and links with harmful protocols
        (javascript:, data:, ...) are neutralized by mistune.
        """
        self.config = config or DEFAULT_PIPELINE_CONFIG
        self._markdown = mistune.create_markdown(
            escape=True,
            plugins=["strikethrough", "table", "url"]
        )

    def render_markup(self, clean_text: str) -> str:
        """
        Convert clean markdown text to sanitized HTML.

        Args:
            clean_text: Output of the text pipeline

        Returns:
            HTML string, empty for empty input
        """
        if not clean_text:
            return ""
        html = self._markdown(clean_text)
        logger.debug(f"Rendered markup: text_length={len(clean_text)}, html_length={len(html)}")
        return html

    def plan_reveal(self, clean_text: str, options: Optional[RevealOptions] = None) -> RevealPlan:
        """
        Build a typewriter reveal plan for clean text.

        Args:
            clean_text: Output of the text pipeline
            options: Reveal speed and initial delay

        Returns:
            RevealPlan whose chunks concatenate to clean_text
        """
        options = options or RevealOptions()
        chunks = split_chunks(
            clean_text,
            min_chunk_length=self.config.min_chunk_length,
            short_text_threshold=self.config.short_text_threshold
        )
        duration_ms = options.delay + options.speed * len(chunks)
        logger.debug(
            f"Planned reveal: chunks={len(chunks)}, speed={options.speed}ms, "
            f"delay={options.delay}ms, duration={duration_ms}ms"
        )
        return RevealPlan(
            chunks=chunks,
            speed=options.speed,
            delay=options.delay,
            duration_ms=duration_ms
        )
