"""
Normalizer

First pipeline stage: repairs encoding artifacts, strips control characters
and collapses horizontal whitespace. Protected spans are detected before any
transform runs and are passed through verbatim.

Every transform here removes characters or replaces one character with one
character, so the output is never longer than the input.
"""

import logging
import re
from typing import List, Optional

import ftfy

from models.pipeline_config import DEFAULT_PIPELINE_CONFIG, PipelineConfig, SpanKind
from models.segment import Segment
from utils.span_scanner import join_segments, scan_segments

logger = logging.getLogger(__name__)

# C0/C1 control characters except \t (\x09) and \n (\x0a), plus BOM and
# zero-width space left behind by lossy transcoding.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f\ufeff\u200b]")
_LINE_SEPARATOR_RE = re.compile(r"\r\n?|[\u2028\u2029]")
_SPACE_LIKE_RE = re.compile(r"[\u00a0\u2000-\u200a\u202f\u205f\u3000]")
_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")
_SPACE_AROUND_NEWLINE_RE = re.compile(r" ?\n ?")


def normalize(raw: str, config: Optional[PipelineConfig] = None) -> str:
    """
    Normalize whitespace, control characters and encoding artifacts.

    Args:
        raw: Untrusted text, possibly empty
        config: Pipeline configuration (defaults apply when omitted)

    Returns:
        Normalized text, never longer than the input
    """
    if not raw:
        return raw
    config = config or DEFAULT_PIPELINE_CONFIG
    segments = scan_segments(raw, config.protected_span_markers)
    return join_segments(normalize_segments(segments))


def normalize_segments(segments: List[Segment]) -> List[Segment]:
    """Normalize the text segments of an already scanned input."""
    normalized: List[Segment] = []
    for segment in segments:
        if segment.is_protected:
            normalized.append(segment)
            continue
        text = normalize_text(segment.text)
        if text:
            normalized.append(Segment(SpanKind.text, text))
    return normalized


def normalize_text(text: str) -> str:
    """Normalize a run of unprotected text."""
    fixed = ftfy.fix_encoding(text)
    if fixed != text and len(fixed) <= len(text):
        logger.debug(f"Repaired encoding artifacts: before={len(text)}, after={len(fixed)}")
        text = fixed

    text = _LINE_SEPARATOR_RE.sub("\n", text)
    text = _CONTROL_RE.sub("", text)
    text = _SPACE_LIKE_RE.sub(" ", text)
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    return _SPACE_AROUND_NEWLINE_RE.sub("\n", text)
