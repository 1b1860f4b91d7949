"""
Protected Span Scanner

This module splits text into Segments in a single left-to-right scan.
Protected segments (fenced code blocks, inline code spans, URLs) must pass
through every pipeline stage byte-for-byte; only SpanKind.text segments are
ever rewritten.

Scanning rules:
1. A fence opens at any ``` and closes after the next ```. A fence with no
   closer extends to the end of the input.
2. Inline code opens at a backtick and closes at the next backtick on the
   same line, unless that backtick opens a fence. A backtick with no closer
   is ordinary text.
3. A URL starts at a scheme followed by :// (http://, ftp://, ...) or at
   www. when not preceded by a letter or digit, and ends before whitespace,
   brackets, quotes or backticks.
   Trailing sentence punctuation stays outside the URL.
"""

import re
from typing import Iterable, List, Optional, Tuple

from models.pipeline_config import PROTECTED_SPAN_KINDS, SpanKind
from models.segment import Segment

FENCE = "```"
BACKTICK = "`"

_URL_RE = re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*://|www\.)[^\s<>()\[\]{}\"'`]+", re.IGNORECASE)
_URL_TRAILING_PUNCTUATION = ".,;:!?"


def scan_segments(
    text: str,
    markers: Iterable[SpanKind] = PROTECTED_SPAN_KINDS
) -> List[Segment]:
    """
    Split text into ordinary and protected segments.

    Args:
        text: Text to scan
        markers: Span kinds to recognize; unrecognized kinds are treated
            as ordinary text

    Returns:
        Segments whose texts concatenate to exactly the input
    """
    enabled = frozenset(markers)
    segments: List[Segment] = []
    text_start = 0
    i = 0
    length = len(text)

    while i < length:
        match = _match_protected(text, i, enabled)
        if match is None:
            i += 1
            continue

        kind, end = match
        if text_start < i:
            segments.append(Segment(SpanKind.text, text[text_start:i]))
        segments.append(Segment(kind, text[i:end]))
        i = end
        text_start = end

    if text_start < length:
        segments.append(Segment(SpanKind.text, text[text_start:]))

    return segments


def join_segments(segments: Iterable[Segment]) -> str:
    """Reassemble segments into a single string."""
    return "".join(segment.text for segment in segments)


def _match_protected(
    text: str,
    i: int,
    enabled: frozenset
) -> Optional[Tuple[SpanKind, int]]:
    """Return (kind, end) when a protected span opens at position i."""
    char = text[i]

    if char == BACKTICK:
        if SpanKind.fence in enabled and text.startswith(FENCE, i):
            close = text.find(FENCE, i + len(FENCE))
            end = len(text) if close == -1 else close + len(FENCE)
            return SpanKind.fence, end

        if SpanKind.inline_code in enabled:
            close = text.find(BACKTICK, i + 1)
            newline = text.find("\n", i + 1)
            if close == -1 or (newline != -1 and newline < close):
                return None
            if SpanKind.fence in enabled and text.startswith(FENCE, close):
                return None
            return SpanKind.inline_code, close + 1

        return None

    if (
        SpanKind.url in enabled
        and char.isascii()
        and char.isalpha()
        and (i == 0 or not text[i - 1].isalnum())
    ):
        match = _URL_RE.match(text, i)
        if match is None:
            return None
        end = match.end()
        while end > i and text[end - 1] in _URL_TRAILING_PUNCTUATION:
            end -= 1
        if end <= i + len(match.group(1)):
            return None
        return SpanKind.url, end

    return None
