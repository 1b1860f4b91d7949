"""
Structural Re-flower

Third pipeline stage: restores block boundaries. Blocks are headings,
lists, paragraphs, thematic breaks and fenced code blocks. Blocks are
separated by exactly one blank line and list items by exactly one newline.
Only block structure is managed here; inline syntax such as emphasis is
never rewritten, and protected spans are passed through verbatim.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from models.pipeline_config import DEFAULT_PIPELINE_CONFIG, PipelineConfig, SpanKind
from models.segment import Segment
from utils.span_scanner import join_segments, scan_segments

_HEADING_RE = re.compile(r"#{1,6}(?:[ \t]|$)")
_LIST_ITEM_RE = re.compile(r"(?:-|\d+\.)(?:[ \t]|$)")
_THEMATIC_BREAK_RE = re.compile(r"(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,}")

Line = List[Segment]


class BlockKind(str, Enum):
    blank = "blank"
    heading = "heading"
    list_item = "list_item"
    thematic_break = "thematic_break"
    code = "code"
    paragraph = "paragraph"


@dataclass
class Block:
    kind: BlockKind
    lines: List[Line] = field(default_factory=list)


def reflow(text: str, config: Optional[PipelineConfig] = None) -> str:
    """
    Normalize block structure.

    Args:
        text: Text to re-flow, possibly empty
        config: Pipeline configuration (defaults apply when omitted)

    Returns:
        Text with one blank line between blocks and one newline between
        list items, without leading or trailing blank lines
    """
    if not text:
        return text
    config = config or DEFAULT_PIPELINE_CONFIG
    segments = scan_segments(text, config.protected_span_markers)
    return join_segments(reflow_segments(segments))


def reflow_segments(segments: List[Segment]) -> List[Segment]:
    """Re-flow an already scanned input."""
    blocks: List[Block] = []
    pending_blank = False

    for line in _split_lines(segments):
        kind = classify_line(line)
        if kind is BlockKind.blank:
            pending_blank = bool(blocks)
            continue

        line = _tidy_line(line, kind)
        current = blocks[-1] if blocks else None
        if current is not None and _continues(current.kind, kind, pending_blank):
            current.lines.append(line)
        else:
            blocks.append(Block(kind=kind, lines=[line]))
        pending_blank = False

    out: List[Segment] = []
    for block_index, block in enumerate(blocks):
        if block_index:
            out.append(Segment(SpanKind.text, "\n\n"))
        for line_index, line in enumerate(block.lines):
            if line_index:
                out.append(Segment(SpanKind.text, "\n"))
            out.extend(line)
    return _coalesce(out)


def classify_line(line: Line) -> BlockKind:
    """Classify one logical line by its first non-blank content."""
    for index, segment in enumerate(line):
        if segment.is_protected:
            if segment.kind is SpanKind.fence:
                return BlockKind.code
            return BlockKind.paragraph
        if not segment.text.strip(" \t"):
            continue

        content = "".join(s.text for s in line[index:]).lstrip(" \t")
        if _THEMATIC_BREAK_RE.fullmatch(content.rstrip(" \t")):
            return BlockKind.thematic_break
        if _HEADING_RE.match(content):
            return BlockKind.heading
        if _LIST_ITEM_RE.match(content):
            return BlockKind.list_item
        return BlockKind.paragraph
    return BlockKind.blank


def _continues(current: BlockKind, kind: BlockKind, after_blank: bool) -> bool:
    """Whether a line of the given kind extends the current block."""
    if current is BlockKind.list_item:
        # Blank lines between items do not end a list; a plain line
        # directly under an item continues that item.
        return kind is BlockKind.list_item or (kind is BlockKind.paragraph and not after_blank)
    if current is BlockKind.paragraph:
        return kind is BlockKind.paragraph and not after_blank
    return False


def _split_lines(segments: List[Segment]) -> List[Line]:
    """Split segments into logical lines; a fence never splits a line."""
    lines: List[Line] = [[]]
    for segment in segments:
        if segment.is_protected:
            lines[-1].append(segment)
            continue
        for index, part in enumerate(segment.text.split("\n")):
            if index:
                lines.append([])
            if part:
                lines[-1].append(Segment(SpanKind.text, part))
    return lines


def _tidy_line(line: Line, kind: BlockKind) -> Line:
    pieces = list(line)
    if kind in (BlockKind.heading, BlockKind.list_item, BlockKind.thematic_break):
        while pieces and not pieces[0].is_protected:
            stripped = pieces[0].text.lstrip(" \t")
            if stripped:
                pieces[0] = Segment(SpanKind.text, stripped)
                break
            pieces.pop(0)

    while pieces and not pieces[-1].is_protected:
        stripped = pieces[-1].text.rstrip(" \t")
        if stripped:
            pieces[-1] = Segment(SpanKind.text, stripped)
            break
        pieces.pop()
    return pieces


def _coalesce(segments: List[Segment]) -> List[Segment]:
    """Merge neighbouring text segments."""
    merged: List[Segment] = []
    for segment in segments:
        if merged and not segment.is_protected and not merged[-1].is_protected:
            merged[-1] = Segment(SpanKind.text, merged[-1].text + segment.text)
        else:
            merged.append(segment)
    return merged
