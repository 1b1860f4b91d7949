"""
Segment Data Model

A Segment is one contiguous slice of text produced by the protected span
scanner. Concatenating the text of every segment, in order, yields the
scanned input exactly.
"""

from dataclasses import dataclass

from models.pipeline_config import SpanKind


@dataclass(frozen=True)
class Segment:
    """
    A contiguous slice of scanned text.

    Attributes:
        kind: SpanKind.text for correctable text, otherwise the kind of
            protected span (fence, inline_code, url)
        text: The exact characters of the slice
    """
    kind: SpanKind
    text: str

    @property
    def is_protected(self) -> bool:
        return self.kind is not SpanKind.text
