"""
Property-Based Tests for the Text Reconstruction Pipeline

This module tests the invariants every pipeline stage must hold for
arbitrary input:

- Segment scanning is lossless
- Normalization never lengthens text
- Duplicate correction is idempotent
- Fenced code passes through the full pipeline byte-for-byte
- Reveal chunks are non-empty and reconstruct the text
"""

from hypothesis import given, strategies as st, settings

from services.renderer_service import split_chunks
from services.text_pipeline import reconstruct_text
from utils.deduplicator import dedupe
from utils.normalizer import normalize
from utils.span_scanner import join_segments, scan_segments


# =============================================================================
# Strategy Definitions
# =============================================================================

# Characters that exercise the interesting paths: repeated letters, word
# separators, markdown markers, backticks and URL prefixes.
ARTIFACT_ALPHABET = list("aAeElLoOtTwWhHps .,!?:/()\t\n`#-1_")


@st.composite
def artifact_text(draw):
    """Generate text dense in repetition artifacts and markup."""
    pieces = draw(st.lists(
        st.one_of(
            st.text(alphabet=st.sampled_from(ARTIFACT_ALPHABET), max_size=12),
            st.sampled_from([
                "the the ", "Helllo ", "wooorld", "```", "`x`", "https://a.io/b",
                "www.x.org", "htttp://y", "\n\n\n", "# ", "- ", "1. ", "great great.",
            ]),
        ),
        max_size=10
    ))
    return "".join(pieces)


any_text = st.one_of(st.text(max_size=200), artifact_text())

# Every character doubled, the way a duplicated token stream repeats itself
doubled_text = artifact_text().map(lambda s: "".join(c * 2 for c in s))

no_backtick_text = st.text(max_size=80).filter(lambda s: "`" not in s)


# =============================================================================
# Property: Lossless Scanning
# =============================================================================

@given(any_text)
@settings(max_examples=100)
def test_scanned_segments_reconstruct_input(text):
    """Segments always concatenate to exactly the scanned text."""
    segments = scan_segments(text)

    assert join_segments(segments) == text
    assert all(segment.text for segment in segments), "Segments must be non-empty"


# =============================================================================
# Property: Normalization Never Lengthens Text
# =============================================================================

@given(any_text)
@settings(max_examples=100, deadline=None)
def test_normalize_never_lengthens(text):
    """len(normalize(x)) <= len(x) for every input."""
    assert len(normalize(text)) <= len(text)


# =============================================================================
# Property: Dedupe Idempotence
# =============================================================================

@given(st.one_of(any_text, doubled_text))
@settings(max_examples=100, deadline=None)
def test_dedupe_is_idempotent(text):
    """dedupe(dedupe(x)) == dedupe(x) for every input."""
    once = dedupe(text)

    assert dedupe(once) == once


# =============================================================================
# Property: Code Block Invariance
# =============================================================================

@given(before=no_backtick_text, code=no_backtick_text, after=no_backtick_text)
@settings(max_examples=100, deadline=None)
def test_fenced_code_survives_pipeline(before, code, after):
    """A fenced code block appears verbatim in the cleaned text."""
    fence = "```" + code + "```"

    cleaned = reconstruct_text(before + fence + after)

    assert fence in cleaned


# =============================================================================
# Property: Reveal Chunks Reconstruct Text
# =============================================================================

@given(
    text=any_text,
    min_chunk_length=st.integers(min_value=1, max_value=8),
    short_text_threshold=st.integers(min_value=0, max_value=20)
)
@settings(max_examples=100)
def test_chunks_reconstruct_text(text, min_chunk_length, short_text_threshold):
    """Chunks are non-empty and concatenate to exactly the input."""
    chunks = split_chunks(text, min_chunk_length, short_text_threshold)

    assert "".join(chunks) == text
    assert all(chunks), "Chunks must be non-empty"


@given(any_text)
@settings(max_examples=50, deadline=None)
def test_pipeline_output_chunks_reconstruct(text):
    """Chunking the pipeline output loses nothing."""
    cleaned = reconstruct_text(text)

    assert "".join(split_chunks(cleaned)) == cleaned
