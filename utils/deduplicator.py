"""
Duplication Corrector

Second pipeline stage: collapses repetition artifacts introduced by the
upstream token stream, outside protected spans.

Doubling rule:
    When more than DOUBLED_PAIR_RATE of the adjacent character pairs in the
    unprotected text repeat, the whole response is taken to be doubled
    ("TThhiiss iiss aa tteesstt"). Every token that consists entirely of
    repeated pairs is then halved. Tokens shorter than MIN_DOUBLED_TOKEN are
    only halved when they are a single doubled letter ("aa" -> "a").

Character rule:
    Within an alphabetic run, a letter repeated three or more times in a row
    is reduced to two when it is whitelisted ("Helllo" -> "Hello") and to one
    otherwise ("yaaay" -> "yay"). When a word has whitelisted runs, each
    one-or-two choice is ranked by word frequency so that "wooorld" becomes
    "world" rather than "woorld". Digits, punctuation and emoji are never
    touched.

Word rule:
    A token that repeats the previously kept token on the same line,
    case-insensitively and separated only by spaces or tabs, is dropped
    together with its leading whitespace ("the the" -> "the"). Tokens
    separated by punctuation ("the, the") are left alone.

The three rules are applied in that order until the text stops changing.
Every change shortens the text, so the loop ends, and its result is a fixed
point: dedupe(dedupe(x)) == dedupe(x).
"""

import logging
import re
from itertools import groupby, product
from typing import Iterable, List, Optional, Sequence, Tuple

from wordfreq import zipf_frequency

from models.pipeline_config import DEFAULT_PIPELINE_CONFIG, PipelineConfig, SpanKind
from models.segment import Segment
from utils.span_scanner import join_segments, scan_segments

logger = logging.getLogger(__name__)

# Runs of three or more are artifacts; pairs may be legitimate spelling
MIN_ARTIFACT_RUN = 3

# Beyond this many ambiguous runs in one word the whitelist default is used
# instead of ranking every spelling.
MAX_RANKED_RUNS = 4

DOUBLED_PAIR_RATE = 0.3
MIN_DOUBLED_TOKEN = 4

_ALPHA_RUN_RE = re.compile(r"[^\W\d_]+")
_TRIPLE_RE = re.compile(r"(.)\1\1")
_WS_SPLIT_RE = re.compile(r"([ \t]+)")
_TOKEN_PARTS_RE = re.compile(r"^([\W_]*)(.*?)([\W_]*)$", re.DOTALL)
_NON_SPACE_RE = re.compile(r"\S+")
# Repeats of these never count towards the doubling rate
_PAIR_EXEMPT_CHARS = frozenset(" \t\n.,!?;:")


def dedupe(text: str, config: Optional[PipelineConfig] = None) -> str:
    """
    Collapse doubled text and character-level and word-level repetition
    artifacts.

    Args:
        text: Text to correct, possibly empty
        config: Pipeline configuration (defaults apply when omitted)

    Returns:
        Corrected text; protected spans are returned unchanged
    """
    if not text:
        return text
    config = config or DEFAULT_PIPELINE_CONFIG
    segments = scan_segments(text, config.protected_span_markers)
    return join_segments(dedupe_segments(segments, config))


def dedupe_segments(segments: List[Segment], config: PipelineConfig) -> List[Segment]:
    """Apply the duplication rules to the text segments of a scanned input."""
    corrected = list(segments)
    while True:
        step = _dedupe_step(corrected, config)
        if step == corrected:
            return corrected
        corrected = step


def _dedupe_step(segments: List[Segment], config: PipelineConfig) -> List[Segment]:
    doubled = is_systematically_doubled(s.text for s in segments if not s.is_protected)
    if doubled:
        logger.debug("Systematic character doubling detected, halving doubled tokens")

    corrected: List[Segment] = []
    for segment in segments:
        if segment.is_protected:
            corrected.append(segment)
            continue
        text = segment.text
        if doubled:
            text = collapse_doubled_characters(text, config)
        text = collapse_repeated_chars(text, config)
        text = collapse_repeated_words(text)
        if text:
            corrected.append(Segment(SpanKind.text, text))
    return corrected


# =============================================================================
# Doubling rule
# =============================================================================

def is_systematically_doubled(texts: Iterable[str]) -> bool:
    """Whether the share of repeated adjacent character pairs exceeds DOUBLED_PAIR_RATE."""
    pairs = 0
    repeated = 0
    for text in texts:
        pairs += max(len(text) - 1, 0)
        repeated += sum(
            1 for a, b in zip(text, text[1:])
            if a == b and a not in _PAIR_EXEMPT_CHARS
        )
    return pairs > 0 and repeated / pairs > DOUBLED_PAIR_RATE


def collapse_doubled_characters(text: str, config: PipelineConfig = DEFAULT_PIPELINE_CONFIG) -> str:
    """Halve every whitespace-delimited token made entirely of repeated pairs."""
    return _NON_SPACE_RE.sub(
        lambda m: _undouble_token(m.group(0), config.protected_span_markers),
        text
    )


def _undouble_token(token: str, markers) -> str:
    if len(token) % 2:
        return token
    if len(token) < MIN_DOUBLED_TOKEN and not (len(token) == 2 and token[0].isalpha()):
        return token
    if any(token[i] != token[i + 1] for i in range(0, len(token), 2)):
        return token

    halved = token[::2]
    # A halved token that would scan as a URL or code span stays as it is,
    # so the segmentation of the corrected text matches the input's.
    if any(segment.is_protected for segment in scan_segments(halved, markers)):
        return token
    return halved


# =============================================================================
# Character rule
# =============================================================================

def collapse_repeated_chars(text: str, config: PipelineConfig = DEFAULT_PIPELINE_CONFIG) -> str:
    """Reduce letter runs of three or more inside every alphabetic run."""
    if not _TRIPLE_RE.search(text):
        return text
    return _ALPHA_RUN_RE.sub(lambda m: _reduce_word(m.group(0), config), text)


def _reduce_word(word: str, config: PipelineConfig) -> str:
    runs = [(char, len(list(group))) for char, group in groupby(word)]
    if all(count < MIN_ARTIFACT_RUN for _, count in runs):
        return word

    choices = [_run_lengths(char, count, config) for char, count in runs]
    ambiguous = sum(1 for lengths in choices if len(lengths) > 1)
    default = _spell(runs, [lengths[0] for lengths in choices])

    if ambiguous == 0 or config.lexicon_language is None:
        return default
    if ambiguous > MAX_RANKED_RUNS:
        logger.debug(f"Too many ambiguous runs to rank: word_length={len(word)}, runs={ambiguous}")
        return default

    candidates = [_spell(runs, lengths) for lengths in product(*choices)]
    try:
        # max() keeps the first of equally ranked spellings, and the
        # whitelist default is always generated first.
        return max(
            candidates,
            key=lambda candidate: zipf_frequency(candidate.lower(), config.lexicon_language)
        )
    except (LookupError, ValueError) as e:
        logger.warning(
            f"Word frequency lookup unavailable, keeping whitelist default: "
            f"language={config.lexicon_language}, error={e}"
        )
        return default


def _run_lengths(char: str, count: int, config: PipelineConfig) -> Tuple[int, ...]:
    """Allowed lengths for one run, whitelist default first."""
    if count < MIN_ARTIFACT_RUN or not char.isalpha():
        return (count,)
    if char.lower() in config.duplicate_char_whitelist:
        return (2, 1)
    return (1,)


def _spell(runs: Sequence[Tuple[str, int]], lengths: Sequence[int]) -> str:
    return "".join(char * length for (char, _), length in zip(runs, lengths))


# =============================================================================
# Word rule
# =============================================================================

def collapse_repeated_words(text: str) -> str:
    """Drop immediately repeated words on each line."""
    return "\n".join(_collapse_line(line) for line in text.split("\n"))


def _collapse_line(line: str) -> str:
    # re.split with a capture group alternates token, whitespace, token, ...
    parts = _WS_SPLIT_RE.split(line)
    if len(parts) < 3:
        return line

    out = [parts[0]]
    kept = parts[0]
    for i in range(1, len(parts), 2):
        whitespace, token = parts[i], parts[i + 1]
        merged = _merge_repeat(kept, token)
        if merged is None:
            out.append(whitespace)
            out.append(token)
            kept = token
        else:
            out[-1] = merged
            kept = merged
    return "".join(out)


def _merge_repeat(previous: str, token: str) -> Optional[str]:
    """
    Return the merged token when token repeats previous, else None.

    The first occurrence keeps its casing and leading punctuation; trailing
    punctuation of the repeat is carried over ("great great." -> "great.").
    """
    _, previous_core, previous_trail = _split_token(previous)
    lead, core, trail = _split_token(token)

    if not core or lead or previous_trail:
        return None
    if not any(char.isalpha() for char in core):
        return None
    if core.casefold() != previous_core.casefold():
        return None
    return previous + trail


def _split_token(token: str) -> Tuple[str, str, str]:
    match = _TOKEN_PARTS_RE.match(token)
    return match.group(1), match.group(2), match.group(3)
