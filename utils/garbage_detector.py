"""
Garbage Text Detector

Recognizes degenerate model output that cleaning cannot turn into a readable
answer: a known "caTng" artifact loop, walls of capital T, one word making up
a large share of a long response, or text that is mostly symbols.
"""

import re
from collections import Counter

GARBAGE_TEXT_MESSAGE = "An error occurred while generating the response. Please try again."

KNOWN_ARTIFACT = "caTng"
MAX_KNOWN_ARTIFACTS = 3
T_WALL = "TTTTT"

# Word repetition only counts in responses longer than this many words
MIN_WORDS_FOR_REPETITION = 20
MAX_WORD_REPEATS = 8
MAX_WORD_SHARE = 0.25

# Character densities only count in texts longer than this
MIN_LENGTH_FOR_DENSITY = 100
MAX_T_DENSITY = 0.15
MAX_SYMBOL_DENSITY = 0.4

_WORD_OR_SPACE_RE = re.compile(r"[\w\s]")


def contains_garbage_patterns(text: str) -> bool:
    """
    Check text for known garbage patterns.

    Args:
        text: Text to check, possibly empty

    Returns:
        True if the text looks like degenerate output
    """
    if not text:
        return False

    if text.count(KNOWN_ARTIFACT) > MAX_KNOWN_ARTIFACTS:
        return True
    if T_WALL in text:
        return True

    words = text.split()
    if len(words) > MIN_WORDS_FOR_REPETITION:
        counts = Counter(word for word in words if len(word) > 2)
        for count in counts.values():
            if count > MAX_WORD_REPEATS and count / len(words) > MAX_WORD_SHARE:
                return True

    if len(text) > MIN_LENGTH_FOR_DENSITY:
        if text.count("T") > len(text) * MAX_T_DENSITY:
            return True
        symbols = len(_WORD_OR_SPACE_RE.sub("", text))
        if symbols > len(text) * MAX_SYMBOL_DENSITY:
            return True

    return False
