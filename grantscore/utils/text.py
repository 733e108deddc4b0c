"""Text utility functions shared by the analyzers."""

import json
import math
import re
from typing import Any, List

SENTENCE_BREAK = re.compile(r"[.!?]+")
VOWEL_GROUP = re.compile(r"[aeiou]+")
NON_LETTER = re.compile(r"[^a-z]")


def split_words(text: str) -> List[str]:
    """Split text on runs of whitespace."""
    return text.split()


def split_sentences(text: str) -> List[str]:
    """Split text on runs of sentence punctuation, dropping blank fragments."""
    return [s for s in SENTENCE_BREAK.split(text) if s.strip()]


def count_syllables(word: str) -> int:
    """Approximate syllables in a word by counting vowel groups.

    A word with no vowel group (including one with no letters at all)
    counts as a single syllable.
    """
    letters = NON_LETTER.sub("", word.lower())
    return max(1, len(VOWEL_GROUP.findall(letters)))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero for non-negative values.

    Python's round() uses banker's rounding; scores here follow the
    conventional half-up rule instead.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def stringify(value: Any) -> str:
    """Render a form value as the text that length rules measure."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)
