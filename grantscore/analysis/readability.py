"""Flesch Reading Ease scoring."""

from typing import List

from grantscore.models import ReadabilityReport
from grantscore.utils.text import count_syllables, round_half_up, split_sentences, split_words

# Grade buckets, checked top-down against the clamped score
GRADE_LEVELS = [
    (90, "Elementary"),
    (80, "Middle School"),
    (70, "High School"),
    (60, "College"),
]
DEFAULT_GRADE = "Graduate"

READABILITY_HINTS = [
    "Use shorter sentences",
    "Simplify complex words where possible",
    "Break up long paragraphs",
]


def readability_score(text: str) -> float:
    """Compute a Flesch Reading Ease score clamped to [0, 100].

    Args:
        text: Text to score

    Returns:
        Score; 0 for text without sentences or words
    """
    sentences = len(split_sentences(text))
    words = split_words(text)

    if sentences == 0 or not words:
        return 0.0

    syllables = sum(count_syllables(word) for word in words)

    avg_sentence_length = len(words) / sentences
    avg_syllables_per_word = syllables / len(words)

    score = 206.835 - (1.015 * avg_sentence_length) - (84.6 * avg_syllables_per_word)

    return max(0.0, min(100.0, score))


def grade_level(score: float) -> str:
    for threshold, label in GRADE_LEVELS:
        if score > threshold:
            return label
    return DEFAULT_GRADE


def analyze_readability(text: str) -> ReadabilityReport:
    """Score text and attach a grade level and simplification hints."""
    score = readability_score(text)

    improvements: List[str] = list(READABILITY_HINTS) if score < 60 else []

    return ReadabilityReport(
        score=int(round_half_up(score)),
        grade_level=grade_level(score),
        improvements=improvements,
    )
