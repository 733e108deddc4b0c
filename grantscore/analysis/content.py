"""Heuristic content quality scoring.

The score is a coarse triage signal built from length and keyword overlap;
it says nothing about the semantic quality of the text.
"""

from typing import List

from grantscore.utils.text import split_words

BASE_SCORE = 0.5
LENGTH_BONUSES = [(100, 0.1), (300, 0.1)]
MAX_KEYWORD_BONUS = 0.3
MIN_SCORE = 0.1
MAX_SCORE = 1.0
MIN_IMPORTANT_WORD_LENGTH = 4


def important_words(reference_text: str) -> List[str]:
    """Lower-cased reference tokens longer than three characters."""
    return [
        word
        for word in split_words(reference_text.lower())
        if len(word) >= MIN_IMPORTANT_WORD_LENGTH
    ]


def score_content(content: str, reference_text: str = "") -> float:
    """Estimate content quality in [0.1, 1.0].

    Args:
        content: Text being scored
        reference_text: Grant title/description the text should address

    Returns:
        Score starting at 0.5, raised by length and keyword bonuses
    """
    score = BASE_SCORE

    word_count = len(split_words(content))
    for min_words, bonus in LENGTH_BONUSES:
        if word_count > min_words:
            score += bonus

    keywords = important_words(reference_text)
    if keywords:
        content_lower = content.lower()
        matches = sum(1 for word in keywords if word in content_lower)
        score += min(MAX_KEYWORD_BONUS, matches / len(keywords) * MAX_KEYWORD_BONUS)

    return min(MAX_SCORE, max(MIN_SCORE, score))


def improvement_suggestions(content: str, reference_text: str = "") -> List[str]:
    """Plain-language hints for strengthening a piece of content."""
    suggestions = []

    if len(split_words(content)) < 100:
        suggestions.append("Consider expanding with more detail and examples")

    reference_words = split_words(reference_text)
    if reference_words and reference_words[0] not in content:
        suggestions.append("Reference the specific grant program name")

    if len(content.split(".")) < 3:
        suggestions.append("Break content into more sentences for better readability")

    return suggestions
