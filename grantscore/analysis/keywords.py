"""Keyword coverage of content against a reference text."""

from typing import Dict, List

from grantscore.models import KeywordReport
from grantscore.utils.text import round_half_up, split_words

STOP_WORDS = {"that", "this", "with", "from", "they", "have", "will", "been"}
MIN_KEYWORD_LENGTH = 5
MAX_MISSING_KEYWORDS = 10


def extract_candidate_keywords(reference_text: str) -> List[str]:
    """Salient words of a reference text, in first-occurrence order.

    Args:
        reference_text: Grant title/description or similar text

    Returns:
        Lower-cased words longer than four characters, stop words removed
    """
    seen = set()
    keywords = []
    for word in split_words(reference_text.lower()):
        if len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS or word in seen:
            continue
        seen.add(word)
        keywords.append(word)
    return keywords


def analyze_keywords(content: str, reference_text: str) -> KeywordReport:
    """Measure how often reference keywords appear in content.

    A content token counts toward a keyword when it contains the keyword,
    so "innovations" counts for "innovation".

    Args:
        content: Text being evaluated
        reference_text: Text the keywords are drawn from

    Returns:
        KeywordReport with per-keyword density (percent, one decimal) and
        up to ten missing keywords in reference order
    """
    content_words = split_words(content.lower())
    total_words = len(content_words)

    keyword_density: Dict[str, float] = {}
    missing_keywords: List[str] = []

    for keyword in extract_candidate_keywords(reference_text):
        count = sum(1 for word in content_words if keyword in word)

        if count > 0:
            keyword_density[keyword] = round_half_up(count / total_words * 1000) / 10
        else:
            missing_keywords.append(keyword)

    return KeywordReport(
        missing_keywords=missing_keywords[:MAX_MISSING_KEYWORDS],
        keyword_density=keyword_density,
    )
