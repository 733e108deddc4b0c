"""Text analysis: readability, keywords, content quality and writing aids."""

from .content import improvement_suggestions, score_content
from .keywords import analyze_keywords, extract_candidate_keywords
from .readability import analyze_readability, grade_level, readability_score
from .writing import analyze_tone, writing_suggestions, writing_tips

__all__ = [
    "analyze_keywords",
    "analyze_readability",
    "analyze_tone",
    "extract_candidate_keywords",
    "grade_level",
    "improvement_suggestions",
    "readability_score",
    "score_content",
    "writing_suggestions",
    "writing_tips",
]
