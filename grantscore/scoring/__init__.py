"""Draft scoring and improvement prioritization."""

from .prioritizer import prioritize_improvements, validation_suggestions
from .scorer import ContentScorer, critical_issues, overall_score

__all__ = [
    "ContentScorer",
    "critical_issues",
    "overall_score",
    "prioritize_improvements",
    "validation_suggestions",
]
