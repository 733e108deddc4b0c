"""Section-level writing aids: tone, tips and quick suggestions."""

import re
from typing import Dict, List

from grantscore.models import Section, Suggestion, SuggestionKind, ToneAnalysis

TECHNICAL_TERMS = re.compile(r"\b(methodology|implementation|framework|analysis)\b", re.IGNORECASE)
FIRST_PERSON = re.compile(r"\b(I|we|our|us)\b", re.IGNORECASE)

RECOMMENDED_TONE = "professional"
TONE_ADJUSTMENTS = [
    "Use active voice where possible",
    "Be specific with examples",
    "Maintain professional language",
]

WRITING_TIPS: Dict[str, List[str]] = {
    "narrative": [
        "Use clear, concise language",
        "Start with a compelling opening",
        "Support claims with specific examples",
        "Address all grant criteria systematically",
    ],
    "budget": [
        "Justify all budget items",
        "Ensure budget aligns with project activities",
        "Include contingency planning",
        "Show cost-effectiveness",
    ],
    "technical": [
        "Use appropriate technical terminology",
        "Include methodology details",
        "Address feasibility concerns",
        "Provide timeline and milestones",
    ],
}
GENERAL_TIPS = [
    "Be specific and detailed",
    "Use active voice",
    "Proofread carefully",
    "Follow grant guidelines exactly",
]

MIN_SECTION_CHARS = 100


def analyze_tone(content: str) -> ToneAnalysis:
    """Classify the tone of content as technical, personal or neutral."""
    if TECHNICAL_TERMS.search(content):
        current_tone = "technical"
    elif FIRST_PERSON.search(content):
        current_tone = "personal"
    else:
        current_tone = "neutral"

    return ToneAnalysis(
        current_tone=current_tone,
        recommended_tone=RECOMMENDED_TONE,
        adjustments=list(TONE_ADJUSTMENTS),
    )


def writing_tips(section_type: str) -> List[str]:
    """Tips for a section type (narrative, budget, technical, ...)."""
    return list(WRITING_TIPS.get(section_type, GENERAL_TIPS))


def writing_suggestions(content: str, section: Section) -> List[Suggestion]:
    suggestions = []

    if len(content) < MIN_SECTION_CHARS:
        suggestions.append(
            Suggestion(
                section_id=section.id,
                kind=SuggestionKind.IMPROVEMENT,
                original_text=content,
                text=f"Expand {section.title} with more detail and specific examples",
                reasoning="Content appears too brief for this section type",
                confidence=0.8,
            )
        )

    return suggestions
