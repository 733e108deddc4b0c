"""Improvement prioritization and validation-driven suggestions."""

from typing import List, Sequence

from grantscore.models import (
    Draft,
    ResultStatus,
    Suggestion,
    SuggestionKind,
    Template,
    ValidationResult,
)
from grantscore.values import is_filled

HIGH_CONFIDENCE = 0.8
MAX_IMPROVEMENTS = 10
MISSING_FIELD_CONFIDENCE = 0.9


def prioritize_improvements(
    validation_results: Sequence[ValidationResult],
    suggestions: Sequence[Suggestion],
) -> List[str]:
    """Order improvement actions by urgency.

    Required-field failures come first, then suggestions with confidence
    above 0.8, then every other failed rule. Order within each group is
    preserved and the list is cut to the top ten.

    Args:
        validation_results: Validator output
        suggestions: Suggestions gathered for the draft

    Returns:
        Up to ten improvement texts
    """
    required_failures = [r.message for r in validation_results if r.is_required_failure]
    confident = [s.text for s in suggestions if s.confidence > HIGH_CONFIDENCE]
    other_failures = [
        r.message
        for r in validation_results
        if r.status == ResultStatus.FAIL and not r.is_required_failure
    ]

    return (required_failures + confident + other_failures)[:MAX_IMPROVEMENTS]


def validation_suggestions(draft: Draft, template: Template) -> List[Suggestion]:
    """Suggest completing each required field that is still empty."""
    suggestions = []

    for field_name in template.required_fields:
        if is_filled(draft.form_data.get(field_name), template.get_section(field_name)):
            continue
        suggestions.append(
            Suggestion(
                section_id=field_name,
                kind=SuggestionKind.AUTO_COMPLETE,
                text=f"Complete the {field_name} field",
                reasoning="This field is required for application submission",
                confidence=MISSING_FIELD_CONFIDENCE,
            )
        )

    return suggestions
