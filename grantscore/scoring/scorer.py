"""Overall draft scoring."""

from typing import Callable, List, Sequence

from grantscore.models import Draft, ResultStatus, Template, ValidationResult
from grantscore.utils.text import round_half_up
from grantscore.validation import completion_percentage

COMPLETION_WEIGHT = 0.4
VALIDATION_WEIGHT = 0.3
CONTENT_WEIGHT = 0.3

ContentScorer = Callable[[str], float]


def overall_score(
    draft: Draft,
    template: Template,
    validation_results: Sequence[ValidationResult],
    content_scorer: ContentScorer,
) -> float:
    """Blend completion, rule pass rate and content quality into one score.

    Args:
        draft: Draft being evaluated
        template: Template the draft answers
        validation_results: Output of the validator for this draft
        content_scorer: Scores one text in [0, 1]; applied to every required
            field that holds string content

    Returns:
        Score in [0, 1], rounded to two decimals
    """
    score = completion_percentage(draft, template) / 100 * COMPLETION_WEIGHT

    if validation_results:
        passed = sum(1 for r in validation_results if r.status == ResultStatus.PASS)
        score += passed / len(validation_results) * VALIDATION_WEIGHT

    content_scores: List[float] = []
    for field_name in template.required_fields:
        content = draft.form_data.get(field_name)
        if isinstance(content, str) and content:
            content_scores.append(content_scorer(content))

    if content_scores:
        score += sum(content_scores) / len(content_scores) * CONTENT_WEIGHT

    return min(1.0, max(0.0, round_half_up(score, 2)))


def critical_issues(validation_results: Sequence[ValidationResult]) -> List[str]:
    """Messages of failed required-field checks."""
    return [r.message for r in validation_results if r.is_required_failure]
