"""Application validation and scoring engine.

``ApplicationEngine`` wires the validator, completion calculator, text
analyzers and scorer into the operations callers use. Every operation is a
function of its arguments: the engine keeps no state between calls and never
modifies the drafts it is given.
"""

from functools import partial
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from grantscore.analysis import (
    analyze_keywords,
    analyze_readability,
    analyze_tone,
    improvement_suggestions,
    score_content,
    writing_suggestions,
    writing_tips,
)
from grantscore.llm.provider import FieldCompleter
from grantscore.models import (
    ContentAnalysis,
    Draft,
    FieldCompletion,
    FieldCompletionRequest,
    FormPlan,
    ScoreReport,
    SectionKind,
    Suggestion,
    Template,
    ValidationResult,
    WritingAssistance,
)
from grantscore.scoring import (
    critical_issues,
    overall_score,
    prioritize_improvements,
    validation_suggestions,
)
from grantscore.utils.logging_config import get_logger
from grantscore.utils.text import split_words
from grantscore.validation import completion_percentage, validate
from grantscore.values import is_filled

logger = get_logger()

# Minutes a user typically spends on one section of each kind
MINUTES_PER_SECTION: Dict[SectionKind, int] = {
    SectionKind.TEXT: 5,
    SectionKind.NUMBER: 2,
    SectionKind.DATE: 1,
    SectionKind.FILE: 10,
    SectionKind.SELECTION: 3,
    SectionKind.TABLE: 15,
    SectionKind.NARRATIVE: 30,
}
MIN_COMPLETION_MINUTES = 15
NEXT_SECTION_COUNT = 3


def _require(value: Any, expected: type, name: str) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{name} must be a {expected.__name__}, got {type(value).__name__}")


def _log_context(template: Template, draft: Draft) -> Dict[str, str]:
    return {"draft_id": draft.id, "template_id": template.id, "grant_id": template.grant_id}


class ApplicationEngine:
    """Stateless facade over validation, analysis and scoring."""

    def __init__(self, completer: Optional[FieldCompleter] = None):
        """Initialize the engine.

        Args:
            completer: Field completer used by auto_complete (optional)
        """
        self.completer = completer

    def validate(
        self,
        template: Template,
        draft: Draft,
        reference_text: Optional[str] = None,
    ) -> ScoreReport:
        """Validate a draft and score it.

        Args:
            template: Template the draft answers
            draft: Draft to evaluate
            reference_text: Keyword reference for content scoring; defaults
                to the template title and description

        Returns:
            ScoreReport for the draft
        """
        _require(template, Template, "template")
        _require(draft, Draft, "draft")

        log_context = _log_context(template, draft)
        logger.info(
            f"Validating draft {draft.id or '<unsaved>'} against template {template.id or '<unsaved>'}",
            extra=log_context,
        )

        reference = template.reference_text if reference_text is None else reference_text

        results = validate(draft, template)
        completion = completion_percentage(draft, template)
        suggestions = validation_suggestions(draft, template)
        score = overall_score(
            draft,
            template,
            results,
            partial(score_content, reference_text=reference),
        )
        issues = critical_issues(results)
        improvements = prioritize_improvements(results, suggestions)

        logger.info(
            f"Validation complete: score={score}, completion={completion}%, "
            f"critical_issues={len(issues)}, suggestions={len(suggestions)}",
            extra=log_context,
        )

        return ScoreReport(
            validation_results=results,
            overall_score=score,
            completion_percentage=completion,
            critical_issues=issues,
            prioritized_improvements=improvements,
            suggestions=suggestions,
        )

    def auto_complete(
        self,
        template: Template,
        draft: Draft,
        field_names: Iterable[str],
        context: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, FieldCompletion]:
        """Ask the field completer for values of the requested fields.

        Fields without a matching section are skipped. Errors raised by the
        completer propagate to the caller.

        Args:
            template: Template the draft answers
            draft: Draft being completed (not modified)
            field_names: Field ids or section titles to complete
            context: Plain values the completer may use (grant, profile, ...)

        Returns:
            Completion per requested field that matched a section
        """
        _require(template, Template, "template")
        _require(draft, Draft, "draft")
        if self.completer is None:
            raise RuntimeError("auto_complete requires a field completer")

        field_names = list(field_names)
        log_context = _log_context(template, draft)
        logger.info(
            f"Auto-completing {len(field_names)} fields for draft {draft.id or '<unsaved>'}",
            extra=log_context,
        )

        completions: Dict[str, FieldCompletion] = {}
        for field_name in field_names:
            section = template.find_section(field_name)
            if section is None:
                logger.warning(
                    f"Section not found for auto-completion: {field_name}",
                    extra={**log_context, "field_name": field_name},
                )
                continue

            request = FieldCompletionRequest(
                field_name=field_name,
                section=section,
                template_id=template.id,
                grant_id=template.grant_id,
                current_data=dict(draft.form_data),
                context=dict(context or {}),
            )
            completion = self.completer.complete(request)
            completions[field_name] = completion

            logger.debug(
                f"Field auto-completed: {field_name} "
                f"(confidence={completion.confidence}, has_value={completion.value is not None})",
                extra={**log_context, "field_name": field_name},
            )

        return completions

    def score_content(self, text: str, reference_text: str = "") -> ContentAnalysis:
        """Readability, keyword coverage and a quality estimate for a text."""
        _require(text, str, "text")
        _require(reference_text, str, "reference_text")

        return ContentAnalysis(
            readability=analyze_readability(text),
            keyword_optimization=analyze_keywords(text, reference_text),
            estimated_score=score_content(text, reference_text),
            word_count=len(split_words(text)),
            improvement_suggestions=improvement_suggestions(text, reference_text),
        )

    def recommend(
        self,
        validation_results: Sequence[ValidationResult],
        suggestions: Sequence[Suggestion] = (),
    ) -> List[str]:
        """Prioritized improvement list for validation results and suggestions."""
        return prioritize_improvements(validation_results, suggestions)

    def assist_writing(
        self,
        template: Template,
        draft: Draft,
        section_id: str,
        reference_text: Optional[str] = None,
    ) -> WritingAssistance:
        """Writing feedback for one section of a draft.

        Raises:
            KeyError: If the template has no such section
        """
        _require(template, Template, "template")
        _require(draft, Draft, "draft")

        section = template.get_section(section_id)
        if section is None:
            raise KeyError(f"Section not found: {section_id}")

        raw = draft.form_data.get(section_id)
        content = raw if isinstance(raw, str) else ""
        reference = template.reference_text if reference_text is None else reference_text

        return WritingAssistance(
            section_id=section_id,
            suggestions=writing_suggestions(content, section),
            tone_analysis=analyze_tone(content),
            readability=analyze_readability(content),
            keyword_optimization=analyze_keywords(content, reference),
            writing_tips=writing_tips(section.kind.value),
        )

    def plan(self, template: Template, form_data: Optional[Mapping[str, Any]] = None) -> FormPlan:
        """Estimate remaining effort and pick the next sections to work on.

        Args:
            template: Template being filled
            form_data: Answers given or pre-filled so far

        Returns:
            FormPlan with minutes remaining and up to three section ids
        """
        _require(template, Template, "template")
        form_data = form_data or {}

        unfilled = [
            section
            for section in template.sections
            if not is_filled(form_data.get(section.id), section)
        ]

        minutes = sum(MINUTES_PER_SECTION.get(section.kind, 10) for section in unfilled)
        # Required sections first, then display order
        ranked = sorted(unfilled, key=lambda s: (not s.required, s.order))

        return FormPlan(
            estimated_completion_minutes=max(MIN_COMPLETION_MINUTES, minutes),
            next_recommended_sections=[s.id for s in ranked[:NEXT_SECTION_COUNT]],
        )
