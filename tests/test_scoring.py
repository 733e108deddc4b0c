"""Tests for overall scoring and improvement prioritization."""

import pytest

from grantscore.models import (
    Draft,
    ResultStatus,
    Suggestion,
    SuggestionKind,
    Template,
    ValidationResult,
)
from grantscore.scoring import (
    critical_issues,
    overall_score,
    prioritize_improvements,
    validation_suggestions,
)
from grantscore.validation import validate


def _result(field_name, status, rule_kind="min_length", message=None):
    return ValidationResult(
        field_name=field_name,
        rule_kind=rule_kind,
        status=status,
        message=message or f"{field_name} {rule_kind} {status.value}",
    )


def _suggestion(text, confidence):
    return Suggestion(section_id="f1", kind=SuggestionKind.CONTENT, text=text, confidence=confidence)


class TestOverallScore:
    """Tests for the weighted overall score."""

    def test_empty_draft_scores_zero(self):
        template = Template(required_fields=["a", "b"])
        draft = Draft()

        score = overall_score(draft, template, validate(draft, template), lambda text: 1.0)

        assert score == 0.0

    def test_full_draft(self, five_field_template):
        draft = Draft(
            form_data={"f1": "x", "f2": "summary", "f3": 1000, "f4": "2025-01-01", "f5": "letters.pdf"}
        )

        score = overall_score(draft, five_field_template, validate(draft, five_field_template), lambda text: 1.0)

        assert score == 1.0

    def test_partial_draft(self, five_field_template):
        """40% complete, one of three checks passing, content scored 0.5."""
        draft = Draft(form_data={"f1": "x", "f4": "y"})

        score = overall_score(draft, five_field_template, validate(draft, five_field_template), lambda text: 0.5)

        assert score == 0.41

    def test_only_string_required_fields_are_content_scored(self, five_field_template):
        draft = Draft(form_data={"f1": "title", "f2": "", "f3": 5000})
        scored = []

        def scorer(text):
            scored.append(text)
            return 0.5

        overall_score(draft, five_field_template, [], scorer)

        assert scored == ["title"]

    def test_no_validation_results(self):
        template = Template(optional_fields=["notes"])
        draft = Draft(form_data={"notes": 42})

        assert overall_score(draft, template, [], lambda text: 1.0) == 0.4

    @pytest.mark.parametrize("content_score", [-3.0, 0.0, 0.7, 5.0])
    def test_bounds(self, five_field_template, content_score):
        draft = Draft(form_data={"f1": "x", "f2": "y", "f3": 1})

        score = overall_score(
            draft, five_field_template, validate(draft, five_field_template), lambda text: content_score
        )

        assert 0.0 <= score <= 1.0

    def test_rounded_to_two_decimals(self, five_field_template):
        draft = Draft(form_data={"f1": "x"})

        score = overall_score(draft, five_field_template, validate(draft, five_field_template), lambda text: 0.333)

        assert score == round(score, 2)


class TestCriticalIssues:
    def test_only_required_failures(self):
        results = [
            _result("a", ResultStatus.FAIL, "required", "a is required"),
            _result("b", ResultStatus.PASS, "required", "b is provided"),
            _result("c", ResultStatus.FAIL, "min_length", "c is too short"),
        ]

        assert critical_issues(results) == ["a is required"]

    def test_custom_required_message_still_critical(self):
        results = [_result("a", ResultStatus.FAIL, "required", "Please tell us your name")]

        assert critical_issues(results) == ["Please tell us your name"]


class TestPrioritizeImprovements:
    """Tests for improvement ordering."""

    def test_group_order(self):
        results = [
            _result("x", ResultStatus.FAIL, "max_length", "x is too long"),
            _result("a", ResultStatus.FAIL, "required", "a is required"),
            _result("y", ResultStatus.PASS, "min_length", "ok"),
            _result("b", ResultStatus.FAIL, "required", "b is required"),
        ]
        suggestions = [
            _suggestion("Low confidence", 0.5),
            _suggestion("High confidence", 0.95),
            _suggestion("Borderline", 0.8),
        ]

        improvements = prioritize_improvements(results, suggestions)

        assert improvements == ["a is required", "b is required", "High confidence", "x is too long"]

    def test_truncated_to_ten(self):
        results = [
            _result(f"f{i}", ResultStatus.FAIL, "required", f"f{i} is required") for i in range(12)
        ]

        improvements = prioritize_improvements(results, [_suggestion("Extra", 0.9)])

        assert len(improvements) == 10
        assert improvements == [f"f{i} is required" for i in range(10)]

    def test_empty(self):
        assert prioritize_improvements([], []) == []


class TestValidationSuggestions:
    def test_missing_required_fields(self, five_field_template):
        draft = Draft(form_data={"f1": "Telehealth expansion", "f3": "  "})

        suggestions = validation_suggestions(draft, five_field_template)

        assert [s.section_id for s in suggestions] == ["f2", "f3"]
        assert suggestions[0].text == "Complete the f2 field"
        assert suggestions[0].kind == SuggestionKind.AUTO_COMPLETE
        assert all(s.confidence == 0.9 for s in suggestions)

    def test_complete_draft(self, five_field_template):
        draft = Draft(form_data={"f1": "x", "f2": "y", "f3": 0})

        assert validation_suggestions(draft, five_field_template) == []
