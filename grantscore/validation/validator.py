"""Rule-based draft validation."""

import math
from typing import Any, Callable, Dict, List, Optional

from grantscore.models import (
    Draft,
    ResultStatus,
    Rule,
    RuleKind,
    Section,
    Severity,
    Template,
    ValidationResult,
)
from grantscore.utils.logging_config import get_logger
from grantscore.values import field_value, is_filled

logger = get_logger()

_MISSING = object()


def _threshold(parameters: Dict[str, Any], names: tuple, default: float) -> float:
    """Read a numeric rule parameter, falling back to a permissive default."""
    for name in names:
        value = parameters.get(name)
        if value is None or isinstance(value, bool):
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if math.isnan(number) or number < 0:
            continue
        return number
    return default


def _measure(value: Any, section: Optional[Section]) -> Optional[int]:
    """Length of a value as text, or None when it is absent."""
    if value is _MISSING or value is None:
        return None
    return len(field_value(value, section.kind if section else None).as_text())


def _check_min_length(value: Any, rule: Rule, section: Optional[Section] = None) -> ValidationResult:
    min_length = _threshold(rule.parameters, ("minLength", "min_length"), 0)
    length = _measure(value, section)
    is_valid = length is not None and length >= min_length

    return ValidationResult(
        field_name=rule.field_name,
        rule_kind=rule.kind_name,
        status=ResultStatus.PASS if is_valid else ResultStatus.FAIL,
        message="Minimum length met" if is_valid else (
            rule.message or f"{rule.field_name} must be at least {int(min_length)} characters"
        ),
        auto_fix_available=False,
        severity=rule.severity,
    )


def _check_max_length(value: Any, rule: Rule, section: Optional[Section] = None) -> ValidationResult:
    max_length = _threshold(rule.parameters, ("maxLength", "max_length"), math.inf)
    length = _measure(value, section)
    is_valid = length is None or length <= max_length

    return ValidationResult(
        field_name=rule.field_name,
        rule_kind=rule.kind_name,
        status=ResultStatus.PASS if is_valid else ResultStatus.FAIL,
        message="Maximum length respected" if is_valid else (
            rule.message or f"{rule.field_name} must be at most {int(max_length)} characters"
        ),
        # Truncation is always mechanically possible; the caller decides whether to apply it
        auto_fix_available=True,
        severity=rule.severity,
    )


def _vacuous_pass(value: Any, rule: Rule, section: Optional[Section] = None) -> ValidationResult:
    return ValidationResult(
        field_name=rule.field_name,
        rule_kind=rule.kind_name,
        status=ResultStatus.PASS,
        message="Validation passed",
        auto_fix_available=False,
        severity=rule.severity,
    )


RuleCheck = Callable[[Any, Rule, Optional[Section]], ValidationResult]

# Required, pattern, range and dependency rules are part of the template
# schema but have no checker yet; they pass like unknown kinds do.
RULE_CHECKS: Dict[RuleKind, RuleCheck] = {
    RuleKind.MIN_LENGTH: _check_min_length,
    RuleKind.MAX_LENGTH: _check_max_length,
}


def check_rule(value: Any, rule: Rule, section: Optional[Section] = None) -> ValidationResult:
    """Evaluate one template rule against a raw field value.

    Args:
        value: Raw form value, or the module's missing sentinel
        rule: Rule to evaluate
        section: Section the rule's field belongs to, if any; its kind
            decides how the value is read as text

    Returns:
        ValidationResult for the rule
    """
    check: Optional[RuleCheck] = None
    if rule.is_known_kind:
        check = RULE_CHECKS.get(rule.kind)
    else:
        logger.debug(f"Unknown rule kind '{rule.kind_name}' on {rule.field_name}; passing")

    return (check or _vacuous_pass)(value, rule, section)


def check_required(draft: Draft, template: Template, field_name: str) -> ValidationResult:
    """Check that a required field holds a value."""
    section = template.get_section(field_name)
    provided = is_filled(draft.form_data.get(field_name), section)

    return ValidationResult(
        field_name=field_name,
        rule_kind=RuleKind.REQUIRED.value,
        status=ResultStatus.PASS if provided else ResultStatus.FAIL,
        message=f"{field_name} is provided" if provided else f"{field_name} is required",
        auto_fix_available=False,
        severity=Severity.ERROR,
    )


def validate(draft: Draft, template: Template) -> List[ValidationResult]:
    """Run required-field checks and template rules against a draft.

    Results list the required-field checks first, in template order,
    followed by one result per validation rule in template order.

    Args:
        draft: Draft being evaluated
        template: Template the draft answers

    Returns:
        List of ValidationResult
    """
    if not isinstance(draft, Draft):
        raise TypeError(f"draft must be a Draft, got {type(draft).__name__}")
    if not isinstance(template, Template):
        raise TypeError(f"template must be a Template, got {type(template).__name__}")

    results = [
        check_required(draft, template, field_name)
        for field_name in template.required_fields
    ]

    for rule in template.validation_rules:
        value = draft.form_data.get(rule.field_name, _MISSING)
        results.append(check_rule(value, rule, template.get_section(rule.field_name)))

    failed = sum(1 for r in results if r.status == ResultStatus.FAIL)
    logger.debug(f"Validated draft {draft.id or '<unsaved>'}: {len(results)} checks, {failed} failed")

    return results
