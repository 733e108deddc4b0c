"""Draft validation and completion."""

from .completion import completion_percentage
from .validator import check_required, check_rule, validate

__all__ = ["validate", "check_rule", "check_required", "completion_percentage"]
