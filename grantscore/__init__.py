"""Validation and scoring engine for grant application drafts."""

__version__ = "0.1.0"

from .config import get_config, reset_config, set_config
from .engine import ApplicationEngine
from .models import (
    ContentAnalysis,
    Draft,
    FieldCompletion,
    Rule,
    RuleKind,
    ScoreReport,
    Section,
    SectionKind,
    Suggestion,
    Template,
    ValidationResult,
)

__all__ = [
    "get_config",
    "reset_config",
    "set_config",
    "ApplicationEngine",
    "ContentAnalysis",
    "Draft",
    "FieldCompletion",
    "Rule",
    "RuleKind",
    "ScoreReport",
    "Section",
    "SectionKind",
    "Suggestion",
    "Template",
    "ValidationResult",
]
