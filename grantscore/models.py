"""Pydantic models for application templates, drafts and evaluation results."""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SectionKind(str, Enum):
    """Kind of input a template section collects."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    FILE = "file"
    SELECTION = "selection"
    TABLE = "table"
    NARRATIVE = "narrative"


class RuleKind(str, Enum):
    """Rule kinds the template schema defines.

    Kinds outside this set are kept on the rule as their raw string and
    always pass validation.
    """
    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"
    RANGE = "range"
    DEPENDENCY = "dependency"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ResultStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class SuggestionKind(str, Enum):
    CONTENT = "content"
    STRUCTURE = "structure"
    IMPROVEMENT = "improvement"
    ERROR_FIX = "error_fix"
    AUTO_COMPLETE = "auto_complete"


class DraftStatus(str, Enum):
    DRAFT = "draft"
    IN_REVIEW = "in_review"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_REPEATED_UNDERSCORES = re.compile(r"_+")


def parse_rule_kind(kind: Any) -> Union[RuleKind, str]:
    """Map a rule kind name onto RuleKind, accepting camelCase and upper-case spellings.

    Unrecognized names are returned unchanged.
    """
    if isinstance(kind, RuleKind):
        return kind
    name = str(kind).strip()
    # SCREAMING_CASE has no camel boundaries to split on
    spaced = name if name.isupper() else _CAMEL_BOUNDARY.sub("_", name)
    normalized = _REPEATED_UNDERSCORES.sub("_", spaced.lower())
    try:
        return RuleKind(normalized)
    except ValueError:
        return name


class Section(BaseModel):
    """One addressable field of an application form."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    kind: SectionKind = SectionKind.TEXT
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    order: int = 0
    help_text: Optional[str] = None


class Rule(BaseModel):
    """Declarative check attached to a form field."""

    model_config = ConfigDict(frozen=True)

    field_name: str
    kind: Union[RuleKind, str] = Field(union_mode="left_to_right")
    parameters: dict[str, Any] = Field(default_factory=dict)
    message: str = ""
    severity: Severity = Severity.ERROR

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, value: Any) -> Union[RuleKind, str]:
        return parse_rule_kind(value)

    @property
    def kind_name(self) -> str:
        """Rule kind as a plain string."""
        return self.kind.value if isinstance(self.kind, RuleKind) else self.kind

    @property
    def is_known_kind(self) -> bool:
        return isinstance(self.kind, RuleKind)


class Template(BaseModel):
    """Static description of a grant application form."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    grant_id: str = ""
    template_type: str = "form"  # form, narrative, budget, technical
    title: str = ""
    description: str = ""
    sections: tuple[Section, ...] = ()
    required_fields: tuple[str, ...] = ()
    optional_fields: tuple[str, ...] = ()
    validation_rules: tuple[Rule, ...] = ()

    @model_validator(mode="after")
    def _check_unique_section_ids(self) -> "Template":
        seen: set[str] = set()
        for section in self.sections:
            if section.id in seen:
                raise ValueError(f"Duplicate section id: {section.id}")
            seen.add(section.id)
        return self

    @property
    def reference_text(self) -> str:
        """Title and description, the default keyword reference."""
        return f"{self.title} {self.description}".strip()

    def get_section(self, section_id: str) -> Optional[Section]:
        """Return the section with the given id, if any."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def find_section(self, field_name: str) -> Optional[Section]:
        """Find a section by id, falling back to a title containing the name."""
        section = self.get_section(field_name)
        if section is not None:
            return section

        needle = field_name.lower()
        for candidate in self.sections:
            if needle in candidate.title.lower():
                return candidate
        return None

    def ordered_sections(self) -> list[Section]:
        return sorted(self.sections, key=lambda s: s.order)


class ValidationResult(BaseModel):
    """Verdict of one rule against a draft."""

    model_config = ConfigDict(frozen=True)

    field_name: str
    rule_kind: str
    status: ResultStatus
    message: str
    auto_fix_available: bool = False
    severity: Severity = Severity.ERROR

    @property
    def is_required_failure(self) -> bool:
        """True for a failed required-field check."""
        return (
            self.status == ResultStatus.FAIL
            and self.rule_kind == RuleKind.REQUIRED.value
        )


class Suggestion(BaseModel):
    """Actionable recommendation for a section."""

    model_config = ConfigDict(frozen=True)

    section_id: str
    kind: SuggestionKind
    text: str
    reasoning: str = ""
    confidence: float = Field(ge=0.0, le=1.0)
    original_text: Optional[str] = None


class Draft(BaseModel):
    """One user's in-progress answers against a template."""

    id: str = ""
    template_id: str = ""
    grant_id: str = ""
    user_id: str = ""
    title: str = ""
    status: DraftStatus = DraftStatus.DRAFT
    form_data: dict[str, Any] = Field(default_factory=dict)

    # Written by the orchestration layer after an evaluation
    completion_percentage: int = 0
    validation_results: list[ValidationResult] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    last_reviewed_at: Optional[datetime] = None


class ScoreReport(BaseModel):
    """Aggregate output of a draft validation."""

    model_config = ConfigDict(frozen=True)

    validation_results: list[ValidationResult] = Field(default_factory=list)
    overall_score: float = Field(ge=0.0, le=1.0)
    completion_percentage: int = Field(ge=0, le=100)
    critical_issues: list[str] = Field(default_factory=list)
    prioritized_improvements: list[str] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)


class ReadabilityReport(BaseModel):
    score: int
    grade_level: str
    improvements: list[str] = Field(default_factory=list)


class KeywordReport(BaseModel):
    missing_keywords: list[str] = Field(default_factory=list)
    keyword_density: dict[str, float] = Field(default_factory=dict)


class ContentAnalysis(BaseModel):
    """Combined readability, keyword and quality estimate for a text."""

    readability: ReadabilityReport
    keyword_optimization: KeywordReport
    estimated_score: float
    word_count: int = 0
    improvement_suggestions: list[str] = Field(default_factory=list)


class ToneAnalysis(BaseModel):
    current_tone: str
    recommended_tone: str
    adjustments: list[str] = Field(default_factory=list)


class WritingAssistance(BaseModel):
    """Writing feedback for a single section of a draft."""

    section_id: str
    suggestions: list[Suggestion] = Field(default_factory=list)
    tone_analysis: ToneAnalysis
    readability: ReadabilityReport
    keyword_optimization: KeywordReport
    writing_tips: list[str] = Field(default_factory=list)


class FormPlan(BaseModel):
    estimated_completion_minutes: int
    next_recommended_sections: list[str] = Field(default_factory=list)


class FieldCompletionRequest(BaseModel):
    """Everything a field completer may use to propose a value."""

    field_name: str
    section: Section
    template_id: str = ""
    grant_id: str = ""
    current_data: dict[str, Any] = Field(default_factory=dict)
    context: dict[str, Any] = Field(default_factory=dict)


class FieldCompletion(BaseModel):
    """Proposed value for one field, as returned by a field completer."""

    value: Any = None
    confidence: float = 0.0
    reasoning: str = ""
