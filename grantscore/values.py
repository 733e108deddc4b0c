"""Typed views over raw draft form values.

Draft form data arrives as loosely typed JSON. ``field_value`` turns one raw
value into a variant keyed by section kind so that the validator and the
completion calculator decide "filled", and measure length, the same way for
every kind.
"""

from datetime import date, datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from grantscore.models import Section, SectionKind
from grantscore.utils.text import stringify


class _FieldValueBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def is_filled(self) -> bool:
        value = getattr(self, "value")
        return not (isinstance(value, str) and not value.strip())

    def as_text(self) -> str:
        """The value as the text that length rules measure."""
        return stringify(getattr(self, "value"))


class _TextLike(_FieldValueBase):
    value: str


class TextValue(_TextLike):
    kind: Literal["text"] = "text"


class NarrativeValue(_TextLike):
    kind: Literal["narrative"] = "narrative"


class NumberValue(_FieldValueBase):
    kind: Literal["number"] = "number"
    value: float


class DateValue(_FieldValueBase):
    kind: Literal["date"] = "date"
    # Plain dates first so "2025-03-01" stays a date rather than midnight
    value: Union[date, datetime] = Field(union_mode="left_to_right")

    def as_text(self) -> str:
        return self.value.isoformat()


class FileValue(_FieldValueBase):
    kind: Literal["file"] = "file"
    value: Any


class SelectionValue(_FieldValueBase):
    kind: Literal["selection"] = "selection"
    value: Any


class TableValue(_FieldValueBase):
    kind: Literal["table"] = "table"
    value: Any


FieldValue = Annotated[
    Union[
        TextValue,
        NarrativeValue,
        NumberValue,
        DateValue,
        FileValue,
        SelectionValue,
        TableValue,
    ],
    Field(discriminator="kind"),
]

_adapter: TypeAdapter = TypeAdapter(FieldValue)


def infer_kind(raw: Any) -> SectionKind:
    """Pick a section kind from the Python type of a raw value."""
    if isinstance(raw, str):
        return SectionKind.TEXT
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return SectionKind.NUMBER
    if isinstance(raw, date):
        return SectionKind.DATE
    return SectionKind.TABLE


def field_value(raw: Any, kind: Optional[SectionKind] = None) -> Optional[FieldValue]:
    """Wrap a raw form value in the variant for its section kind.

    Args:
        raw: Value from ``Draft.form_data`` (may be missing/None)
        kind: Declared section kind, if the field has a section

    Returns:
        The typed variant, or None when the value is absent
    """
    if raw is None:
        return None

    if kind is not None:
        try:
            return _adapter.validate_python({"kind": kind.value, "value": raw})
        except ValidationError:
            # Value does not fit its declared kind; fall back to its own type
            pass

    inferred = infer_kind(raw)
    if inferred == SectionKind.TEXT:
        return TextValue(value=raw)
    if inferred == SectionKind.NUMBER:
        return NumberValue(value=raw)
    if inferred == SectionKind.DATE:
        return DateValue(value=raw)
    return TableValue(value=raw)


def is_filled(raw: Any, section: Optional[Section] = None) -> bool:
    """Whether a raw form value counts as answered."""
    value = field_value(raw, section.kind if section else None)
    return value is not None and value.is_filled()
