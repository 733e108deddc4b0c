"""Completion percentage of a draft."""

from grantscore.models import Draft, Template
from grantscore.utils.text import round_half_up
from grantscore.values import is_filled


def completion_percentage(draft: Draft, template: Template) -> int:
    """Percent of tracked fields that hold a value.

    Required and optional fields are counted independently, so an id
    listed in both counts twice. A template with no tracked fields is
    complete.

    Args:
        draft: Draft being evaluated
        template: Template the draft answers

    Returns:
        Integer percentage in [0, 100]
    """
    tracked = list(template.required_fields) + list(template.optional_fields)
    if not tracked:
        return 100

    filled = sum(
        1
        for field_name in tracked
        if is_filled(draft.form_data.get(field_name), template.get_section(field_name))
    )

    return int(round_half_up(filled / len(tracked) * 100))
