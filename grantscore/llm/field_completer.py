"""LLM-backed field completion."""

import json
from typing import Any, Dict, Optional

from grantscore.config import Config, get_config
from grantscore.llm.prompts import FIELD_COMPLETION_PROMPT
from grantscore.llm.provider import GenerationOptions, TextGenerator
from grantscore.models import FieldCompletion, FieldCompletionRequest
from grantscore.utils.logging_config import get_logger

logger = get_logger()


def _format_mapping(data: Dict[str, Any]) -> str:
    if not data:
        return "(none)"
    return json.dumps(data, indent=2, default=str)


def build_completion_prompt(request: FieldCompletionRequest) -> str:
    """Render the field completion prompt for a request."""
    section = request.section

    length_hint = ""
    if section.max_length:
        length_hint = f"Maximum length: {section.max_length} characters\n"
    elif section.min_length:
        length_hint = f"Minimum length: {section.min_length} characters\n"

    return FIELD_COMPLETION_PROMPT.format(
        field_name=request.field_name,
        section_title=section.title,
        section_description=section.description or "(none)",
        section_kind=section.kind.value,
        length_hint=length_hint,
        current_data=_format_mapping(request.current_data),
        context=_format_mapping(request.context),
    )


def parse_completion(text: str, default_confidence: float, section_title: str) -> FieldCompletion:
    """Turn generator output into a FieldCompletion.

    JSON objects with a ``value`` key are used as-is (confidence clamped to
    [0, 1]); anything else becomes the value verbatim.
    """
    stripped = text.strip()

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        data = None

    if isinstance(data, dict) and "value" in data:
        try:
            confidence = float(data.get("confidence", default_confidence))
        except (TypeError, ValueError):
            confidence = default_confidence

        return FieldCompletion(
            value=data["value"],
            confidence=min(1.0, max(0.0, confidence)),
            reasoning=str(data.get("reasoning") or f"Generated from {section_title} requirements"),
        )

    logger.debug(f"Completion for {section_title} was not JSON; using raw text")
    return FieldCompletion(
        value=stripped,
        confidence=default_confidence,
        reasoning=f"Generated from {section_title} requirements",
    )


class LLMFieldCompleter:
    """Field completer that asks a text generator for each value."""

    def __init__(self, generator: TextGenerator, config: Optional[Config] = None):
        self.generator = generator
        self.config = config or get_config()

    def complete(self, request: FieldCompletionRequest) -> FieldCompletion:
        """Generate a value for one field.

        Generator errors are not caught here.
        """
        prompt = build_completion_prompt(request)
        options = GenerationOptions(
            model=self.config.llm_model,
            temperature=self.config.llm_temperature,
            max_tokens=self.config.llm_max_tokens,
        )

        text = self.generator.generate(prompt, options)

        return parse_completion(
            text,
            default_confidence=self.config.default_completion_confidence,
            section_title=request.section.title,
        )
