"""Prompt templates for LLM tasks."""

FIELD_COMPLETION_PROMPT = """You are helping an applicant fill in a grant application form.

Propose a value for the field described below. Use only facts that can be
reasonably inferred from the context and the answers already given.

Field: {field_name}
Section title: {section_title}
Section description: {section_description}
Section type: {section_kind}
{length_hint}
Answers already given:
{current_data}

Additional context:
{context}

Respond in JSON format:
{{
  "value": "proposed value for the field",
  "confidence": 0.0-1.0,
  "reasoning": "one sentence explaining where the value comes from"
}}

JSON output:
"""
