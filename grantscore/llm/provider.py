"""Interfaces for the text-generation collaborators the engine relies on."""

from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from grantscore.models import FieldCompletion, FieldCompletionRequest


class GenerationOptions(BaseModel):
    """Per-request generation settings."""

    model: str
    temperature: float = 0.7
    max_tokens: Optional[int] = None


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that turns a prompt into text."""

    def generate(self, prompt: str, options: GenerationOptions) -> str:
        ...


@runtime_checkable
class FieldCompleter(Protocol):
    """Proposes a value for one form field."""

    def complete(self, request: FieldCompletionRequest) -> FieldCompletion:
        ...
