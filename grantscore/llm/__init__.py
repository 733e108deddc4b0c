"""Text generation collaborators."""

from .field_completer import LLMFieldCompleter, build_completion_prompt, parse_completion
from .ollama_client import OllamaClient
from .provider import FieldCompleter, GenerationOptions, TextGenerator

__all__ = [
    "FieldCompleter",
    "GenerationOptions",
    "LLMFieldCompleter",
    "OllamaClient",
    "TextGenerator",
    "build_completion_prompt",
    "parse_completion",
]
