"""Utility functions."""

from .logging_config import get_logger, setup_logging
from .text import (
    count_syllables,
    round_half_up,
    split_sentences,
    split_words,
    stringify,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "count_syllables",
    "round_half_up",
    "split_sentences",
    "split_words",
    "stringify",
]
