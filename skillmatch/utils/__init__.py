"""Utility functions for text normalization and time handling."""

from .text import clean_display_name, normalize_skill_name, tokenize
from .timestamps import ensure_utc, format_for_storage, parse_from_storage, utc_now

__all__ = [
    # Text
    "normalize_skill_name",
    "clean_display_name",
    "tokenize",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "format_for_storage",
    "parse_from_storage",
]
