"""Skill categorization against a weighted keyword lexicon.

This module provides:
- CategoryLexicon / CategoryDefinition / KeywordTrigger: the lexicon configuration
- Categorizer: classifies one skill name into (category, confidence, reasoning)
- BatchClassifier: classification over sequences plus category statistics
- CategoryPrediction: the classification result
"""

from .batch import BatchClassifier
from .engine import Categorizer, format_reasoning
from .lexicon import (
    DEFAULT_LEXICON_DATA,
    CategoryDefinition,
    CategoryLexicon,
    KeywordTrigger,
    get_default_lexicon,
    load_lexicon,
)
from .models import CategoryPrediction

__all__ = [
    "Categorizer",
    "BatchClassifier",
    "CategoryPrediction",
    "CategoryLexicon",
    "CategoryDefinition",
    "KeywordTrigger",
    "DEFAULT_LEXICON_DATA",
    "get_default_lexicon",
    "load_lexicon",
    "format_reasoning",
]
