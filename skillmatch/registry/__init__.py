"""Idempotent, categorized skill registry.

This module provides:
- SkillRegistry: normalizes, deduplicates and stores skills with their category
- RegistryError / RegistryWriteError: storage failures surfaced by the registry
"""

from .exceptions import RegistryError, RegistryWriteError
from .service import SkillRegistry

__all__ = [
    "SkillRegistry",
    "RegistryError",
    "RegistryWriteError",
]
