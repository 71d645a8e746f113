"""Skill registry exceptions."""

from typing import Optional


class RegistryError(Exception):
    """Base exception for skill registry errors."""

    pass


class RegistryWriteError(RegistryError):
    """Raised when storing a skill fails.

    The failure is transient from the registry's point of view: calling
    auto_create again with the same input is safe and resumes where it stopped.
    Skills stored before the failing one stay stored.
    """

    retryable = True

    def __init__(self, message: str, normalized_name: Optional[str] = None):
        self.normalized_name = normalized_name
        super().__init__(message)
