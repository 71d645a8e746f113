"""Errors raised while reading settings, lexicon files and user pools."""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    A settings, lexicon or users file could not be used.

    Carries the individual problems (one per invalid field) and fix hints so
    the CLI can print them as a numbered report.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(self.render())

    def render(self) -> str:
        lines = [self.message]
        if self.errors:
            lines.append("\nProblems:")
            lines.extend(f"  {n}. {problem}" for n, problem in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nTry:")
            lines.extend(f"  - {hint}" for hint in self.suggestions)
        return "\n".join(lines)
