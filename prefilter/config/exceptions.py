"""Exceptions raised while loading configuration and building rules."""

from typing import List, Optional


class PrefilterError(Exception):
    """Base class for errors raised by the pre-filter package."""


class ConfigurationError(PrefilterError):
    """
    Raised when configuration cannot be loaded or validated.

    Collects every validation problem found plus hints for fixing them, and
    renders all of it as the exception message.
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
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [self.message]

        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))

        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(lines)

    def __str__(self) -> str:
        return self._format_message()

    def add_error(self, error: str) -> None:
        """Append a validation error."""
        self.errors.append(error)

    def add_suggestion(self, suggestion: str) -> None:
        """Append a hint for fixing the configuration."""
        self.suggestions.append(suggestion)


class RuleDefinitionError(ConfigurationError):
    """Raised when a rule definition cannot be turned into a PolicyRule."""

    def __init__(self, rule_id: str, message: str, suggestions: Optional[List[str]] = None):
        self.rule_id = rule_id
        super().__init__(f"Invalid rule '{rule_id}': {message}", suggestions=suggestions)
