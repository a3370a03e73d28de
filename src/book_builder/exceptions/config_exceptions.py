"""
Configuration-related exceptions for Book Builder.

Errors raised while reading ``bookbuilder.config.json``, applying environment
overrides or validating the merged configuration. Each one carries the file
involved and a list of suggested fixes shown by the CLI.
"""

from typing import List, Optional

from .system_exceptions import BookBuilderError


class ConfigurationError(BookBuilderError):
    """Base exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        original_exception: Optional[BaseException] = None
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_file: Configuration file the error refers to
            suggestions: Suggested fixes, most useful first
            original_exception: Underlying error
        """
        super().__init__(message, original_exception=original_exception)
        self.config_file = config_file
        self.suggestions = list(suggestions or [])

    def details(self) -> List[str]:
        """Extra lines printed after the message."""
        return []

    def __str__(self) -> str:
        lines = [super().__str__()]
        if self.config_file:
            lines.append(f"Config file: {self.config_file}")
        lines.extend(self.details())
        if self.suggestions:
            lines.append("Suggestions:")
            lines.extend(f"  - {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)


class ConfigurationFileNotFoundError(ConfigurationError):
    """An explicitly requested configuration file does not exist."""

    def __init__(self, message: str, config_file: Optional[str] = None) -> None:
        super().__init__(message, config_file, [
            "Check the path given with --config-path",
            "Omit --config-path to use bookbuilder.config.json or the built-in defaults",
        ])


class ConfigurationValidationError(ConfigurationError):
    """
    The merged configuration does not match the configuration schema.

    Attributes:
        validation_errors: One message per schema violation
        invalid_fields: Dotted keys of the offending values
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        validation_errors: Optional[List[str]] = None,
        invalid_fields: Optional[List[str]] = None
    ) -> None:
        self.validation_errors = list(validation_errors or [])
        self.invalid_fields = list(invalid_fields or [])

        suggestions = ["Compare with the values printed by `book-builder config`"]
        if self.invalid_fields:
            suggestions.append(f"Fix these keys: {', '.join(self.invalid_fields)}")
        super().__init__(message, config_file, suggestions)

    def details(self) -> List[str]:
        return [f"  * {error}" for error in self.validation_errors]


class EnvironmentVariableError(ConfigurationError):
    """A BOOK_BUILDER_* variable holds a value of the wrong type."""

    def __init__(self, message: str, variable_name: Optional[str] = None) -> None:
        suggestions = []
        if variable_name:
            suggestions.append(f"Check {variable_name} in the environment or the .env file")
        super().__init__(message, suggestions=suggestions)
        self.variable_name = variable_name
