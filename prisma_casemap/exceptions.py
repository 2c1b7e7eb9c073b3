"""
Custom exception hierarchy for prisma-casemap.

Every failure the tool can surface carries a message, optional context about
where it happened and a short list of things the user can try next.
"""

from typing import Dict, Any, Optional, List


class CaseMapError(Exception):
    """
    Base exception for all prisma-casemap errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(CaseMapError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify option names against the documented settings",
                "Run with --verbose to see the effective configuration",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class InputNotFoundError(CaseMapError):
    """Raised when no readable schema file exists at any searched location."""

    def __init__(self, message: str, searched_paths: Optional[List[str]] = None, **kwargs):
        context = kwargs.get('context', {})
        if searched_paths:
            context['searched_paths'] = ", ".join(searched_paths)
        self.searched_paths = list(searched_paths or [])

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Pass the schema path explicitly as the first argument",
                "Run the command from the project root",
                "Check the file permissions",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INPUT_NOT_FOUND"
        )


class SchemaParseError(CaseMapError):
    """Raised when the schema text does not conform to the schema grammar."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        **kwargs
    ):
        context = kwargs.get('context', {})
        if line is not None:
            context['line'] = line
        if column is not None:
            context['column'] = column
        self.line = line
        self.column = column

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Run `prisma format` on the schema to locate syntax errors",
                "Check for unbalanced braces or unterminated strings",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="PARSE_ERROR"
        )


class OutputWriteError(CaseMapError):
    """Raised when the rendered schema cannot be written to its destination."""

    def __init__(self, message: str, destination: str = None, **kwargs):
        context = kwargs.get('context', {})
        if destination:
            context['destination'] = destination

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the target directory exists and is writable",
                "Use --dry to print the result instead of writing it",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="OUTPUT_WRITE_ERROR"
        )


# Convenience functions for common error patterns
def raise_configuration_error(message: str, config_file: str = None, **kwargs):
    """Convenience function to raise configuration errors."""
    raise ConfigurationError(message, config_file=config_file, **kwargs)


def raise_input_not_found(message: str, searched_paths: Optional[List[str]] = None, **kwargs):
    """Convenience function to raise input-not-found errors."""
    raise InputNotFoundError(message, searched_paths=searched_paths, **kwargs)
