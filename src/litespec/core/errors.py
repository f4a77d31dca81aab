"""
Error types for LiteSpec compilation.
"""

from dataclasses import dataclass


class LiteSpecError(Exception):
    """Base exception for all LiteSpec errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    def with_context(self, context: "ErrorContext") -> "LiteSpecError":
        """Attach source context after the fact (keeps an existing location)."""
        if self.context is None:
            self.context = context
        elif self.context.snippet is None and self.context.line == context.line:
            self.context.snippet = context.snippet
        self.args = (self._format_message(),)
        return self


class ParseError(LiteSpecError):
    """
    Raised when a LiteSpec line cannot be compiled.

    Examples:
    - Field line without a ``name: type`` separator
    - Annotation with an unterminated argument
    - Unsupported ``array(...)`` spelling
    """

    pass


class ExpressionFormatError(ParseError):
    """
    Raised when an expression annotation does not match its expected shape.

    Attributes:
        kind: Which expression failed (``if``, ``permission``, ``sort``,
            ``breadcrumb``)
    """

    def __init__(self, kind: str, message: str, context: "ErrorContext | None" = None):
        self.kind = kind
        super().__init__(message, context)


class MissingArgumentError(ParseError):
    """
    Raised when an annotation needs an argument that is absent or unusable.

    Examples:
    - ``@enum`` with no value list
    - ``@minLength(abc)``
    """

    pass


class StructuralError(ParseError):
    """
    Raised when blocks are not balanced.

    Examples:
    - ``}`` with no open block
    - Field line outside any ``def``/``model`` block
    - End of input with a block still open
    """

    pass


class ConfigError(LiteSpecError):
    """Raised when compiler configuration cannot be loaded."""

    pass


class InvalidSchemaError(LiteSpecError):
    """
    Raised when a compiled schema cannot be used for validation.

    Examples:
    - Unknown type name (``name: text`` gives ``{"type": "text"}``)
    - Flat ``@if`` action with a string where draft-07 wants a number
    """

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        source: Name of the input (file path or ``<string>``)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line shown under the location
    """

    source: str
    line: int
    column: int = 1
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "customer.ls:10:5"
        """
        location = f"{self.source}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the snippet with its line number and an error marker."""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^^^"
        return f"{prefix}{self.snippet}\n{marker}"


def make_parse_error(
    message: str,
    source: str,
    line: int,
    column: int = 1,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        source: Input name
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(source=source, line=line, column=column, snippet=snippet)
    return ParseError(message, context)


def make_structural_error(
    message: str,
    source: str,
    line: int,
    snippet: str | None = None,
) -> StructuralError:
    """Helper to create a StructuralError pointing at a whole line."""
    context = ErrorContext(source=source, line=line, column=1, snippet=snippet)
    return StructuralError(message, context)
