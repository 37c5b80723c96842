"""
Error types for twostate declaration parsing, validation, and emission.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TwoStateError(Exception):
    """Base exception for all twostate errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class GrammarError(TwoStateError):
    """
    Raised when a declaration does not match either surface grammar.

    Examples:
    - Unparsable token stream
    - Wrong number of variants
    - Discriminant that is not `true` or `false`
    - Unrecognized extension-clause key
    """

    pass


class InconsistentDiscriminantError(TwoStateError):
    """
    Raised when discriminant assignment is not one of the two valid patterns.

    Valid patterns are: neither variant pinned, or exactly one pinned to
    `true` and the other to `false`.
    """

    pass


class EmissionError(TwoStateError):
    """
    Raised when a validated declaration cannot be emitted.

    Examples:
    - Two variants with the same identifier
    - Two variants whose accessors share a name
    - A variant shadowing a generated method
    - The same type name declared twice in one unit
    """

    pass


class ManifestError(TwoStateError):
    """Raised when twostate.toml cannot be read or is malformed."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet showing the error location
        declaration: Optional type name of the declaration being processed
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None
    declaration: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "flags.tsd:10:5 in enum ClearFirst"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.declaration:
            location += f" in enum {self.declaration}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the offending source line with a marker under the column."""
        if not self.snippet:
            return ""

        prefix = f"{self.line:4d} | "
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{self.snippet}\n{' ' * marker_pos}^^^"


def source_line(text: str, line: int) -> str | None:
    """Return the 1-indexed line of text, or None if out of range."""
    lines = text.splitlines()
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return None


def make_grammar_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
    declaration: str | None = None,
) -> GrammarError:
    """
    Helper to create a GrammarError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line
        declaration: Type name, if parsing got far enough to read it

    Returns:
        GrammarError with context attached
    """
    context = ErrorContext(
        file=file, line=line, column=column, snippet=snippet, declaration=declaration
    )
    return GrammarError(message, context)


def make_discriminant_error(
    message: str,
    file: Path | None = None,
    line: int | None = None,
    column: int | None = None,
    declaration: str | None = None,
) -> InconsistentDiscriminantError:
    """Helper to create an InconsistentDiscriminantError with optional context."""
    if file and line and column:
        context = ErrorContext(file=file, line=line, column=column, declaration=declaration)
        return InconsistentDiscriminantError(message, context)
    return InconsistentDiscriminantError(message)


def make_emission_error(
    message: str,
    file: Path | None = None,
    line: int | None = None,
    column: int | None = None,
    declaration: str | None = None,
) -> EmissionError:
    """Helper to create an EmissionError with optional context."""
    if file and line and column:
        context = ErrorContext(file=file, line=line, column=column, declaration=declaration)
        return EmissionError(message, context)
    return EmissionError(message)
