"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (fatal, raised at engine construction)
        2000-2999: Catalog errors (fatal, raised while loading catalogs)
        3000-3999: Plural rule errors (fatal, malformed Plural-Forms text)
        4000-4999: Invalid call usage (per call site, reported to the host)
    """

    # Configuration errors (1000-1999)
    UNKNOWN_OPTION = 1001
    INVALID_OPTION_VALUE = 1002
    TRANSLATION_REQUIRED = 1003
    INVALID_TRANSLATION_SOURCE = 1004
    AMBIGUOUS_FUNCTION_NAME = 1005

    # Catalog errors (2000-2999)
    CATALOG_NOT_FOUND = 2001
    CATALOG_UNREADABLE = 2002
    CATALOG_MALFORMED = 2003

    # Plural rule errors (3000-3999)
    PLURAL_RULE_SYNTAX = 3001
    PLURAL_RULE_NPLURALS = 3002
    PLURAL_RULE_MISSING_EXPRESSION = 3003

    # Invalid usage (4000-4999)
    WRONG_ARGUMENT_COUNT = 4001
    NON_LITERAL_ARGUMENT = 4002
    EMPTY_LITERAL_ARGUMENT = 4003
    PLURAL_FACTORY_ARGUMENTS = 4004


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Offsets count characters (Unicode code points), not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        filename: Name of the source file, if known
    """

    start: int
    end: int
    line: int
    column: int
    filename: str | None = None

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                are less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    def describe(self) -> str:
        """Return ``file:line:column`` (file omitted when unknown)."""
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for configuration and catalog errors)
        hint: Suggestion for fixing the error
        function_name: Translation function involved, for call-site errors
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    function_name: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[WRONG_ARGUMENT_COUNT]: The "__" function must receive 1 or 2 ...
              --> app/views.py:12:8
              = function: __

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
