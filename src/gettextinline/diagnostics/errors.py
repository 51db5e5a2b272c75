"""Exception hierarchy with structured diagnostics.

Fatal conditions (configuration, catalog loading, plural rules) abort engine
construction. InvalidUsageError is raised per call site and is converted by the
engine into a reported Diagnostic; it never aborts a file.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "CatalogLoadError",
    "ConfigurationError",
    "GettextInlineError",
    "InvalidUsageError",
    "PluralRuleError",
]


class GettextInlineError(Exception):
    """Base exception for all gettextinline errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize GettextInlineError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(GettextInlineError):
    """Invalid engine configuration.

    Raised at construction for unknown options, invalid option values and
    function names whose overloads cannot be told apart by arity.
    """


class PluralRuleError(ConfigurationError):
    """Malformed plural rule text (Plural-Forms header or override)."""


class CatalogLoadError(GettextInlineError):
    """Translation catalog is missing, unreadable or malformed.

    Attributes:
        path: Catalog path, or empty string for in-memory catalogs
    """

    def __init__(self, message: str | Diagnostic, *, path: str = "") -> None:
        """Initialize CatalogLoadError.

        Args:
            message: Error message string OR Diagnostic object
            path: Catalog path that failed to load
        """
        super().__init__(message)
        self.path = path


class InvalidUsageError(GettextInlineError):
    """A translation call site has an invalid argument list.

    Always carries a Diagnostic with the call's source span.
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic)
        self.diagnostic: Diagnostic = diagnostic
