"""Diagnostic system for gettextinline errors.

Provides structured error diagnostics with codes, source spans and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    CatalogLoadError,
    ConfigurationError,
    GettextInlineError,
    InvalidUsageError,
    PluralRuleError,
)
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "CatalogLoadError",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "GettextInlineError",
    "InvalidUsageError",
    "OutputFormat",
    "PluralRuleError",
    "SourceSpan",
]
