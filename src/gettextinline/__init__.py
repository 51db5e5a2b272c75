"""gettextinline - build-time inlining of gettext translations.

Replaces gettext-style call sites in source code with the translated string
literal for a single target locale, so the shipped code carries no catalog
lookups at runtime.

Public API:
    TranslationEngine - Per-call-site pipeline (validate, resolve, serialize)
    TranslatorConfig - Validated engine options
    SourceRewriter - Rewrites translation calls in Python source
    rewrite_file - Read and rewrite one Python file
    CatalogStore - Immutable (context, msgid) -> variants store
    load_catalog - Load a .po/.mo catalog
    PluralRule - Compiled gettext plural rule
    parse_plural_forms - Parse a Plural-Forms header or bare expression
    format_translation - Runtime plural selection and interpolation
    pseudolocalize - Text transform for pseudo-localized builds

Exceptions:
    GettextInlineError - Base exception class
    ConfigurationError - Invalid options
    PluralRuleError - Malformed plural rule
    CatalogLoadError - Unreadable catalog
    InvalidUsageError - Invalid call site

Submodules:
    gettextinline.catalog - Catalog store, loading and resolver adapters
    gettextinline.plural - Plural expression parser and rule selection
    gettextinline.matching - Call shapes, matchers and dispatch table
    gettextinline.diagnostics - Diagnostic codes, spans, errors and formatting
    gettextinline.runtime - Runtime formatting helper and template cache
"""

from .catalog import CatalogStore, load_catalog
from .config import TranslatorConfig
from .diagnostics import (
    CatalogLoadError,
    ConfigurationError,
    Diagnostic,
    GettextInlineError,
    InvalidUsageError,
    PluralRuleError,
)
from .engine import CallOutcome, TranslationEngine
from .enums import ReportLevel
from .plural import PluralRule, parse_plural_forms
from .resolution import ResolutionRequest
from .rewriter import RewriteResult, SourceRewriter, rewrite_file
from .runtime import FormatCache, format_translation
from .serializer import pseudolocalize

# Version information - Auto-populated from package metadata
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("gettextinline")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CallOutcome",
    "CatalogLoadError",
    "CatalogStore",
    "ConfigurationError",
    "Diagnostic",
    "FormatCache",
    "GettextInlineError",
    "InvalidUsageError",
    "PluralRule",
    "PluralRuleError",
    "ReportLevel",
    "ResolutionRequest",
    "RewriteResult",
    "SourceRewriter",
    "TranslationEngine",
    "TranslatorConfig",
    "__version__",
    "format_translation",
    "load_catalog",
    "parse_plural_forms",
    "pseudolocalize",
    "rewrite_file",
]
