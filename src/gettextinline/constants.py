"""Shared constants for gettextinline.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Function names
    "DEFAULT_PLURAL_FACTORY_NAME",
    "DEFAULT_OVERLOADED_GETTEXT_NAME",
    "DEFAULT_OVERLOADED_PGETTEXT_NAME",
    # Plural rules
    "DEFAULT_PLURAL_FORMS",
    "MAX_NPLURALS",
    "MAX_PLURAL_EXPRESSION_DEPTH",
    "MAX_PLURAL_EXPRESSION_LENGTH",
    # Catalogs
    "FUZZY_FLAG",
    "NO_CONTEXT",
    # Runtime helper
    "DEFAULT_FORMAT_CACHE_SIZE",
]

# ============================================================================
# FUNCTION NAMES
# ============================================================================

# Used when no translation function name is configured at all:
# "__" accepts (singular) or (singular, plural),
# "_c" accepts (context, singular) or (context, singular, plural).
DEFAULT_OVERLOADED_GETTEXT_NAME = "__"
DEFAULT_OVERLOADED_PGETTEXT_NAME = "_c"

# Zero-argument call rewritten to the plural index function.
DEFAULT_PLURAL_FACTORY_NAME = "_p"

# ============================================================================
# PLURAL RULES
# ============================================================================

DEFAULT_PLURAL_FORMS = "nplurals=2; plural=(n != 1);"

# No language in the CLDR gettext tables uses more than 6 forms.
MAX_NPLURALS = 6

# Plural-Forms headers are short; anything longer is not a real rule.
MAX_PLURAL_EXPRESSION_LENGTH = 1000

# Nesting bound for parsing and for the expression tree. Real rules stay below
# 12; the rendered lambda must also stay within the Python parser limits.
MAX_PLURAL_EXPRESSION_DEPTH = 32

# ============================================================================
# CATALOGS
# ============================================================================

FUZZY_FLAG = "fuzzy"

# Catalog key used for messages without msgctxt.
NO_CONTEXT = ""

# ============================================================================
# RUNTIME HELPER
# ============================================================================

DEFAULT_FORMAT_CACHE_SIZE = 1000
