"""Runtime helper for inlined translations.

Submodules:
    cache  - FormatCache (explicit LRU of compiled templates)
    format - format_translation: plural selection and interpolation

Python 3.13+.
"""

from gettextinline.runtime.cache import FormatCache
from gettextinline.runtime.format import (
    Template,
    compile_template,
    format_translation,
    select_plural_key,
)

__all__ = [
    "FormatCache",
    "Template",
    "compile_template",
    "format_translation",
    "select_plural_key",
]
