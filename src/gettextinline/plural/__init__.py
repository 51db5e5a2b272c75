"""Plural rule engine.

Submodules:
    expression - Safe tokenizer/parser/evaluator for C plural expressions
    rule       - PluralRule, Plural-Forms parsing and rule selection

Python 3.13+.
"""

from gettextinline.plural.expression import compile_expression, render_python
from gettextinline.plural.rule import (
    DEFAULT_PLURAL_RULE,
    PluralRule,
    parse_plural_forms,
    plural_forms_for_locale,
    select_plural_rule,
)

__all__ = [
    "DEFAULT_PLURAL_RULE",
    "PluralRule",
    "compile_expression",
    "parse_plural_forms",
    "plural_forms_for_locale",
    "render_python",
    "select_plural_rule",
]
