"""Plural rules from gettext Plural-Forms headers.

A PluralRule maps a non-negative count to the index of the plural variant to
display. Rules come from, in order of precedence:

1. an explicit override string (``plural_function`` option)
2. the Plural-Forms header of the primary catalog
3. the CLDR-derived gettext rule for ``plural_locale`` (via Babel)
4. the default two-form rule ``nplurals=2; plural=(n != 1);``

Fallback catalogs never contribute a rule: plural semantics follow the
primary target locale.

Python 3.13+. Depends on Babel for locale-derived rules.
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass, field

from babel.core import UnknownLocaleError

from gettextinline.constants import DEFAULT_PLURAL_FORMS, MAX_NPLURALS
from gettextinline.diagnostics import Diagnostic, DiagnosticCode, PluralRuleError
from gettextinline.plural.expression import (
    Expression,
    compile_expression,
    evaluate,
    render_python,
)

__all__ = [
    "DEFAULT_PLURAL_RULE",
    "PluralRule",
    "parse_plural_forms",
    "plural_forms_for_locale",
    "select_plural_rule",
]

logger = logging.getLogger(__name__)

# "nplurals=" or "plural=" but not "plural==".
_HEADER_KEY = re.compile(r"\b(?:nplurals|plural)\s*=(?!=)")


@dataclass(frozen=True, slots=True)
class PluralRule:
    """Executable plural rule.

    Example:
        >>> rule = parse_plural_forms("nplurals=2; plural=(n != 1);")
        >>> rule(0), rule(1), rule(5)
        (1, 0, 1)
        >>> rule.to_source()
        'lambda n: min(max(int(n != 1), 0), 1)'

    Attributes:
        nplurals: Number of plural forms the rule can select
        expression_text: The ``plural=`` expression as written
        expression: Compiled expression tree
    """

    nplurals: int
    expression_text: str
    expression: Expression = field(repr=False, compare=False)

    def __call__(self, n: int) -> int:
        """Return the variant index for count ``n``.

        The result is always within ``[0, nplurals - 1]``. Division or modulo
        by zero evaluates to 0 inside the expression, as in the rendered source.

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            msg = f"Plural count must be non-negative, got {n}"
            raise ValueError(msg)
        index = evaluate(self.expression, int(n))
        return min(max(index, 0), self.nplurals - 1)

    @property
    def plural_forms(self) -> str:
        """Header form of the rule: ``nplurals=N; plural=EXPR;``."""
        return f"nplurals={self.nplurals}; plural={self.expression_text};"

    def to_source(self) -> str:
        """Render the rule as a Python lambda expression."""
        body = render_python(self.expression)
        return f"lambda n: min(max({body}, 0), {self.nplurals - 1})"


def _rule_error(code: DiagnosticCode, text: str, detail: str) -> PluralRuleError:
    return PluralRuleError(
        Diagnostic(
            code=code,
            message=f"Invalid plural rule {text!r}: {detail}",
            hint="Expected 'nplurals=N; plural=EXPR;'",
        )
    )


def parse_plural_forms(text: str) -> PluralRule:
    """Parse a Plural-Forms header value, or a bare plural expression.

    A bare expression (no ``plural=``) is taken to select between two forms.

    Raises:
        PluralRuleError: If the text is malformed
    """
    text = text.strip()
    if not _HEADER_KEY.search(text):
        bare = text.rstrip(";").strip()
        return PluralRule(2, bare, compile_expression(bare))

    nplurals: int | None = None
    expression_text: str | None = None
    for segment in text.split(";"):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        key = key.strip()
        if not sep or key not in ("nplurals", "plural"):
            detail = f"unexpected {segment.strip()!r}"
            raise _rule_error(DiagnosticCode.PLURAL_RULE_SYNTAX, text, detail)
        if key == "plural":
            expression_text = value.strip()
            continue
        try:
            nplurals = int(value.strip())
        except ValueError:
            detail = f"nplurals is not an integer: {value.strip()!r}"
            raise _rule_error(DiagnosticCode.PLURAL_RULE_NPLURALS, text, detail) from None

    if nplurals is None:
        raise _rule_error(DiagnosticCode.PLURAL_RULE_NPLURALS, text, "nplurals is missing")
    if not 1 <= nplurals <= MAX_NPLURALS:
        detail = f"nplurals must be between 1 and {MAX_NPLURALS}"
        raise _rule_error(DiagnosticCode.PLURAL_RULE_NPLURALS, text, detail)
    if not expression_text:
        detail = "plural expression is missing"
        raise _rule_error(DiagnosticCode.PLURAL_RULE_MISSING_EXPRESSION, text, detail)
    return PluralRule(nplurals, expression_text, compile_expression(expression_text))


DEFAULT_PLURAL_RULE = parse_plural_forms(DEFAULT_PLURAL_FORMS)


@functools.lru_cache(maxsize=128)
def plural_forms_for_locale(locale_code: str) -> str:
    """Return the gettext Plural-Forms value Babel knows for a locale.

    Accepts BCP-47 (``pt-BR``) or POSIX (``pt_BR``) codes.

    Raises:
        babel.core.UnknownLocaleError: If the locale is not recognized
        ValueError: If the locale code is malformed
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.messages.plurals import get_plural  # noqa: PLC0415

    return get_plural(locale_code.replace("-", "_")).plural_forms


def select_plural_rule(
    primary_plural_forms: str | None,
    *,
    override: str | None = None,
    locale: str | None = None,
) -> PluralRule:
    """Pick the plural rule for an engine.

    Args:
        primary_plural_forms: Plural-Forms of the primary catalog, or None
            when the primary source declares none
        override: Explicit rule text, wins over everything else
        locale: Locale to derive a rule from when no header is present

    Raises:
        PluralRuleError: If the chosen rule text is malformed, or locale is
            given but unknown to Babel
    """
    locale_forms = None
    if locale:
        try:
            locale_forms = plural_forms_for_locale(locale)
        except (UnknownLocaleError, ValueError) as e:
            raise PluralRuleError(
                Diagnostic(
                    code=DiagnosticCode.INVALID_OPTION_VALUE,
                    message=f"Unknown plural_locale {locale!r}: {e}",
                )
            ) from e

    if override:
        logger.debug("Using plural rule override: %s", override)
        return parse_plural_forms(override)
    if primary_plural_forms:
        logger.debug("Using plural rule from primary catalog: %s", primary_plural_forms)
        return parse_plural_forms(primary_plural_forms)
    if locale_forms:
        logger.debug("Using plural rule for locale %s: %s", locale, locale_forms)
        return parse_plural_forms(locale_forms)
    return DEFAULT_PLURAL_RULE
