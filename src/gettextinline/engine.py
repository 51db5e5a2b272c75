"""Translation engine: the per-call-site pipeline.

    call site ─▶ DispatchTable/CallMatcher ─▶ ResolutionRequest
              ─▶ ResolutionChain (primary, fallback, untranslated)
              ─▶ OutputSerializer ─▶ replacement source text

Everything expensive (catalog loading, plural rule compilation, overload
collapsing) happens once in the constructor. Afterwards the engine holds only
read-only state and processing a call site is a pure function of its name,
arguments and location.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from gettextinline.catalog import CatalogStore, build_resolver
from gettextinline.catalog.types import Resolver, TranslationValue
from gettextinline.config import TranslatorConfig
from gettextinline.diagnostics import Diagnostic, InvalidUsageError, SourceSpan
from gettextinline.enums import ReportLevel
from gettextinline.matching import (
    DispatchTable,
    StaticValue,
    build_dispatch_table,
    validate_plural_factory,
)
from gettextinline.plural import PluralRule, select_plural_rule
from gettextinline.resolution import ResolutionChain, ResolutionRequest
from gettextinline.serializer import OutputSerializer

__all__ = ["CallOutcome", "TranslationEngine"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CallOutcome:
    """Result of processing one call site.

    Attributes:
        name: Function name of the call
        replacement: Source text to splice in, or None to leave the call as is
        diagnostic: Reported problem, or None (always None when the call was
            valid, and for invalid calls when reporting is "none")
        request: Extracted request for translation calls that validated
    """

    name: str
    replacement: str | None
    diagnostic: Diagnostic | None = None
    request: ResolutionRequest | None = None

    @property
    def rewritten(self) -> bool:
        return self.replacement is not None


class TranslationEngine:
    """Build-time translation resolver for gettext-style call sites.

    Example:
        >>> engine = TranslationEngine.from_options({"translation": "locale/fr.po"})
        >>> engine.process_call("__", ["Hello"]).replacement
        '"Bonjour"'
        >>> engine.process_call("__", ["Missing"]).replacement
        '"Missing"'

    Raises:
        ConfigurationError: On invalid options or ambiguous function names
        PluralRuleError: On a malformed plural rule
        CatalogLoadError: If a catalog file cannot be loaded
    """

    __slots__ = (
        "_chain",
        "_config",
        "_dispatch",
        "_plural_rule",
        "_serializer",
        "_stores",
    )

    def __init__(self, config: TranslatorConfig) -> None:
        self._config = config

        primary, primary_store = build_resolver(
            config.translation,
            name="translation",
            include_fuzzy=config.include_fuzzy,
            locale=config.plural_locale,
        )
        resolvers: list[Resolver] = [primary]
        stores: list[CatalogStore] = [primary_store] if primary_store is not None else []
        if config.fallback_translation is not None:
            fallback, fallback_store = build_resolver(
                config.fallback_translation,
                name="fallbackTranslation",
                include_fuzzy=config.include_fuzzy,
            )
            resolvers.append(fallback)
            if fallback_store is not None:
                stores.append(fallback_store)

        self._stores: tuple[CatalogStore, ...] = tuple(stores)
        self._chain = ResolutionChain(resolvers)
        # Only the primary catalog's rule counts; fallback headers are ignored.
        self._plural_rule: PluralRule = select_plural_rule(
            primary_store.plural_forms if primary_store is not None else None,
            override=config.plural_function,
            locale=config.plural_locale,
        )
        self._serializer = OutputSerializer(config.transform_text, config.transform_to_source)
        self._dispatch: DispatchTable = build_dispatch_table(config.function_names)

        logger.info(
            "Translation engine ready: %d chain links, %d catalogs, plural rule %s",
            len(self._chain),
            len(self._stores),
            self._plural_rule.plural_forms,
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> TranslationEngine:
        """Construct from a plain options mapping (snake_case or camelCase keys)."""
        return cls(TranslatorConfig.from_options(options))

    @property
    def config(self) -> TranslatorConfig:
        return self._config

    @property
    def dispatch_table(self) -> DispatchTable:
        return self._dispatch

    @property
    def plural_rule(self) -> PluralRule:
        return self._plural_rule

    @property
    def catalogs(self) -> tuple[CatalogStore, ...]:
        """Loaded catalog stores in chain order (callback sources excluded)."""
        return self._stores

    @property
    def plural_function_source(self) -> str:
        """Parenthesized Python source injected for the plural factory call."""
        return f"({self._plural_rule.to_source()})"

    def handles(self, name: str) -> bool:
        """True if calls to ``name`` are processed by this engine."""
        return self._dispatch.is_translation_call(name) or self._dispatch.is_plural_factory(name)

    def resolve(self, request: ResolutionRequest) -> TranslationValue:
        """Resolve a request through the fallback chain (never None)."""
        return self._chain.resolve(request)

    def translate(self, context: str | None, singular: str, plural: str | None = None) -> str:
        """Resolve and serialize in one step."""
        request = ResolutionRequest(singular=singular, context=context, plural=plural)
        return self._serializer.serialize(self.resolve(request))

    def process_call(
        self,
        name: str,
        args: Sequence[StaticValue],
        span: SourceSpan | None = None,
    ) -> CallOutcome:
        """Process one call site.

        Args:
            name: Called function name
            args: Statically evaluated arguments (None for non-literals)
            span: Source location of the whole call expression

        Returns:
            CallOutcome with replacement text, or with the reported diagnostic
            when the call is invalid

        Raises:
            KeyError: If ``name`` is not handled by this engine
        """
        try:
            if self._dispatch.is_plural_factory(name):
                validate_plural_factory(name, args, span)
                return CallOutcome(name, self.plural_function_source)
            request = self._dispatch[name].match(args, span)
        except InvalidUsageError as e:
            return CallOutcome(name, None, self._report(e.diagnostic))

        replacement = self._serializer.serialize(self.resolve(request))
        return CallOutcome(name, replacement, request=request)

    def _report(self, diagnostic: Diagnostic) -> Diagnostic | None:
        where = diagnostic.span.describe() if diagnostic.span else "<unknown>"
        match self._config.report_invalid_as:
            case ReportLevel.ERROR:
                logger.debug("Invalid call at %s: %s", where, diagnostic.message)
                return diagnostic
            case ReportLevel.WARNING:
                logger.warning("Invalid call at %s: %s", where, diagnostic.message)
                return dataclasses.replace(diagnostic, severity="warning")
            case _:
                logger.debug("Ignoring invalid call at %s: %s", where, diagnostic.message)
                return None
