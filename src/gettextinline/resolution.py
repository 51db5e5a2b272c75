"""Translation resolution chain.

Resolvers are consulted in priority order; the first non-None answer wins and
is used as-is. There is no merging across sources: a primary catalog entry
with fewer plural forms than a fallback catalog still satisfies the request.
The chain always ends in no_translation, so every request resolves.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from gettextinline.catalog.types import Resolver, ResolverResult, TranslationValue

__all__ = [
    "ResolutionChain",
    "ResolutionRequest",
    "no_translation",
    "normalize_result",
    "select_variant",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolutionRequest:
    """Canonical translation request extracted from a call site.

    Attributes:
        singular: Source text (msgid); never empty
        context: Message context (msgctxt), or None
        plural: Plural source text (msgid_plural) when the call is plural
    """

    singular: str
    context: str | None = None
    plural: str | None = None

    def __post_init__(self) -> None:
        if not self.singular:
            msg = "ResolutionRequest.singular must be a non-empty string"
            raise ValueError(msg)

    @property
    def is_plural(self) -> bool:
        return self.plural is not None


def no_translation(context: str | None, singular: str, plural: str | None) -> TranslationValue:
    """Terminal resolver: the untranslated source text.

    Returns the singular, or (singular, plural) when a plural was requested.
    """
    if plural is None:
        return singular
    return (singular, plural)


def normalize_result(result: ResolverResult) -> TranslationValue | None:
    """Coerce a resolver answer to ``str | tuple[str, ...] | None``.

    Empty strings and empty sequences count as "no translation", as does
    any sequence containing an empty string. A callback resolver is a
    translation source like any other, so it follows the catalog rules.
    """
    if result is None:
        return None
    if isinstance(result, str):
        return result or None
    if isinstance(result, Sequence):
        variants = tuple(result)
        if not variants or not all(isinstance(v, str) and v for v in variants):
            return None
        return variants
    msg = f"Resolver returned unsupported value of type {type(result).__name__}"
    raise TypeError(msg)


class ResolutionChain:
    """Ordered resolvers ending in the always-succeeding default.

    Example:
        >>> chain = ResolutionChain([lambda c, s, p: {"Hello": "Bonjour"}.get(s)])
        >>> chain.resolve(ResolutionRequest("Hello"))
        'Bonjour'
        >>> chain.resolve(ResolutionRequest("Cat", plural="Cats"))
        ('Cat', 'Cats')
    """

    __slots__ = ("_resolvers",)

    def __init__(self, resolvers: Sequence[Resolver]) -> None:
        self._resolvers: tuple[Resolver, ...] = (*resolvers, no_translation)

    def __len__(self) -> int:
        return len(self._resolvers)

    @property
    def resolvers(self) -> tuple[Resolver, ...]:
        return self._resolvers

    def resolve(self, request: ResolutionRequest) -> TranslationValue:
        """Resolve a request; never returns None."""
        for position, resolver in enumerate(self._resolvers):
            result = normalize_result(resolver(request.context, request.singular, request.plural))
            if result is not None:
                if position:
                    logger.debug(
                        "Resolved %r (context %r) from chain link %d",
                        request.singular,
                        request.context,
                        position,
                    )
                return result
        # no_translation always answers; kept for type checkers.
        return no_translation(request.context, request.singular, request.plural)


def select_variant(variants: TranslationValue, index: int) -> str:
    """Pick a plural variant, degrading when the entry is short.

    Falls back from the requested slot to slot 1, then to slot 0, so catalogs
    with fewer forms than the plural rule allows never fail.

    Example:
        >>> select_variant(("fichier", "fichiers"), 2)
        'fichiers'
        >>> select_variant("fichier", 3)
        'fichier'
    """
    if isinstance(variants, str):
        return variants
    for slot in (index, 1, 0):
        if 0 <= slot < len(variants) and variants[slot]:
            return variants[slot]
    return ""
