"""Type aliases for the catalog domain.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Sequence
from os import PathLike

__all__ = [
    "CatalogSource",
    "Context",
    "Resolver",
    "ResolverResult",
    "TranslationValue",
]

type Context = str
"""Message context (msgctxt). The empty string means "no context"."""

type TranslationValue = str | tuple[str, ...]
"""Resolved translation: one string, or one string per plural index."""

type ResolverResult = str | Sequence[str] | None
"""What a resolver may return. None means "no translation found"."""

type Resolver = Callable[[str | None, str, str | None], ResolverResult]
"""Resolver signature: (context, singular, plural) -> result."""

type CatalogSource = str | PathLike[str] | Resolver
"""A catalog file path, or a resolver callback used as-is."""
