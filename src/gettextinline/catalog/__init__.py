"""Translation catalog package.

Submodules:
    types   - PEP 695 type aliases (Context, TranslationValue, Resolver, ...)
    store   - Entry and the immutable CatalogStore
    loading - load_catalog (Babel) and build_resolver

Python 3.13+.
"""

from gettextinline.catalog.loading import build_resolver, load_catalog
from gettextinline.catalog.store import CatalogStore, Entry
from gettextinline.catalog.types import (
    CatalogSource,
    Context,
    Resolver,
    ResolverResult,
    TranslationValue,
)

__all__ = [
    "CatalogSource",
    "CatalogStore",
    "Context",
    "Entry",
    "Resolver",
    "ResolverResult",
    "TranslationValue",
    "build_resolver",
    "load_catalog",
]
