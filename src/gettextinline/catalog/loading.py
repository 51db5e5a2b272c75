"""Catalog loading from gettext files.

Parsing is delegated to Babel (``babel.messages.pofile`` and
``babel.messages.mofile``); its Catalog/Message objects are converted into the
strict Entry model immediately and never leave this module.

Components:
    load_catalog - Read a .po or .mo file into a CatalogStore
    build_resolver - Turn a configured translation source into a resolver

Python 3.13+. Depends on Babel for PO/MO parsing.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from babel.messages.catalog import Catalog
from babel.messages.mofile import read_mo
from babel.messages.pofile import PoFileError, PoFileParser

from gettextinline.catalog.store import CatalogStore, Entry
from gettextinline.catalog.types import CatalogSource, Resolver
from gettextinline.diagnostics import (
    CatalogLoadError,
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from babel.messages.catalog import Message

__all__ = ["build_resolver", "load_catalog"]

logger = logging.getLogger(__name__)

_MO_SUFFIXES = frozenset({".mo", ".gmo"})


class _DeclaredHeaderCatalog(Catalog):
    """Catalog that also keeps the Plural-Forms header exactly as written.

    Babel completes a partial header with ``nplurals=2`` or ``plural=(n != 1)``
    while parsing it; the declared text is what must be validated.
    """

    declared_plural_forms: str | None = None

    @property
    def mime_headers(self) -> list[tuple[str, str]]:
        return Catalog.mime_headers.fget(self)  # type: ignore[misc]

    @mime_headers.setter
    def mime_headers(self, headers: Iterable[tuple[str, str]]) -> None:
        headers = list(headers)
        for name, value in headers:
            if name.lower() == "plural-forms":
                self.declared_plural_forms = value.strip()
        Catalog.mime_headers.fset(self, headers)  # type: ignore[misc]


def load_catalog(
    path: str | os.PathLike[str],
    *,
    include_fuzzy: bool = False,
    locale: str | None = None,
    charset: str | None = None,
) -> CatalogStore:
    """Read a gettext catalog file.

    The store's plural_forms is the catalog's Plural-Forms header as written,
    so an incomplete header fails later when the rule is compiled. Without
    one, Babel derives the rule from the catalog's Language header, then from
    ``locale``, then falls back to the two-form default. Compiled catalogs
    carry the header msgfmt already validated, as completed by Babel.

    Args:
        path: Path to a ``.po`` file, or a compiled ``.mo``/``.gmo`` file
        include_fuzzy: Let fuzzy entries take part in lookups
        locale: Locale assumed when the file declares no Language header
        charset: Override the charset declared in a PO file header

    Returns:
        Immutable CatalogStore for the file

    Raises:
        CatalogLoadError: If the file is missing, unreadable or not a valid
            gettext catalog
    """
    catalog_path = Path(path)
    name = str(catalog_path)
    if not catalog_path.is_file():
        diagnostic = Diagnostic(
            code=DiagnosticCode.CATALOG_NOT_FOUND,
            message=f"Translation catalog not found: {name}",
            hint="Check the 'translation' and 'fallback_translation' options",
        )
        raise CatalogLoadError(diagnostic, path=name)

    babel_locale = locale.replace("-", "_") if locale else None
    declared: str | None = None
    try:
        with catalog_path.open("rb") as f:
            if catalog_path.suffix.lower() in _MO_SUFFIXES:
                catalog = read_mo(f)
                if catalog.locale is None and babel_locale:
                    catalog.locale = babel_locale
            else:
                po_catalog = _DeclaredHeaderCatalog(locale=babel_locale, charset=charset)
                PoFileParser(po_catalog, abort_invalid=True).parse(f)
                catalog, declared = po_catalog, po_catalog.declared_plural_forms
    except (OSError, UnicodeDecodeError, ValueError, PoFileError) as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.CATALOG_UNREADABLE,
            message=f"Unable to read translation catalog {name}: {e}",
        )
        raise CatalogLoadError(diagnostic, path=name) from e

    store = CatalogStore.from_entries(
        _iter_entries(catalog),
        plural_forms=declared or catalog.plural_forms,
        include_fuzzy=include_fuzzy,
        name=name,
    )
    logger.info(
        "Loaded catalog %s: %d entries, plural forms %s",
        name,
        len(store),
        store.plural_forms,
    )
    return store


def _iter_entries(catalog: Catalog) -> Iterator[tuple[str | None, Entry]]:
    # Obsolete messages live in catalog.obsolete and are not iterated.
    for message in catalog:
        if not message.id:
            continue
        yield _decode(message.context), _convert_message(message)


def _decode(value: str | bytes | None) -> str | None:
    # read_mo leaves msgctxt undecoded.
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _convert_message(message: Message) -> Entry:
    if isinstance(message.id, (list, tuple)):
        msgid, msgid_plural = message.id[0], message.id[1]
        strings = message.string
        if isinstance(strings, str):
            strings = (strings,)
        variants = tuple(s or "" for s in strings)
    else:
        msgid, msgid_plural = message.id, None
        variants = (message.string or "",)
    return Entry(
        msgid=msgid,
        variants=variants,
        flags=frozenset(message.flags),
        msgid_plural=msgid_plural or None,
    )


def build_resolver(
    source: CatalogSource | CatalogStore | None,
    *,
    name: str,
    include_fuzzy: bool = False,
    locale: str | None = None,
) -> tuple[Resolver, CatalogStore | None]:
    """Turn a configured translation source into a resolver.

    Args:
        source: Catalog path, already loaded CatalogStore, or a resolver
            callback ``(context, singular, plural) -> str | list[str] | None``
        name: Option name, used in error messages
        include_fuzzy: Passed to load_catalog for path sources
        locale: Passed to load_catalog for path sources

    Returns:
        (resolver, store) where store is None for callback sources

    Raises:
        ConfigurationError: If source is none of the accepted types
        CatalogLoadError: If a path source cannot be loaded
    """
    match source:
        case CatalogStore():
            return source.resolve, source
        case str() | os.PathLike():
            store = load_catalog(source, include_fuzzy=include_fuzzy, locale=locale)
            return store.resolve, store
        case _ if callable(source):
            logger.debug("Using callback resolver for option '%s'", name)
            return source, None
        case _:
            diagnostic = Diagnostic(
                code=DiagnosticCode.INVALID_TRANSLATION_SOURCE,
                message=(
                    f'Invalid option "{name}". Unable to handle the value as a source '
                    f"of translations: {type(source).__name__}"
                ),
                hint="Pass a catalog path or a (context, singular, plural) callable",
            )
            raise ConfigurationError(diagnostic)
