"""Immutable, queryable translation catalog.

The catalog parser's output is loosely typed. It is converted into Entry and
CatalogStore at load time so that resolution code only ever sees the strict
model:

    CatalogStore
      └─ context ("" = no context)
           └─ singular msgid
                └─ Entry(variants, flags)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, NoReturn

from gettextinline.catalog.types import Context, TranslationValue
from gettextinline.constants import FUZZY_FLAG, NO_CONTEXT
from gettextinline.diagnostics import CatalogLoadError, Diagnostic, DiagnosticCode

__all__ = ["CatalogStore", "Entry"]

_FLAG_SPLIT = re.compile(r"[\s,]+")


@dataclass(frozen=True, slots=True)
class Entry:
    """Translation data for one (context, msgid) key.

    Attributes:
        msgid: Singular source text
        variants: Translated forms; index 0 is the singular, index >= 1 the
            plural forms in plural-rule order
        flags: Flag comments (``#, fuzzy, python-format``)
        msgid_plural: Plural source text, if the entry is a plural entry
    """

    msgid: str
    variants: tuple[str, ...]
    flags: frozenset[str] = frozenset()
    msgid_plural: str | None = None

    @property
    def fuzzy(self) -> bool:
        """True when the translation is marked as needing review."""
        return FUZZY_FLAG in self.flags

    @property
    def is_complete(self) -> bool:
        """True when every variant, including the singular slot, is translated."""
        return bool(self.variants) and all(self.variants)

    @property
    def value(self) -> TranslationValue:
        """Single variant as ``str``, several as ``tuple``."""
        if len(self.variants) == 1:
            return self.variants[0]
        return self.variants


class CatalogStore:
    """Read-only catalog for a single translation source.

    Lookups are exact matches on (context, msgid). Fuzzy entries are hidden
    unless ``include_fuzzy`` is set, and partially translated entries are
    always hidden. In both cases lookup reports "not found" so that the
    resolution chain moves to its next source.

    Example:
        >>> store = CatalogStore.from_entries(
        ...     [("", Entry("Hello", ("Bonjour",)))],
        ... )
        >>> store.resolve(None, "Hello", None)
        'Bonjour'
        >>> store.resolve(None, "Missing", None) is None
        True

    Attributes:
        plural_forms: Raw ``Plural-Forms`` header value, or None when absent
        include_fuzzy: Whether fuzzy entries take part in lookups
        name: Human-readable origin (file path or "<mapping>")
    """

    __slots__ = ("_contexts", "include_fuzzy", "name", "plural_forms")

    def __init__(
        self,
        contexts: Mapping[Context, Mapping[str, Entry]],
        *,
        plural_forms: str | None = None,
        include_fuzzy: bool = False,
        name: str = "<mapping>",
    ) -> None:
        self._contexts: Mapping[Context, Mapping[str, Entry]] = MappingProxyType(
            {ctx: MappingProxyType(dict(entries)) for ctx, entries in contexts.items()}
        )
        self.plural_forms = plural_forms
        self.include_fuzzy = include_fuzzy
        self.name = name

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[tuple[Context | None, Entry]],
        *,
        plural_forms: str | None = None,
        include_fuzzy: bool = False,
        name: str = "<mapping>",
    ) -> CatalogStore:
        """Group (context, entry) pairs by context then msgid.

        Later duplicates replace earlier ones, as msgfmt does.
        """
        contexts: dict[Context, dict[str, Entry]] = {}
        for context, entry in entries:
            contexts.setdefault(context or NO_CONTEXT, {})[entry.msgid] = entry
        return cls(
            contexts,
            plural_forms=plural_forms,
            include_fuzzy=include_fuzzy,
            name=name,
        )

    @classmethod
    def from_mapping(
        cls,
        translations: Mapping[str, Mapping[str, Any]],
        headers: Mapping[str, str] | None = None,
        *,
        include_fuzzy: bool = False,
        name: str = "<mapping>",
    ) -> CatalogStore:
        """Build a store from an already parsed nested mapping.

        The accepted shape is the one produced by gettext-parser style tools::

            {
                "": {                       # context
                    "Hello": {              # msgid
                        "msgid": "Hello",
                        "msgstr": ["Bonjour"],
                        "comments": {"flag": "fuzzy"},
                    },
                },
            }

        The header entry (empty msgid) is skipped. Header names are matched
        case-insensitively.

        Raises:
            CatalogLoadError: If the mapping does not have this shape
        """
        entries: list[tuple[Context, Entry]] = []
        if not isinstance(translations, Mapping):
            kind = type(translations).__name__
            _raise_malformed(name, f"expected a mapping of contexts, got {kind}")
        for context, messages in translations.items():
            if not isinstance(context, str) or not isinstance(messages, Mapping):
                _raise_malformed(name, f"invalid context block {context!r}")
            for msgid, raw in messages.items():
                if msgid == "":
                    continue
                entries.append((context, _entry_from_raw(name, msgid, raw)))

        plural_forms = None
        for header, value in (headers or {}).items():
            if header.lower() == "plural-forms" and value:
                plural_forms = value
        return cls.from_entries(
            entries,
            plural_forms=plural_forms,
            include_fuzzy=include_fuzzy,
            name=name,
        )

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._contexts.values())

    def __repr__(self) -> str:
        return f"CatalogStore(name={self.name!r}, entries={len(self)})"

    @property
    def contexts(self) -> Mapping[Context, Mapping[str, Entry]]:
        """Read-only view of the grouped entries."""
        return self._contexts

    def lookup(self, context: str | None, singular: str) -> Entry | None:
        """Find the usable entry for (context, singular).

        Args:
            context: Message context; None and "" both mean "no context"
            singular: Exact msgid

        Returns:
            The entry, or None if it is absent, fuzzy (and fuzzy entries are
            excluded), or has any untranslated variant
        """
        messages = self._contexts.get(context or NO_CONTEXT)
        if messages is None:
            return None
        entry = messages.get(singular)
        if entry is None:
            return None
        if entry.fuzzy and not self.include_fuzzy:
            return None
        if not entry.is_complete:
            return None
        return entry

    def resolve(
        self, context: str | None, singular: str, plural: str | None
    ) -> TranslationValue | None:
        """Resolver interface: the entry's value, or None when not usable.

        The plural text does not take part in the key; a request with a
        plural is satisfied by whatever variants the entry stores.
        """
        entry = self.lookup(context, singular)
        if entry is None:
            return None
        return entry.value


def _raise_malformed(name: str, detail: str) -> NoReturn:
    diagnostic = Diagnostic(
        code=DiagnosticCode.CATALOG_MALFORMED,
        message=f"Malformed catalog {name}: {detail}",
    )
    raise CatalogLoadError(diagnostic, path=name)


def _entry_from_raw(name: str, msgid: str, raw: Any) -> Entry:
    if not isinstance(raw, Mapping):
        _raise_malformed(name, f"entry {msgid!r} is not a mapping")
    msgstr = raw.get("msgstr")
    if isinstance(msgstr, str):
        variants: tuple[str, ...] = (msgstr,)
    elif isinstance(msgstr, (list, tuple)) and all(isinstance(v, str) for v in msgstr):
        variants = tuple(msgstr)
    elif msgstr is None:
        variants = ()
    else:
        _raise_malformed(name, f"entry {msgid!r} has invalid msgstr {msgstr!r}")

    comments = raw.get("comments") or {}
    flag_text = comments.get("flag", "") if isinstance(comments, Mapping) else ""
    flags = frozenset(f for f in _FLAG_SPLIT.split(flag_text or "") if f)
    msgid_plural = raw.get("msgid_plural") or None
    return Entry(msgid=msgid, variants=variants, flags=flags, msgid_plural=msgid_plural)
