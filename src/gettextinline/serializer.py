"""Output serialization of resolved translations.

Turns a resolved translation into the source text that replaces the call:

    "Bonjour"                       single variant
    ["1 fichier", "{n} fichiers"]   plural variants

Two optional hooks compose in a fixed order. ``transform_text`` is applied to
every variant first; ``transform_to_source`` then receives the transformed
value and returns the final source text, bypassing default quoting.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable

from gettextinline.catalog.types import TranslationValue

__all__ = [
    "OutputSerializer",
    "TextTransform",
    "ToSourceTransform",
    "pseudolocalize",
    "to_literal",
]

type TextTransform = Callable[[str], str]
type ToSourceTransform = Callable[[TranslationValue], str]


def to_literal(value: TranslationValue) -> str:
    """Default serialization: a double-quoted string or a list of them.

    The JSON form is also a valid Python literal.
    """
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(list(value), ensure_ascii=False)


class OutputSerializer:
    """Serialize resolved translations into replacement source text.

    Example:
        >>> OutputSerializer().serialize("Bonjour")
        '"Bonjour"'
        >>> OutputSerializer(transform_text=str.upper).serialize(["ok"])
        '"OK"'
        >>> OutputSerializer(transform_to_source=lambda v: f"fmt({v!r})").serialize("Hi")
        "fmt('Hi')"
    """

    __slots__ = ("transform_text", "transform_to_source")

    def __init__(
        self,
        transform_text: TextTransform | None = None,
        transform_to_source: ToSourceTransform | None = None,
    ) -> None:
        self.transform_text = transform_text
        self.transform_to_source = transform_to_source

    def serialize(self, result: TranslationValue | list[str]) -> str:
        """Return the replacement source text for a resolved translation."""
        value = self._normalize(result)
        if self.transform_text is not None:
            if isinstance(value, str):
                value = self.transform_text(value)
            else:
                value = tuple(self.transform_text(variant) for variant in value)
        if self.transform_to_source is not None:
            return self.transform_to_source(value)
        return to_literal(value)

    @staticmethod
    def _normalize(result: TranslationValue | list[str]) -> TranslationValue:
        # A single variant is a scalar translation, whatever container it came in.
        if isinstance(result, str):
            return result
        variants = tuple(result)
        if len(variants) == 1:
            return variants[0]
        return variants


_PSEUDO_MAP = str.maketrans(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "àƀçđéƒĝĥîĵķĺɱñöþǫŕšŧûṽŵẋýžÀƁÇĐÉƑĜĤÎĴĶĹṀÑÖÞǪŔŠŦÛṼŴẊÝŽ",
)

# Placeholders such as {name} or {0} must survive untouched.
_PLACEHOLDER = re.compile(r"(\{[^{}]*\})")


def pseudolocalize(text: str) -> str:
    """Pseudolocalization transform for ``transform_text``.

    Replaces ASCII letters with accented look-alikes, keeps ``{placeholder}``
    spans intact, and brackets the result so truncation is visible.

    Example:
        >>> pseudolocalize("Hello {name}")
        '[Ĥéĺĺö {name}]'
    """
    parts = _PLACEHOLDER.split(text)
    converted = "".join(
        part if index % 2 else part.translate(_PSEUDO_MAP) for index, part in enumerate(parts)
    )
    return f"[{converted}]"
