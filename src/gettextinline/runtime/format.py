"""Runtime formatting of inlined translations.

After the build, a translation call has become a literal: a string, or a list
of plural variants. ``format_translation`` is the small helper application
code calls on that literal at runtime to pick the plural variant for a count
and interpolate ``{name}`` placeholders:

    format_translation(["{n} file", "{n} files"], {"n": 3})  ->  "3 files"

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence

from gettextinline.plural import DEFAULT_PLURAL_RULE
from gettextinline.resolution import select_variant
from gettextinline.runtime.cache import FormatCache

__all__ = ["Template", "compile_template", "format_translation", "select_plural_key"]

type Template = tuple[str | tuple[str], ...]
"""Compiled template: literal text parts and 1-tuples holding placeholder names."""

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def compile_template(text: str) -> Template:
    """Split a template into literal and placeholder parts.

    Example:
        >>> compile_template("Hi {name}!")
        ('Hi ', ('name',), '!')
    """
    parts: list[str | tuple[str]] = []
    position = 0
    for match in _PLACEHOLDER.finditer(text):
        if match.start() > position:
            parts.append(text[position : match.start()])
        parts.append((match.group(1),))
        position = match.end()
    if position < len(text):
        parts.append(text[position:])
    return tuple(parts)


def select_plural_key(params: Mapping[str, object]) -> str:
    """Find the single integer parameter that drives plural selection.

    Raises:
        ValueError: If there is no integer parameter or more than one
    """
    keys = [
        key
        for key, value in params.items()
        if isinstance(value, int) and not isinstance(value, bool)
    ]
    if len(keys) != 1:
        msg = (
            "Unable to find the plural count in the params automatically "
            f"(integer params: {keys}); pass plural_key explicitly"
        )
        raise ValueError(msg)
    return keys[0]


def format_translation(
    translation: str | Sequence[str],
    params: Mapping[str, object] | None = None,
    plural_key: str | None = None,
    *,
    plural_rule: Callable[[int], int] = DEFAULT_PLURAL_RULE,
    cache: FormatCache | None = None,
) -> str:
    """Select a plural variant and interpolate parameters.

    Args:
        translation: Inlined literal, a string or the list of plural variants
        params: Values for ``{name}`` placeholders; unknown placeholders are
            left as written
        plural_key: Parameter holding the count; found automatically when
            exactly one parameter is an integer
        plural_rule: Count to variant index function (the plural factory
            result); defaults to the two-form rule
        cache: Compiled template cache to reuse across calls

    Raises:
        ValueError: If a plural translation is formatted without a count
    """
    if isinstance(translation, str):
        text = translation
    else:
        variants = tuple(translation)
        if params is None:
            msg = "A plural translation needs params holding the count"
            raise ValueError(msg)
        key = plural_key or select_plural_key(params)
        count = params[key]
        if not isinstance(count, int):
            msg = f"Plural count {key!r} must be an integer, got {type(count).__name__}"
            raise ValueError(msg)
        text = select_variant(variants, plural_rule(count))

    if not params:
        return text

    template = cache.get(text) if cache is not None else None
    if template is None:
        template = compile_template(text)
        if cache is not None:
            cache.put(text, template)

    out: list[str] = []
    for part in template:
        if isinstance(part, str):
            out.append(part)
        elif part[0] in params:
            out.append(str(params[part[0]]))
        else:
            out.append(f"{{{part[0]}}}")
    return "".join(out)
