"""Argument layouts for each call shape.

A layout maps an accepted argument count to the meaning of each positional
argument. Overloaded shapes accept two counts.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal

from gettextinline.enums import CallShape

__all__ = ["LAYOUTS", "ArgumentRole", "describe_arity"]

type ArgumentRole = Literal["context", "singular", "plural"]

_S: tuple[ArgumentRole, ...] = ("singular",)
_SP: tuple[ArgumentRole, ...] = ("singular", "plural")
_CS: tuple[ArgumentRole, ...] = ("context", "singular")
_CSP: tuple[ArgumentRole, ...] = ("context", "singular", "plural")

LAYOUTS: Mapping[CallShape, Mapping[int, tuple[ArgumentRole, ...]]] = MappingProxyType({
    CallShape.GETTEXT: {1: _S},
    CallShape.NGETTEXT: {2: _SP},
    CallShape.PGETTEXT: {2: _CS},
    CallShape.NPGETTEXT: {3: _CSP},
    CallShape.GETTEXT_OVERLOADED_N: {1: _S, 2: _SP},
    CallShape.PGETTEXT_OVERLOADED_N: {2: _CS, 3: _CSP},
    # Two arguments mean (context, singular), never (singular, plural).
    CallShape.GETTEXT_OVERLOADED_P: {1: _S, 2: _CS},
    CallShape.NGETTEXT_OVERLOADED_P: {2: _SP, 3: _CSP},
})


def describe_arity(shape: CallShape) -> str:
    """Human-readable accepted argument counts, e.g. ``1 or 2 ... literals``."""
    counts = sorted(LAYOUTS[shape])
    noun = "literal" if counts == [1] else "literals"
    return f"{' or '.join(str(c) for c in counts)} non-empty string {noun}"
