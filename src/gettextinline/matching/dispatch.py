"""Function-name dispatch table.

Overload collapsing runs once, when the table is built. Each configured name
ends up mapped to exactly one CallShape; call sites are then matched with a
single dictionary lookup.

Collapsing rules, applied in order:

1. gettext == ngettext      -> GETTEXT_OVERLOADED_N  (1 or 2 args)
2. pgettext == npgettext    -> PGETTEXT_OVERLOADED_N (2 or 3 args)
3. gettext == pgettext      -> GETTEXT_OVERLOADED_P  (1 or 2 args, 2 = context)
4. ngettext == npgettext    -> NGETTEXT_OVERLOADED_P (2 or 3 args, 3 = context)

Any other shared name cannot be told apart by arity and is rejected.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from gettextinline.constants import (
    DEFAULT_OVERLOADED_GETTEXT_NAME,
    DEFAULT_OVERLOADED_PGETTEXT_NAME,
    DEFAULT_PLURAL_FACTORY_NAME,
)
from gettextinline.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from gettextinline.enums import CallShape, Operation
from gettextinline.matching.matcher import CallMatcher

__all__ = ["DispatchTable", "FunctionNames", "build_dispatch_table"]

logger = logging.getLogger(__name__)

_COLLAPSE_RULES: tuple[tuple[Operation, Operation, CallShape], ...] = (
    (Operation.GETTEXT, Operation.NGETTEXT, CallShape.GETTEXT_OVERLOADED_N),
    (Operation.PGETTEXT, Operation.NPGETTEXT, CallShape.PGETTEXT_OVERLOADED_N),
    (Operation.GETTEXT, Operation.PGETTEXT, CallShape.GETTEXT_OVERLOADED_P),
    (Operation.NGETTEXT, Operation.NPGETTEXT, CallShape.NGETTEXT_OVERLOADED_P),
)

_PLAIN_SHAPES: Mapping[Operation, CallShape] = {
    Operation.GETTEXT: CallShape.GETTEXT,
    Operation.NGETTEXT: CallShape.NGETTEXT,
    Operation.PGETTEXT: CallShape.PGETTEXT,
    Operation.NPGETTEXT: CallShape.NPGETTEXT,
}


@dataclass(frozen=True, slots=True)
class FunctionNames:
    """Source identifiers configured for each logical operation.

    Attributes:
        gettext: (singular)
        ngettext: (singular, plural)
        pgettext: (context, singular)
        npgettext: (context, singular, plural)
        plural_factory: Zero-argument call replaced by the plural function
    """

    gettext: str | None = None
    ngettext: str | None = None
    pgettext: str | None = None
    npgettext: str | None = None
    plural_factory: str = DEFAULT_PLURAL_FACTORY_NAME

    @property
    def any_configured(self) -> bool:
        return any((self.gettext, self.ngettext, self.pgettext, self.npgettext))

    def for_operation(self, operation: Operation) -> str | None:
        return getattr(self, operation.value)


class DispatchTable(Mapping[str, CallMatcher]):
    """Immutable mapping from function name to its CallMatcher.

    Attributes:
        plural_factory: Name of the plural factory call
    """

    __slots__ = ("_matchers", "plural_factory")

    def __init__(self, matchers: Mapping[str, CallMatcher], plural_factory: str) -> None:
        self._matchers = dict(matchers)
        self.plural_factory = plural_factory

    def __getitem__(self, name: str) -> CallMatcher:
        return self._matchers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._matchers)

    def __len__(self) -> int:
        return len(self._matchers)

    def __repr__(self) -> str:
        shapes = ", ".join(f"{name}={m.shape.value}" for name, m in self._matchers.items())
        return f"DispatchTable({shapes}; plural_factory={self.plural_factory})"

    def is_translation_call(self, name: str) -> bool:
        return name in self._matchers

    def is_plural_factory(self, name: str) -> bool:
        return name == self.plural_factory


def _ambiguous(name: str, operations: list[str]) -> ConfigurationError:
    joined = ", ".join(operations)
    return ConfigurationError(
        Diagnostic(
            code=DiagnosticCode.AMBIGUOUS_FUNCTION_NAME,
            message=(
                f'Invalid configuration, the function name "{name}" is shared by '
                f"{joined} and cannot be disambiguated by argument count"
            ),
            hint="Use distinct names, or only pair operations that differ by one argument",
        )
    )


def build_dispatch_table(names: FunctionNames) -> DispatchTable:
    """Resolve configured names into a dispatch table.

    With no translation name configured at all, ``__`` handles gettext and
    ngettext, and ``_c`` handles pgettext and npgettext.

    Raises:
        ConfigurationError: If a name is shared in a way arity cannot resolve,
            or collides with the plural factory name
    """
    if not names.any_configured:
        names = FunctionNames(
            gettext=DEFAULT_OVERLOADED_GETTEXT_NAME,
            ngettext=DEFAULT_OVERLOADED_GETTEXT_NAME,
            pgettext=DEFAULT_OVERLOADED_PGETTEXT_NAME,
            npgettext=DEFAULT_OVERLOADED_PGETTEXT_NAME,
            plural_factory=names.plural_factory,
        )

    remaining: dict[Operation, str] = {
        op: name for op in Operation if (name := names.for_operation(op))
    }
    claims: list[tuple[str, CallShape, list[str]]] = []

    for first, second, shape in _COLLAPSE_RULES:
        name = remaining.get(first)
        if name is not None and name == remaining.get(second):
            del remaining[first], remaining[second]
            claims.append((name, shape, [first.value, second.value]))
            logger.debug("Collapsed %s and %s under %r as %s", first, second, name, shape)

    for op, name in remaining.items():
        claims.append((name, _PLAIN_SHAPES[op], [op.value]))

    matchers: dict[str, CallMatcher] = {}
    owners: dict[str, list[str]] = {}
    for name, shape, operations in claims:
        owners.setdefault(name, []).extend(operations)
        if name in matchers:
            raise _ambiguous(name, owners[name])
        matchers[name] = CallMatcher(name, shape)

    if names.plural_factory in matchers:
        raise _ambiguous(
            names.plural_factory, [*owners[names.plural_factory], "the plural factory"]
        )

    table = DispatchTable(matchers, names.plural_factory)
    logger.debug("Built %r", table)
    return table
