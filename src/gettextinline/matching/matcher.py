"""Per-call validation and request extraction.

The host evaluates each call argument statically and passes a StaticValue:
the argument's string value when it is determinable at build time, or None
when it is a runtime expression. Validation never raises anything but
InvalidUsageError, so one bad call site cannot stop a file.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gettextinline.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    InvalidUsageError,
    SourceSpan,
)
from gettextinline.enums import CallShape
from gettextinline.matching.shapes import LAYOUTS, describe_arity
from gettextinline.resolution import ResolutionRequest

__all__ = ["CallMatcher", "StaticValue", "validate_plural_factory"]

type StaticValue = str | None
"""Statically evaluated call argument; None means "not a string literal"."""


@dataclass(frozen=True, slots=True)
class CallMatcher:
    """Validator and extractor for one configured function name.

    Example:
        >>> matcher = CallMatcher("t", CallShape.GETTEXT_OVERLOADED_N)
        >>> matcher.match(["Cat", "Cats"])
        ResolutionRequest(singular='Cat', context=None, plural='Cats')

    Attributes:
        name: Function name as written in source
        shape: Call shape the name dispatches to
    """

    name: str
    shape: CallShape

    @property
    def usage(self) -> str:
        """Message used for every invalid call of this function."""
        return f'The "{self.name}" function must receive {describe_arity(self.shape)} as argument'

    def match(
        self, args: Sequence[StaticValue], span: SourceSpan | None = None
    ) -> ResolutionRequest:
        """Validate the arguments and build the resolution request.

        Raises:
            InvalidUsageError: On wrong argument count, a non-literal argument
                or an empty literal
        """
        layout = LAYOUTS[self.shape].get(len(args))
        if layout is None:
            raise self._invalid(DiagnosticCode.WRONG_ARGUMENT_COUNT, span, f"got {len(args)}")

        values: dict[str, str] = {}
        for position, (role, value) in enumerate(zip(layout, args, strict=True), start=1):
            if value is None:
                detail = f"argument {position} ({role}) is not a string literal"
                raise self._invalid(DiagnosticCode.NON_LITERAL_ARGUMENT, span, detail)
            if not value:
                detail = f"argument {position} ({role}) is empty"
                raise self._invalid(DiagnosticCode.EMPTY_LITERAL_ARGUMENT, span, detail)
            values[role] = value

        return ResolutionRequest(
            singular=values["singular"],
            context=values.get("context"),
            plural=values.get("plural"),
        )

    def _invalid(
        self, code: DiagnosticCode, span: SourceSpan | None, hint: str
    ) -> InvalidUsageError:
        return InvalidUsageError(
            Diagnostic(
                code=code,
                message=self.usage,
                span=span,
                hint=hint,
                function_name=self.name,
            )
        )


def validate_plural_factory(
    name: str, args: Sequence[object], span: SourceSpan | None = None
) -> None:
    """Check a plural factory call: it takes no arguments.

    Raises:
        InvalidUsageError: If any argument is supplied
    """
    if args:
        raise InvalidUsageError(
            Diagnostic(
                code=DiagnosticCode.PLURAL_FACTORY_ARGUMENTS,
                message=f'The "{name}" function must receive 0 arguments',
                span=span,
                hint=f"got {len(args)}",
                function_name=name,
            )
        )
