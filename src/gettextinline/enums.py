"""Enumerations for gettextinline type-safe constants.

Uses StrEnum so members compare equal to their option strings.

Python 3.13+.
"""

from enum import StrEnum

__all__ = [
    "CallShape",
    "Operation",
    "ReportLevel",
]


class ReportLevel(StrEnum):
    """How invalid translation call usage is reported to the host.

    StrEnum provides automatic string conversion: ReportLevel("warning") works.
    """

    ERROR = "error"
    """Attach an error diagnostic to the call site."""

    WARNING = "warning"
    """Attach a warning diagnostic to the call site."""

    NONE = "none"
    """Leave the call site untouched without reporting."""


class Operation(StrEnum):
    """Logical gettext operation a function name can be configured for."""

    GETTEXT = "gettext"
    """(singular) -> str"""

    NGETTEXT = "ngettext"
    """(singular, plural) -> list[str]"""

    PGETTEXT = "pgettext"
    """(context, singular) -> str"""

    NPGETTEXT = "npgettext"
    """(context, singular, plural) -> list[str]"""


class CallShape(StrEnum):
    """Closed set of call shapes a function name can be dispatched to.

    The four plain shapes mirror Operation. The overloaded shapes are produced
    when two operations are configured with the same function name and are
    told apart by argument count.
    """

    GETTEXT = "gettext"
    NGETTEXT = "ngettext"
    PGETTEXT = "pgettext"
    NPGETTEXT = "npgettext"

    GETTEXT_OVERLOADED_N = "gettext|ngettext"
    """1 arg: singular; 2 args: singular, plural"""

    PGETTEXT_OVERLOADED_N = "pgettext|npgettext"
    """2 args: context, singular; 3 args: context, singular, plural"""

    GETTEXT_OVERLOADED_P = "gettext|pgettext"
    """1 arg: singular; 2 args: context, singular"""

    NGETTEXT_OVERLOADED_P = "ngettext|npgettext"
    """2 args: singular, plural; 3 args: context, singular, plural"""
