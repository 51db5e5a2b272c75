"""Tests for call shapes, per-call matchers and the dispatch table."""

import pytest

from gettextinline import ConfigurationError, InvalidUsageError, ResolutionRequest
from gettextinline.diagnostics import DiagnosticCode, SourceSpan
from gettextinline.enums import CallShape
from gettextinline.matching import (
    CallMatcher,
    FunctionNames,
    build_dispatch_table,
    describe_arity,
    validate_plural_factory,
)

SPAN = SourceSpan(start=0, end=9, line=1, column=1, filename="app.py")


def _usage_code(excinfo: pytest.ExceptionInfo[InvalidUsageError]) -> DiagnosticCode:
    return excinfo.value.diagnostic.code


class TestDescribeArity:
    """Human-readable argument counts."""

    def test_single_count(self) -> None:
        """Plain shapes name one count."""
        assert describe_arity(CallShape.GETTEXT) == "1 non-empty string literal"
        assert describe_arity(CallShape.NPGETTEXT) == "3 non-empty string literals"

    def test_overloaded_counts(self) -> None:
        """Overloaded shapes name both counts."""
        assert describe_arity(CallShape.GETTEXT_OVERLOADED_N) == "1 or 2 non-empty string literals"


class TestCallMatcher:
    """Validation and extraction per shape."""

    @pytest.mark.parametrize(
        ("shape", "args", "expected"),
        [
            (CallShape.GETTEXT, ["Hi"], ResolutionRequest("Hi")),
            (CallShape.NGETTEXT, ["Cat", "Cats"], ResolutionRequest("Cat", plural="Cats")),
            (CallShape.PGETTEXT, ["month", "May"], ResolutionRequest("May", context="month")),
            (
                CallShape.NPGETTEXT,
                ["pet", "Cat", "Cats"],
                ResolutionRequest("Cat", context="pet", plural="Cats"),
            ),
            (CallShape.GETTEXT_OVERLOADED_P, ["month", "May"], ResolutionRequest("May", "month")),
            (
                CallShape.NGETTEXT_OVERLOADED_P,
                ["Cat", "Cats"],
                ResolutionRequest("Cat", plural="Cats"),
            ),
        ],
    )
    def test_extraction(
        self, shape: CallShape, args: list[str], expected: ResolutionRequest
    ) -> None:
        """Arguments map to roles by position."""
        assert CallMatcher("f", shape).match(args) == expected

    def test_overloaded_by_arity(self) -> None:
        """One name serves plain and plural by argument count."""
        matcher = CallMatcher("t", CallShape.GETTEXT_OVERLOADED_N)
        assert not matcher.match(["Cat"]).is_plural
        assert matcher.match(["Cat", "Cats"]).is_plural

    def test_wrong_count(self) -> None:
        """An unaccepted count reports the accepted ones."""
        matcher = CallMatcher("t", CallShape.GETTEXT_OVERLOADED_N)
        with pytest.raises(InvalidUsageError) as excinfo:
            matcher.match([], SPAN)
        diagnostic = excinfo.value.diagnostic
        assert diagnostic.code is DiagnosticCode.WRONG_ARGUMENT_COUNT
        assert diagnostic.message == (
            'The "t" function must receive 1 or 2 non-empty string literals as argument'
        )
        assert diagnostic.span == SPAN
        assert diagnostic.function_name == "t"
        assert diagnostic.hint == "got 0"

    def test_non_literal(self) -> None:
        """None marks an argument that is not a static string."""
        with pytest.raises(InvalidUsageError) as excinfo:
            CallMatcher("_c", CallShape.PGETTEXT).match(["ctx", None])
        assert _usage_code(excinfo) is DiagnosticCode.NON_LITERAL_ARGUMENT
        assert excinfo.value.diagnostic.hint == "argument 2 (singular) is not a string literal"

    def test_empty_literal(self) -> None:
        """Empty strings are invalid in every position."""
        with pytest.raises(InvalidUsageError) as excinfo:
            CallMatcher("__", CallShape.GETTEXT).match([""])
        assert _usage_code(excinfo) is DiagnosticCode.EMPTY_LITERAL_ARGUMENT


class TestPluralFactory:
    """The zero-argument plural factory call."""

    def test_no_arguments(self) -> None:
        """A bare call is valid."""
        validate_plural_factory("_p", [])

    def test_arguments_rejected(self) -> None:
        """Any argument is invalid usage."""
        with pytest.raises(InvalidUsageError) as excinfo:
            validate_plural_factory("_p", ["x"], SPAN)
        assert _usage_code(excinfo) is DiagnosticCode.PLURAL_FACTORY_ARGUMENTS
        assert excinfo.value.diagnostic.message == 'The "_p" function must receive 0 arguments'


class TestBuildDispatchTable:
    """Overload collapsing and ambiguity detection."""

    def _shapes(self, names: FunctionNames) -> dict[str, CallShape]:
        return {name: matcher.shape for name, matcher in build_dispatch_table(names).items()}

    def test_defaults(self) -> None:
        """Without configured names, __ and _c are overloaded."""
        table = build_dispatch_table(FunctionNames())
        assert self._shapes(FunctionNames()) == {
            "__": CallShape.GETTEXT_OVERLOADED_N,
            "_c": CallShape.PGETTEXT_OVERLOADED_N,
        }
        assert table.plural_factory == "_p"
        assert table.is_plural_factory("_p")
        assert not table.is_translation_call("_p")

    def test_distinct_names(self) -> None:
        """Distinct names get plain shapes."""
        names = FunctionNames(gettext="_", ngettext="n_", pgettext="p_", npgettext="np_")
        assert self._shapes(names) == {
            "_": CallShape.GETTEXT,
            "n_": CallShape.NGETTEXT,
            "p_": CallShape.PGETTEXT,
            "np_": CallShape.NPGETTEXT,
        }

    def test_partial_configuration(self) -> None:
        """Configuring one name disables the defaults."""
        assert self._shapes(FunctionNames(gettext="t")) == {"t": CallShape.GETTEXT}

    @pytest.mark.parametrize(
        ("names", "expected"),
        [
            (FunctionNames(gettext="t", ngettext="t"), CallShape.GETTEXT_OVERLOADED_N),
            (FunctionNames(pgettext="t", npgettext="t"), CallShape.PGETTEXT_OVERLOADED_N),
            (FunctionNames(gettext="t", pgettext="t"), CallShape.GETTEXT_OVERLOADED_P),
            (FunctionNames(ngettext="t", npgettext="t"), CallShape.NGETTEXT_OVERLOADED_P),
        ],
    )
    def test_collapse_rules(self, names: FunctionNames, expected: CallShape) -> None:
        """Each pair differing by one argument collapses."""
        assert self._shapes(names) == {"t": expected}

    def test_both_pairs_collapse(self) -> None:
        """gettext+ngettext and pgettext+npgettext collapse independently."""
        names = FunctionNames(gettext="t", ngettext="t", pgettext="tc", npgettext="tc")
        assert self._shapes(names) == {
            "t": CallShape.GETTEXT_OVERLOADED_N,
            "tc": CallShape.PGETTEXT_OVERLOADED_N,
        }

    @pytest.mark.parametrize(
        "names",
        [
            FunctionNames(gettext="t", npgettext="t"),
            FunctionNames(ngettext="t", pgettext="t"),
            FunctionNames(gettext="t", ngettext="t", pgettext="t"),
            FunctionNames(gettext="t", ngettext="t", pgettext="t", npgettext="t"),
        ],
    )
    def test_ambiguous(self, names: FunctionNames) -> None:
        """Names arity cannot disambiguate are rejected."""
        with pytest.raises(ConfigurationError, match='"t"') as excinfo:
            build_dispatch_table(names)
        assert excinfo.value.diagnostic is not None
        assert excinfo.value.diagnostic.code is DiagnosticCode.AMBIGUOUS_FUNCTION_NAME

    def test_plural_factory_clash(self) -> None:
        """The plural factory cannot share a translation name."""
        with pytest.raises(ConfigurationError, match="plural factory"):
            build_dispatch_table(FunctionNames(gettext="_p"))

    def test_table_is_mapping(self) -> None:
        """The table behaves as a read-only mapping."""
        table = build_dispatch_table(FunctionNames())
        assert set(table) == {"__", "_c"}
        assert len(table) == 2
        assert table["__"].name == "__"
        assert "plural_factory=_p" in repr(table)
