"""Tests for the resolution chain and plural variant degradation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gettextinline import CatalogStore, ResolutionRequest
from gettextinline.catalog import Entry
from gettextinline.resolution import (
    ResolutionChain,
    no_translation,
    normalize_result,
    select_variant,
)

PRIMARY = CatalogStore.from_entries(
    [
        ("", Entry("Hello", ("Bonjour",))),
        ("", Entry("Cat", ("Chat", "Chats"), msgid_plural="Cats")),
        ("", Entry("Draft", ("Brouillon",), flags=frozenset({"fuzzy"}))),
    ]
)

FALLBACK = CatalogStore.from_entries(
    [
        ("", Entry("Hello", ("Hallo",))),
        ("", Entry("Dog", ("Hund", "Hunde", "Hundes"), msgid_plural="Dogs")),
        ("", Entry("Draft", ("Entwurf",))),
    ]
)


class TestResolutionRequest:
    """Request invariants."""

    def test_empty_singular_rejected(self) -> None:
        """Requests always carry a singular."""
        with pytest.raises(ValueError, match="singular"):
            ResolutionRequest("")

    def test_is_plural(self) -> None:
        """Only requests with a plural are plural."""
        assert ResolutionRequest("Cat", plural="Cats").is_plural
        assert not ResolutionRequest("Cat", context="animal").is_plural


class TestNormalizeResult:
    """Coercion of resolver answers."""

    @pytest.mark.parametrize("result", [None, "", [], ("a", ""), ["", "b"]])
    def test_not_found(self, result: object) -> None:
        """Empty answers and sequences with gaps mean "not found"."""
        assert normalize_result(result) is None  # type: ignore[arg-type]

    def test_sequence_becomes_tuple(self) -> None:
        """Lists are frozen into tuples."""
        assert normalize_result(["a", "b"]) == ("a", "b")

    def test_unsupported_type(self) -> None:
        """Non-string answers are a programming error."""
        with pytest.raises(TypeError, match="int"):
            normalize_result(42)  # type: ignore[arg-type]


class TestResolutionChain:
    """First non-empty answer wins, no merging."""

    def test_two_links_without_fallback(self) -> None:
        """A single source plus the terminal default."""
        chain = ResolutionChain([PRIMARY.resolve])
        assert len(chain) == 2
        assert chain.resolvers[-1] is no_translation

    def test_primary_short_circuits(self) -> None:
        """Primary hits never consult the fallback."""
        calls: list[str] = []

        def fallback(context: str | None, singular: str, plural: str | None) -> str:
            calls.append(singular)
            return "never"

        chain = ResolutionChain([PRIMARY.resolve, fallback])
        assert chain.resolve(ResolutionRequest("Hello")) == "Bonjour"
        assert calls == []

    def test_fallback_plural_not_merged(self) -> None:
        """A fallback plural hit returns the fallback's variants as-is."""
        chain = ResolutionChain([PRIMARY.resolve, FALLBACK.resolve])
        result = chain.resolve(ResolutionRequest("Dog", plural="Dogs"))
        assert result == ("Hund", "Hunde", "Hundes")

    def test_miss_returns_source_text(self) -> None:
        """Unresolved requests return the untranslated text."""
        chain = ResolutionChain([PRIMARY.resolve, FALLBACK.resolve])
        assert chain.resolve(ResolutionRequest("Missing")) == "Missing"
        assert chain.resolve(ResolutionRequest("Bird", plural="Birds")) == ("Bird", "Birds")

    def test_fuzzy_falls_through(self) -> None:
        """A hidden fuzzy primary entry lets the fallback answer."""
        chain = ResolutionChain([PRIMARY.resolve, FALLBACK.resolve])
        assert chain.resolve(ResolutionRequest("Draft")) == "Entwurf"

    def test_callback_empty_string_falls_through(self) -> None:
        """A callback answering "" counts as a miss."""
        chain = ResolutionChain([lambda c, s, p: "", PRIMARY.resolve])
        assert chain.resolve(ResolutionRequest("Hello")) == "Bonjour"

    def test_context_passed_to_resolvers(self) -> None:
        """Resolvers receive (context, singular, plural)."""
        seen: list[tuple[str | None, str, str | None]] = []

        def spy(context: str | None, singular: str, plural: str | None) -> None:
            seen.append((context, singular, plural))

        ResolutionChain([spy]).resolve(ResolutionRequest("May", context="month"))
        assert seen == [("month", "May", None)]


class TestSelectVariant:
    """Degradation from the requested slot to 1 then 0."""

    def test_exact_slot(self) -> None:
        """An available slot is used."""
        assert select_variant(("a", "b", "c"), 2) == "c"

    def test_degrades_to_slot_one(self) -> None:
        """A two-variant entry asked for index 2 uses index 1."""
        assert select_variant(("fichier", "fichiers"), 2) == "fichiers"

    def test_degrades_to_slot_zero(self) -> None:
        """With slot 1 missing too, index 0 is used."""
        assert select_variant(("fichier",), 2) == "fichier"
        assert select_variant(("fichier", ""), 2) == "fichier"

    def test_scalar(self) -> None:
        """A single string is every slot."""
        assert select_variant("fichier", 5) == "fichier"

    def test_empty(self) -> None:
        """Nothing to select yields the empty string."""
        assert select_variant((), 0) == ""

    @given(
        st.lists(st.text(min_size=1, max_size=5), min_size=1, max_size=6),
        st.integers(min_value=0, max_value=10),
    )
    def test_never_raises(self, variants: list[str], index: int) -> None:
        """Any index selects one of the variants."""
        assert select_variant(tuple(variants), index) in variants
