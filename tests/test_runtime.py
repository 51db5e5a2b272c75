"""Tests for the runtime formatting helper and its template cache."""

import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gettextinline import FormatCache, format_translation, parse_plural_forms
from gettextinline.runtime import compile_template, select_plural_key


class TestFormatCache:
    """LRU behavior and statistics."""

    def test_miss_then_hit(self) -> None:
        """A stored template is returned on the next lookup."""
        cache = FormatCache()
        assert cache.get("Hi {name}") is None
        cache.put("Hi {name}", ("Hi ", ("name",)))
        assert cache.get("Hi {name}") == ("Hi ", ("name",))
        assert (cache.hits, cache.misses) == (1, 1)

    def test_evicts_least_recently_used(self) -> None:
        """The oldest untouched entry is evicted first."""
        cache = FormatCache(maxsize=2)
        cache.put("a", ("a",))
        cache.put("b", ("b",))
        cache.get("a")
        cache.put("c", ("c",))
        assert len(cache) == 2
        assert cache.get("b") is None
        assert cache.get("a") == ("a",)

    def test_put_existing_does_not_evict(self) -> None:
        """Re-storing a key keeps the size stable."""
        cache = FormatCache(maxsize=2)
        cache.put("a", ("a",))
        cache.put("b", ("b",))
        cache.put("a", ("a",))
        assert len(cache) == 2
        assert cache.get("b") == ("b",)

    def test_stats_and_clear(self) -> None:
        """Statistics report the hit rate and reset on clear."""
        cache = FormatCache(maxsize=10)
        cache.put("x", ("x",))
        cache.get("x")
        cache.get("y")
        assert cache.get_stats() == {
            "size": 1,
            "maxsize": 10,
            "hits": 1,
            "misses": 1,
            "hit_rate": 50.0,
        }
        cache.clear()
        assert cache.get_stats()["size"] == 0
        assert cache.hits == 0
        assert cache.get_stats()["hit_rate"] == 0.0

    @pytest.mark.parametrize("maxsize", [0, -1])
    def test_invalid_maxsize(self, maxsize: int) -> None:
        """The size bound must be positive."""
        with pytest.raises(ValueError, match="maxsize"):
            FormatCache(maxsize=maxsize)

    def test_concurrent_access(self) -> None:
        """Parallel formatting keeps the cache consistent."""
        cache = FormatCache(maxsize=8)

        def worker() -> None:
            for i in range(200):
                format_translation(f"v{i % 16} {{x}}", {"x": i}, cache=cache)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(cache) <= 8
        assert cache.hits + cache.misses == 800


class TestCompileTemplate:
    """Placeholder splitting."""

    def test_parts(self) -> None:
        """Literal text and placeholder names alternate."""
        assert compile_template("{n} files in {dir}") == (("n",), " files in ", ("dir",))

    def test_no_placeholders(self) -> None:
        """Braces that are not identifiers stay literal."""
        assert compile_template("{0} {} {a b}") == ("{0} {} {a b}",)


class TestSelectPluralKey:
    """Automatic count detection."""

    def test_single_integer(self) -> None:
        """The only integer parameter is the count."""
        assert select_plural_key({"n": 3, "name": "x", "flag": True}) == "n"

    @pytest.mark.parametrize("params", [{}, {"a": 1, "b": 2}, {"flag": True}])
    def test_ambiguous_or_missing(self, params: dict[str, object]) -> None:
        """Zero or several integer parameters cannot be resolved."""
        with pytest.raises(ValueError, match="plural_key"):
            select_plural_key(params)


class TestFormatTranslation:
    """Variant selection and interpolation."""

    def test_scalar_without_params(self) -> None:
        """A plain string without params is returned unchanged."""
        assert format_translation("Bonjour {name}") == "Bonjour {name}"

    def test_scalar_interpolation(self) -> None:
        """Known placeholders are replaced; unknown ones are kept."""
        assert format_translation("{greet}, {name}!", {"greet": "Salut"}) == "Salut, {name}!"

    def test_plural_default_rule(self) -> None:
        """The default rule selects the plural for zero."""
        variants = ["{n} fichier", "{n} fichiers"]
        assert format_translation(variants, {"n": 1}) == "1 fichier"
        assert format_translation(variants, {"n": 0}) == "0 fichiers"

    def test_plural_rule_from_factory(self) -> None:
        """An injected rule picks from three forms."""
        rule = parse_plural_forms(
            "nplurals=3; plural=(n==1 ? 0 : n%10>=2 && n%10<=4 && "
            "(n%100<10 || n%100>=20) ? 1 : 2);"
        )
        variants = ("{n} plik", "{n} pliki", "{n} plików")
        assert format_translation(variants, {"n": 3}, plural_rule=rule) == "3 pliki"
        assert format_translation(variants, {"n": 5}, plural_rule=rule) == "5 plików"

    def test_degrades_for_short_variant_lists(self) -> None:
        """Missing plural slots fall back to slot 1 then slot 0."""
        rule = parse_plural_forms("nplurals=3; plural=(n > 4 ? 2 : n > 1 ? 1 : 0);")
        assert format_translation(["one", "few"], {"n": 9}, plural_rule=rule) == "few"
        assert format_translation(["one"], {"n": 9}, plural_rule=rule) == "one"

    def test_explicit_plural_key(self) -> None:
        """plural_key disambiguates several integers."""
        variants = ["{count} item of {total}", "{count} items of {total}"]
        result = format_translation(variants, {"count": 2, "total": 9}, plural_key="count")
        assert result == "2 items of 9"

    def test_plural_without_params(self) -> None:
        """Plural variants need a count."""
        with pytest.raises(ValueError, match="count"):
            format_translation(["a", "b"])

    def test_ambiguous_count(self) -> None:
        """Several integers without plural_key are rejected."""
        with pytest.raises(ValueError, match="plural_key"):
            format_translation(["a", "b"], {"x": 1, "y": 2})

    def test_non_integer_count(self) -> None:
        """An explicit key must name an integer."""
        with pytest.raises(ValueError, match="integer"):
            format_translation(["a", "b"], {"n": "3"}, plural_key="n")

    def test_cache_reused(self) -> None:
        """Repeated texts compile once."""
        cache = FormatCache()
        for count in (2, 3, 4):
            format_translation(["{n} file", "{n} files"], {"n": count}, cache=cache)
        assert cache.misses == 1
        assert cache.hits == 2

    @given(st.text(alphabet=st.characters(exclude_characters="{}")))
    def test_text_without_braces_unchanged(self, text: str) -> None:
        """Texts without placeholders are returned as is."""
        assert format_translation(text, {"n": 1}) == text
