"""Thread-safe LRU cache of compiled message templates.

The runtime helper parses ``{placeholder}`` templates once per distinct text.
The cache is an explicit object owned by the caller, so its lifetime is the
caller's session and separate helpers never share hidden state.

Architecture:
    - Thread-safe using threading.RLock
    - LRU eviction via OrderedDict
    - Keyed by the exact literal text being formatted

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections import OrderedDict
from threading import RLock
from typing import TYPE_CHECKING

from gettextinline.constants import DEFAULT_FORMAT_CACHE_SIZE

if TYPE_CHECKING:
    from gettextinline.runtime.format import Template

__all__ = ["FormatCache"]


class FormatCache:
    """LRU cache mapping template text to its compiled form.

    Transparent to the caller: ``get`` returns None on a miss.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits
        misses: Number of cache misses
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = DEFAULT_FORMAT_CACHE_SIZE) -> None:
        """Initialize format cache.

        Args:
            maxsize: Maximum number of entries (default: 1000)
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[str, Template] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def get(self, text: str) -> Template | None:
        """Get the compiled template for ``text`` if cached."""
        with self._lock:
            if text in self._cache:
                self._cache.move_to_end(text)
                self._hits += 1
                return self._cache[text]
            self._misses += 1
            return None

    def put(self, text: str, template: Template) -> None:
        """Store a compiled template, evicting the least recently used entry."""
        with self._lock:
            if text in self._cache:
                self._cache.move_to_end(text)
            elif len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)
            self._cache[text] = template

    def clear(self) -> None:
        """Clear all cached entries and reset statistics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        return self._maxsize

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        with self._lock:
            return self._misses

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys size, maxsize, hits, misses and hit_rate
            (percentage, 0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }
