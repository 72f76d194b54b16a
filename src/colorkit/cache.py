"""Thread-safe memoization cache for color computations.

Stores derived values (HSL / LAB / XYZ components, luminance, contrast ratios,
blended and interpolated colors) keyed on quantized color identity so repeated
calls with the same inputs skip recomputation.

Design goals:
 - Injectable instance: components receive a ``ColorCache`` explicitly; there
   is no process-wide singleton.
 - Bounded: each category is a count-limited LRU (``OrderedDict``); the least
   recently used entry is evicted transparently when the limit is reached.
 - Thread-safe: a single ``RLock`` guards every store. Values are computed
   outside the lock and published whole, so readers see either the previous
   value, the new value or a miss, never a partial one.
 - A miss is never an error: callers recompute.

Keys are ``CacheKey(category, identity)`` tuples. Helpers build identities
with the right order-sensitivity: contrast is symmetric and shares one key
for (A, B) and (B, A); blend and interpolation are ordered.

Public API:
    cache = ColorCache(max_entries=256)
    cache.put(color_key(CacheCategory.LAB, c), lab)
    cache.get(color_key(CacheCategory.LAB, c))
    cache.get_or_compute(key, compute_fn)
    cache.clear() / cache.clear_category(CacheCategory.LAB)
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from enum import Enum
from threading import RLock
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple, TypeVar, TYPE_CHECKING

from .config import settings

if TYPE_CHECKING:  # pragma: no cover
    from .color import Color

__all__ = [
    "CacheCategory",
    "CacheKey",
    "ColorCache",
    "color_key",
    "contrast_key",
    "blend_key",
    "interpolation_key",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheCategory(Enum):
    HSL = "hsl"
    LAB = "lab"
    XYZ = "xyz"
    LUMINANCE = "luminance"
    CONTRAST = "contrast"
    BLEND = "blend"
    INTERPOLATION = "interpolation"


class CacheKey(NamedTuple):
    category: CacheCategory
    identity: Tuple[Any, ...]


def color_key(category: CacheCategory, color: "Color") -> CacheKey:
    return CacheKey(category, color.key())


def contrast_key(first: "Color", second: "Color") -> CacheKey:
    # Contrast is symmetric; sort so both orders share an entry
    a, b = sorted((first.key(), second.key()))
    return CacheKey(CacheCategory.CONTRAST, (a, b))


def blend_key(base: "Color", overlay: "Color", mode: str, amount: float = 1.0) -> CacheKey:
    return CacheKey(
        CacheCategory.BLEND, (base.key(), overlay.key(), mode, round(amount, 3))
    )


def interpolation_key(first: "Color", second: "Color", amount: float, space: str) -> CacheKey:
    return CacheKey(
        CacheCategory.INTERPOLATION, (first.key(), second.key(), round(amount, 3), space)
    )


class ColorCache:
    """Bounded, thread-safe LRU cache partitioned by ``CacheCategory``."""

    def __init__(self, max_entries: Optional[int] = None) -> None:
        limit = settings.CACHE_MAX_ENTRIES if max_entries is None else max_entries
        self._max_entries = max(1, int(limit))
        self._lock = RLock()
        self._stores: Dict[CacheCategory, "OrderedDict[Tuple[Any, ...], Any]"] = {
            category: OrderedDict() for category in CacheCategory
        }
        self._hits = 0
        self._misses = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    # Public API -----------------------------------------------------------
    def get(self, key: CacheKey) -> Optional[Any]:
        """Return the cached value for ``key`` or None on a miss."""
        with self._lock:
            store = self._stores[key.category]
            if key.identity not in store:
                self._misses += 1
                return None
            store.move_to_end(key.identity)
            self._hits += 1
            return store[key.identity]

    def put(self, key: CacheKey, value: Any) -> None:
        """Store ``value`` under ``key`` (last write wins)."""
        with self._lock:
            store = self._stores[key.category]
            store[key.identity] = value
            store.move_to_end(key.identity)
            while len(store) > self._max_entries:
                store.popitem(last=False)

    def get_or_compute(
        self, key: CacheKey, compute_fn: Callable[[], T], source: Any = None
    ) -> T:
        """Return the cached value or compute, store and return it.

        ``compute_fn`` runs outside the lock; concurrent callers may both
        compute, and the last one to finish wins (values are deterministic).

        With ``source`` (the exact inputs behind ``key``), the entry is stored
        together with it and only served back for equal inputs. Quantized keys
        are shared by neighbouring colors; a neighbour's entry counts as a
        miss and is replaced.
        """
        cached = self.get(key)
        if source is None:
            if cached is not None:
                return cached
            value = compute_fn()
            self.put(key, value)
            return value
        if isinstance(cached, tuple) and len(cached) == 2 and cached[0] == source:
            return cached[1]
        if cached is not None:
            with self._lock:
                self._hits -= 1
                self._misses += 1
        value = compute_fn()
        self.put(key, (source, value))
        return value

    def clear(self) -> None:
        """Drop every entry in every category."""
        with self._lock:
            removed = sum(len(s) for s in self._stores.values())
            self._stores = {category: OrderedDict() for category in CacheCategory}
        _logger.debug("color cache cleared (%d entries)", removed)

    def clear_category(self, category: CacheCategory) -> int:
        """Drop all entries of one category; returns the number removed."""
        with self._lock:
            removed = len(self._stores[category])
            self._stores[category] = OrderedDict()
        _logger.debug("color cache category %s cleared (%d entries)", category.value, removed)
        return removed

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "entries": {c.value: len(s) for c, s in self._stores.items()},
                "hits": self._hits,
                "misses": self._misses,
                "max_entries": self._max_entries,
            }

    def __len__(self) -> int:
        with self._lock:
            return sum(len(s) for s in self._stores.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, CacheKey):
            return False
        with self._lock:
            return key.identity in self._stores[key.category]
