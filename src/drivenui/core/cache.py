"""Bounded in-memory cache for parsed artifacts.

Entries are indexed by a truncated xxhash of the caller's key, so a key
made of whole markup sections is never retained by the index itself.
"""

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NamedTuple, TypeVar

from .hash import Algorithm, hash_string

T = TypeVar("T")

Clock = Callable[[], float]


@dataclass
class Stats:
    """Running counters; ``size`` follows the live entry count."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "hit_rate": self.hit_rate,
        }


class _Entry(NamedTuple):
    value: Any
    stored_at: float


class LRUCache(Generic[T]):
    """
    Least-recently-used cache with an optional time-to-live.

    Args:
        max_size: Entry limit; the oldest unused entry goes first
        ttl_seconds: Lifetime of an entry (None keeps entries until evicted)
        hash_algorithm: Digest used for the index keys
        clock: Monotonic time source

    Examples:
        >>> cache = LRUCache[str](max_size=2)
        >>> cache.set("<screen/>", "parsed")
        >>> cache.get("<screen/>")
        'parsed'
        >>> cache.stats.hits
        1
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: int | None = None,
        hash_algorithm: Algorithm = Algorithm.XXHASH64,
        clock: Clock = time.monotonic,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.hash_algorithm = hash_algorithm
        self._clock = clock
        self._index: OrderedDict[str, _Entry] = OrderedDict()
        self._stats = Stats(max_size=max_size)

    def _key(self, key: str) -> str:
        return hash_string(key, self.hash_algorithm, truncate=16)

    def _expired(self, entry: _Entry, now: float) -> bool:
        return self.ttl_seconds is not None and now - entry.stored_at >= self.ttl_seconds

    def _drop(self, index_key: str) -> None:
        del self._index[index_key]
        self._stats.size = len(self._index)

    def get(self, key: str) -> T | None:
        """Return the live value for ``key`` and mark it recently used."""
        index_key = self._key(key)
        entry = self._index.get(index_key)
        if entry is None:
            self._stats.misses += 1
            return None

        if self._expired(entry, self._clock()):
            self._drop(index_key)
            self._stats.expirations += 1
            self._stats.misses += 1
            return None

        self._index.move_to_end(index_key)
        self._stats.hits += 1
        return entry.value

    def set(self, key: str, value: T) -> None:
        index_key = self._key(key)
        self._index.pop(index_key, None)
        self._index[index_key] = _Entry(value, self._clock())

        while len(self._index) > self.max_size:
            self._index.popitem(last=False)
            self._stats.evictions += 1
        self._stats.size = len(self._index)

    def delete(self, key: str) -> bool:
        index_key = self._key(key)
        if index_key not in self._index:
            return False
        self._drop(index_key)
        return True

    def purge_expired(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        if self.ttl_seconds is None:
            return 0
        now = self._clock()
        stale = [k for k, entry in self._index.items() if self._expired(entry, now)]
        for index_key in stale:
            self._drop(index_key)
        self._stats.expirations += len(stale)
        return len(stale)

    def clear(self) -> None:
        self._index.clear()
        self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: str) -> bool:
        # Membership does not refresh recency
        return self._key(key) in self._index


__all__ = ["LRUCache", "Stats"]
