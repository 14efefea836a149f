"""Caching utilities for clover-summary."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

_T = TypeVar("_T")


class PrefixCache(Generic[_T]):
    """Insertion-ordered ``path prefix -> value`` cache.

    Entries are never evicted or expired: the cache lives for one run.
    Reads and writes are guarded by a lock so the cache can be shared between
    threads.

    Args:
        seed: Optional initial entries, e.g. to pre-resolve known prefixes.
    """

    def __init__(self, seed: dict[str, _T] | None = None) -> None:
        self._lock = threading.Lock()
        self._store: dict[str, _T] = dict(seed or {})

    def get(self, key: str) -> _T | None:
        """Return the cached value or ``None`` if missing."""
        with self._lock:
            return self._store.get(key)

    def put(self, key: str, value: _T) -> None:
        """Store *value* under *key*, replacing any previous value."""
        with self._lock:
            self._store[key] = value

    def longest_match(self, prefixes: list[str]) -> _T | None:
        """Return the value of the last (most specific) cached prefix in *prefixes*."""
        found: _T | None = None
        with self._lock:
            for prefix in prefixes:
                if prefix in self._store:
                    found = self._store[prefix]
        return found

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._store.clear()

    def snapshot(self) -> dict[str, _T]:
        """Return a copy of the entries in insertion order."""
        with self._lock:
            return dict(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    @property
    def size(self) -> int:
        """Number of entries currently held."""
        with self._lock:
            return len(self._store)
