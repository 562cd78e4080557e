# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Calculation cache for engine runs.

Memoizes full engine outputs keyed by a fingerprint of the input (and the
engine settings). The cache is an explicit object passed to the engine, not
module state, so each test or service builds its own.

Guarantees:
- at most one computation in flight per key; concurrent callers for the
  same key wait on the in-flight result instead of recomputing;
- a failed computation is not cached and its error reaches every waiter;
- entries never expire on their own; ``invalidate`` and ``clear`` are the
  only ways to drop them (plus LRU eviction beyond ``max_entries``).
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from ..core.primitives import EngineSettings, Model

logger = logging.getLogger(__name__)

T = TypeVar("T")

KEY_PREFIX = "calc:"


def fingerprint(projection: Model, settings: Optional[EngineSettings] = None) -> str:
    """Stable cache key for an input snapshot and engine settings."""
    digest = hashlib.sha256()
    digest.update(projection.fingerprint_payload().encode("utf-8"))
    digest.update(b"\x00")
    digest.update((settings or EngineSettings()).fingerprint_payload().encode("utf-8"))
    return f"{KEY_PREFIX}{digest.hexdigest()}"


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    evictions: int
    waits: int
    size: int
    max_entries: int

    @property
    def hit_rate(self) -> Optional[float]:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else None


class CalculationCache(Generic[T]):
    """
    LRU cache with in-flight de-duplication.

    Args:
        max_entries: Completed entries kept before evicting the least recently used

    Example:
        ```python
        cache = CalculationCache(max_entries=10)
        output = cache.get_or_compute(key, lambda: engine.compute(projection))
        cache.invalidate(key)
        ```
    """

    def __init__(self, max_entries: int = 100):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, T]" = OrderedDict()
        self._in_flight: Dict[str, Future] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._waits = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> Optional[T]:
        """Cached value for ``key`` or None; counts as a hit or miss."""
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                return self._entries[key]
            self._misses += 1
            return None

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        """
        Return the cached value for ``key``, computing it at most once.

        If another thread is already computing ``key``, wait for its result.
        """
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                logger.info(f"Cache hit {key[:16]}")
                return self._entries[key]

            pending = self._in_flight.get(key)
            if pending is None:
                self._misses += 1
                future: Future = Future()
                self._in_flight[key] = future
                owner = True
            else:
                self._waits += 1
                future = pending
                owner = False

        if not owner:
            logger.debug(f"Waiting on in-flight computation {key[:16]}")
            return future.result()

        try:
            value = compute()
        except BaseException as error:
            with self._lock:
                self._in_flight.pop(key, None)
            future.set_exception(error)
            raise

        with self._lock:
            self._in_flight.pop(key, None)
            self._store(key, value)
        future.set_result(value)
        return value

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._store(key, value)

    def _store(self, key: str, value: T) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug(f"Evicted {evicted[:16]}")

    def invalidate(self, key: str) -> bool:
        """Drop ``key``; returns True if an entry was removed."""
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.info(f"Invalidated cache entry {key[:16]}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                waits=self._waits,
                size=len(self._entries),
                max_entries=self.max_entries,
            )
