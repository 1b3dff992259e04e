"""
Result Cache

Content-addressed cache of assembled ``ParliamentContextResult`` payloads.

Features:
- Versioned keys: ``ctx:v<N>:`` + sha1 of ``"<query>|<boundedLimit>"``
- Per-entry TTL via cachetools.TLRUCache, LRU eviction when full
- Fail-open reads and writes: store errors and corrupt payloads are misses
- Global disable switch that bypasses both reads and writes
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, NamedTuple

from cachetools import TLRUCache

from parliament_context.domain.entities import ParliamentContextResult
from parliament_context.domain.ports import CacheStore
from parliament_context.shared.exceptions import ParseError

logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    payload: str
    ttl_seconds: int


def _time_to_use(_key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl_seconds


class InMemoryCacheStore:
    """
    Process-local ``CacheStore``.

    Each entry expires after the TTL given when it was written. No locking
    is needed: every operation completes without yielding to the loop.

    Example:
        store = InMemoryCacheStore(max_size=1024)
        await store.set("ctx:v2:abc", payload, ttl_seconds=3600)
        payload = await store.get("ctx:v2:abc")
    """

    def __init__(self, max_size: int = 1024):
        self._cache: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=max_size, ttu=_time_to_use, timer=time.monotonic
        )

    async def get(self, key: str) -> str | None:
        entry = self._cache.get(key)
        return entry.payload if entry is not None else None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._cache[key] = _Entry(value, ttl_seconds)

    def clear(self) -> int:
        count = len(self._cache)
        self._cache.clear()
        return count

    def __len__(self) -> int:
        return len(self._cache)


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    writes: int = 0
    errors: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        total = self.total_requests
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "writes": self.writes,
            "errors": self.errors,
            "hit_rate": round(self.hit_rate, 4),
        }

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.writes = 0
        self.errors = 0


class ResultCache:
    """Typed, fail-open wrapper around a ``CacheStore``."""

    def __init__(
        self,
        store: CacheStore,
        ttl_seconds: int = 3600,
        disabled: bool = False,
        key_version: int = 2,
    ):
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._disabled = disabled
        self._key_version = key_version
        self._stats = CacheStats()

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def disabled(self) -> bool:
        return self._disabled

    def build_key(self, query: str, bounded_limit: int) -> str:
        digest = hashlib.sha1(f"{query}|{bounded_limit}".encode()).hexdigest()
        return f"ctx:v{self._key_version}:{digest}"

    async def get(self, key: str) -> ParliamentContextResult | None:
        if self._disabled:
            return None
        try:
            payload = await self._store.get(key)
        except Exception as e:
            self._stats.errors += 1
            self._stats.misses += 1
            logger.warning("Cache read failed for %s: %s", key, e)
            return None
        if payload is None:
            self._stats.misses += 1
            return None
        try:
            result = ParliamentContextResult.from_json(payload)
        except ParseError as e:
            self._stats.errors += 1
            self._stats.misses += 1
            logger.warning("Discarding unreadable cache entry %s: %s", key, e)
            return None
        self._stats.hits += 1
        logger.debug("Cache hit: %s", key)
        return result

    async def set(self, key: str, result: ParliamentContextResult) -> None:
        if self._disabled:
            return
        try:
            await self._store.set(key, result.to_json(), self._ttl_seconds)
        except Exception as e:
            self._stats.errors += 1
            logger.warning("Cache write failed for %s: %s", key, e)
            return
        self._stats.writes += 1
