"""Result cache and its in-memory store."""

from .result_cache import CacheStats, InMemoryCacheStore, ResultCache

__all__ = ["CacheStats", "InMemoryCacheStore", "ResultCache"]
