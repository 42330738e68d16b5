"""
semcache Cache Module.

Classes:
    BaseCacheStore: Abstract base class for cache stores
    CacheEntry: Data class for cache entries
    CacheStats: Thread-safe hit/miss and savings counters
    SemanticCache: Cache that uses embedding similarity for matching

Example:
    >>> from semcache.cache import SemanticCache, RedisCacheStore
    >>> store = RedisCacheStore(redis_url="redis://localhost:6379/0", max_size=5000)
    >>> cache = SemanticCache(embedder, store=store, similarity_threshold=0.9)
    >>> answer = cache.fetch(question, producer=lambda: llm.chat(question))
"""

from semcache.cache.base import BaseCacheStore
from semcache.cache.entry import CacheEntry
from semcache.cache.keys import KeyLayout, derive_key
from semcache.cache.semantic import SemanticCache
from semcache.cache.stats import CacheStats, StatsSnapshot
from semcache.cache.stores import CacheStoreFactory, InMemoryCacheStore, RedisCacheStore

__all__ = [
    "BaseCacheStore",
    "CacheEntry",
    "CacheStats",
    "CacheStoreFactory",
    "InMemoryCacheStore",
    "KeyLayout",
    "RedisCacheStore",
    "SemanticCache",
    "StatsSnapshot",
    "derive_key",
]
