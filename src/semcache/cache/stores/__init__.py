"""Cache store implementations.

- InMemoryCacheStore: thread-safe in-process store
- RedisCacheStore: shared store for multi-process deployments
"""

from .factory import CacheStoreFactory
from .in_memory import InMemoryCacheStore
from .redis_store import RedisCacheStore

__all__ = [
    "CacheStoreFactory",
    "InMemoryCacheStore",
    "RedisCacheStore",
]
