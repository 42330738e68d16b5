"""Test builders - Use builder pattern to create test objects."""

import time
from typing import Any, Dict, List, Optional

from semcache.cache.entry import CacheEntry
from semcache.config.models import CacheConfig, ComponentConfig


class CacheEntryBuilder:
    """Builder for CacheEntry."""

    def __init__(self):
        self._query = "What is Python?"
        self._embedding: List[float] = [1.0, 0.0, 0.0]
        self._response: Any = "A programming language"
        self._model: Optional[str] = None
        self._tags: List[str] = []
        self._created_at: Optional[float] = None
        self._ttl: Optional[float] = None
        self._metadata: Dict[str, Any] = {}

    def with_query(self, query: str):
        self._query = query
        return self

    def with_embedding(self, embedding: List[float]):
        self._embedding = embedding
        return self

    def with_response(self, response: Any):
        self._response = response
        return self

    def with_model(self, model: str):
        self._model = model
        return self

    def with_tags(self, *tags: str):
        self._tags = list(tags)
        return self

    def created_at(self, timestamp: float):
        self._created_at = timestamp
        return self

    def aged(self, seconds: float):
        self._created_at = time.time() - seconds
        return self

    def with_ttl(self, ttl: Optional[float]):
        self._ttl = ttl
        return self

    def with_metadata(self, **metadata: Any):
        self._metadata = metadata
        return self

    def build(self) -> CacheEntry:
        kwargs: Dict[str, Any] = {
            "query": self._query,
            "embedding": self._embedding,
            "response": self._response,
            "model": self._model,
            "tags": self._tags,
            "ttl": self._ttl,
            "metadata": self._metadata,
        }
        if self._created_at is not None:
            kwargs["created_at"] = self._created_at
        return CacheEntry(**kwargs)


class CacheConfigBuilder:
    """Builder for CacheConfig."""

    def __init__(self):
        self._params: Dict[str, Any] = {}
        self._store = ComponentConfig(type="memory", params={})
        self._embedder = ComponentConfig(type="mock", params={"dimension": 8})

    def with_threshold(self, threshold: float):
        self._params["similarity_threshold"] = threshold
        return self

    def with_default_ttl(self, ttl: Optional[float]):
        self._params["default_ttl"] = ttl
        return self

    def with_namespace(self, namespace: str):
        self._params["namespace"] = namespace
        return self

    def with_max_size(self, max_size: int):
        self._params["max_cache_size"] = max_size
        return self

    def with_store(self, store_type: str, **params):
        self._store = ComponentConfig(type=store_type, params=params)
        return self

    def with_embedder(self, embedder_type: str, **params):
        self._embedder = ComponentConfig(type=embedder_type, params=params)
        return self

    def build(self) -> CacheConfig:
        return CacheConfig(store=self._store, embedder=self._embedder, **self._params)
