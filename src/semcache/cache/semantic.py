"""
Semantic Cache Implementation.

This module provides a cache that matches queries by embedding similarity,
so a semantically similar question returns the answer computed for an
earlier one instead of calling the expensive producer again.

Features:
- Cosine similarity matching with a configurable threshold
- Pluggable stores (in-process or Redis) and embedders
- TTL support per entry, with an engine-wide default
- Oldest-by-creation eviction when the store has a capacity
- Tag-based invalidation
- Hit/miss statistics and estimated cost savings

Example:
    >>> from semcache import SemanticCache
    >>> cache = SemanticCache(embedder, similarity_threshold=0.9, default_ttl=3600)
    >>> answer = cache.fetch(
    ...     "What is Python?",
    ...     producer=lambda: llm.chat("What is Python?"),
    ...     tags=["faq"],
    ...     model="gpt-4o",
    ... )
"""

import time
from collections.abc import Callable, Iterable
from typing import Any

from loguru import logger

from semcache.cache.base import BaseCacheStore
from semcache.cache.entry import CacheEntry, normalize_tags
from semcache.cache.keys import derive_key
from semcache.cache.stats import CacheStats
from semcache.cache.stores.factory import CacheStoreFactory
from semcache.cache.stores.in_memory import InMemoryCacheStore
from semcache.config.costs import DEFAULT_MODEL_COSTS, cost_for, estimate_request_cost
from semcache.config.models import CacheConfig
from semcache.embedder.base import BaseEmbedder
from semcache.embedder.factory import EmbedderFactory
from semcache.errors import ConfigurationError, InvalidArgumentError
from semcache.utils.similarity import cosine_similarity


class SemanticCache:
    """
    Cache that matches queries based on embedding similarity.

    Every fetch embeds the query and scans all live entries of the store.
    The highest scoring entry wins (first one on exact ties); it is a hit
    when its score reaches ``similarity_threshold``. There is no index,
    so lookups are linear in the number of live entries.

    Concurrent misses for the same question are not coalesced: each caller
    runs its producer and writes its own entry.

    Attributes:
        similarity_threshold: Minimum similarity score for a cache hit (0.0-1.0)
        default_ttl: Entry lifetime in seconds when fetch() gives none (None = never)
        namespace: Prefix used when deriving store keys
        track_costs: Whether hits accumulate estimated savings
        store: The backing store
        embedder: The embedding provider
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        store: BaseCacheStore | None = None,
        similarity_threshold: float = 0.85,
        default_ttl: float | None = None,
        namespace: str = "semantic_cache",
        track_costs: bool = True,
        model_costs: dict[str, dict[str, float]] | None = None,
        max_cache_size: int | None = None,
    ):
        """
        Initialize the semantic cache.

        Args:
            embedder: Provider turning query text into vectors
            store: Store instance. Defaults to an in-process store bounded
                by max_cache_size.
            similarity_threshold: Minimum cosine similarity for a cache hit.
                Higher values (e.g., 0.95) require near-exact matches.
                Default: 0.85
            default_ttl: Entry lifetime in seconds. None means no expiration.
            namespace: Logical cache name mixed into every key
            track_costs: Estimate savings on hits using model_costs
            model_costs: Per-model pricing per 1K tokens
            max_cache_size: Capacity of the default in-process store

        Raises:
            ConfigurationError: If the threshold is out of range, default_ttl
                is negative, or the embedder/store do not implement the
                required interfaces
        """
        if not 0.0 <= similarity_threshold <= 1.0:
            raise ConfigurationError(
                "similarity_threshold must be between 0.0 and 1.0",
                details={"similarity_threshold": similarity_threshold},
            )
        if default_ttl is not None and default_ttl < 0:
            raise ConfigurationError(
                "default_ttl must be non-negative",
                details={"default_ttl": default_ttl},
            )
        if not isinstance(embedder, BaseEmbedder):
            raise ConfigurationError(
                f"{type(embedder).__name__} must be a subclass of BaseEmbedder"
            )
        if store is not None and not isinstance(store, BaseCacheStore):
            raise ConfigurationError(
                f"{type(store).__name__} must be a subclass of BaseCacheStore"
            )

        self.embedder = embedder
        self.store = store if store is not None else InMemoryCacheStore(max_size=max_cache_size)
        self.similarity_threshold = similarity_threshold
        self.default_ttl = default_ttl
        self.namespace = namespace
        self.track_costs = track_costs
        self.model_costs = model_costs if model_costs is not None else DEFAULT_MODEL_COSTS

        self._stats = CacheStats()

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        embedder: BaseEmbedder | None = None,
        store: BaseCacheStore | None = None,
    ) -> "SemanticCache":
        """
        Build a cache from configuration.

        Explicit embedder/store instances take precedence over the
        component configurations.

        Raises:
            ConfigurationError: If a configured store or embedder type is unknown
        """
        if store is None:
            params = dict(config.store.params)
            params.setdefault("max_size", config.max_cache_size)
            if config.store.type == "redis":
                params.setdefault("namespace", config.namespace)
            store = CacheStoreFactory.create(config.store.type, **params)

        if embedder is None:
            embedder = EmbedderFactory.create(config.embedder.type, **config.embedder.params)

        return cls(
            embedder=embedder,
            store=store,
            similarity_threshold=config.similarity_threshold,
            default_ttl=config.default_ttl,
            namespace=config.namespace,
            track_costs=config.track_costs,
            model_costs=config.model_costs,
        )

    def fetch(
        self,
        query: str,
        producer: Callable[[], Any],
        *,
        ttl: float | None = None,
        tags: str | Iterable[str] | None = None,
        model: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Any:
        """
        Return a cached response for a similar query, or produce and cache one.

        Args:
            query: The query text
            producer: Zero-argument callable invoked on a miss
            ttl: Entry lifetime in seconds (falls back to default_ttl)
            tags: Tag or tags for grouped invalidation
            model: Model name used for cost tracking
            metadata: Extra data stored with the entry

        Returns:
            The cached response on a hit, otherwise the producer's result

        Raises:
            InvalidArgumentError: If query is not a non-blank string, producer is
                missing or ttl is negative, before any embedding call is made
        """
        if query is None or (isinstance(query, str) and not query.strip()):
            raise InvalidArgumentError("query cannot be None or blank")
        if not isinstance(query, str):
            raise InvalidArgumentError(
                "query must be a string",
                details={"type": type(query).__name__},
            )
        if producer is None or not callable(producer):
            raise InvalidArgumentError("producer must be a zero-argument callable")
        if ttl is not None and ttl < 0:
            raise InvalidArgumentError("ttl must be non-negative", details={"ttl": ttl})
        tags = normalize_tags(tags)

        start = time.perf_counter()

        query_embedding = self.embedder.generate(query)

        match, score = self._find_similar(query_embedding)
        if match is not None:
            elapsed = self._elapsed_ms(start)
            self._stats.record_hit(saved_cost=self._estimate_cost(model), response_time=elapsed)
            logger.debug(
                f"Semantic cache hit: score={score:.4f}, "
                f"query='{query[:50]}', cached='{match.query[:50]}'"
            )
            return match.response

        response = producer()

        elapsed = self._elapsed_ms(start)
        self._stats.record_miss(response_time=elapsed)

        entry = CacheEntry(
            query=query,
            embedding=query_embedding,
            response=response,
            model=model,
            tags=tags,
            ttl=ttl if ttl is not None else self.default_ttl,
            metadata=metadata or {},
        )
        self.store.write(self.generate_key(query), entry)
        logger.debug(f"Semantic cache miss, cached query: '{query[:50]}'")

        return response

    def fetch_openai(self, query: str, producer: Callable[[], Any], *, model: str = "gpt-4o", **options: Any) -> Any:
        return self.fetch(query, producer, model=model, **options)

    def fetch_anthropic(
        self, query: str, producer: Callable[[], Any], *, model: str = "claude-sonnet-4-20250514", **options: Any
    ) -> Any:
        return self.fetch(query, producer, model=model, **options)

    def fetch_gemini(self, query: str, producer: Callable[[], Any], *, model: str = "gemini-pro", **options: Any) -> Any:
        return self.fetch(query, producer, model=model, **options)

    def invalidate(self, tags: str | Iterable[str]) -> None:
        """Delete every cached entry carrying any of the given tags."""
        self.store.invalidate_by_tags(tags)

    def clear(self) -> None:
        """Clear all cache entries and reset statistics."""
        self.store.clear()
        self._stats.reset()

    def size(self) -> int:
        """Return the number of entries in the store."""
        return self.store.size()

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def current_stats(self) -> dict[str, Any]:
        return self._stats.to_dict()

    def detailed_stats(self) -> str:
        return self._stats.report()

    def savings_report(self) -> str:
        snapshot = self._stats.snapshot()
        return f"Total saved: ${snapshot.total_savings:.2f} ({snapshot.hits} cached calls)"

    def generate_key(self, query: str) -> str:
        """Derive the store key for a query in this cache's namespace."""
        return derive_key(self.namespace, query)

    def _find_similar(self, query_embedding: list[float]) -> tuple[CacheEntry | None, float]:
        """Single stable pass over live entries; the first maximum wins."""
        best_match: CacheEntry | None = None
        best_score = float("-inf")

        for entry in self.store.entries():
            if entry.expired():
                continue
            score = cosine_similarity(query_embedding, entry.embedding)
            if score > best_score:
                best_score = score
                best_match = entry

        if best_match is None or best_score < self.similarity_threshold:
            return None, best_score
        return best_match, best_score

    def _estimate_cost(self, model: str | None) -> float:
        if not self.track_costs or not model:
            return 0.0
        return estimate_request_cost(cost_for(model, self.model_costs))

    @staticmethod
    def _elapsed_ms(start: float) -> float:
        return round((time.perf_counter() - start) * 1000, 2)
