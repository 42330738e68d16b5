"""Configuration models for cache components.

Stores and embedders are configured via a type string and optional
parameters, and resolved through their factories.
"""

from typing import Any

from pydantic import BaseModel, Field

from .costs import DEFAULT_MODEL_COSTS
from .settings import Settings


class ComponentConfig(BaseModel):
    """Configuration for a single component.

    Attributes:
        type: Component type identifier (e.g., "memory", "redis", "openai")
        params: Component-specific parameters as a dictionary
    """

    type: str
    params: dict[str, Any] = Field(default_factory=dict)


class CacheConfig(BaseModel):
    """Configuration for one semantic cache instance.

    Attributes:
        similarity_threshold: Minimum cosine similarity for a hit
        default_ttl: Entry lifetime in seconds when fetch() gives none (None = never)
        namespace: Prefix scoping the cache's keys
        track_costs: Whether hits accumulate estimated savings
        max_cache_size: Store capacity (None = unlimited)
        store: Store component configuration
        embedder: Embedder component configuration
        model_costs: Per-model pricing per 1K tokens
    """

    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    default_ttl: float | None = Field(default=None, ge=0.0)
    namespace: str = "semantic_cache"
    track_costs: bool = True
    max_cache_size: int | None = Field(default=None, ge=0)
    store: ComponentConfig = Field(default_factory=lambda: ComponentConfig(type="memory"))
    embedder: ComponentConfig = Field(default_factory=lambda: ComponentConfig(type="openai"))
    model_costs: dict[str, dict[str, float]] = Field(
        default_factory=lambda: {model: dict(costs) for model, costs in DEFAULT_MODEL_COSTS.items()}
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheConfig":
        """Build a cache configuration from global settings."""
        store_params: dict[str, Any] = {}
        if settings.STORE == "redis" and settings.REDIS_URL:
            store_params["redis_url"] = settings.REDIS_URL

        embedder_params: dict[str, Any] = {}
        if settings.EMBEDDING_ADAPTER == "openai":
            embedder_params = {
                "api_key": settings.OPENAI_API_KEY,
                "base_url": settings.OPENAI_BASE_URL,
                "model": settings.EMBEDDING_MODEL,
                "timeout": settings.EMBEDDING_TIMEOUT,
            }

        return cls(
            similarity_threshold=settings.SIMILARITY_THRESHOLD,
            default_ttl=settings.DEFAULT_TTL,
            namespace=settings.NAMESPACE,
            track_costs=settings.TRACK_COSTS,
            max_cache_size=settings.MAX_CACHE_SIZE,
            store=ComponentConfig(type=settings.STORE, params=store_params),
            embedder=ComponentConfig(type=settings.EMBEDDING_ADAPTER, params=embedder_params),
        )
