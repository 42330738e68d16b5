"""
semcache - A semantic cache for expensive calls.

Instead of keying on the exact input, semcache embeds each query and returns
the stored answer of a previously seen query whose embedding is similar
enough, skipping the expensive producer call.
"""

__version__ = "0.1.0"

from .cache import (
    BaseCacheStore,
    CacheEntry,
    CacheStats,
    CacheStoreFactory,
    InMemoryCacheStore,
    RedisCacheStore,
    SemanticCache,
    StatsSnapshot,
)
from .config import CacheConfig, ComponentConfig, Settings, load_settings
from .embedder import BaseEmbedder, EmbedderFactory, MockEmbedder, OpenAIEmbedder
from .errors import (
    ConfigurationError,
    EmbeddingError,
    EmbeddingTimeoutError,
    InvalidArgumentError,
    SemCacheError,
    StoreError,
)
from .utils import cosine_similarity
from .wrapper import CachedChatClient, wrap

__all__ = [
    # Version
    "__version__",
    # Cache
    "SemanticCache",
    "CacheEntry",
    "CacheStats",
    "StatsSnapshot",
    # Stores
    "BaseCacheStore",
    "CacheStoreFactory",
    "InMemoryCacheStore",
    "RedisCacheStore",
    # Embedders
    "BaseEmbedder",
    "EmbedderFactory",
    "MockEmbedder",
    "OpenAIEmbedder",
    # Configuration
    "CacheConfig",
    "ComponentConfig",
    "Settings",
    "load_settings",
    # Errors
    "SemCacheError",
    "InvalidArgumentError",
    "ConfigurationError",
    "EmbeddingError",
    "EmbeddingTimeoutError",
    "StoreError",
    # Utilities
    "cosine_similarity",
    # Wrapper
    "CachedChatClient",
    "wrap",
]
