"""Store factory for creating cache store instances."""

from typing import Any

from loguru import logger

from semcache.cache.base import BaseCacheStore
from semcache.errors import ConfigurationError

from .in_memory import InMemoryCacheStore
from .redis_store import RedisCacheStore


class CacheStoreFactory:
    """Factory for creating cache stores based on type.

    This factory maintains a registry of available store types
    and creates instances based on string identifiers.
    """

    _registry: dict[str, type[BaseCacheStore]] = {
        "memory": InMemoryCacheStore,
        "redis": RedisCacheStore,
    }

    @classmethod
    def create(cls, store_type: str, **params: Any) -> BaseCacheStore:
        """Create a store instance by type.

        Args:
            store_type: Type identifier (e.g., "memory", "redis")
            **params: Initialization parameters for the store

        Returns:
            Store instance

        Raises:
            ConfigurationError: If store type is not registered
        """
        if store_type not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ConfigurationError(
                f"Unknown store type: '{store_type}'. Available types: {available}"
            )

        store_class = cls._registry[store_type]
        logger.debug(f"Creating {store_class.__name__} with params: {sorted(params)}")

        try:
            return store_class(**params)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid parameters for store type '{store_type}'",
                details={"params": sorted(params)},
                original_error=e,
            ) from e

    @classmethod
    def register(cls, store_type: str, store_class: type[BaseCacheStore]) -> None:
        """Register a new store type.

        Args:
            store_type: Type identifier
            store_class: Store class to register

        Raises:
            TypeError: If store_class is not a subclass of BaseCacheStore
        """
        if not isinstance(store_class, type) or not issubclass(store_class, BaseCacheStore):
            raise TypeError(
                f"{getattr(store_class, '__name__', store_class)} must be a subclass of BaseCacheStore"
            )

        cls._registry[store_type] = store_class
        logger.info(f"Registered store type '{store_type}': {store_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        """Get list of available store types."""
        return list(cls._registry.keys())
