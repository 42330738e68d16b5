"""Embedder factory for creating embedder instances."""

from typing import Any

from loguru import logger

from semcache.errors import ConfigurationError

from .base import BaseEmbedder
from .providers.mock import MockEmbedder
from .providers.openai import OpenAIEmbedder


class EmbedderFactory:
    """Factory for creating embedder instances based on type.

    This factory maintains a registry of available embedder types
    and creates instances based on string identifiers.
    """

    _registry: dict[str, type[BaseEmbedder]] = {
        "openai": OpenAIEmbedder,
        "mock": MockEmbedder,
    }

    @classmethod
    def create(cls, embedder_type: str, **params: Any) -> BaseEmbedder:
        """Create an embedder instance by type.

        Args:
            embedder_type: Type identifier (e.g., "openai", "mock")
            **params: Initialization parameters for the embedder

        Returns:
            Embedder instance

        Raises:
            ConfigurationError: If embedder type is not registered
        """
        if embedder_type not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ConfigurationError(
                f"Unknown embedder type: '{embedder_type}'. "
                f"Available types: {available}"
            )

        embedder_class = cls._registry[embedder_type]
        logger.debug(f"Creating {embedder_class.__name__} with params: {sorted(params)}")

        try:
            return embedder_class(**params)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid parameters for embedder type '{embedder_type}'",
                details={"params": sorted(params)},
                original_error=e,
            ) from e

    @classmethod
    def register(cls, embedder_type: str, embedder_class: type[BaseEmbedder]) -> None:
        """Register a new embedder type.

        Args:
            embedder_type: Type identifier
            embedder_class: Embedder class to register

        Raises:
            TypeError: If embedder_class is not a subclass of BaseEmbedder
        """
        if not isinstance(embedder_class, type) or not issubclass(embedder_class, BaseEmbedder):
            raise TypeError(
                f"{getattr(embedder_class, '__name__', embedder_class)} must be a subclass of BaseEmbedder"
            )

        cls._registry[embedder_type] = embedder_class
        logger.info(f"Registered embedder type '{embedder_type}': {embedder_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        """Get list of available embedder types.

        Returns:
            List of registered embedder type identifiers
        """
        return list(cls._registry.keys())
