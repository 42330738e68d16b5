"""Base embedder interface."""

from abc import ABC, abstractmethod
from typing import Any

from semcache.errors import EmbeddingError, InvalidArgumentError


class BaseEmbedder(ABC):
    """Abstract base class for embedding generation.

    Embedders convert text strings into vector representations. Subclasses
    implement ``embed``; ``generate`` and ``generate_batch`` add the input
    validation every provider shares. Providers that call remote services
    are expected to enforce their own timeout and raise
    ``EmbeddingTimeoutError`` / ``EmbeddingError``.
    """

    def generate(self, text: Any) -> list[float]:
        """Generate an embedding for a single text.

        Raises:
            InvalidArgumentError: If text is None or blank
            EmbeddingError: If the provider returns no vector
        """
        self._validate_input(text)
        vectors = self.embed([str(text)])
        if not vectors or not vectors[0]:
            raise EmbeddingError("Embedding provider returned no vector")
        return vectors[0]

    def generate_batch(self, texts: Any) -> list[list[float]]:
        """Generate embeddings for several texts in one provider call.

        Raises:
            InvalidArgumentError: If texts is not a non-empty list, or any
                element is None or blank
            EmbeddingError: If the provider returns the wrong number of vectors
        """
        if not isinstance(texts, (list, tuple)) or not texts:
            raise InvalidArgumentError("texts must be a non-empty list")

        for i, text in enumerate(texts):
            self._validate_input(text, label=f"texts[{i}]")

        vectors = self.embed([str(t) for t in texts])
        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding provider returned an unexpected number of vectors",
                details={"expected": len(texts), "received": len(vectors)},
            )
        return vectors

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors (same order as input)
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimension.

        Returns:
            Size of embedding vectors produced by this embedder
        """
        pass

    @staticmethod
    def _validate_input(text: Any, label: str = "query") -> None:
        if text is None:
            raise InvalidArgumentError(f"{label} cannot be None")
        if not str(text).strip():
            raise InvalidArgumentError(f"{label} cannot be blank")
