"""Mock embedder for testing (no external API)."""

import hashlib
import random

from loguru import logger

from ..base import BaseEmbedder


class MockEmbedder(BaseEmbedder):
    """Generates deterministic random embeddings for testing.

    WARNING: This embedder is NOT suitable for production use. Identical
    texts map to identical vectors, but different texts are unrelated, so
    only exact repeats produce cache hits.

    Attributes:
        dimension: Embedding vector dimension
        seed: Random seed for reproducibility
    """

    def __init__(self, dimension: int = 384, seed: int = 42):
        self._dimension = dimension
        self.seed = seed
        logger.warning(
            "Using MockEmbedder - NOT for production use! "
            "Replace with real embedder for actual applications."
        )

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate mock embeddings for texts.

        Uses a digest of the text so vectors are stable across processes.
        """
        logger.debug(f"Generating {len(texts)} mock embeddings")

        embeddings = []
        for text in texts:
            digest = hashlib.sha256(text.encode("utf-8")).digest()
            rng = random.Random(int.from_bytes(digest[:8], "big") + self.seed)

            vec = [rng.gauss(0, 1) for _ in range(self._dimension)]

            # Normalize to unit length
            magnitude = sum(x**2 for x in vec) ** 0.5
            if magnitude > 0:
                vec = [x / magnitude for x in vec]
            else:
                vec = [0.0] * self._dimension

            embeddings.append(vec)

        return embeddings

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension
