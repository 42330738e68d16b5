"""
OpenAI-compatible embedder.

Works with any API that follows the OpenAI embeddings format, including
OpenAI, Azure OpenAI and local servers exposing a compatible endpoint.

Uses httpx directly for synchronous calls: the cache engine is synchronous,
and the client timeout doubles as the embedding timeout.
"""

import httpx
from loguru import logger

from semcache.errors import ConfigurationError, EmbeddingError, EmbeddingTimeoutError

from ..base import BaseEmbedder


class OpenAIEmbedder(BaseEmbedder):
    """
    OpenAI-compatible Embedder implementation.

    Attributes:
        base_url: The API base URL (e.g., "https://api.openai.com/v1")
        model: Model identifier (e.g., "text-embedding-3-small")
        timeout: Request timeout in seconds (None or 0 disables it)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = "https://api.openai.com/v1",
        model: str = "text-embedding-3-small",
        timeout: float | None = 30.0,
    ):
        """
        Initialize the OpenAI-compatible embedder.

        Args:
            api_key: Authentication key for the API
            base_url: API endpoint base URL (trailing slash will be stripped)
            model: Model name to use for embeddings
            timeout: Seconds to wait for a response before failing

        Raises:
            ConfigurationError: If api_key is missing
        """
        if not api_key:
            raise ConfigurationError(
                "OpenAIEmbedder requires an api_key (set OPENAI_API_KEY)"
            )

        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout or None
        self.client = httpx.Client(timeout=self.timeout)
        self._dimension = 1536  # Default for text-embedding-3-small, updated on first call

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for a list of texts in a single API call.

        Raises:
            EmbeddingTimeoutError: If the request exceeds the timeout
            EmbeddingError: If the API call fails or returns no data
        """
        url = f"{self.base_url}/embeddings"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "input": texts[0] if len(texts) == 1 else texts,
            "model": self.model
        }

        try:
            resp = self.client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as e:
            logger.error(f"Embedding request timed out after {self.timeout}s")
            raise EmbeddingTimeoutError(
                f"Embedding API request timed out after {self.timeout}s",
                timeout=self.timeout,
                original_error=e,
            ) from e
        except httpx.HTTPStatusError as e:
            logger.error(f"Embedding failed: {e}")
            raise EmbeddingError(
                "Embedding API returned an error status",
                details={"status_code": e.response.status_code},
                original_error=e,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Embedding failed: {e}")
            raise EmbeddingError("Embedding API request failed", original_error=e) from e

        results = data.get("data") if isinstance(data, dict) else None
        if not results:
            raise EmbeddingError(
                "Failed to generate embedding",
                details={"model": self.model},
            )

        # Sort by index to ensure correct order
        try:
            results = sorted(results, key=lambda x: x.get("index", 0))
            vector_list = [item["embedding"] for item in results]
        except (AttributeError, KeyError, TypeError) as e:
            raise EmbeddingError(
                "Embedding API returned a malformed item",
                details={"model": self.model},
                original_error=e,
            ) from e

        if vector_list:
            self._dimension = len(vector_list[0])

        return vector_list

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension
