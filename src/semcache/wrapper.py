"""
Chat client wrapper.

Wraps an OpenAI-style chat client so chat calls go through a semantic cache.
The content of the last user message is the cache query and the ``model``
argument is the cost-tracking hint.

Example:
    >>> cached = wrap(client, cache)
    >>> cached.chat(model="gpt-4o", messages=[{"role": "user", "content": "What is Python?"}])
    >>> cached.semantic_cache.current_stats()
"""

from typing import Any

from semcache.cache.semantic import SemanticCache


def _last_user_message(messages: list[Any]) -> str | None:
    for message in reversed(messages or []):
        if isinstance(message, dict):
            role, content = message.get("role"), message.get("content")
        else:
            role, content = getattr(message, "role", None), getattr(message, "content", None)
        if role == "user" and isinstance(content, str) and content.strip():
            return content
    return None


class CachedChatClient:
    """
    Delegating wrapper that caches ``chat`` calls.

    Every attribute other than ``chat`` and ``semantic_cache`` is looked up
    on the wrapped client.
    """

    def __init__(self, client: Any, cache: SemanticCache):
        self._client = client
        self._cache = cache

    @property
    def semantic_cache(self) -> SemanticCache:
        """Access the underlying cache for stats, invalidation, etc."""
        return self._cache

    def chat(self, *args: Any, messages: list[Any] | None = None, model: str | None = None, **kwargs: Any) -> Any:
        """Call ``client.chat``, answering from the cache when a similar question was seen."""
        if messages is not None:
            kwargs["messages"] = messages
        if model is not None:
            kwargs["model"] = model

        query = _last_user_message(messages)
        if query is None:
            return self._client.chat(*args, **kwargs)

        return self._cache.fetch(
            query,
            lambda: self._client.chat(*args, **kwargs),
            model=model,
        )

    def __getattr__(self, name: str) -> Any:
        return getattr(self._client, name)


def wrap(client: Any, cache: SemanticCache) -> CachedChatClient:
    """Wrap a chat client with semantic caching."""
    return CachedChatClient(client, cache)
