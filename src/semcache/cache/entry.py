"""Cache entry record and its serialized form."""

import json
import time
from dataclasses import dataclass, field
from typing import Any

from semcache.errors import InvalidArgumentError

ENTRY_FIELDS = (
    "query",
    "embedding",
    "response",
    "model",
    "tags",
    "created_at",
    "ttl",
    "metadata",
)


def normalize_tags(tags: Any) -> tuple[str, ...]:
    """Normalize a single tag or a collection of tags into a tuple of strings.

    Duplicates are dropped, first occurrence wins.
    """
    if tags is None:
        return ()
    if isinstance(tags, (str, bytes)):
        tags = [tags]
    normalized: list[str] = []
    for tag in tags:
        value = tag.decode() if isinstance(tag, bytes) else str(tag)
        if value not in normalized:
            normalized.append(value)
    return tuple(normalized)


@dataclass(frozen=True)
class CacheEntry:
    """
    A single cached answer.

    Attributes:
        query: The original query string
        embedding: The query embedding vector
        response: The cached response (must be JSON serializable for shared stores)
        model: Model hint used for cost accounting, if any
        tags: Labels used for bulk invalidation
        created_at: Unix timestamp of when the entry was created
        ttl: Lifetime in seconds, None means the entry never expires
        metadata: Additional caller-supplied metadata
    """
    query: str
    embedding: list[float]
    response: Any
    model: str | None = None
    tags: tuple[str, ...] = ()
    created_at: float = field(default_factory=time.time)
    ttl: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tags", normalize_tags(self.tags))
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})
        if self.ttl is not None and self.ttl < 0:
            raise InvalidArgumentError(
                "ttl must be non-negative", details={"ttl": self.ttl}
            )

    def expired(self, now: float | None = None) -> bool:
        """Check whether the entry has outlived its ttl.

        An entry without ttl never expires. Otherwise it is expired strictly
        after ``ttl`` seconds have passed since ``created_at``.
        """
        if self.ttl is None:
            return False
        current = time.time() if now is None else now
        return current - self.created_at > self.ttl

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "embedding": list(self.embedding),
            "response": self.response,
            "model": self.model,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "ttl": self.ttl,
            "metadata": dict(self.metadata),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[Any, Any]) -> "CacheEntry":
        """
        Rebuild an entry from its serialized form.

        Keys may be plain strings or symbol-style strings (``":query"``),
        so payloads written by other clients of the same backend can be read.
        ``created_at`` is preserved so the entry keeps its age.
        """
        normalized = {str(key).lstrip(":"): value for key, value in data.items()}

        kwargs: dict[str, Any] = {
            "query": normalized.get("query"),
            "embedding": list(normalized.get("embedding") or []),
            "response": normalized.get("response"),
            "model": normalized.get("model"),
            "tags": normalized.get("tags") or (),
            "ttl": normalized.get("ttl"),
            "metadata": normalized.get("metadata") or {},
        }
        if normalized.get("created_at") is not None:
            kwargs["created_at"] = float(normalized["created_at"])

        return cls(**kwargs)

    @classmethod
    def from_json(cls, payload: str | bytes) -> "CacheEntry":
        return cls.from_dict(json.loads(payload))
