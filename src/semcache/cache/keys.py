"""Cache key derivation and shared-backend key layout."""

import hashlib

KEY_LENGTH = 16


def derive_key(namespace: str, query: str) -> str:
    """Derive the store key for a query.

    The key is the first ``KEY_LENGTH`` hex characters of
    ``sha256("{namespace}:{query}")``. It only indexes the store; similarity
    is always computed on embeddings.

    Args:
        namespace: Logical cache name
        query: Query text as passed to fetch

    Returns:
        Hex digest prefix
    """
    digest = hashlib.sha256(f"{namespace}:{query}".encode("utf-8")).hexdigest()
    return digest[:KEY_LENGTH]


class KeyLayout:
    """
    Key families used by shared backends for one namespace.

    Key format:
        {ns}:entry:{key}   serialized entry
        {ns}:tag:{tag}     set of entry keys carrying the tag
        {ns}:keys          set of all live entry keys

    Examples:
        semantic_cache:entry:3f9a0c1d2e4b5a69
        semantic_cache:tag:pricing
        semantic_cache:keys
    """

    def __init__(self, namespace: str):
        self.namespace = namespace

    def entry(self, key: str) -> str:
        return f"{self.namespace}:entry:{key}"

    def tag(self, tag: str) -> str:
        return f"{self.namespace}:tag:{tag}"

    @property
    def keys(self) -> str:
        return f"{self.namespace}:keys"

    @property
    def tag_pattern(self) -> str:
        return f"{self.namespace}:tag:*"
