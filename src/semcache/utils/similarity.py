"""Vector similarity calculation utilities."""

import numpy as np

from semcache.errors import InvalidArgumentError


def cosine_similarity(vec1: list[float], vec2: list[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity score in [-1, 1]. 0.0 when either vector is empty
        or has zero magnitude.

    Raises:
        InvalidArgumentError: If vectors have different dimensions
    """
    if len(vec1) == 0 or len(vec2) == 0:
        return 0.0

    if len(vec1) != len(vec2):
        raise InvalidArgumentError(
            f"Vector dimension mismatch: {len(vec1)} != {len(vec2)}"
        )

    v1 = np.asarray(vec1, dtype=np.float64)
    v2 = np.asarray(vec2, dtype=np.float64)

    norm1 = np.linalg.norm(v1)
    norm2 = np.linalg.norm(v2)

    if norm1 == 0 or norm2 == 0:
        return 0.0

    score = float(np.dot(v1, v2) / (norm1 * norm2))

    # Clamp to [-1, 1] to handle floating point errors
    return max(-1.0, min(1.0, score))
