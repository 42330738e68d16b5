"""Tests for similarity calculation utilities."""

import pytest

from semcache.errors import InvalidArgumentError
from semcache.utils.similarity import cosine_similarity


class TestCosineSimilarity:
    """Tests for cosine_similarity function."""

    def test_identical_vectors(self):
        """Identical vectors have maximum similarity."""
        vec = [0.1, 0.2, 0.3, 0.4]
        assert cosine_similarity(vec, vec) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        """Opposite vectors have minimum similarity."""
        vec1 = [1.0, 2.0, 3.0]
        vec2 = [-1.0, -2.0, -3.0]
        assert cosine_similarity(vec1, vec2) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        vec1 = [1.0, 0.0]
        vec2 = [0.0, 1.0]
        assert cosine_similarity(vec1, vec2) == 0.0

    def test_similar_vectors(self):
        vec1 = [0.1, 0.2, 0.3, 0.4]
        vec2 = [0.11, 0.21, 0.31, 0.41]
        assert cosine_similarity(vec1, vec2) > 0.99

    def test_magnitude_is_ignored(self):
        assert cosine_similarity([1.0, 1.0], [10.0, 10.0]) == pytest.approx(1.0)

    def test_dimension_mismatch(self):
        """Raises error for vectors with different dimensions."""
        with pytest.raises(InvalidArgumentError, match="dimension mismatch"):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_dimension_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            cosine_similarity([1.0], [1.0, 2.0])

    def test_empty_vectors(self):
        """Empty vectors score zero rather than failing."""
        assert cosine_similarity([], []) == 0.0
        assert cosine_similarity([], [1.0, 2.0]) == 0.0

    def test_zero_vector(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [0.1, 0.2, 0.3]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_output_range(self):
        """Output is always in [-1, 1] range."""
        test_cases = [
            ([1.0, 0.0], [1.0, 0.0]),
            ([1.0, 0.0], [-1.0, 0.0]),
            ([0.5, 0.5], [0.5, -0.5]),
            ([1e-8, 3e-8], [2e-8, 6e-8]),
            ([1e8, 1e8], [1e8, 1e8]),
        ]
        for vec1, vec2 in test_cases:
            result = cosine_similarity(vec1, vec2)
            assert -1.0 <= result <= 1.0

    def test_returns_python_float(self):
        assert type(cosine_similarity([1.0, 2.0], [2.0, 1.0])) is float
