"""Utility functions for semcache."""

from .similarity import cosine_similarity

__all__ = [
    "cosine_similarity",
]
