"""Pytest configuration and global fixtures for semcache tests."""

from pathlib import Path

import pytest

from semcache.cache.semantic import SemanticCache
from semcache.cache.stores.in_memory import InMemoryCacheStore
from semcache.cache.stores.redis_store import RedisCacheStore
from tests.utils.builders import CacheEntryBuilder
from tests.utils.fake_redis import FakeRedis
from tests.utils.keyword_embedder import SAMPLE_VECTORS, KeywordEmbedder


@pytest.fixture
def embedder() -> KeywordEmbedder:
    """Embedder where the Ruby question and its paraphrase score above 0.99."""
    return KeywordEmbedder(SAMPLE_VECTORS)


@pytest.fixture
def entry_builder() -> CacheEntryBuilder:
    return CacheEntryBuilder()

# ==================== Store Fixtures ====================

@pytest.fixture
def memory_store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def redis_store(fake_redis) -> RedisCacheStore:
    return RedisCacheStore(client=fake_redis, namespace="test")


@pytest.fixture(params=["memory", "redis"])
def any_store_factory(request):
    """Build either backend with a given capacity, for contract tests."""
    def build(max_size=None):
        if request.param == "memory":
            return InMemoryCacheStore(max_size=max_size)
        return RedisCacheStore(client=FakeRedis(), namespace="contract", max_size=max_size)
    build.backend = request.param
    return build


@pytest.fixture
def cache(embedder, memory_store) -> SemanticCache:
    return SemanticCache(embedder, store=memory_store, similarity_threshold=0.85)

# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")


def pytest_collection_modifyitems(config, items):
    for item in items:
        rel_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
