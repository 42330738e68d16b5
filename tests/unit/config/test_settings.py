import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from semcache.config.costs import (
    DEFAULT_MODEL_COSTS,
    FALLBACK_MODEL_COST,
    cost_for,
    estimate_request_cost,
)
from semcache.config.models import CacheConfig, ComponentConfig
from semcache.config.settings import Settings, load_settings


class TestSettings:

    @patch.dict(os.environ, {
        "LOG_LEVEL": "DEBUG",
        "SEMCACHE_SIMILARITY_THRESHOLD": "0.92",
        "SEMCACHE_EMBEDDING_ADAPTER": "mock",
        "SEMCACHE_EMBEDDING_TIMEOUT": "5",
        "SEMCACHE_STORE": "redis",
        "REDIS_URL": "redis://cache:6379/1",
        "SEMCACHE_MAX_CACHE_SIZE": "500",
        "SEMCACHE_NAMESPACE": "faq",
        "SEMCACHE_DEFAULT_TTL": "3600",
        "SEMCACHE_TRACK_COSTS": "false",
        "OPENAI_API_KEY": "sk-test-key",
    }, clear=True)
    def test_load_settings_from_env(self):
        settings = load_settings()

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.SIMILARITY_THRESHOLD == 0.92
        assert settings.EMBEDDING_ADAPTER == "mock"
        assert settings.EMBEDDING_TIMEOUT == 5.0
        assert settings.STORE == "redis"
        assert settings.REDIS_URL == "redis://cache:6379/1"
        assert settings.MAX_CACHE_SIZE == 500
        assert settings.NAMESPACE == "faq"
        assert settings.DEFAULT_TTL == 3600.0
        assert settings.TRACK_COSTS is False
        assert settings.OPENAI_API_KEY == "sk-test-key"

    def test_default_values(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()

            assert settings.LOG_LEVEL == "INFO"
            assert settings.SIMILARITY_THRESHOLD == 0.85
            assert settings.EMBEDDING_ADAPTER == "openai"
            assert settings.EMBEDDING_MODEL == "text-embedding-3-small"
            assert settings.STORE == "memory"
            assert settings.MAX_CACHE_SIZE is None
            assert settings.DEFAULT_TTL is None
            assert settings.TRACK_COSTS is True
            assert settings.OPENAI_API_KEY is None

    def test_blank_optional_values_are_none(self):
        with patch.dict(os.environ, {"SEMCACHE_DEFAULT_TTL": " ", "SEMCACHE_MAX_CACHE_SIZE": ""}, clear=True):
            settings = load_settings()

            assert settings.DEFAULT_TTL is None
            assert settings.MAX_CACHE_SIZE is None

    def test_threshold_out_of_range(self):
        with patch.dict(os.environ, {"SEMCACHE_SIMILARITY_THRESHOLD": "1.5"}, clear=True):
            with pytest.raises(ValidationError):
                load_settings()

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.STORE = "redis"


class TestCacheConfig:

    def test_defaults(self):
        config = CacheConfig()

        assert config.similarity_threshold == 0.85
        assert config.store == ComponentConfig(type="memory")
        assert config.embedder.type == "openai"
        assert config.model_costs == DEFAULT_MODEL_COSTS

    def test_model_costs_are_copied(self):
        config = CacheConfig()
        config.model_costs["gpt-4o"]["input"] = 99.0

        assert DEFAULT_MODEL_COSTS["gpt-4o"]["input"] != 99.0

    def test_threshold_validated(self):
        with pytest.raises(ValidationError):
            CacheConfig(similarity_threshold=-0.5)

    def test_from_settings_redis_and_openai(self):
        settings = Settings(
            STORE="redis",
            REDIS_URL="redis://cache:6379/0",
            OPENAI_API_KEY="sk-test",
            EMBEDDING_TIMEOUT=7.0,
            NAMESPACE="faq",
            MAX_CACHE_SIZE=100,
        )

        config = CacheConfig.from_settings(settings)

        assert config.store == ComponentConfig(type="redis", params={"redis_url": "redis://cache:6379/0"})
        assert config.embedder.type == "openai"
        assert config.embedder.params["api_key"] == "sk-test"
        assert config.embedder.params["timeout"] == 7.0
        assert config.namespace == "faq"
        assert config.max_cache_size == 100

    def test_from_settings_mock_embedder_has_no_params(self):
        config = CacheConfig.from_settings(Settings(EMBEDDING_ADAPTER="mock"))

        assert config.embedder == ComponentConfig(type="mock")
        assert config.store == ComponentConfig(type="memory")


class TestModelCosts:

    def test_known_model(self):
        assert cost_for("gpt-4o") == DEFAULT_MODEL_COSTS["gpt-4o"]

    def test_unknown_model_falls_back(self):
        assert cost_for("in-house") == FALLBACK_MODEL_COST

    def test_custom_table(self):
        table = {"house": {"input": 0.1, "output": 0.2}}
        assert cost_for("house", table) == {"input": 0.1, "output": 0.2}
        assert cost_for("gpt-4o", table) == FALLBACK_MODEL_COST

    def test_estimate_request_cost(self):
        assert estimate_request_cost({"input": 0.03, "output": 0.06}) == pytest.approx(0.027)

    def test_estimate_rounded_to_six_decimals(self):
        assert estimate_request_cost({"input": 0.0000034, "output": 0.0}) == 0.000002
