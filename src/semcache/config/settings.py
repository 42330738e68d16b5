import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file from the project root
# This file: src/semcache/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return float(value)


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Global cache settings"""

    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Matching
    SIMILARITY_THRESHOLD: float = Field(default=0.85, ge=0.0, le=1.0, description="Minimum cosine similarity for a hit")

    # Embedding provider
    EMBEDDING_ADAPTER: str = Field(default="openai", description="Embedder type: openai, mock")
    EMBEDDING_MODEL: str = Field(default="text-embedding-3-small", description="Embedding model name")
    EMBEDDING_TIMEOUT: float = Field(default=30.0, ge=0.0, description="Embedding request timeout in seconds (0 = none)")
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="OpenAI API Key")
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible API base URL")

    # Storage
    STORE: str = Field(default="memory", description="Store type: memory, redis")
    REDIS_URL: Optional[str] = Field(default=None, description="Redis connection URL")
    MAX_CACHE_SIZE: Optional[int] = Field(default=None, ge=0, description="Maximum entries (None = unlimited)")
    NAMESPACE: str = Field(default="semantic_cache", description="Key prefix on shared backends")

    # Entries
    DEFAULT_TTL: Optional[float] = Field(default=None, ge=0.0, description="Default entry ttl in seconds (None = never)")
    TRACK_COSTS: bool = Field(default=True, description="Estimate savings from cache hits")

    model_config = {
        "frozen": True,
    }


def load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        SIMILARITY_THRESHOLD=float(os.getenv("SEMCACHE_SIMILARITY_THRESHOLD", "0.85")),
        EMBEDDING_ADAPTER=os.getenv("SEMCACHE_EMBEDDING_ADAPTER", "openai"),
        EMBEDDING_MODEL=os.getenv("SEMCACHE_EMBEDDING_MODEL", "text-embedding-3-small"),
        EMBEDDING_TIMEOUT=float(os.getenv("SEMCACHE_EMBEDDING_TIMEOUT", "30")),
        OPENAI_API_KEY=os.getenv("OPENAI_API_KEY"),
        OPENAI_BASE_URL=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        STORE=os.getenv("SEMCACHE_STORE", "memory"),
        REDIS_URL=os.getenv("REDIS_URL"),
        MAX_CACHE_SIZE=_optional_int("SEMCACHE_MAX_CACHE_SIZE"),
        NAMESPACE=os.getenv("SEMCACHE_NAMESPACE", "semantic_cache"),
        DEFAULT_TTL=_optional_float("SEMCACHE_DEFAULT_TTL"),
        TRACK_COSTS=_flag("SEMCACHE_TRACK_COSTS", True),
    )


# Global settings instance
settings = load_settings()
