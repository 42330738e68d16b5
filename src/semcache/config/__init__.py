"""Configuration system for semcache."""

from .costs import DEFAULT_MODEL_COSTS, FALLBACK_MODEL_COST, cost_for, estimate_request_cost
from .models import CacheConfig, ComponentConfig
from .settings import Settings, load_settings

__all__ = [
    "CacheConfig",
    "ComponentConfig",
    "DEFAULT_MODEL_COSTS",
    "FALLBACK_MODEL_COST",
    "Settings",
    "cost_for",
    "estimate_request_cost",
    "load_settings",
]
