"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .search import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONCURRENCY,
    OrderSearchConfig,
    get_auth_token,
    get_order_search_config,
)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_CONCURRENCY",
    "ConfigurationError",
    "MissingConfigurationError",
    "OrderSearchConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_auth_token",
    "get_order_search_config",
    "require_env_vars",
]
