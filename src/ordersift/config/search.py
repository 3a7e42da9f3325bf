"""Order search configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from ordersift.domain.batching import DEFAULT_BATCH_SIZE
from ordersift.domain.scheduler import DEFAULT_CONCURRENCY

from .env import (
    optional_env_positive_float,
    optional_env_positive_int,
    optional_env_str,
    require_env_vars,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SEARCH_URL = "https://api-gateway.shipox.com/api/v2/admin/orders"
DEFAULT_MARKETPLACE_ID = "307345429"
DEFAULT_BATCH_TIMEOUT_SECONDS = 30.0
PAGE_SIZE_CAP = 500
SEARCH_TYPE = "order_number"

AUTH_TOKEN_ENV = "ORDERSIFT_AUTH_TOKEN"


def _default_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="order-search",
        timeout_seconds=DEFAULT_BATCH_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


@dataclass(frozen=True, slots=True)
class OrderSearchConfig:
    """Settings for resolving order numbers through the search endpoint."""

    search_url: str = DEFAULT_SEARCH_URL
    marketplace_id: str = DEFAULT_MARKETPLACE_ID
    batch_size: int = DEFAULT_BATCH_SIZE
    concurrency: int = DEFAULT_CONCURRENCY
    batch_timeout_seconds: float = DEFAULT_BATCH_TIMEOUT_SECONDS
    page_size_cap: int = PAGE_SIZE_CAP
    resilience: ResilienceConfig = field(default_factory=_default_resilience)


def get_order_search_config() -> OrderSearchConfig:
    return OrderSearchConfig(
        search_url=optional_env_str("ORDERSIFT_SEARCH_URL", DEFAULT_SEARCH_URL),
        marketplace_id=optional_env_str("ORDERSIFT_MARKETPLACE_ID", DEFAULT_MARKETPLACE_ID),
        batch_size=optional_env_positive_int("ORDERSIFT_BATCH_SIZE", DEFAULT_BATCH_SIZE),
        concurrency=optional_env_positive_int("ORDERSIFT_CONCURRENCY", DEFAULT_CONCURRENCY),
        batch_timeout_seconds=optional_env_positive_float(
            "ORDERSIFT_BATCH_TIMEOUT", DEFAULT_BATCH_TIMEOUT_SECONDS
        ),
    )


def get_auth_token() -> str:
    return require_env_vars((AUTH_TOKEN_ENV,))[AUTH_TOKEN_ENV]
