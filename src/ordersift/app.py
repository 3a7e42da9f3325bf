"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from ordersift.adapters.http_resilience import ResilientClient
from ordersift.adapters.orders import OrderSearchClient
from ordersift.config.search import PAGE_SIZE_CAP, get_order_search_config
from ordersift.domain.resolution import resolve_async

if TYPE_CHECKING:
    from collections.abc import Callable

    from ordersift.config.http_resilience import ResilienceConfig
    from ordersift.config.search import OrderSearchConfig
    from ordersift.domain.model import ResolutionResult

type ClientFactory = Callable[[ResilienceConfig], ResilientClient]

log = getLogger(__name__)


def resolve_order_numbers(
    raw_text: str,
    token: str,
    *,
    batch_size: int | None = None,
    concurrency: int | None = None,
    config: OrderSearchConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> ResolutionResult:
    """Resolve free-text order numbers into record ids using the search API.

    ``batch_size`` and ``concurrency`` default to the configured values. Raises
    ``UnauthorizedError`` when the token is rejected; partial failures are
    reported on the returned result instead.
    """

    effective_config = config or get_order_search_config()
    return asyncio.run(
        _resolve(
            raw_text,
            token,
            config=effective_config,
            batch_size=effective_config.batch_size if batch_size is None else batch_size,
            concurrency=effective_config.concurrency if concurrency is None else concurrency,
            client_factory=client_factory or ResilientClient,
        )
    )


def resolve_order_numbers_once(
    raw_text: str,
    token: str,
    *,
    config: OrderSearchConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> ResolutionResult:
    """Resolve with the largest single-page batches, one batch at a time."""

    return resolve_order_numbers(
        raw_text,
        token,
        batch_size=PAGE_SIZE_CAP,
        concurrency=1,
        config=config,
        client_factory=client_factory,
    )


async def _resolve(
    raw_text: str,
    token: str,
    *,
    config: OrderSearchConfig,
    batch_size: int,
    concurrency: int,
    client_factory: ClientFactory,
) -> ResolutionResult:
    async with client_factory(config.resilience) as http_client:
        fetcher = OrderSearchClient(config=config, client=http_client)
        return await resolve_async(
            raw_text,
            token,
            fetcher=fetcher,
            batch_size=batch_size,
            concurrency=concurrency,
        )
