"""HTTP client for the admin order search endpoint."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from ordersift.config.search import SEARCH_TYPE
from ordersift.domain.errors import (
    DeadlineExceededError,
    MalformedResponseError,
    UnauthorizedError,
    UpstreamError,
)
from ordersift.domain.model import BatchResult

from .translator import SearchPage, parse_search_page

if TYPE_CHECKING:
    from ordersift.adapters.http_resilience import ResilientClient
    from ordersift.config.search import OrderSearchConfig
    from ordersift.domain.model import Batch, OrderRecord

log = getLogger(__name__)


class OrderSearchClient:
    """Paginated order-number search, one batch at a time.

    The underlying ``ResilientClient`` is owned by the caller and may be shared
    between concurrent ``fetch_batch`` calls; each call keeps its own
    accumulator and deadline.
    """

    def __init__(self, *, config: OrderSearchConfig, client: ResilientClient) -> None:
        self._config = config
        self._client = client

    async def fetch_batch(self, batch: Batch, token: str) -> BatchResult:
        page_size = min(len(batch), self._config.page_size_cap)
        timeout_seconds = self._config.batch_timeout_seconds
        records: list[OrderRecord] = []
        collected = 0
        total: int | None = None
        page = 0

        try:
            async with asyncio.timeout(timeout_seconds):
                while True:
                    search_page = await self._fetch_page(batch, token, page=page, size=page_size)
                    if total is None:
                        total = search_page.total
                    records.extend(search_page.records)
                    collected += search_page.item_count
                    log.debug(
                        "Batch %s page %s: items=%s, total=%s, collected=%s",
                        batch.index,
                        page,
                        search_page.item_count,
                        total,
                        collected,
                    )

                    if search_page.item_count == 0:
                        break
                    if total is not None and collected >= total:
                        break
                    if search_page.item_count < page_size:
                        break
                    page += 1
        except TimeoutError as exc:
            raise DeadlineExceededError(
                f"Batch {batch.index} exceeded its {timeout_seconds}s deadline on page {page}",
                timeout_seconds=timeout_seconds,
            ) from exc

        return BatchResult(records=records, requested=frozenset(batch.tokens), pages=page + 1)

    async def _fetch_page(
        self,
        batch: Batch,
        token: str,
        *,
        page: int,
        size: int,
    ) -> SearchPage:
        params = {
            "size": str(size),
            "page": str(page),
            "search": ",".join(batch.tokens),
            "search_type": SEARCH_TYPE,
            "use_solr": "true",
        }
        headers = {
            "Authorization": f"Bearer {token}",
            "marketplace_id": self._config.marketplace_id,
        }
        try:
            response = await self._client.get(
                self._config.search_url,
                params=params,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Order search request failed: {exc!r}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise UnauthorizedError("Order search rejected the auth token")
        if not response.is_success:
            raise UpstreamError(
                f"Order search failed with status {response.status_code}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Order search response is not valid JSON") from exc
        return parse_search_page(payload)
