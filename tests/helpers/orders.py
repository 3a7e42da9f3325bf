"""Reusable fakes for order search tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from ordersift.adapters.http_resilience import ResilientClient
from ordersift.config.http_resilience import ResilienceConfig
from ordersift.config.search import OrderSearchConfig
from ordersift.domain.model import BatchResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ordersift.domain.errors import OrderSearchError
    from ordersift.domain.model import Batch, NumericId, OrderToken

    Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]

SEARCH_URL = "https://orders.test/api/v2/admin/orders"


def make_config(**overrides: object) -> OrderSearchConfig:
    values: dict[str, object] = {
        "search_url": SEARCH_URL,
        "marketplace_id": "42",
        "resilience": ResilienceConfig(name="order-search-test"),
    }
    values.update(overrides)
    return OrderSearchConfig(**values)  # type: ignore[arg-type]


def make_client_factory(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


@dataclass
class FakeOrderApi:
    """In-memory stand-in for the admin order search endpoint.

    Matches the comma-separated ``search`` tokens against ``catalog`` and pages
    the matches using the ``size`` and ``page`` query parameters. A token listed
    in ``status_by_token`` makes every query containing it fail with that status.
    """

    catalog: dict[str, int]
    status_by_token: dict[str, int] = field(default_factory=dict[str, int])
    include_total: bool = True
    envelope: bool = True
    requests: list[httpx.Request] = field(default_factory=list[httpx.Request])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        tokens = params["search"].split(",")
        for token in tokens:
            if token in self.status_by_token:
                return httpx.Response(self.status_by_token[token], json={"message": "rejected"})

        size = int(params["size"])
        page = int(params["page"])
        matches = [
            {"id": self.catalog[token], "order_number": token}
            for token in tokens
            if token in self.catalog
        ]
        body: dict[str, object] = {"list": matches[page * size : (page + 1) * size]}
        if self.include_total:
            body["total"] = len(matches)
        return httpx.Response(200, json={"data": body} if self.envelope else body)

    @property
    def searched_batches(self) -> list[list[str]]:
        return [request.url.params["search"].split(",") for request in self.requests]


@dataclass(frozen=True, slots=True)
class FakeRecord:
    numeric_id: NumericId | None
    echoed_token: OrderToken | None = None


def result_for(tokens: tuple[OrderToken, ...], *records: FakeRecord) -> BatchResult:
    return BatchResult(records=list(records), requested=frozenset(tokens), pages=1)


@dataclass
class ScriptedFetcher:
    """Batch fetcher resolving tokens from ``catalog`` after ``delays[index]`` seconds."""

    catalog: dict[str, int] = field(default_factory=dict[str, int])
    failures: dict[int, OrderSearchError] = field(default_factory=dict[int, "OrderSearchError"])
    delays: dict[int, float] = field(default_factory=dict[int, float])
    events: list[tuple[str, int]] = field(default_factory=list[tuple[str, int]])
    tokens_seen: list[str] = field(default_factory=list[str])
    in_flight: int = 0
    max_in_flight: int = 0

    async def fetch_batch(self, batch: Batch, token: str) -> BatchResult:
        self.tokens_seen.append(token)
        self.events.append(("start", batch.index))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(batch.index, 0.0))
            if batch.index in self.failures:
                raise self.failures[batch.index]
        except asyncio.CancelledError:
            self.events.append(("cancelled", batch.index))
            raise
        finally:
            self.in_flight -= 1
        self.events.append(("end", batch.index))
        records = [
            FakeRecord(numeric_id=self.catalog[item], echoed_token=item)
            for item in batch.tokens
            if item in self.catalog
        ]
        return result_for(batch.tokens, *records)

    @property
    def started(self) -> list[int]:
        return [index for kind, index in self.events if kind == "start"]
