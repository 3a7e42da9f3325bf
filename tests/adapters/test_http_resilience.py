from __future__ import annotations

import asyncio

import httpx

from ordersift.adapters.http_resilience import ResilientClient
from ordersift.config.http_resilience import RateLimit, ResilienceConfig
from tests.helpers.orders import make_client_factory


async def _close(*clients: ResilientClient) -> None:
    for client in clients:
        await client.aclose()


def test_limiter_is_created_only_with_rate_limit() -> None:
    plain = ResilientClient(ResilienceConfig(name="plain"))
    limited = ResilientClient(
        ResilienceConfig(name="limited", ratelimit=RateLimit(max_calls=2, per_seconds=1.0))
    )
    try:
        assert plain._limiter is None  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        assert limited._limiter is not None  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    finally:
        asyncio.run(_close(plain, limited))


def test_get_passes_params_and_headers_through() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(name="test", ratelimit=RateLimit(max_calls=5, per_seconds=1.0))
    factory = make_client_factory(handler)

    async def call() -> httpx.Response:
        async with factory(config) as client:
            return await client.get(
                "https://orders.test/ping",
                params={"page": "0"},
                headers={"X-Test": "1"},
            )

    response = asyncio.run(call())

    assert response.json() == {"ok": True}
    assert seen[0].url.params["page"] == "0"
    assert seen[0].headers["X-Test"] == "1"


def test_client_applies_timeout_and_default_headers_from_config() -> None:
    client = ResilientClient(
        ResilienceConfig(
            name="headers",
            timeout_seconds=7.5,
            default_headers={"Accept": "application/json"},
        )
    )
    try:
        inner = client._client  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        assert inner.headers["Accept"] == "application/json"
        assert inner.timeout == httpx.Timeout(7.5)
    finally:
        asyncio.run(_close(client))
