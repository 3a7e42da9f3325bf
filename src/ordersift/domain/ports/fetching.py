"""Ports for fetching order records from an external search provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ordersift.domain.model import Batch, BatchResult


@runtime_checkable
class BatchFetcher(Protocol):
    """Retrieves every page of search results for one batch of order numbers.

    Implementations enforce the batch deadline themselves and raise
    ``OrderSearchError`` subclasses; they must not share mutable state between
    concurrent calls.
    """

    async def fetch_batch(self, batch: Batch, token: str) -> BatchResult: ...


__all__ = ["BatchFetcher"]
