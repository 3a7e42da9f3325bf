"""Windowed, concurrency-bounded execution of batch fetches."""

from __future__ import annotations

import asyncio
import math
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import OrderSearchError, UnauthorizedError
from .model import BatchOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import Batch
    from .ports.fetching import BatchFetcher

log = getLogger(__name__)

DEFAULT_CONCURRENCY = 6


async def run_batches(
    batches: Sequence[Batch],
    fetcher: BatchFetcher,
    token: str,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[BatchOutcome]:
    """Fetch ``batches`` in windows of ``concurrency`` and return outcomes in batch order.

    A window is started only after the previous one has fully completed. A batch
    failing with anything but :class:`UnauthorizedError` yields a failed outcome
    and leaves its siblings running; an unauthorized batch cancels the window and
    the error propagates.
    """

    if concurrency < 1:
        raise ValueError(f"concurrency must be positive, got {concurrency}")

    window_count = math.ceil(len(batches) / concurrency)
    outcomes: list[BatchOutcome] = []
    for number, window in enumerate(batched(batches, concurrency), start=1):
        log.debug("Dispatching window %s/%s with %s batches", number, window_count, len(window))
        outcomes.extend(await _run_window(window, fetcher, token))
    return outcomes


async def _run_window(
    window: Sequence[Batch],
    fetcher: BatchFetcher,
    token: str,
) -> list[BatchOutcome]:
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_run_batch(batch, fetcher, token)) for batch in window]
    except ExceptionGroup as exc_group:
        unauthorized = exc_group.subgroup(UnauthorizedError)
        if unauthorized is None:
            raise
        raise unauthorized.exceptions[0] from None
    return [task.result() for task in tasks]


async def _run_batch(batch: Batch, fetcher: BatchFetcher, token: str) -> BatchOutcome:
    try:
        result = await fetcher.fetch_batch(batch, token)
    except UnauthorizedError:
        log.warning("Batch %s was rejected as unauthorized; aborting run", batch.index)
        raise
    except OrderSearchError as exc:
        log.warning(
            "Batch %s (%s tokens) failed with %s: %s", batch.index, len(batch), exc.code, exc
        )
        return BatchOutcome(batch=batch, error=exc)
    log.debug(
        "Batch %s finished: %s records over %s pages",
        batch.index,
        len(result.records),
        result.pages,
    )
    return BatchOutcome(batch=batch, result=result)
