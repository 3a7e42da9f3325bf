"""End-to-end resolution of order numbers into record ids."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .batching import DEFAULT_BATCH_SIZE, partition
from .model import ResolutionResult
from .normalization import normalize_order_numbers
from .reconciliation import reconcile
from .scheduler import DEFAULT_CONCURRENCY, run_batches

if TYPE_CHECKING:
    from .ports.fetching import BatchFetcher

log = getLogger(__name__)


async def resolve_async(
    raw_text: str,
    token: str,
    *,
    fetcher: BatchFetcher,
    batch_size: int = DEFAULT_BATCH_SIZE,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> ResolutionResult:
    """Resolve free-text order numbers through ``fetcher``.

    Raises ``UnauthorizedError`` when the upstream rejects ``token``. Other
    batch failures never raise; they are listed in ``ResolutionResult.failures``
    and the affected tokens are reported as not found.
    """

    tokens = normalize_order_numbers(raw_text)
    if not tokens:
        log.info("No order numbers in input; nothing to resolve")
        return ResolutionResult()

    batches = partition(tokens, batch_size)
    log.info(
        "Resolving %s order numbers: batches=%s, batch_size=%s, concurrency=%s",
        len(tokens),
        len(batches),
        batch_size,
        concurrency,
    )
    outcomes = await run_batches(batches, fetcher, token, concurrency=concurrency)
    result = reconcile(outcomes, tokens)

    log.info(
        "Resolution finished: ids=%s, matched=%s, not_found=%s, failed_batches=%s",
        len(result.ids),
        len(result.matched),
        len(result.not_found),
        len(result.failures),
    )
    if result.failures:
        log.warning(
            "Partial result: %s of %s batches failed (%s)",
            len(result.failures),
            len(batches),
            ", ".join(sorted({failure.code for failure in result.failures})),
        )
    return result
