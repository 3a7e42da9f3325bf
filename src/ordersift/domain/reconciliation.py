"""Merge per-batch outcomes into a single resolution result."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .encoding import encode_ids
from .model import BatchFailure, ResolutionResult
from .normalization import dedupe_preserve_order

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .model import BatchOutcome, NumericId, OrderToken

log = getLogger(__name__)


def reconcile(outcomes: Iterable[BatchOutcome], tokens: Sequence[OrderToken]) -> ResolutionResult:
    """Combine all batches at once so that matching is global, never per batch.

    Ids keep their first occurrence by batch index, then page, then item. A
    token counts as found if any record in any batch echoes it back, so a token
    missed by one batch but matched by another is not reported. Records
    without a usable id still mark their echoed token as found.
    """

    id_stream: list[NumericId] = []
    found: set[OrderToken] = set()
    failures: list[BatchFailure] = []

    for outcome in sorted(outcomes, key=lambda item: item.batch.index):
        if outcome.result is None:
            if outcome.error is not None:
                failures.append(
                    BatchFailure(
                        batch_index=outcome.batch.index,
                        tokens=outcome.batch.tokens,
                        error=outcome.error,
                    )
                )
            continue
        for record in outcome.result.records:
            numeric_id = record.numeric_id
            if numeric_id is not None:
                id_stream.append(numeric_id)
            echoed = record.echoed_token
            if echoed is not None:
                found.add(echoed)

    ids = dedupe_preserve_order(id_stream)
    matched = tuple(token for token in tokens if token in found)
    not_found = tuple(token for token in tokens if token not in found)
    log.debug(
        "Reconciled %s records into %s ids; %s/%s tokens matched",
        len(id_stream),
        len(ids),
        len(matched),
        len(tokens),
    )
    return ResolutionResult(
        ids=tuple(ids),
        ids_encoded=encode_ids(ids),
        matched=matched,
        not_found=not_found,
        failures=tuple(failures),
    )
