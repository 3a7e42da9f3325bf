"""Partition normalized tokens into size-bounded search batches."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING

from .model import Batch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import OrderToken

DEFAULT_BATCH_SIZE = 450


def partition(tokens: Sequence[OrderToken], batch_size: int = DEFAULT_BATCH_SIZE) -> list[Batch]:
    """Split ``tokens`` into contiguous batches of at most ``batch_size`` tokens."""

    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [
        Batch(index=index, tokens=chunk)
        for index, chunk in enumerate(batched(tokens, batch_size))
    ]
