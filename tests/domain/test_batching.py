from __future__ import annotations

import pytest

from ordersift.domain.batching import DEFAULT_BATCH_SIZE, partition
from ordersift.domain.model import Batch


def test_partition_preserves_order_within_and_across_batches() -> None:
    batches = partition(["a", "b", "c", "d", "e"], 2)

    assert [batch.tokens for batch in batches] == [("a", "b"), ("c", "d"), ("e",)]
    assert [batch.index for batch in batches] == [0, 1, 2]


def test_partition_uses_default_batch_size() -> None:
    tokens = [str(number) for number in range(1000)]

    batches = partition(tokens)

    assert DEFAULT_BATCH_SIZE == 450
    assert [len(batch) for batch in batches] == [450, 450, 100]
    assert [token for batch in batches for token in batch.tokens] == tokens


def test_partition_of_empty_input_is_empty() -> None:
    assert partition([], 3) == []


def test_partition_exact_multiple_has_no_empty_tail() -> None:
    batches = partition(["1", "2", "3", "4"], 2)

    assert len(batches) == 2
    assert all(len(batch) == 2 for batch in batches)


@pytest.mark.parametrize("batch_size", [0, -5])
def test_partition_rejects_non_positive_batch_size(batch_size: int) -> None:
    with pytest.raises(ValueError, match="batch_size"):
        partition(["1"], batch_size)


def test_batch_requires_tokens() -> None:
    with pytest.raises(ValueError, match="no tokens"):
        Batch(index=0, tokens=())
