from __future__ import annotations

import pytest

from ordersift.domain.normalization import dedupe_preserve_order, normalize_order_numbers


def test_splits_on_commas_whitespace_and_newlines() -> None:
    raw = "1001, 1002\n1003\t1004,,1005 ,\r\n 1006"

    assert normalize_order_numbers(raw) == ["1001", "1002", "1003", "1004", "1005", "1006"]


def test_keeps_first_occurrence_order() -> None:
    assert normalize_order_numbers("B, A, A, C") == ["B", "A", "C"]


def test_tokens_are_not_reformatted() -> None:
    tokens = normalize_order_numbers("007 7 007 AWB-0042 7.0")

    assert tokens == ["007", "7", "AWB-0042", "7.0"]


@pytest.mark.parametrize("raw", ["", "   ", "\n\t\n", " , ,, "])
def test_blank_input_yields_no_tokens(raw: str) -> None:
    assert normalize_order_numbers(raw) == []


@pytest.mark.parametrize(
    "raw",
    ["3, 1, 2, 1, 3", "0001\n0001\n02", "x y,z\nx"],
)
def test_normalization_is_idempotent(raw: str) -> None:
    tokens = normalize_order_numbers(raw)

    assert normalize_order_numbers(",".join(tokens)) == tokens
    assert normalize_order_numbers("\n".join(tokens)) == tokens


def test_dedupe_preserve_order_handles_any_hashable() -> None:
    assert dedupe_preserve_order([3, 1, 3, 2, 1]) == [3, 1, 2]
    assert dedupe_preserve_order(iter(["b", "a", "b"])) == ["b", "a"]
    assert dedupe_preserve_order([]) == []
