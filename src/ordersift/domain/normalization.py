"""Turn free-text order number input into an ordered set of tokens."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable

    from .model import OrderToken

_SEPARATORS = re.compile(r"[,\s]+")


def dedupe_preserve_order[T: Hashable](items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping each one at its first position."""

    return list(dict.fromkeys(items))


def normalize_order_numbers(raw_text: str) -> list[OrderToken]:
    """Split ``raw_text`` on commas and whitespace into unique tokens.

    Tokens are kept verbatim, so ``"007"`` and ``"7"`` are different order numbers.
    Blank input yields an empty list.
    """

    if not raw_text.strip():
        return []
    pieces = (piece.strip() for piece in _SEPARATORS.split(raw_text))
    return dedupe_preserve_order(piece for piece in pieces if piece)
