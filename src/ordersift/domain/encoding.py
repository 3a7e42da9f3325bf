"""Encoding of resolved ids for the document service's ``ids`` query value."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import unquote

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import NumericId

ID_SEPARATOR = "%2C"
_ENCODED_SEPARATOR = re.compile(re.escape(ID_SEPARATOR), re.IGNORECASE)


def encode_ids(ids: Iterable[NumericId]) -> str:
    """Join ids with an already percent-encoded comma; consumers must not re-encode."""

    return ID_SEPARATOR.join(str(value) for value in ids)


def decode_ids(encoded: str) -> list[NumericId]:
    if not encoded:
        return []
    decoded: list[NumericId] = []
    for part in encoded.split(ID_SEPARATOR):
        try:
            decoded.append(int(part))
        except ValueError:
            decoded.append(float(part))
    return decoded


def normalize_ids_param(raw: str) -> str:
    """Return ``raw`` with exactly one level of comma encoding.

    ``1%252C2`` (double-encoded) and ``1,2`` (raw) both become ``1%2C2``;
    ``1%2C2`` is returned unchanged.
    """

    if not raw:
        return ""
    once = unquote(raw)
    if _ENCODED_SEPARATOR.search(once):
        return once
    if "," in once:
        return once.replace(",", ID_SEPARATOR)
    if _ENCODED_SEPARATOR.search(raw):
        return raw
    return raw.replace(",", ID_SEPARATOR)
