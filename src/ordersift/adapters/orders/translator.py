"""Translate raw search payloads into domain records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ordersift.domain.encoding import encode_ids
from ordersift.domain.errors import MalformedResponseError
from ordersift.domain.normalization import dedupe_preserve_order

from .schema import OrderItem, OrderSearchResponse

if TYPE_CHECKING:
    from ordersift.domain.model import NumericId


@dataclass(slots=True, frozen=True)
class SearchPage:
    records: list[OrderItem]
    item_count: int
    total: int | None


def parse_search_page(payload: object) -> SearchPage:
    """Validate one page body; non-object items are counted but yield no record."""

    if not isinstance(payload, dict):
        raise MalformedResponseError("Unexpected order search response payload")
    try:
        response = OrderSearchResponse.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(f"Invalid order search response: {exc}") from exc

    items = response.page_items()
    records = [OrderItem.model_validate(item) for item in items if isinstance(item, dict)]
    return SearchPage(records=records, item_count=len(items), total=response.page_total())


def extract_ids_from_response(payload: object) -> tuple[list[NumericId], str]:
    """Return the unique ids of a single search response and their encoded form.

    Unlike :func:`parse_search_page` this never raises: an unusable payload
    simply has no ids.
    """

    try:
        page = parse_search_page(payload)
    except MalformedResponseError:
        return [], ""
    ids = dedupe_preserve_order(
        numeric_id for record in page.records if (numeric_id := record.numeric_id) is not None
    )
    return ids, encode_ids(ids)
