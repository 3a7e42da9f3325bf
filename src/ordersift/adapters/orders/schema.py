"""Pydantic models for the admin order search endpoint.

The endpoint is loosely typed: ids and echoed order numbers arrive as numbers
or strings, and the page may be wrapped in a ``data`` envelope or not. The
models accept any shape for the record fields and coerce them on access.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from ordersift.domain.model import NumericId, OrderToken


class OrdersBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


def coerce_numeric_id(value: object) -> NumericId | None:
    """Return ``value`` as a finite number, or ``None`` if it is not one.

    Integral values come back as ``int``. Booleans, blank strings and NaN or
    infinite values are rejected.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def coerce_echoed_token(value: object) -> OrderToken | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return None


class OrderItem(OrdersBaseModel):
    id: Any = None
    order_number: Any = None

    @property
    def numeric_id(self) -> NumericId | None:
        return coerce_numeric_id(self.id)

    @property
    def echoed_token(self) -> OrderToken | None:
        return coerce_echoed_token(self.order_number)


def _list_or_none(value: object) -> list[Any] | None:
    return value if isinstance(value, list) else None


def _total_or_none(value: object) -> int | None:
    total = coerce_numeric_id(value)
    return total if isinstance(total, int) else None


class OrderListPayload(OrdersBaseModel):
    items: list[Any] | None = Field(default=None, alias="list")
    total: int | None = None

    _normalize_items = field_validator("items", mode="before")(_list_or_none)
    _normalize_total = field_validator("total", mode="before")(_total_or_none)


class OrderSearchResponse(OrdersBaseModel):
    """One page of search results.

    Unusable envelope parts are treated as absent: a ``data`` that is not an
    object, a ``list`` that is not an array and a ``total`` that is not a finite
    integer all read as missing instead of failing the page.
    """

    data: OrderListPayload | None = None
    items: list[Any] | None = Field(default=None, alias="list")
    total: int | None = None

    _normalize_items = field_validator("items", mode="before")(_list_or_none)
    _normalize_total = field_validator("total", mode="before")(_total_or_none)

    @field_validator("data", mode="before")
    @classmethod
    def _object_or_none(cls, value: object) -> object:
        return value if isinstance(value, Mapping) else None

    def page_items(self) -> list[Any]:
        if self.data is not None and self.data.items is not None:
            return self.data.items
        return self.items or []

    def page_total(self) -> int | None:
        if self.data is not None and self.data.total is not None:
            return self.data.total
        return self.total
