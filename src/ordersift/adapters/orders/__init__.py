"""Adapter for the admin order search API."""

from __future__ import annotations

from .client import OrderSearchClient
from .schema import OrderItem, OrderSearchResponse
from .translator import SearchPage, extract_ids_from_response, parse_search_page

__all__ = [
    "OrderItem",
    "OrderSearchClient",
    "OrderSearchResponse",
    "SearchPage",
    "extract_ids_from_response",
    "parse_search_page",
]
