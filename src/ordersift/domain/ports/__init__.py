"""Domain ports implemented by adapters."""

from __future__ import annotations

from .fetching import BatchFetcher

__all__ = ["BatchFetcher"]
