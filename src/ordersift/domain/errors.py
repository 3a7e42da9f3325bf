"""Failure taxonomy for order resolution.

Only :class:`UnauthorizedError` aborts a resolution run. Every other
:class:`OrderSearchError` is confined to the batch that raised it: the batch's
tokens end up unmatched and the failure is reported alongside the result.
Records with unusable ids are not errors at all; they are dropped while
parsing a page.
"""

from __future__ import annotations

from typing import ClassVar


class OrderSearchError(RuntimeError):
    """Base class for failures while searching orders upstream."""

    code: ClassVar[str] = "ORDER_SEARCH_ERROR"


class UnauthorizedError(OrderSearchError):
    """The upstream rejected the bearer token (HTTP 401)."""

    code = "UNAUTHORIZED"


class UpstreamError(OrderSearchError):
    """The upstream answered with a non-success status or could not be reached."""

    code = "UPSTREAM_ERROR"

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class DeadlineExceededError(OrderSearchError):
    """A batch did not finish paginating within its deadline."""

    code = "DEADLINE_EXCEEDED"

    def __init__(self, message: str, *, timeout_seconds: float) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds


class MalformedResponseError(OrderSearchError):
    """A page body was not JSON or did not have the expected envelope."""

    code = "MALFORMED_RESPONSE"


__all__ = [
    "DeadlineExceededError",
    "MalformedResponseError",
    "OrderSearchError",
    "UnauthorizedError",
    "UpstreamError",
]
