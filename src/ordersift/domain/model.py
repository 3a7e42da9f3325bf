"""Value objects passed between the resolution stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .errors import OrderSearchError

type OrderToken = str
type NumericId = int | float


@runtime_checkable
class OrderRecord(Protocol):
    """What the reconciler needs from a record returned by the search endpoint."""

    @property
    def numeric_id(self) -> NumericId | None: ...

    @property
    def echoed_token(self) -> OrderToken | None: ...


@dataclass(slots=True, frozen=True)
class Batch:
    index: int
    tokens: tuple[OrderToken, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError(f"Batch {self.index} has no tokens")

    def __len__(self) -> int:
        return len(self.tokens)


@dataclass(slots=True)
class BatchResult:
    """Records collected across all pages of one batch, in page then item order."""

    records: list[OrderRecord] = field(default_factory=list["OrderRecord"])
    requested: frozenset[OrderToken] = frozenset()
    pages: int = 0


@dataclass(slots=True, frozen=True)
class BatchOutcome:
    batch: Batch
    result: BatchResult | None = None
    error: OrderSearchError | None = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None


@dataclass(slots=True, frozen=True)
class BatchFailure:
    """A batch whose lookups were lost; its tokens are reported as not found."""

    batch_index: int
    tokens: tuple[OrderToken, ...]
    error: OrderSearchError

    @property
    def code(self) -> str:
        return self.error.code


@dataclass(slots=True, frozen=True)
class ResolutionResult:
    ids: tuple[NumericId, ...] = ()
    ids_encoded: str = ""
    matched: tuple[OrderToken, ...] = ()
    not_found: tuple[OrderToken, ...] = ()
    failures: tuple[BatchFailure, ...] = ()

    @property
    def is_partial(self) -> bool:
        return bool(self.failures)

    def as_dict(self) -> dict[str, object]:
        return {
            "ids": list(self.ids),
            "idsEncoded": self.ids_encoded,
            "notFound": list(self.not_found),
            "failures": [
                {
                    "batch": failure.batch_index,
                    "code": failure.code,
                    "message": str(failure.error),
                    "tokens": len(failure.tokens),
                }
                for failure in self.failures
            ],
        }
