"""Result of computing a single table cell."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FallbackReason(Enum):
    # The computation was cancelled cooperatively; not an error.
    CANCELLED = "cancelled"
    # The column raised; the failure was logged.
    FAILED = "failed"
    # The column had no value for the row.
    MISSING = "missing"


@dataclass(frozen=True)
class CellResult(Generic[T]):
    """Either a computed value or the column stub substituted for it."""

    value: T
    reason: Optional[FallbackReason] = None

    @classmethod
    def ok(cls, value: T) -> "CellResult[T]":
        return cls(value)

    @classmethod
    def fallback(cls, stub: T, reason: FallbackReason) -> "CellResult[T]":
        return cls(stub, reason)

    @property
    def is_ok(self) -> bool:
        return self.reason is None

    @property
    def is_fallback(self) -> bool:
        return self.reason is not None
