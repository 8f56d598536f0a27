"""Windows of commit ids worth loading around an accessed row."""

from __future__ import annotations

from typing import Iterator, Tuple

from ..config import DOWN_PRELOAD_COUNT, UP_PRELOAD_COUNT
from ..errors import RowOutOfRangeError, WindowConsumedError
from ..models.commit import EntityId
from .resolver import EntityIdentityResolver


def window_bounds(
    row: int,
    row_count: int,
    up: int = UP_PRELOAD_COUNT,
    down: int = DOWN_PRELOAD_COUNT,
) -> Tuple[int, int]:
    """Return the half-open row range ``[start, stop)`` prefetched around *row*."""

    start = max(0, row - up)
    stop = min(row_count, row + down)
    return start, max(start, stop)


class PrefetchWindow(Iterator[EntityId]):
    """Forward-only, single-pass sequence of ids around a row.

    The row count is re-read on every step, so a visible pack replaced
    mid-iteration never produces an out-of-range row: the window just ends
    early.  Iterating a second time once consumption started raises
    :class:`WindowConsumedError`.
    """

    def __init__(
        self,
        resolver: EntityIdentityResolver,
        row: int,
        up: int = UP_PRELOAD_COUNT,
        down: int = DOWN_PRELOAD_COUNT,
    ) -> None:
        self._resolver = resolver
        self._next_row = max(0, row - up)
        self._stop = row + down
        self._started = False
        self._exhausted = False

    def __iter__(self) -> "PrefetchWindow":
        if self._started:
            raise WindowConsumedError("prefetch window can only be iterated once")
        return self

    def __next__(self) -> EntityId:
        self._started = True
        if self._exhausted:
            raise StopIteration
        row = self._next_row
        if row >= self._stop or row >= self._resolver.row_count():
            self._exhausted = True
            raise StopIteration
        self._next_row += 1
        try:
            return self._resolver.id_at(row)
        except RowOutOfRangeError:
            # The pack shrank between the bound check and the lookup.
            self._exhausted = True
            raise StopIteration from None

    def __length_hint__(self) -> int:
        if self._exhausted:
            return 0
        return max(0, min(self._stop, self._resolver.row_count()) - self._next_row)

    @property
    def exhausted(self) -> bool:
        return self._exhausted


def window_around(
    resolver: EntityIdentityResolver,
    row: int,
    up: int = UP_PRELOAD_COUNT,
    down: int = DOWN_PRELOAD_COUNT,
) -> PrefetchWindow:
    return PrefetchWindow(resolver, row, up, down)
