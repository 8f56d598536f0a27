"""Immutable snapshot of the visible commit ordering."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Dict, Mapping, Optional, Sequence, Tuple

from ..errors import RowOutOfRangeError
from .refs import RefsModel


@dataclass(frozen=True, slots=True)
class RowInfo:
    commit: int
    row: int


class VisibleGraph(ABC):
    """Row-indexed view of the commits the upstream graph decided to show."""

    @abstractmethod
    def visible_commit_count(self) -> int:
        ...

    @abstractmethod
    def row_info(self, row: int) -> RowInfo:
        """Return the commit shown at *row*.

        Raises :class:`RowOutOfRangeError` for rows outside
        ``[0, visible_commit_count())``.
        """

    @abstractmethod
    def visible_row_of(self, commit: int) -> Optional[int]:
        ...


class ListVisibleGraph(VisibleGraph):
    """Visible graph backed by a tuple of commit ids in display order."""

    def __init__(self, commits: Sequence[int] = ()) -> None:
        self._commits: Tuple[int, ...] = tuple(commits)
        self._rows: Optional[Dict[int, int]] = None

    def visible_commit_count(self) -> int:
        return len(self._commits)

    def row_info(self, row: int) -> RowInfo:
        if not 0 <= row < len(self._commits):
            raise RowOutOfRangeError(row, len(self._commits))
        return RowInfo(self._commits[row], row)

    def visible_row_of(self, commit: int) -> Optional[int]:
        # Built on first use: most packs are only ever read row-wise.
        if self._rows is None:
            self._rows = {commit_id: row for row, commit_id in enumerate(self._commits)}
        return self._rows.get(commit)


@dataclass(frozen=True)
class VisiblePack:
    """Everything the table needs to map rows to commits.

    A pack is handed over by the upstream provider and never mutated
    afterwards; reloads publish a new pack instead.
    """

    EMPTY: ClassVar["VisiblePack"]

    visible_graph: VisibleGraph
    can_request_more: bool = False
    roots: Tuple[Optional[str], ...] = ()
    refs: RefsModel = RefsModel.EMPTY
    filters: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))
    generation: int = 0

    def row_count(self) -> int:
        return self.visible_graph.visible_commit_count()

    def root(self, row: int) -> Optional[str]:
        """Return the origin root of *row*; ``None`` when it is not tracked."""

        if not 0 <= row < self.row_count():
            raise RowOutOfRangeError(row, self.row_count())
        if row >= len(self.roots):
            return None
        return self.roots[row]

    def is_empty(self) -> bool:
        return self.row_count() == 0


VisiblePack.EMPTY = VisiblePack(ListVisibleGraph(()))
