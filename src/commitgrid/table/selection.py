"""Snapshot of selected rows, stable across visible pack replacements."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from ..data.providers import LogDataProvider
from ..errors import RowOutOfRangeError
from ..models.commit import (
    CommitId,
    DetailsOrPlaceholder,
    EntityId,
    MetadataOrPlaceholder,
    is_placeholder,
)
from ..models.visible_pack import VisiblePack


class CommitSelection:
    """Commits shown at a set of rows when the selection was made.

    Row indices are resolved once against *pack*, so the selection keeps
    naming the same commits after the table moved on to a newer pack.
    """

    def __init__(self, log_data: LogDataProvider, pack: VisiblePack, rows: Iterable[int]) -> None:
        self._log_data = log_data
        self._rows: Tuple[int, ...] = tuple(sorted(set(rows)))
        count = pack.row_count()
        for row in self._rows:
            if not 0 <= row < count:
                raise RowOutOfRangeError(row, count)
        graph = pack.visible_graph
        self._ids: Tuple[EntityId, ...] = tuple(graph.row_info(row).commit for row in self._rows)
        self._generation = pack.generation

    @property
    def rows(self) -> Tuple[int, ...]:
        return self._rows

    @property
    def ids(self) -> Tuple[EntityId, ...]:
        return self._ids

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[EntityId]:
        return iter(self._ids)

    def cached_metadata(self) -> List[MetadataOrPlaceholder]:
        getter = self._log_data.mini_details_getter()
        return [getter.commit_data(commit, ()) for commit in self._ids]

    def cached_full_details(self) -> List[DetailsOrPlaceholder]:
        getter = self._log_data.details_getter()
        return [getter.cached_data_or_placeholder(commit) for commit in self._ids]

    def commit_ids(self) -> List[CommitId]:
        """Return identities of the selected commits whose metadata is loaded."""

        return [
            CommitId(metadata.hash, metadata.root)
            for metadata in self.cached_metadata()
            if not is_placeholder(metadata)
        ]
