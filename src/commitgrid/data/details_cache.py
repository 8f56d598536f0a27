"""Caches of commit details and metadata with placeholder fallback."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Iterable, List, Optional, Sequence

from PySide6.QtCore import QObject, QThreadPool, Signal

from ..config import DETAILS_CACHE_SIZE, METADATA_BATCH_LIMIT, METADATA_CACHE_SIZE
from ..models.commit import (
    CommitMetadata,
    DetailsOrPlaceholder,
    EntityId,
    FullCommitDetails,
    LoadingDetails,
    MetadataOrPlaceholder,
)
from ..tasks.metadata_loader import MetadataLoader, MetadataLoadSignals, MetadataLoadWorker
from ..utils.cancellation import CancellationToken
from .providers import DetailsGetter, MiniDetailsGetter

logger = logging.getLogger(__name__)


class CommitDetailsCache(DetailsGetter):
    """Bounded LRU of full commit details.

    Reads never load anything; the cache is filled by whoever loads details
    (for example when commits get selected).
    """

    def __init__(self, max_size: int = DETAILS_CACHE_SIZE) -> None:
        self._max_size = max(1, max_size)
        self._entries: "OrderedDict[EntityId, FullCommitDetails]" = OrderedDict()

    def cached_data_or_placeholder(self, commit: EntityId) -> DetailsOrPlaceholder:
        details = self.get(commit)
        if details is None:
            return LoadingDetails(commit)
        return details

    def get(self, commit: EntityId) -> Optional[FullCommitDetails]:
        details = self._entries.get(commit)
        if details is not None:
            self._entries.move_to_end(commit)
        return details

    def put(self, details: FullCommitDetails) -> None:
        self._entries[details.id] = details
        self._entries.move_to_end(details.id)
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def invalidate(self, commit: EntityId) -> None:
        self._entries.pop(commit, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, commit: object) -> bool:
        return commit in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class MiniDetailsCache(QObject):
    """Bounded LRU of commit metadata, populated by background batches.

    A miss answers :class:`LoadingDetails` immediately.  When the caller hands
    over ids worth loading, every id that is neither cached nor already being
    loaded is collected into one batch (up to ``batch_limit``) and resolved by
    *loader* on the thread pool.  Results are stored on the UI thread and
    announced through :attr:`dataLoaded`.
    """

    dataLoaded = Signal(list)

    def __init__(
        self,
        loader: MetadataLoader,
        *,
        max_size: int = METADATA_CACHE_SIZE,
        batch_limit: int = METADATA_BATCH_LIMIT,
        thread_pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._loader = loader
        self._max_size = max(1, max_size)
        self._batch_limit = max(1, batch_limit)
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._entries: "OrderedDict[EntityId, CommitMetadata]" = OrderedDict()
        self._pending: set[EntityId] = set()
        self._generation = 0
        self._token = CancellationToken()
        self._signals = MetadataLoadSignals(self)
        self._signals.loaded.connect(self._on_loaded)
        self._signals.failed.connect(self._on_failed)

    # ------------------------------------------------------------------
    # MiniDetailsGetter
    # ------------------------------------------------------------------
    def commit_data(
        self, commit: EntityId, commits_to_load: Iterable[EntityId]
    ) -> MetadataOrPlaceholder:
        cached = self.get_cached(commit)
        if cached is not None:
            return cached
        self._schedule(commit, commits_to_load)
        return LoadingDetails(commit)

    def get_cached(self, commit: EntityId) -> Optional[CommitMetadata]:
        record = self._entries.get(commit)
        if record is not None:
            self._entries.move_to_end(commit)
        return record

    def is_pending(self, commit: EntityId) -> bool:
        return commit in self._pending

    def pending_count(self) -> int:
        return len(self._pending)

    def put(self, record: CommitMetadata) -> None:
        self._entries[record.id] = record
        self._entries.move_to_end(record.id)
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def reset(self) -> None:
        """Drop cached records and abandon batches still in flight."""

        self._token.cancel()
        self._token = CancellationToken()
        self._generation += 1
        self._pending.clear()
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Batch scheduling
    # ------------------------------------------------------------------
    def _schedule(self, commit: EntityId, hints: Iterable[EntityId]) -> None:
        batch: List[EntityId] = []
        seen: set[EntityId] = set()
        for candidate in hints:
            if len(batch) >= self._batch_limit:
                break
            if candidate in seen or candidate in self._pending or candidate in self._entries:
                continue
            seen.add(candidate)
            batch.append(candidate)
        if not batch:
            return
        if commit not in seen and commit not in self._pending:
            # The requested commit always rides along, even past the limit.
            batch.insert(0, commit)

        self._pending.update(batch)
        worker = MetadataLoadWorker(
            self._loader,
            batch,
            self._generation,
            self._signals,
            self._token,
        )
        logger.debug("Scheduling metadata batch of %d commits starting at %s", len(batch), batch[0])
        self._pool.start(worker)

    def _on_loaded(
        self,
        generation: int,
        commits: Sequence[EntityId],
        records: Sequence[CommitMetadata],
    ) -> None:
        if generation != self._generation:
            return
        # Ids the loader did not know about become loadable again.
        self._pending.difference_update(commits)
        loaded: List[EntityId] = []
        for record in records:
            self.put(record)
            loaded.append(record.id)
        if loaded:
            self.dataLoaded.emit(loaded)

    def _on_failed(self, generation: int, commits: Sequence[EntityId], message: str) -> None:
        if generation != self._generation:
            return
        for commit in commits:
            self._pending.discard(commit)
        logger.warning("Metadata batch of %d commits failed: %s", len(commits), message)


# Qt's metaclass cannot be mixed with ABCMeta, so the interface is registered.
MiniDetailsGetter.register(MiniDetailsCache)

__all__ = ["CommitDetailsCache", "MiniDetailsCache"]
