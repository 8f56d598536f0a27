"""Materialized commit storage and the paged refresher that grows it."""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, QThreadPool, Signal

from ..config import DEFAULT_PAGE_SIZE, DETAILS_CACHE_SIZE, METADATA_CACHE_SIZE
from ..errors import DataUnavailableError
from ..models.commit import CommitMetadata, EntityId, FullCommitDetails
from ..models.refs import Ref, RefsModel
from ..models.visible_pack import ListVisibleGraph, VisiblePack
from ..tasks.fetch_more_worker import FetchMoreSignals, FetchMoreWorker
from ..utils.cancellation import CancellationToken
from .commit_source import CommitSource, SourceCommit
from .details_cache import CommitDetailsCache, MiniDetailsCache
from .providers import LogDataProvider

logger = logging.getLogger(__name__)


class VcsLogData(LogDataProvider):
    """Commits materialized so far, indexed by storage id.

    Storage ids are assigned in arrival order, so id ``n`` is the ``n``-th
    newest commit loaded.  Appends happen on the UI thread; metadata workers
    read concurrently, hence the lock.
    """

    def __init__(
        self,
        source: CommitSource,
        *,
        details_cache_size: int = DETAILS_CACHE_SIZE,
        metadata_cache_size: int = METADATA_CACHE_SIZE,
        thread_pool: QThreadPool | None = None,
    ) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._commits: List[SourceCommit] = []
        self._index: Dict[Tuple[str, str], EntityId] = {}
        self._refs: List[Ref] = []
        self._has_more = True
        self._details = CommitDetailsCache(details_cache_size)
        self._mini_details = MiniDetailsCache(
            self.load_metadata,
            max_size=metadata_cache_size,
            thread_pool=thread_pool,
        )

    # ------------------------------------------------------------------
    # LogDataProvider
    # ------------------------------------------------------------------
    def details_getter(self) -> CommitDetailsCache:
        return self._details

    def mini_details_getter(self) -> MiniDetailsCache:
        return self._mini_details

    def commit_index(self, hash: str, root: str) -> Optional[EntityId]:
        with self._lock:
            return self._index.get((hash, root))

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    def source(self) -> CommitSource:
        return self._source

    def commit_count(self) -> int:
        with self._lock:
            return len(self._commits)

    def has_more(self) -> bool:
        return self._has_more

    def append(self, commits: Iterable[SourceCommit], has_more: bool) -> List[EntityId]:
        """Store *commits* and return the ids assigned to them."""

        added: List[EntityId] = []
        with self._lock:
            for commit in commits:
                key = (commit.hash, commit.root)
                if key in self._index:
                    continue
                commit_id = len(self._commits)
                self._commits.append(commit)
                self._index[key] = commit_id
                for name, ref_type in commit.refs:
                    self._refs.append(Ref(name, ref_type, commit_id, commit.root))
                added.append(commit_id)
            self._has_more = has_more
        return added

    def clear(self) -> None:
        with self._lock:
            self._commits.clear()
            self._index.clear()
            self._refs.clear()
            self._has_more = True
        self._details.clear()
        self._mini_details.reset()

    def load_metadata(self, commits: Sequence[EntityId]) -> List[CommitMetadata]:
        """Resolve *commits* to metadata; ids not materialized are skipped."""

        with self._lock:
            snapshot = [
                (commit_id, self._commits[commit_id])
                for commit_id in commits
                if 0 <= commit_id < len(self._commits)
            ]
        return [
            CommitMetadata(
                id=commit_id,
                hash=commit.hash,
                root=commit.root,
                subject=commit.subject,
                author=commit.author,
                timestamp=commit.timestamp,
                parents=commit.parents,
            )
            for commit_id, commit in snapshot
        ]

    def load_full_details(self, commit_id: EntityId) -> FullCommitDetails:
        with self._lock:
            if not 0 <= commit_id < len(self._commits):
                raise DataUnavailableError(f"commit {commit_id} is not loaded")
            commit = self._commits[commit_id]
        return FullCommitDetails(
            id=commit_id,
            hash=commit.hash,
            root=commit.root,
            subject=commit.subject,
            author=commit.author,
            timestamp=commit.timestamp,
            parents=commit.parents,
            full_message=commit.full_message,
            changes=commit.changes,
        )

    def prime_full_details(self, commits: Iterable[EntityId]) -> int:
        """Load full details of *commits* into the details cache."""

        primed = 0
        for commit_id in commits:
            if commit_id in self._details:
                continue
            self._details.put(self.load_full_details(commit_id))
            primed += 1
        return primed

    # ------------------------------------------------------------------
    # Visible packs
    # ------------------------------------------------------------------
    def build_pack(
        self,
        generation: int,
        *,
        roots: Optional[Iterable[str]] = None,
    ) -> VisiblePack:
        """Snapshot the materialized commits, newest first.

        *roots* restricts the pack to commits of those roots.
        """

        root_filter = frozenset(roots) if roots is not None else None
        with self._lock:
            if root_filter is None:
                commits = list(range(len(self._commits)))
            else:
                commits = [
                    commit_id
                    for commit_id, commit in enumerate(self._commits)
                    if commit.root in root_filter
                ]
            row_roots = tuple(self._commits[commit_id].root for commit_id in commits)
            refs = RefsModel(self._refs)
            has_more = self._has_more
        filters: Dict[str, object] = {}
        if root_filter is not None:
            filters["roots"] = tuple(sorted(root_filter))
        return VisiblePack(
            ListVisibleGraph(commits),
            can_request_more=has_more,
            roots=row_roots,
            refs=refs,
            filters=MappingProxyType(filters),
            generation=generation,
        )


class PagedLogRefresher(QObject):
    """Grow :class:`VcsLogData` one page at a time and publish new packs.

    :meth:`fetch_more` is the ``MoreRequester`` the table model is given.  A
    new pack is announced through :attr:`packReady` on the UI thread, after
    which every callback collected since the page was requested runs once.
    A failed page publishes the unchanged commits so waiting views can make a
    fresh decision; a page superseded by :meth:`reset` is dropped.
    """

    packReady = Signal(object)
    loadFailed = Signal(str)

    def __init__(
        self,
        log_data: VcsLogData,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        roots: Optional[Iterable[str]] = None,
        thread_pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._log_data = log_data
        self._page_size = max(1, page_size)
        self._roots = tuple(roots) if roots is not None else None
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._generation = 0
        self._pack_generation = 0
        self._loading = False
        self._callbacks: List[Callable[[], None]] = []
        self._token = CancellationToken()
        self._source_lock = threading.Lock()
        self._signals = FetchMoreSignals(self)
        self._signals.pageReady.connect(self._on_page_ready)
        self._signals.failed.connect(self._on_failed)
        self._signals.cancelled.connect(self._on_cancelled)

    def is_loading(self) -> bool:
        return self._loading

    def fetch_more(self, on_loaded: Callable[[], None]) -> None:
        self._callbacks.append(on_loaded)
        if self._loading:
            logger.debug("fetch_more: page already in flight, callback queued")
            return
        self._loading = True
        worker = FetchMoreWorker(
            self._log_data.source(),
            self._page_size,
            self._generation,
            self._signals,
            self._token,
            self._source_lock,
        )
        logger.debug(
            "fetch_more: requesting %d commits after %d loaded",
            self._page_size,
            self._log_data.commit_count(),
        )
        self._pool.start(worker)

    def refresh(self) -> None:
        """Load the first page."""

        self.fetch_more(lambda: None)

    def reset(self) -> None:
        """Forget everything loaded and publish an empty pack.

        A page still in flight is cancelled; its callbacks run now.
        """

        with self._source_lock:
            self._token.cancel()
            self._token = CancellationToken()
            self._log_data.source().reset()
        self._generation += 1
        self._loading = False
        self._log_data.clear()
        self._publish()

    def set_roots(self, roots: Optional[Iterable[str]]) -> None:
        """Filter the published packs to *roots* and republish.

        Callbacks of a page still in flight keep waiting for that page.
        """

        self._roots = tuple(roots) if roots is not None else None
        self._publish(run_callbacks=not self._loading)

    # ------------------------------------------------------------------
    # Worker results (UI thread)
    # ------------------------------------------------------------------
    def _on_page_ready(self, generation: int, commits: List[SourceCommit], has_more: bool) -> None:
        if generation != self._generation:
            logger.debug("Dropping stale page of %d commits", len(commits))
            return
        added = self._log_data.append(commits, has_more)
        logger.debug("Loaded %d commits (more: %s)", len(added), has_more)
        self._loading = False
        self._publish()

    def _on_failed(self, generation: int, message: str) -> None:
        if generation != self._generation:
            return
        self._loading = False
        self.loadFailed.emit(message)
        self._publish()

    def _on_cancelled(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._loading = False
        self._publish()

    def _publish(self, run_callbacks: bool = True) -> None:
        # Taken before emitting: a packReady slot may start the next page,
        # and its callback belongs to that page.
        callbacks: List[Callable[[], None]] = []
        if run_callbacks:
            callbacks, self._callbacks = self._callbacks, []
        self._pack_generation += 1
        pack = self._log_data.build_pack(self._pack_generation, roots=self._roots)
        self.packReady.emit(pack)
        for callback in callbacks:
            callback()


__all__ = ["PagedLogRefresher", "VcsLogData"]
