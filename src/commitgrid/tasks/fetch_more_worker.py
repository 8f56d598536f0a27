"""Background pull of the next page of commits."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, List

from PySide6.QtCore import QObject, QRunnable, Signal

from ..errors import ProcessCanceledError
from ..utils.cancellation import CancellationToken

if TYPE_CHECKING:  # pragma: no cover
    from ..data.commit_source import CommitSource, SourceCommit

logger = logging.getLogger(__name__)


class FetchMoreSignals(QObject):
    # (generation, commits, has_more)
    pageReady = Signal(int, object, bool)
    # (generation, message)
    failed = Signal(int, str)
    cancelled = Signal(int)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)


class FetchMoreWorker(QRunnable):
    """Fetch a single page from a :class:`CommitSource` off the UI thread."""

    def __init__(
        self,
        source: CommitSource,
        limit: int,
        generation: int,
        signals: FetchMoreSignals,
        token: CancellationToken,
        source_lock: threading.Lock,
    ) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._source = source
        self._source_lock = source_lock
        self._limit = limit
        self._generation = generation
        self._token = token
        self.signals = signals

    def run(self) -> None:  # pragma: no cover - runs in background thread when pooled
        try:
            # A reset rewinds the source under the same lock, so a page is
            # either fetched entirely before the rewind or not at all.
            with self._source_lock:
                self._token.check()
                commits: List[SourceCommit] = self._source.fetch_next(self._limit)
                has_more = self._source.has_more()
            self._token.check()
        except ProcessCanceledError:
            self.signals.cancelled.emit(self._generation)
            return
        except Exception as exc:
            logger.exception("Fetching %d commits failed", self._limit)
            self.signals.failed.emit(self._generation, f"{exc.__class__.__name__}: {exc}")
            return
        self.signals.pageReady.emit(self._generation, commits, has_more)
