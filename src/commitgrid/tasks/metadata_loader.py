"""Background batch loading of commit metadata."""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from PySide6.QtCore import QObject, QRunnable, Signal

from ..errors import ProcessCanceledError
from ..models.commit import CommitMetadata
from ..utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)

MetadataLoader = Callable[[Sequence[int]], List[CommitMetadata]]


class MetadataLoadSignals(QObject):
    # (generation, requested ids, records)
    loaded = Signal(int, object, object)
    # (generation, requested ids, message)
    failed = Signal(int, object, str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)


class MetadataLoadWorker(QRunnable):
    """Resolve a batch of commit ids to metadata records."""

    def __init__(
        self,
        loader: MetadataLoader,
        commits: Sequence[int],
        generation: int,
        signals: MetadataLoadSignals,
        token: CancellationToken,
    ) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._loader = loader
        self._commits = tuple(commits)
        self._generation = generation
        self._token = token
        self.signals = signals

    def run(self) -> None:  # pragma: no cover - runs in background thread when pooled
        try:
            self._token.check()
            records = self._loader(self._commits)
        except ProcessCanceledError:
            # Superseded by a cache reset; the pending set was cleared already.
            return
        except Exception as exc:
            logger.warning("Loading metadata for %d commits failed: %s", len(self._commits), exc)
            self.signals.failed.emit(self._generation, self._commits, str(exc))
            return
        self.signals.loaded.emit(self._generation, self._commits, records)
