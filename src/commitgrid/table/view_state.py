"""Holder of the current visible pack."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..events.bus import EventBus
from ..events.view_events import VisiblePackReplacedEvent
from ..models.visible_pack import VisiblePack
from .more_data import MoreDataCoordinator

logger = logging.getLogger(__name__)


class WindowedViewState(QObject):
    """Single-writer holder of the immutable :class:`VisiblePack`.

    Readers always get one complete pack.  A replacement is announced as a
    whole-structure change: every row mapping computed against the previous
    pack is invalid afterwards.
    """

    aboutToReplace = Signal(object)
    packReplaced = Signal(object)

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._events = event_bus
        self._lock = threading.Lock()
        self._pack = VisiblePack.EMPTY
        self._replacements = 0
        self._coordinator: Optional[MoreDataCoordinator] = None

    def bind_coordinator(self, coordinator: MoreDataCoordinator) -> None:
        self._coordinator = coordinator

    def current(self) -> VisiblePack:
        with self._lock:
            return self._pack

    def replacements(self) -> int:
        """Return how many times a pack was published."""

        with self._lock:
            return self._replacements

    def replace(self, pack: VisiblePack) -> None:
        self.aboutToReplace.emit(pack)
        with self._lock:
            self._pack = pack
            self._replacements += 1
        # Either outcome of a load attempt ends it.
        if self._coordinator is not None:
            self._coordinator.reset()
        logger.debug(
            "Visible pack replaced: %d rows, generation %d, more: %s",
            pack.row_count(),
            pack.generation,
            pack.can_request_more,
        )
        self.packReplaced.emit(pack)
        if self._events is not None:
            self._events.publish(
                VisiblePackReplacedEvent(
                    row_count=pack.row_count(),
                    generation=pack.generation,
                    can_request_more=pack.can_request_more,
                )
            )
