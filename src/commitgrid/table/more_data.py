"""Single-flight coordination of "load more" requests."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from ..data.providers import MoreRequester
from ..events.bus import EventBus
from ..events.view_events import MoreDataRequestedEvent
from ..models.visible_pack import VisiblePack

logger = logging.getLogger(__name__)


class MoreDataState(Enum):
    IDLE = "idle"
    PENDING = "pending"


class MoreDataCoordinator:
    """Allow at most one outstanding "load more" per visible pack.

    The state flips to :attr:`MoreDataState.PENDING` before the requester is
    called, so a second access arriving while the request is dispatched is
    suppressed.  Only :meth:`reset`, called when a new pack is published,
    makes the coordinator idle again.
    """

    def __init__(
        self,
        pack_getter: Callable[[], VisiblePack],
        requester: MoreRequester,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._pack_getter = pack_getter
        self._requester = requester
        self._events = event_bus
        self._state = MoreDataState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> MoreDataState:
        with self._lock:
            return self._state

    def is_pending(self) -> bool:
        return self.state is MoreDataState.PENDING

    def can_request_more(self) -> bool:
        """Return ``True`` if idle and the current pack has more to load."""

        with self._lock:
            idle = self._state is MoreDataState.IDLE
        return idle and self._pack_getter().can_request_more

    def request_more(self, on_loaded: Callable[[], None]) -> bool:
        """Ask the upstream provider for more commits.

        Returns ``False`` without calling the provider when a request is
        already pending or the current pack cannot grow; *on_loaded* is then
        never invoked.
        """

        pack = self._pack_getter()
        with self._lock:
            if self._state is MoreDataState.PENDING:
                logger.debug("request_more: suppressed, a request is already pending")
                return False
            if not pack.can_request_more:
                return False
            self._state = MoreDataState.PENDING

        try:
            self._requester(on_loaded)
        except Exception:
            with self._lock:
                self._state = MoreDataState.IDLE
            raise

        logger.debug("request_more: dispatched at %d rows", pack.row_count())
        if self._events is not None:
            self._events.publish(MoreDataRequestedEvent(row_count=pack.row_count()))
        return True

    def reset(self) -> None:
        with self._lock:
            previous, self._state = self._state, MoreDataState.IDLE
        if previous is MoreDataState.PENDING:
            logger.debug("request_more: pending request cleared")
