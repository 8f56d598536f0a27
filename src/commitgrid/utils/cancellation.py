"""Cooperative cancellation shared between the UI thread and workers."""

from __future__ import annotations

import threading

from ..errors import ProcessCanceledError


class CancellationToken:
    """Flag a background computation polls to find out it was superseded."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        """Raise :class:`ProcessCanceledError` once :meth:`cancel` was called."""

        if self._event.is_set():
            raise ProcessCanceledError("operation was cancelled")
