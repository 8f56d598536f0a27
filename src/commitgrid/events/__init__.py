"""Event bus and the notifications published by the windowed view."""

from .bus import Event, EventBus, Subscription
from .view_events import MoreDataRequestedEvent, VisiblePackReplacedEvent

__all__ = [
    "Event",
    "EventBus",
    "Subscription",
    "MoreDataRequestedEvent",
    "VisiblePackReplacedEvent",
]
