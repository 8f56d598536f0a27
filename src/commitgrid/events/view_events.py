from dataclasses import dataclass

from .bus import Event


@dataclass(kw_only=True)
class VisiblePackReplacedEvent(Event):
    row_count: int = 0
    generation: int = 0
    can_request_more: bool = False


@dataclass(kw_only=True)
class MoreDataRequestedEvent(Event):
    row_count: int = 0
