"""Windowed, lazily materialized access to the visible commit history."""

from .cell_result import CellResult, FallbackReason
from .columns import (
    AuthorColumn,
    ColumnManager,
    CommitCell,
    CommitColumn,
    DateColumn,
    HashColumn,
    LogColumn,
    RefsColumn,
    RootColumn,
)
from .model import GraphTableModel
from .more_data import MoreDataCoordinator, MoreDataState
from .prefetch import PrefetchWindow, window_around, window_bounds
from .resolver import EntityIdentityResolver
from .roles import Roles
from .selection import CommitSelection
from .view_state import WindowedViewState

__all__ = [
    "CellResult",
    "FallbackReason",
    "AuthorColumn",
    "ColumnManager",
    "CommitCell",
    "CommitColumn",
    "DateColumn",
    "HashColumn",
    "LogColumn",
    "RefsColumn",
    "RootColumn",
    "GraphTableModel",
    "MoreDataCoordinator",
    "MoreDataState",
    "PrefetchWindow",
    "window_around",
    "window_bounds",
    "EntityIdentityResolver",
    "Roles",
    "CommitSelection",
    "WindowedViewState",
]
