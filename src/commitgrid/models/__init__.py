"""Data models shared by the table and its providers."""

from .commit import (
    CommitId,
    CommitMetadata,
    EntityId,
    FullCommitDetails,
    LoadingDetails,
    is_placeholder,
)
from .refs import Ref, RefsModel, RefType
from .visible_pack import ListVisibleGraph, RowInfo, VisibleGraph, VisiblePack

__all__ = [
    "CommitId",
    "CommitMetadata",
    "EntityId",
    "FullCommitDetails",
    "LoadingDetails",
    "is_placeholder",
    "Ref",
    "RefsModel",
    "RefType",
    "ListVisibleGraph",
    "RowInfo",
    "VisibleGraph",
    "VisiblePack",
]
