"""Commit identities, detail records and the loading placeholder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

from ..config import LOADING_SUBJECT

# Index of a commit in the backing storage.  Stable for the lifetime of the
# log data and used as the cache key everywhere.
EntityId = int


@dataclass(frozen=True, slots=True)
class CommitId:
    """Stable composite identity of a commit: its hash inside a root."""

    hash: str
    root: str


@dataclass(frozen=True, slots=True)
class CommitMetadata:
    """Lightweight per-commit record used to paint table cells."""

    id: EntityId
    hash: str
    root: str
    subject: str
    author: str
    timestamp: int
    parents: Tuple[str, ...] = ()

    def commit_id(self) -> CommitId:
        return CommitId(self.hash, self.root)


@dataclass(frozen=True, slots=True)
class FullCommitDetails(CommitMetadata):
    """Metadata plus the full message and the list of changed paths."""

    full_message: str = ""
    changes: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LoadingDetails:
    """Placeholder returned while the real record is not cached yet.

    Only the entity id is meaningful.  Every other attribute answers a
    neutral value so cells can be painted without special-casing.
    """

    id: EntityId
    hash: str = ""
    root: str = ""
    subject: str = LOADING_SUBJECT
    author: str = ""
    timestamp: int = 0
    parents: Tuple[str, ...] = field(default=())
    full_message: str = ""
    changes: Tuple[str, ...] = field(default=())


MetadataOrPlaceholder = Union[CommitMetadata, LoadingDetails]
DetailsOrPlaceholder = Union[FullCommitDetails, LoadingDetails]


def is_placeholder(value: object) -> bool:
    """Return ``True`` when *value* is a :class:`LoadingDetails` stand-in."""

    return isinstance(value, LoadingDetails)
