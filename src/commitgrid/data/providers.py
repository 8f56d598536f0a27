"""Interfaces the table core consumes from the log data layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

from ..models.commit import DetailsOrPlaceholder, EntityId, MetadataOrPlaceholder

# ``fetch_more(on_loaded)``: start loading more commits out of band.  The
# callback must be invoked exactly once, on the UI thread, whether the load
# succeeds, fails or is superseded.
MoreRequester = Callable[[Callable[[], None]], None]


class DetailsGetter(ABC):
    """Access to full commit details (message, changed paths)."""

    @abstractmethod
    def cached_data_or_placeholder(self, commit: EntityId) -> DetailsOrPlaceholder:
        """Return the cached details of *commit* or a loading placeholder.

        Must never block and never start a load.
        """


class MiniDetailsGetter(ABC):
    """Access to lightweight commit metadata."""

    @abstractmethod
    def commit_data(
        self, commit: EntityId, commits_to_load: Iterable[EntityId]
    ) -> MetadataOrPlaceholder:
        """Return cached metadata for *commit* or a loading placeholder.

        *commits_to_load* is an advisory, possibly lazy, single-pass sequence
        of ids worth loading together with *commit*.  An empty sequence means
        the caller only wants what is cached already.
        """


class LogDataProvider(ABC):
    """Bundle of the caches the table reads from."""

    @abstractmethod
    def details_getter(self) -> DetailsGetter:
        ...

    @abstractmethod
    def mini_details_getter(self) -> MiniDetailsGetter:
        ...

    def commit_index(self, hash: str, root: str) -> Optional[EntityId]:
        """Return the storage id of the commit *hash* in *root*, if known."""

        return None


__all__ = ["DetailsGetter", "LogDataProvider", "MiniDetailsGetter", "MoreRequester"]
