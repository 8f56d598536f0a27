"""Log data providers: commit sources, caches and the paged refresher."""

from .commit_source import CommitSource, SourceCommit, SyntheticCommitSource
from .details_cache import CommitDetailsCache, MiniDetailsCache
from .log_data import PagedLogRefresher, VcsLogData
from .providers import DetailsGetter, LogDataProvider, MiniDetailsGetter, MoreRequester

__all__ = [
    "CommitSource",
    "SourceCommit",
    "SyntheticCommitSource",
    "CommitDetailsCache",
    "MiniDetailsCache",
    "PagedLogRefresher",
    "VcsLogData",
    "DetailsGetter",
    "LogDataProvider",
    "MiniDetailsGetter",
    "MoreRequester",
]
