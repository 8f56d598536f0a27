"""Background workers feeding the log data caches."""

from .fetch_more_worker import FetchMoreSignals, FetchMoreWorker
from .metadata_loader import MetadataLoadSignals, MetadataLoadWorker

__all__ = [
    "FetchMoreSignals",
    "FetchMoreWorker",
    "MetadataLoadSignals",
    "MetadataLoadWorker",
]
