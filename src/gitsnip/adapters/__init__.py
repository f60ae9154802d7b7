"""Adapters for gitsnip ports."""

from .clock_utc import UtcClockAdapter
from .hash_sha256 import Sha256Adapter
from .logger_std import StdLoggerAdapter
from .metrics import LoggingMetricsAdapter, NoopMetricsAdapter, create_metrics
from .remote_pygit2 import Pygit2RemoteAdapter
from .store_fs import FsSnippetStoreAdapter

__all__ = [
    "FsSnippetStoreAdapter",
    "LoggingMetricsAdapter",
    "NoopMetricsAdapter",
    "Pygit2RemoteAdapter",
    "Sha256Adapter",
    "StdLoggerAdapter",
    "UtcClockAdapter",
    "create_metrics",
]
