"""Port interfaces for gitsnip."""

from .clock import ClockPort
from .hash import HashPort
from .logger import LoggerPort
from .metrics import MetricsPort
from .remote import RemotePort, RemoteRefs
from .store import SnippetRecord, SnippetStorePort

__all__ = [
    "ClockPort",
    "HashPort",
    "LoggerPort",
    "MetricsPort",
    "RemotePort",
    "RemoteRefs",
    "SnippetRecord",
    "SnippetStorePort",
]
