"""Snippet store port interface."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class SnippetRecord:
    """One cached file extraction, named by key prefix and commit."""

    prefix: str
    commit: str
    name: str
    size: int = 0


class SnippetStorePort(Protocol):
    """Port for the directory of cached snippet records."""

    def find_by_prefix(self, prefix: str) -> SnippetRecord | None:
        """Find the record cached under a key prefix, if any."""
        ...

    def put(self, prefix: str, commit: str, content: bytes) -> SnippetRecord:
        """Write a record for prefix at commit."""
        ...

    def remove_if_present(self, prefix: str) -> None:
        """Remove every record cached under prefix."""
        ...

    def record_path(self, record: SnippetRecord) -> Path:
        """Get the on-disk path of a record."""
        ...

    def list_records(self) -> list[SnippetRecord]:
        """List all cached records."""
        ...
