"""Filesystem snippet store adapter."""

import os
import tempfile
from pathlib import Path

from ..core.errors import StorageError
from ..ports import LoggerPort, SnippetRecord

TEMP_PREFIX = ".tmp-"


class FsSnippetStoreAdapter:
    """Directory of ``{prefix}-{commit}{extension}`` files implementing SnippetStorePort."""

    def __init__(self, base_dir: Path, logger: LoggerPort, extension: str = ""):
        self.base_dir = base_dir
        self.logger = logger
        self.extension = extension

    def record_name(self, prefix: str, commit: str) -> str:
        return f"{prefix}-{commit}{self.extension}"

    def record_path(self, record: SnippetRecord) -> Path:
        return self.base_dir / record.name

    def parse_name(self, name: str, prefix: str | None = None) -> SnippetRecord | None:
        """Split a record file name into prefix and commit.

        Returns None for names that are not records (or not under ``prefix``).
        """
        if name.startswith(TEMP_PREFIX):
            return None
        stem = name
        if self.extension:
            if not name.endswith(self.extension):
                return None
            stem = name[: -len(self.extension)]
        record_prefix, sep, commit = stem.rpartition("-")
        if not sep or not record_prefix or not commit:
            return None
        if prefix is not None and record_prefix != prefix:
            return None
        return SnippetRecord(prefix=record_prefix, commit=commit, name=name)

    def find_by_prefix(self, prefix: str) -> SnippetRecord | None:
        matches = self._scan(prefix)
        if not matches:
            return None
        if len(matches) > 1:
            self.logger.warning(
                "Multiple snippets share a prefix",
                prefix=prefix,
                names=[record.name for record in matches],
            )
        return matches[0]

    def list_records(self) -> list[SnippetRecord]:
        return self._scan(None)

    def remove_if_present(self, prefix: str) -> None:
        for record in self._scan(prefix):
            path = self.record_path(record)
            self.logger.debug("Removing snippet", path=str(path))
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to remove {path}: {e}") from e

    def put(self, prefix: str, commit: str, content: bytes) -> SnippetRecord:
        """Write content under its final name via a temporary file and rename."""
        name = self.record_name(prefix, commit)
        final_path = self.base_dir / name
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=self.base_dir)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(content)
                os.chmod(tmp_name, 0o644)
                os.replace(tmp_name, final_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write snippet {final_path}: {e}") from e
        self.logger.debug("Wrote snippet", path=str(final_path), size=len(content))
        return SnippetRecord(prefix=prefix, commit=commit, name=name, size=len(content))

    def _scan(self, prefix: str | None) -> list[SnippetRecord]:
        if not self.base_dir.is_dir():
            return []
        records = []
        try:
            entries = sorted(self.base_dir.iterdir())
        except OSError as e:
            raise StorageError(f"Failed to read snippet store {self.base_dir}: {e}") from e
        for entry in entries:
            if prefix is not None and not entry.name.startswith(f"{prefix}-"):
                continue
            record = self.parse_name(entry.name, prefix)
            if record is None:
                continue
            try:
                if not entry.is_file():
                    continue
                size = entry.stat().st_size
            except OSError as e:
                raise StorageError(f"Failed to stat snippet {entry}: {e}") from e
            records.append(
                SnippetRecord(
                    prefix=record.prefix,
                    commit=record.commit,
                    name=record.name,
                    size=size,
                )
            )
        return records
