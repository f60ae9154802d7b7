"""Tests for the filesystem snippet store."""

import pytest

from gitsnip.adapters import FsSnippetStoreAdapter
from gitsnip.core import StorageError

PREFIX = "aa11bb22-cc33dd44-ee55ff66-lib.txt"
COMMIT_1 = "1" * 40
COMMIT_2 = "2" * 40


class TestFsSnippetStore:
    def test_missing_directory_is_empty(self, store):
        assert store.find_by_prefix(PREFIX) is None
        assert store.list_records() == []

    def test_put_then_find(self, store, snippets_dir):
        record = store.put(PREFIX, COMMIT_1, b"hello\n")
        assert record.name == f"{PREFIX}-{COMMIT_1}"
        assert (snippets_dir / record.name).read_bytes() == b"hello\n"

        found = store.find_by_prefix(PREFIX)
        assert found.commit == COMMIT_1
        assert found.size == 6
        assert store.record_path(found) == snippets_dir / record.name

    def test_exact_bytes(self, store):
        content = bytes(range(256))
        record = store.put(PREFIX, COMMIT_1, content)
        assert store.record_path(record).read_bytes() == content

    def test_extension(self, snippets_dir, logger):
        store = FsSnippetStoreAdapter(snippets_dir, logger, extension=".rs")
        record = store.put(PREFIX, COMMIT_1, b"fn main() {}")
        assert record.name == f"{PREFIX}-{COMMIT_1}.rs"
        assert store.find_by_prefix(PREFIX).commit == COMMIT_1

    def test_remove_if_present(self, store):
        store.put(PREFIX, COMMIT_1, b"x")
        store.remove_if_present(PREFIX)
        assert store.find_by_prefix(PREFIX) is None
        store.remove_if_present(PREFIX)

    def test_other_prefixes_untouched(self, store):
        other = "aa11bb22-cc33dd44-99999999-lib.txt"
        store.put(PREFIX, COMMIT_1, b"x")
        store.put(other, COMMIT_1, b"y")
        store.remove_if_present(PREFIX)
        assert store.find_by_prefix(other) is not None
        assert [r.prefix for r in store.list_records()] == [other]

    def test_longer_name_sharing_prefix_does_not_match(self, store, snippets_dir):
        snippets_dir.mkdir()
        (snippets_dir / f"{PREFIX}-extra-{COMMIT_1}").write_bytes(b"x")
        assert store.find_by_prefix(PREFIX) is None

    def test_ignores_temporary_files(self, store, snippets_dir):
        snippets_dir.mkdir()
        (snippets_dir / ".tmp-abc123").write_bytes(b"partial")
        assert store.list_records() == []

    def test_duplicate_prefix_warns(self, store, logger):
        store.put(PREFIX, COMMIT_2, b"b")
        store.put(PREFIX, COMMIT_1, b"a")
        assert store.find_by_prefix(PREFIX).commit == COMMIT_1
        assert "Multiple snippets share a prefix" in logger.messages("warning")

    def test_no_temporary_files_left(self, store, snippets_dir):
        store.put(PREFIX, COMMIT_1, b"x")
        assert [p.name for p in snippets_dir.iterdir()] == [f"{PREFIX}-{COMMIT_1}"]

    def test_write_failure_raises_storage_error(self, tmp_path, logger):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = FsSnippetStoreAdapter(blocker / ".snippets", logger)
        with pytest.raises(StorageError):
            store.put(PREFIX, COMMIT_1, b"x")
