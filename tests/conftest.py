"""Shared fixtures for gitsnip tests."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pygit2
import pytest

from gitsnip.adapters import FsSnippetStoreAdapter, Sha256Adapter
from gitsnip.core import SnippetService, TransportError
from gitsnip.ports import RemoteRefs

SHA_1 = "a" * 40
SHA_2 = "b" * 40
SHA_TAG_OBJECT = "c" * 40
REPO_URL = "https://example.com/repo.git"


class RecordingLogger:
    """Logger that keeps every record in memory."""

    def __init__(self):
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, message: str, **kwargs: Any) -> None:
        self.records.append(("debug", message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.records.append(("info", message, kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.records.append(("warning", message, kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self.records.append(("error", message, kwargs))

    def log_operation(self, op: str, key: str, **kwargs: Any) -> None:
        self.records.append(("operation", op, {"key": key, **kwargs}))

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


class RecordingMetrics:
    def __init__(self):
        self.counters: dict[str, int] = {}
        self.timings: list[str] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.counters[name] = self.counters.get(name, 0) + value

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.timings.append(name)


class FixedClock:
    def now(self) -> datetime:
        return datetime(2024, 1, 1, tzinfo=UTC)


class FakeRemote:
    """In-memory remote: an advertisement plus file trees per commit."""

    def __init__(self):
        self.refs = RemoteRefs(
            refs={
                "HEAD": SHA_1,
                "refs/heads/main": SHA_1,
                "refs/heads/dev": SHA_2,
                "refs/tags/v1.0": SHA_TAG_OBJECT,
                "refs/tags/v1.0^{}": SHA_1,
                "refs/tags/light": SHA_2,
            },
            head_target="refs/heads/main",
        )
        self.trees: dict[str, dict[str, bytes]] = {
            SHA_1: {"src/lib.txt": b"version one\n", "README.md": b"# readme\n"},
            SHA_2: {"src/lib.txt": b"version two\n"},
        }
        self.list_calls = 0
        self.checkouts: list[tuple[str, str, int]] = []
        self.unreachable = False

    def move_branch(self, branch: str, commit: str) -> None:
        refs = dict(self.refs.refs)
        refs[f"refs/heads/{branch}"] = commit
        if self.refs.head_target == f"refs/heads/{branch}":
            refs["HEAD"] = commit
        self.refs = RemoteRefs(refs=refs, head_target=self.refs.head_target)

    def list_refs(self, url: str) -> RemoteRefs:
        self.list_calls += 1
        if self.unreachable:
            raise TransportError(f"failed to resolve address for {url}")
        return self.refs

    def checkout_commit(self, url: str, commit: str, workdir: Path, depth: int = 1) -> None:
        self.checkouts.append((url, commit, depth))
        if self.unreachable:
            raise TransportError(f"failed to resolve address for {url}")
        if commit not in self.trees:
            raise TransportError(f"object not found - no match for id ({commit})")
        for rel, content in self.trees[commit].items():
            target = workdir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def metrics():
    return RecordingMetrics()


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def snippets_dir(tmp_path):
    return tmp_path / ".snippets"


@pytest.fixture
def store(snippets_dir, logger):
    return FsSnippetStoreAdapter(snippets_dir, logger)


@pytest.fixture
def workspace_dir(tmp_path):
    return tmp_path / "workspaces"


@pytest.fixture
def service(remote, store, logger, metrics, workspace_dir):
    return SnippetService(
        remote=remote,
        store=store,
        hasher=Sha256Adapter(),
        clock=FixedClock(),
        logger=logger,
        metrics=metrics,
        workspace_dir=workspace_dir,
    )


SIGNATURE = pygit2.Signature("gitsnip tests", "tests@example.com", 1700000000, 0)


def write_tree(repo: pygit2.Repository, files: dict[str, bytes]) -> pygit2.Oid:
    """Write a tree for a flat or nested mapping of path -> content."""
    nested: dict[str, dict[str, bytes]] = {}
    builder = repo.TreeBuilder()
    for path, content in files.items():
        head, _, rest = path.partition("/")
        if rest:
            nested.setdefault(head, {})[rest] = content
        else:
            builder.insert(head, repo.create_blob(content), pygit2.enums.FileMode.BLOB)
    for name, subfiles in nested.items():
        builder.insert(name, write_tree(repo, subfiles), pygit2.enums.FileMode.TREE)
    return builder.write()


@pytest.fixture
def origin(tmp_path):
    """A repository with main, dev, an annotated tag and a lightweight tag."""
    repo = pygit2.init_repository(str(tmp_path / "origin"), bare=True, initial_head="main")

    first = repo.create_commit(
        "refs/heads/main",
        SIGNATURE,
        SIGNATURE,
        "first",
        write_tree(repo, {"src/lib.txt": b"version one\n", "README.md": b"# origin\n"}),
        [],
    )
    second = repo.create_commit(
        "refs/heads/dev",
        SIGNATURE,
        SIGNATURE,
        "second",
        write_tree(repo, {"src/lib.txt": b"version two\n"}),
        [first],
    )
    tag = repo.create_tag("v1.0", first, pygit2.enums.ObjectType.COMMIT, SIGNATURE, "release")
    repo.references.create("refs/tags/light", second)

    return {
        "url": str(tmp_path / "origin"),
        "first": str(first),
        "second": str(second),
        "tag": str(tag),
    }
