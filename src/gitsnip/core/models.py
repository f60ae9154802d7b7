"""Core domain models."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath

from ..ports.store import SnippetRecord
from .errors import ResolutionError, ValidationError

COMMIT_RE = re.compile(r"^(?:[0-9a-fA-F]{40}|[0-9a-fA-F]{64})$")


class SelectorKind(str, Enum):
    """Kind of reference a caller selected."""

    BRANCH = "branch"
    TAG = "tag"
    COMMIT = "commit"


@dataclass(frozen=True)
class Selector:
    """Branch, tag, commit hash, or the remote's default branch.

    A branch selector without a name stands for the default branch.
    """

    kind: SelectorKind
    value: str | None = None

    @classmethod
    def branch(cls, name: str) -> "Selector":
        return cls(SelectorKind.BRANCH, name)

    @classmethod
    def tag(cls, name: str) -> "Selector":
        return cls(SelectorKind.TAG, name)

    @classmethod
    def commit(cls, sha: str) -> "Selector":
        return cls(SelectorKind.COMMIT, sha)

    @classmethod
    def default_branch(cls) -> "Selector":
        return cls(SelectorKind.BRANCH, None)

    @classmethod
    def from_options(
        cls,
        branch: str | None = None,
        tag: str | None = None,
        commit_hash: str | None = None,
    ) -> "Selector":
        """Build a selector from mutually exclusive options.

        Raises:
            ValidationError: If more than one option is supplied.
        """
        supplied = [opt for opt in (branch, tag, commit_hash) if opt]
        if len(supplied) > 1:
            raise ValidationError("Only one of --branch, --tag, or --commit-hash can be specified")
        if branch:
            return cls.branch(branch)
        if tag:
            return cls.tag(tag)
        if commit_hash:
            return cls.commit(commit_hash)
        return cls.default_branch()

    @property
    def is_default_branch(self) -> bool:
        return self.kind is SelectorKind.BRANCH and not self.value

    def __str__(self) -> str:
        if self.is_default_branch:
            return "default branch"
        return f"{self.kind.value} {self.value}"


@dataclass(frozen=True)
class ResolvedCommit:
    """Commit a selector mapped to, with the selector kind/value used for keying."""

    commit: str
    kind: SelectorKind
    value: str


def normalize_commit(sha: str) -> str:
    """Validate a full-length commit id and return it in lowercase.

    Raises:
        ResolutionError: If sha is not 40 or 64 hex characters.
    """
    if not COMMIT_RE.match(sha):
        raise ResolutionError(f"Malformed commit hash: {sha!r}", Selector.commit(sha))
    return sha.lower()


@dataclass(frozen=True)
class SnippetRequest:
    """One request for a file at a reference of a remote repository."""

    git_url: str
    path: str
    selector: Selector

    def __post_init__(self) -> None:
        if not self.git_url:
            raise ValidationError("Git URL is required")
        if not self.path:
            raise ValidationError("Path is required")
        parts = PurePosixPath(self.path).parts
        if self.path.startswith("/") or ".." in parts:
            raise ValidationError(f"Path must be relative to the repository root: {self.path}")


@dataclass
class FetchSummary:
    """Summary of a fetch operation."""

    path: str
    commit: str
    prefix: str
    selector_kind: str
    selector_value: str
    cache_hit: bool
    size: int
    previous_commit: str | None = None

    @property
    def operation(self) -> str:
        if self.cache_hit:
            return "up_to_date"
        return "updated" if self.previous_commit else "created"


__all__ = [
    "FetchSummary",
    "ResolvedCommit",
    "Selector",
    "SelectorKind",
    "SnippetRecord",
    "SnippetRequest",
    "normalize_commit",
]
