"""Ephemeral fetch workspaces."""

import shutil
import tempfile
from pathlib import Path

from ..ports import LoggerPort, RemotePort
from .errors import (
    FetchError,
    PathNotFoundError,
    StorageError,
    TransportError,
    ValidationError,
)

WORKSPACE_PREFIX = "gitsnip-"


class Workspace:
    """A process-private directory holding one checked-out commit.

    The owner must call :meth:`release` exactly once.
    """

    def __init__(self, root: Path, keep: bool = False):
        self.root = root
        self.keep = keep
        self.released = False

    @classmethod
    def acquire(cls, parent: Path | None = None, keep: bool = False) -> "Workspace":
        """Create a fresh workspace under parent (system temp when None).

        Raises:
            StorageError: If the directory cannot be created.
        """
        try:
            if parent is not None:
                parent.mkdir(parents=True, exist_ok=True)
            root = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=parent))
        except OSError as e:
            raise StorageError(f"Failed to create workspace under {parent}: {e}") from e
        return cls(root, keep=keep)

    def read_file(self, relative_path: str) -> bytes:
        """Read a checked-out file as raw bytes.

        Raises:
            ValidationError: If the path escapes the workspace.
            PathNotFoundError: If the path is missing or not a regular file.
            StorageError: If the file cannot be read.
        """
        if self.released:
            raise RuntimeError(f"Workspace already released: {self.root}")
        try:
            root = self.root.resolve()
            target = (root / relative_path).resolve()
        except OSError as e:
            raise StorageError(f"Failed to resolve {relative_path} in {self.root}: {e}") from e
        if not target.is_relative_to(root) or target == root:
            raise ValidationError(f"Path escapes repository root: {relative_path}")
        if not target.is_file():
            raise PathNotFoundError(f"Path not found in commit tree: {relative_path}")
        try:
            return target.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read {relative_path}: {e}") from e

    def release(self) -> None:
        if self.released:
            raise RuntimeError(f"Workspace already released: {self.root}")
        self.released = True
        if not self.keep:
            shutil.rmtree(self.root, ignore_errors=True)


class Materializer:
    """Check a single commit out into a fresh workspace."""

    def __init__(
        self,
        remote: RemotePort,
        logger: LoggerPort,
        workspace_dir: Path | None = None,
        depth: int = 1,
        keep_workspace: bool = False,
    ):
        self.remote = remote
        self.logger = logger
        self.workspace_dir = workspace_dir
        self.depth = depth
        self.keep_workspace = keep_workspace

    def materialize(self, git_url: str, commit: str) -> Workspace:
        """Fetch commit from git_url and return the workspace holding its tree.

        On failure the workspace is released before the error propagates.

        Raises:
            FetchError: If the commit could not be fetched or checked out.
        """
        workspace = Workspace.acquire(self.workspace_dir, keep=self.keep_workspace)
        self.logger.info(
            "Fetching commit", url=git_url, commit=commit, workspace=str(workspace.root)
        )
        try:
            self.remote.checkout_commit(git_url, commit, workspace.root, depth=self.depth)
        except TransportError as e:
            workspace.release()
            raise FetchError(f"Failed to fetch commit {commit} from {git_url}: {e}") from e
        except BaseException:
            workspace.release()
            raise
        return workspace
