"""Centralized configuration for gitsnip."""

import os
from dataclasses import dataclass, field
from pathlib import Path

TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


@dataclass(slots=True)
class GitCredentials:
    """Credentials offered to the remote when it asks for them."""

    username: str | None = None
    password: str | None = field(default=None, repr=False)
    ssh_key_path: str | None = None
    ssh_pubkey_path: str | None = None
    ssh_passphrase: str | None = field(default=None, repr=False)

    @property
    def configured(self) -> bool:
        return any((self.username, self.password, self.ssh_key_path, self.ssh_pubkey_path))


@dataclass(slots=True)
class GitSnipConfig:
    """All gitsnip configuration in one place.

    Environment variables (all optional):
        GITSNIP_DIR:            Snippet store directory. Default ".snippets".
        GITSNIP_EXTENSION:      Extension appended to record names. Default "".
        GITSNIP_LOG_LEVEL:      Logging level. Default "INFO".
        GITSNIP_FETCH_DEPTH:    History depth of the commit fetch, 0 for full. Default 1.
        GITSNIP_WORKSPACE_DIR:  Parent directory for fetch workspaces. Default system temp.
        GITSNIP_KEEP_WORKSPACE: Leave fetch workspaces on disk after use. Default false.
        GITSNIP_METRICS:        Metrics backend: "noop" (default) or "logging".
        GITSNIP_GIT_USERNAME, GITSNIP_GIT_PASSWORD, GITSNIP_GIT_SSH_KEY,
        GITSNIP_GIT_SSH_PUBKEY, GITSNIP_GIT_SSH_PASSPHRASE: remote credentials.
    """

    snippets_dir: Path = Path(".snippets")
    extension: str = ""
    log_level: str = "INFO"
    fetch_depth: int = 1
    workspace_dir: Path | None = None
    keep_workspace: bool = False
    metrics_type: str = "noop"
    credentials: GitCredentials = field(default_factory=GitCredentials)

    @classmethod
    def from_env(
        cls,
        *,
        log_level: str | None = None,
        snippets_dir: Path | None = None,
        extension: str | None = None,
    ) -> "GitSnipConfig":
        """Build config from environment variables + explicit overrides."""
        workspace_dir = os.environ.get("GITSNIP_WORKSPACE_DIR")
        return cls(
            snippets_dir=snippets_dir or Path(os.environ.get("GITSNIP_DIR", ".snippets")),
            extension=(
                extension if extension is not None else os.environ.get("GITSNIP_EXTENSION", "")
            ),
            log_level=log_level or os.environ.get("GITSNIP_LOG_LEVEL", "INFO"),
            fetch_depth=int(os.environ.get("GITSNIP_FETCH_DEPTH", "1")),
            workspace_dir=Path(workspace_dir) if workspace_dir else None,
            keep_workspace=_env_bool("GITSNIP_KEEP_WORKSPACE"),
            metrics_type=os.environ.get("GITSNIP_METRICS", "noop"),
            credentials=GitCredentials(
                username=os.environ.get("GITSNIP_GIT_USERNAME"),
                password=os.environ.get("GITSNIP_GIT_PASSWORD"),
                ssh_key_path=os.environ.get("GITSNIP_GIT_SSH_KEY"),
                ssh_pubkey_path=os.environ.get("GITSNIP_GIT_SSH_PUBKEY"),
                ssh_passphrase=os.environ.get("GITSNIP_GIT_SSH_PASSPHRASE"),
            ),
        )
