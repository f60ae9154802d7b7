"""Remote access port interface."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

PEELED_SUFFIX = "^{}"


@dataclass(frozen=True)
class RemoteRefs:
    """Reference advertisement of a remote repository."""

    refs: dict[str, str] = field(default_factory=dict)
    head_target: str | None = None

    def get(self, name: str) -> str | None:
        """Get the advertised oid of a full ref name."""
        return self.refs.get(name)

    def peeled(self, name: str) -> str | None:
        """Get the peeled oid of a ref, if the remote advertised one."""
        return self.refs.get(f"{name}{PEELED_SUFFIX}")


class RemotePort(Protocol):
    """Port for talking to a remote git server."""

    def list_refs(self, url: str) -> RemoteRefs:
        """List advertised references without transferring objects."""
        ...

    def checkout_commit(self, url: str, commit: str, workdir: Path, depth: int = 1) -> None:
        """Fetch a single commit into workdir and check its tree out."""
        ...
