"""pygit2 remote access adapter."""

import tempfile
from pathlib import Path
from urllib.parse import urlparse

import pygit2

from ..core.config import GitCredentials
from ..core.errors import TransportError
from ..ports import LoggerPort, RemoteRefs

FETCH_REF = "refs/heads/gitsnip"
SCRATCH_PREFIX = "gitsnip-ls-"


class SnippetRemoteCallbacks(pygit2.RemoteCallbacks):
    """Remote callbacks that negotiate credentials and report progress."""

    def __init__(self, credentials: GitCredentials, logger: LoggerPort) -> None:
        super().__init__()
        self._spec = credentials
        self._logger = logger

    def credentials(
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: pygit2.enums.CredentialType,
    ) -> pygit2.Username | pygit2.UserPass | pygit2.Keypair | pygit2.KeypairFromAgent:
        """Return credentials based on the allowed types.

        Raises:
            pygit2.GitError: If no supported credential type is available.
        """
        username = username_from_url or self._spec.username or _username_from_url(url) or "git"
        if allowed_types & pygit2.enums.CredentialType.USERNAME:
            return pygit2.Username(username)
        if allowed_types & pygit2.enums.CredentialType.SSH_KEY:
            if self._spec.ssh_key_path and self._spec.ssh_pubkey_path:
                return pygit2.Keypair(
                    username,
                    self._spec.ssh_pubkey_path,
                    self._spec.ssh_key_path,
                    self._spec.ssh_passphrase or "",
                )
            return pygit2.KeypairFromAgent(username)
        if (
            allowed_types & pygit2.enums.CredentialType.USERPASS_PLAINTEXT
            and self._spec.username
            and self._spec.password
        ):
            return pygit2.UserPass(self._spec.username, self._spec.password)
        raise pygit2.GitError("No supported credentials available for remote")

    def transfer_progress(self, stats: pygit2.remotes.TransferProgress) -> None:
        total = stats.total_objects
        percent = (stats.received_objects / total * 100.0) if total else 100.0
        self._logger.debug(
            "Fetching objects",
            received=stats.received_objects,
            total=total,
            percent=round(percent, 1),
        )


class Pygit2RemoteAdapter:
    """pygit2 implementation of RemotePort."""

    def __init__(self, logger: LoggerPort, credentials: GitCredentials | None = None):
        self.logger = logger
        self.credentials = credentials or GitCredentials()

    def callbacks(self) -> SnippetRemoteCallbacks:
        return SnippetRemoteCallbacks(self.credentials, self.logger)

    def list_refs(self, url: str) -> RemoteRefs:
        """Read the remote's reference advertisement.

        An anonymous remote needs a repository to hang off, so a scratch one
        is created and discarded.
        """
        with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as scratch:
            try:
                repo = pygit2.init_repository(scratch, bare=True)
                remote = repo.remotes.create_anonymous(url)
                heads = remote.list_heads(callbacks=self.callbacks())
            except (pygit2.GitError, KeyError, ValueError) as e:
                raise TransportError(str(e)) from e

        refs: dict[str, str] = {}
        head_target = None
        for head in heads:
            refs[head.name] = str(head.oid)
            if head.name == "HEAD" and head.symref_target:
                head_target = head.symref_target
        self.logger.debug("Listed remote references", url=url, count=len(refs))
        return RemoteRefs(refs=refs, head_target=head_target)

    def checkout_commit(self, url: str, commit: str, workdir: Path, depth: int = 1) -> None:
        """Fetch one commit into an empty repository at workdir and check it out."""
        refspec = f"+{commit}:{FETCH_REF}"
        self.logger.debug("Fetching refspec", refspec=refspec, depth=depth)
        try:
            repo = pygit2.init_repository(str(workdir))
            remote = repo.remotes.create_anonymous(url)
            try:
                remote.fetch([refspec], callbacks=self.callbacks(), depth=depth)
            except pygit2.GitError as e:
                if depth and "shallow" in str(e):
                    raise TransportError(
                        f"{e} (set GITSNIP_FETCH_DEPTH=0 to fetch full history from {url})"
                    ) from e
                raise

            target = peel_commit(repo, commit)
            repo.checkout_tree(target.tree, strategy=pygit2.enums.CheckoutStrategy.FORCE)
            repo.set_head(target.id)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise TransportError(str(e)) from e


def peel_commit(repo: pygit2.Repository, commit: str) -> pygit2.Commit:
    """Look commit up in repo and peel it to a commit object.

    Raises:
        TransportError: If the object is missing or does not peel to a commit.
    """
    obj = repo.get(commit)
    if obj is None:
        raise TransportError(f"Commit {commit} not found after fetch")
    try:
        return obj.peel(pygit2.Commit)
    except (pygit2.GitError, KeyError, ValueError, TypeError) as e:
        raise TransportError(f"Object {commit} is a {obj.type_str}, not a commit") from e


def _username_from_url(url: str) -> str | None:
    parsed = urlparse(url)
    if parsed.username:
        return parsed.username
    if "@" in url and ":" in url:
        user_host = url.split(":", 1)[0]
        return user_host.split("@")[0] or None
    return None
