"""Reference resolution against a remote's ref advertisement."""

from ..ports import LoggerPort, RemotePort, RemoteRefs
from .errors import ResolutionError, TransportError
from .models import ResolvedCommit, Selector, SelectorKind, normalize_commit

HEADS_PREFIX = "refs/heads/"
TAGS_PREFIX = "refs/tags/"
PREFERRED_DEFAULTS = ("main", "master")


class ReferenceResolver:
    """Resolve selectors to immutable commit ids.

    Commit hashes are trusted as given. Branches, tags and the default branch
    are resolved from a single reference listing; no objects are downloaded.
    """

    def __init__(self, remote: RemotePort, logger: LoggerPort):
        self.remote = remote
        self.logger = logger

    def resolve(self, git_url: str, selector: Selector) -> ResolvedCommit:
        """Resolve selector for the repository at git_url.

        Raises:
            ResolutionError: On transport failure, unknown refs or a malformed hash.
        """
        if selector.kind is SelectorKind.COMMIT:
            commit = normalize_commit(selector.value or "")
            self.logger.debug("Using commit hash as given", commit=commit)
            return ResolvedCommit(
                commit=commit, kind=SelectorKind.COMMIT, value=selector.value or ""
            )

        self.logger.info("Fetching remote references", url=git_url, selector=str(selector))
        try:
            refs = self.remote.list_refs(git_url)
        except TransportError as e:
            raise ResolutionError(f"Failed to list references of {git_url}: {e}", selector) from e

        if selector.kind is SelectorKind.TAG:
            commit = self._peel_tag(refs, selector)
            return ResolvedCommit(commit=commit, kind=SelectorKind.TAG, value=selector.value or "")

        branch = selector.value or self.default_branch(refs, git_url)
        commit = self._branch_tip(refs, branch, selector)
        return ResolvedCommit(commit=commit, kind=SelectorKind.BRANCH, value=branch)

    def default_branch(self, refs: RemoteRefs, git_url: str = "") -> str:
        """Work out the remote's default branch name.

        Uses the ``HEAD`` symref when advertised, otherwise the branch whose
        tip matches ``HEAD``.
        """
        target = refs.head_target
        if target:
            name = target.removeprefix(HEADS_PREFIX)
            self.logger.debug("Default branch", branch=name)
            return name

        head_oid = refs.get("HEAD")
        candidates = sorted(
            name.removeprefix(HEADS_PREFIX)
            for name, oid in refs.refs.items()
            if name.startswith(HEADS_PREFIX) and oid == head_oid
        )
        if head_oid is None or not candidates:
            raise ResolutionError(
                f"Remote {git_url} does not advertise a default branch", Selector.default_branch()
            )
        for preferred in PREFERRED_DEFAULTS:
            if preferred in candidates:
                return preferred
        return candidates[0]

    def _branch_tip(self, refs: RemoteRefs, branch: str, selector: Selector) -> str:
        oid = refs.get(f"{HEADS_PREFIX}{branch}")
        if oid is None:
            raise ResolutionError(f"Branch not found on remote: {branch}", selector)
        return oid

    def _peel_tag(self, refs: RemoteRefs, selector: Selector) -> str:
        ref_name = f"{TAGS_PREFIX}{selector.value}"
        peeled = refs.peeled(ref_name)
        if peeled is not None:
            return peeled
        oid = refs.get(ref_name)
        if oid is None:
            raise ResolutionError(f"Tag not found on remote: {selector.value}", selector)
        return oid
