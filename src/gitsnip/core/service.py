"""Core SnippetService orchestration."""

from datetime import datetime
from pathlib import Path

from ..ports import (
    ClockPort,
    HashPort,
    LoggerPort,
    MetricsPort,
    RemotePort,
    SnippetStorePort,
)
from .keys import KeyDeriver
from .materializer import Materializer
from .models import FetchSummary, ResolvedCommit, Selector, SnippetRequest
from .resolver import ReferenceResolver


class SnippetService:
    """Core service for fetching and caching snippets."""

    def __init__(
        self,
        remote: RemotePort,
        store: SnippetStorePort,
        hasher: HashPort,
        clock: ClockPort,
        logger: LoggerPort,
        metrics: MetricsPort,
        workspace_dir: Path | None = None,
        fetch_depth: int = 1,
        keep_workspace: bool = False,
    ):
        self.remote = remote
        self.store = store
        self.hasher = hasher
        self.clock = clock
        self.logger = logger
        self.metrics = metrics
        self.keys = KeyDeriver(hasher)
        self.resolver = ReferenceResolver(remote, logger)
        self.materializer = Materializer(
            remote,
            logger,
            workspace_dir=workspace_dir,
            depth=fetch_depth,
            keep_workspace=keep_workspace,
        )

    def resolve(self, git_url: str, selector: Selector) -> ResolvedCommit:
        """Resolve a selector to its current commit."""
        return self.resolver.resolve(git_url, selector)

    def key_for(self, git_url: str, resolved: ResolvedCommit, path: str) -> str:
        """Get the cache-key prefix of a resolved request."""
        prefix = self.keys.derive(git_url, resolved.kind.value, resolved.value, path)
        self.logger.debug(
            "Derived cache key",
            url_hash=self.keys.hash_url(git_url),
            selector_hash=self.keys.hash_selector(resolved.kind.value, resolved.value),
            path_hash=self.keys.hash_path(path),
            prefix=prefix,
        )
        return prefix

    def fetch(self, request: SnippetRequest) -> FetchSummary:
        """Make sure the store holds the requested file at its current commit.

        Returns the existing record when it already matches the resolved
        commit; otherwise fetches the commit and replaces the stale record.
        """
        start_time = self.clock.now()
        self.logger.info(
            "Starting fetch operation",
            url=request.git_url,
            path=request.path,
            selector=str(request.selector),
        )

        resolved = self.resolve(request.git_url, request.selector)
        self.logger.info("Found commit", commit=resolved.commit)

        prefix = self.key_for(request.git_url, resolved, request.path)

        existing = self.store.find_by_prefix(prefix)
        if existing is not None and existing.commit == resolved.commit:
            path = self.store.record_path(existing)
            self.logger.info("Existing snippet is up to date", path=str(path))
            self.metrics.increment("gitsnip.cache.hit")
            return self._finish(
                start_time,
                FetchSummary(
                    path=str(path),
                    commit=resolved.commit,
                    prefix=prefix,
                    selector_kind=resolved.kind.value,
                    selector_value=resolved.value,
                    cache_hit=True,
                    size=existing.size,
                ),
            )

        previous_commit = existing.commit if existing is not None else None
        if previous_commit:
            self.logger.info(
                "Found existing snippet with different commit",
                current=previous_commit,
                new=resolved.commit,
            )

        workspace = self.materializer.materialize(request.git_url, resolved.commit)
        try:
            content = workspace.read_file(request.path)
            self.logger.debug("Read source file", path=request.path, size=len(content))
            if existing is not None:
                self.store.remove_if_present(prefix)
            record = self.store.put(prefix, resolved.commit, content)
        finally:
            workspace.release()

        path = self.store.record_path(record)
        self.logger.info("Snippet saved", path=str(path))
        self.metrics.increment("gitsnip.cache.update" if previous_commit else "gitsnip.cache.miss")
        return self._finish(
            start_time,
            FetchSummary(
                path=str(path),
                commit=resolved.commit,
                prefix=prefix,
                selector_kind=resolved.kind.value,
                selector_value=resolved.value,
                cache_hit=False,
                size=record.size,
                previous_commit=previous_commit,
            ),
        )

    def _finish(self, start_time: datetime, summary: FetchSummary) -> FetchSummary:
        duration = (self.clock.now() - start_time).total_seconds()
        self.logger.log_operation(
            op="fetch",
            key=summary.prefix,
            commit=summary.commit,
            sizes={"file": summary.size},
            durations={"total": duration},
            cache_hit=summary.cache_hit,
        )
        self.metrics.timing("gitsnip.fetch.duration", duration)
        return summary
