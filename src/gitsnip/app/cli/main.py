"""CLI main entry point."""

import json
import sys
from collections.abc import Callable
from pathlib import Path

import click

from ...adapters import (
    FsSnippetStoreAdapter,
    Pygit2RemoteAdapter,
    Sha256Adapter,
    StdLoggerAdapter,
    UtcClockAdapter,
    create_metrics,
)
from ...core import GitSnipError, Selector, SnippetRequest, SnippetService
from ...core.config import GitSnipConfig


def create_service(config: GitSnipConfig) -> SnippetService:
    """Create service with wired adapters."""
    logger = StdLoggerAdapter(level=config.log_level)
    hasher = Sha256Adapter()
    store = FsSnippetStoreAdapter(config.snippets_dir, logger, extension=config.extension)
    remote = Pygit2RemoteAdapter(logger, credentials=config.credentials)
    clock = UtcClockAdapter()
    metrics = create_metrics(config.metrics_type, logger)

    return SnippetService(
        remote=remote,
        store=store,
        hasher=hasher,
        clock=clock,
        logger=logger,
        metrics=metrics,
        workspace_dir=config.workspace_dir,
        fetch_depth=config.fetch_depth,
        keep_workspace=config.keep_workspace,
    )


def fail(error: GitSnipError) -> None:
    click.echo(f"Error ({error.stage}): {error}", err=True)
    sys.exit(1)


def selector_options(func: Callable[..., None]) -> Callable[..., None]:
    """Attach the repository, selector and path options to a command."""
    func = click.option("--path", "path", required=True, help="File path inside the repository")(
        func
    )
    func = click.option("--commit-hash", help="Full commit hash to read the file at")(func)
    func = click.option("--tag", help="Tag to read the file at")(func)
    func = click.option("--branch", help="Branch to read the file at (default: remote HEAD)")(func)
    func = click.option("--git", "git_url", required=True, help="Repository URL")(func)
    return func


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--snippets-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Snippet store directory (default: .snippets)",
)
@click.option("--extension", help="Extension appended to snippet file names")
@click.pass_context
def cli(ctx: click.Context, debug: bool, snippets_dir: Path | None, extension: str | None) -> None:
    """gitsnip - Cache single files from remote git repositories."""
    config = GitSnipConfig.from_env(
        log_level="DEBUG" if debug else None,
        snippets_dir=snippets_dir,
        extension=extension,
    )
    ctx.obj = create_service(config)


@cli.command()
@selector_options
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary")
@click.pass_obj
def fetch(
    service: SnippetService,
    git_url: str,
    branch: str | None,
    tag: str | None,
    commit_hash: str | None,
    path: str,
    as_json: bool,
) -> None:
    """Fetch a file at a reference into the snippet store."""
    try:
        request = SnippetRequest(
            git_url=git_url,
            path=path,
            selector=Selector.from_options(branch=branch, tag=tag, commit_hash=commit_hash),
        )
        summary = service.fetch(request)
    except GitSnipError as e:
        fail(e)
        return

    if as_json:
        output = {
            "operation": summary.operation,
            "path": summary.path,
            "commit": summary.commit,
            "prefix": summary.prefix,
            "selector": {"kind": summary.selector_kind, "value": summary.selector_value},
            "size": summary.size,
            "cache_hit": summary.cache_hit,
        }
        if summary.previous_commit:
            output["previous_commit"] = summary.previous_commit
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(summary.path)


@cli.command()
@selector_options
@click.pass_obj
def key(
    service: SnippetService,
    git_url: str,
    branch: str | None,
    tag: str | None,
    commit_hash: str | None,
    path: str,
) -> None:
    """Print the cache-key prefix of a request.

    Without a selector the remote is asked for its default branch.
    """
    try:
        request = SnippetRequest(
            git_url=git_url,
            path=path,
            selector=Selector.from_options(branch=branch, tag=tag, commit_hash=commit_hash),
        )
        selector = request.selector
        if selector.is_default_branch:
            resolved = service.resolve(git_url, selector)
            kind, value = resolved.kind.value, resolved.value
        else:
            kind, value = selector.kind.value, selector.value or ""
    except GitSnipError as e:
        fail(e)
        return

    click.echo(service.keys.derive(git_url, kind, value, path))


@cli.command(name="list")
@click.pass_obj
def list_snippets(service: SnippetService) -> None:
    """List cached snippets."""
    try:
        records = service.store.list_records()
    except GitSnipError as e:
        fail(e)
        return

    for record in records:
        click.echo(f"{record.prefix}\t{record.commit}\t{record.size}")


def main() -> None:
    """Main entry point."""
    cli()
