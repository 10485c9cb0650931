"""commits command: print the most recent commits of a repository."""

from __future__ import annotations

import click
from rich.console import Console

from commitlens_cli.views import commit_table
from commitlens_core.errors import InvalidReference, RepositoryError
from commitlens_core.gh.commits import parse_reference

console = Console()


@click.command("commits")
@click.argument("url")
@click.pass_context
def commits_cmd(ctx, url: str):
    """List the latest commits of the public GitHub repository at URL.

    Only the first page (15 commits, most recent first) is shown.
    """
    from commitlens_cli.cli import build_repo_client

    reference = parse_reference(url)
    if reference is None:
        raise click.UsageError(str(InvalidReference(url)))

    client = build_repo_client(ctx.obj["config"])
    try:
        changesets = client.list_changesets(reference.owner, reference.name)
    except RepositoryError as e:
        raise click.ClickException(f"Failed to import repository: {e}")

    if not changesets:
        console.print("[yellow]No commits found.[/yellow]")
        return

    table = commit_table(changesets)
    table.title = f"Commits in {reference.full_name}"
    console.print(table)
