"""review command: review a single commit and print the result."""

from __future__ import annotations

import click
from rich.console import Console

from commitlens_cli.progress import ProgressReviewer
from commitlens_cli.views import selection_view
from commitlens_core.models import Changeset
from commitlens_core.session import ReviewSession
from commitlens_core.utils.markdown import render_html

console = Console()
err_console = Console(stderr=True)


def _resolve_changeset(changesets: list[Changeset], sha: str) -> Changeset:
    """Find ``sha`` (full or prefix) among the listed commits.

    Older commits are not in the list; they get a bare Changeset so the
    detail endpoint can still be asked for them.
    """
    for c in changesets:
        if c.id.startswith(sha):
            return c
    return Changeset(id=sha, summary=f"Commit {sha[:7]}", author_name="unknown author", date="")


@click.command("review")
@click.argument("url")
@click.option("--sha", default=None, help="Commit SHA to review. Defaults to the most recent commit.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "markdown", "html"]),
    default="text",
    show_default=True,
    help="text: diff and review panels; markdown: raw review; html: review rendered to HTML.",
)
@click.pass_context
def review_cmd(ctx, url: str, sha: str | None, output_format: str):
    """Review one commit of the public GitHub repository at URL.

    \b
    Required environment variables (depending on --provider):
      GEMINI_API_KEY       Gemini (default)
      OPENAI_API_KEY       OpenAI
      ANTHROPIC_API_KEY    Anthropic
    """
    from commitlens_cli.cli import build_repo_client, build_reviewer

    config = ctx.obj["config"]
    reviewer = ProgressReviewer(build_reviewer(config), err_console)
    session = ReviewSession(build_repo_client(config), reviewer, auto_select=sha is None)
    state = session.state

    err_console.print("[dim]Importing from GitHub...[/dim]")
    if not session.import_repository(url):
        raise click.ClickException(state.import_error or "Import failed.")
    if not state.changesets and sha is None:
        raise click.ClickException("No commits found.")

    if sha is not None:
        session.select_changeset(_resolve_changeset(state.changesets, sha))

    if state.review_error:
        if output_format == "text":
            console.print(selection_view(state))
        raise click.ClickException(state.review_error)

    if output_format == "text":
        console.print(selection_view(state))
        return

    if state.review is None:
        # Sentinel diff: nothing was sent for review.
        err_console.print(f"[yellow]{state.diff.patch if state.diff else 'No changes to review.'}[/yellow]")
        return

    if output_format == "html":
        click.echo(render_html(state.review))
    else:
        click.echo(state.review)
