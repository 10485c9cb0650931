"""browse command: the interactive viewer."""

from __future__ import annotations

import click
from rich.console import Console

from commitlens_cli.progress import ProgressReviewer
from commitlens_cli.views import commit_table, error_panel, render_session, welcome_panel
from commitlens_core.session import ReviewSession, SessionState

console = Console()

_HELP = (
    "[dim]Enter a commit number to select it, (l)ist commits, (i)mport another repository, "
    "(r)etry review, (q)uit.[/dim]"
)


def _announce(state: SessionState) -> None:
    """on_change hook: report the loading states as they begin."""
    if state.is_importing:
        console.print("[dim]Importing from GitHub...[/dim]")
    elif state.is_diff_loading:
        console.print("[dim]Loading diff...[/dim]")


def _prompt_import(default_url: str) -> str:
    console.print("\n[bold]Import GitHub Repository[/bold]")
    console.print("[dim]Enter the URL of a public GitHub repository to begin, or q to cancel.[/dim]")
    url = click.prompt("Repository URL", default=default_url or None, show_default=True).strip()
    return "" if url.lower() == "q" else url


def _run_import(session: ReviewSession, url: str) -> None:
    if session.import_repository(url):
        state = session.state
        console.print(commit_table(state.changesets, state.selected.id if state.selected else None))
        render_session(console, state)


def _handle_command(session: ReviewSession, command: str) -> bool:
    """Apply one command typed at the prompt. Returns False to quit."""
    state = session.state
    command = command.strip().lower()

    if command in ("q", "quit", "exit"):
        return False
    if command in ("i", "import"):
        session.open_import_prompt()
        return True
    if command in ("l", "list"):
        console.print(commit_table(state.changesets, state.selected.id if state.selected else None))
        return True
    if command in ("r", "retry"):
        if session.retry_review():
            render_session(console, state)
        else:
            console.print("[yellow]Nothing to review for this commit.[/yellow]")
        return True
    if command.isdigit():
        index = int(command)
        if 1 <= index <= len(state.changesets):
            session.select_changeset(state.changesets[index - 1])
            render_session(console, state)
        else:
            console.print(f"[yellow]Choose a commit between 1 and {len(state.changesets)}.[/yellow]")
        return True

    console.print(_HELP)
    return True


@click.command("browse")
@click.argument("url", required=False)
@click.pass_context
def browse_cmd(ctx, url: str | None):
    """Browse commits of a public GitHub repository with AI reviews.

    Imports URL (or asks for one), shows the 15 most recent commits and
    reviews the selected commit's diff.
    """
    from commitlens_cli.cli import build_repo_client, build_reviewer

    config = ctx.obj["config"]
    session = ReviewSession(
        build_repo_client(config),
        ProgressReviewer(build_reviewer(config), console),
        on_change=_announce,
    )
    state = session.state

    if url:
        _run_import(session, url)
    else:
        console.print(welcome_panel())

    while True:
        if state.import_error:
            console.print(error_panel(state.import_error, title="Import Failed"))
            if not click.confirm("Try again?", default=True):
                return
            session.acknowledge_import_error()

        if state.import_prompt_open:
            repo_url = _prompt_import(config.get("default_repo_url") or "")
            if not repo_url:
                session.dismiss_import_prompt()
                if state.reference is None:
                    return
                continue
            _run_import(session, repo_url)
            continue

        if not _handle_command(session, click.prompt("commitlens", default="q", show_default=False)):
            return
