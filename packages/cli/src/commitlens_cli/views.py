"""Rich renderables for the session: commit list, diff panel, review panel.

Views only read state. Nothing here talks to GitHub or the review service.
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from commitlens_core.models import Changeset, DiffResult
from commitlens_core.session import SessionState
from commitlens_core.utils.diff import ADDITION, DELETION, HUNK, split_patch
from commitlens_core.utils.markdown import BOLD, CODE, ITALIC, BulletList, parse_markdown

_DIFF_STYLE = {
    ADDITION: "green",
    DELETION: "red",
    HUNK: "cyan",
}

_SPAN_STYLE = {
    BOLD: "bold",
    ITALIC: "italic",
    CODE: "yellow on grey23",
}


def commit_table(changesets: list[Changeset], selected_id: str | None = None) -> Table:
    table = Table(title="Commits", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", width=3)
    table.add_column("SHA", width=8)
    table.add_column("Message", max_width=60)
    table.add_column("Author", max_width=24)
    table.add_column("Date", width=10)

    for index, c in enumerate(changesets, start=1):
        style = "reverse" if c.id == selected_id else None
        table.add_row(str(index), c.short_id, c.summary, c.author_name, c.date, style=style)
    return table


def commit_header(changeset: Changeset) -> Text:
    text = Text(changeset.summary, style="bold")
    text.append("\nAuthored by ", style="dim")
    text.append(changeset.author_name, style="blue")
    text.append(f" on {changeset.date}", style="dim")
    return text


def diff_text(diff: DiffResult) -> Text:
    lines = split_patch(diff.patch)
    if not lines:
        return Text("No changes to display.", style="dim")
    text = Text()
    for i, line in enumerate(lines):
        if i:
            text.append("\n")
        style = _DIFF_STYLE.get(line.kind, "")
        if line.kind != HUNK:
            text.append(f"{line.prefix} ", style=style or "dim")
        text.append(line.content, style=style)
    return text


def diff_panel(diff: DiffResult | None) -> Panel:
    if diff is None:
        return Panel(Text("Select a commit to see the changes.", style="dim"), title="Diff")
    return Panel(diff_text(diff), title=diff.file_name, title_align="left", border_style="grey50")


def markdown_text(markdown: str) -> Text:
    """Render the supported Markdown subset as styled terminal text."""
    text = Text()
    for i, block in enumerate(parse_markdown(markdown)):
        if i:
            text.append("\n\n")
        if isinstance(block, BulletList):
            for j, item in enumerate(block.items):
                if j:
                    text.append("\n")
                text.append("  • ")
                for span in item:
                    text.append(span.text, style=_SPAN_STYLE.get(span.style, ""))
        else:
            for span in block.spans:
                text.append(span.text, style=_SPAN_STYLE.get(span.style, ""))
    return text


def review_panel(review: str) -> Panel:
    return Panel(markdown_text(review), title="AI Review", title_align="left", border_style="magenta")


def error_panel(message: str, title: str = "Error") -> Panel:
    return Panel(Text(message, style="red"), title=title, title_align="left", border_style="red")


def welcome_panel() -> Panel:
    return Panel(
        Text(
            "Get started by importing a public GitHub repository. The assistant will analyze "
            "commits and provide expert feedback on each change."
        ),
        title="Welcome to the AI Code Review Assistant",
        border_style="blue",
    )


def selection_view(state: SessionState) -> Group:
    """Header, diff and review (or error) of the selected commit."""
    parts = []
    if state.selected is not None:
        parts.append(commit_header(state.selected))
    if not state.is_diff_loading:
        parts.append(diff_panel(state.diff))
    if state.review_error:
        parts.append(error_panel(state.review_error))
    elif state.review is not None:
        parts.append(review_panel(state.review))
    return Group(*parts)


def render_session(console: Console, state: SessionState) -> None:
    if state.import_error:
        console.print(error_panel(state.import_error, title="Import Failed"))
        return
    if state.reference is None:
        console.print(welcome_panel())
        return
    if state.selected is None:
        console.print("[yellow]No commits found.[/yellow]")
        return
    console.print(selection_view(state))
