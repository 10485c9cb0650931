"""A small Markdown subset for rendering reviews.

Supported: paragraphs, "- " bullet lists, **bold**, *italic* and `inline code`.
Anything else is shown as plain text. The parser produces a list of blocks
that both the HTML renderer below and the terminal renderer consume.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field

TEXT = "text"
BOLD = "bold"
ITALIC = "italic"
CODE = "code"

# Code first so emphasis markers inside backticks stay literal.
_INLINE_RE = re.compile(r"`(?P<code>[^`]+)`|\*\*(?P<bold>.+?)\*\*|\*(?P<italic>.+?)\*")

_HTML_TAGS = {BOLD: "strong", ITALIC: "em", CODE: "code"}


@dataclass(frozen=True)
class Span:
    style: str
    text: str


@dataclass
class Paragraph:
    spans: list[Span] = field(default_factory=list)


@dataclass
class BulletList:
    items: list[list[Span]] = field(default_factory=list)


def parse_inline(text: str) -> list[Span]:
    spans: list[Span] = []
    pos = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > pos:
            spans.append(Span(TEXT, text[pos : match.start()]))
        style = match.lastgroup
        spans.append(Span(style, match.group(style)))
        pos = match.end()
    if pos < len(text):
        spans.append(Span(TEXT, text[pos:]))
    return spans


def parse_markdown(markdown: str) -> list[Paragraph | BulletList]:
    """Split ``markdown`` into paragraphs and bullet lists.

    Consecutive "- " lines belong to one list. A blank line or any
    non-list line closes the open list.
    """
    blocks: list[Paragraph | BulletList] = []
    current_list: BulletList | None = None

    for line in (markdown or "").split("\n"):
        stripped = line.strip()
        if stripped.startswith("- "):
            if current_list is None:
                current_list = BulletList()
                blocks.append(current_list)
            current_list.items.append(parse_inline(stripped[2:].strip()))
            continue
        current_list = None
        if stripped:
            blocks.append(Paragraph(parse_inline(line)))

    return blocks


def _spans_to_html(spans: list[Span]) -> str:
    parts = []
    for span in spans:
        text = html.escape(span.text, quote=False)
        tag = _HTML_TAGS.get(span.style)
        parts.append(f"<{tag}>{text}</{tag}>" if tag else text)
    return "".join(parts)


def render_html(markdown: str) -> str:
    out = []
    for block in parse_markdown(markdown):
        if isinstance(block, BulletList):
            items = "".join(f"<li>{_spans_to_html(item)}</li>" for item in block.items)
            out.append(f"<ul>{items}</ul>")
        else:
            out.append(f"<p>{_spans_to_html(block.spans)}</p>")
    return "".join(out)
