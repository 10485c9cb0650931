from __future__ import annotations

from dataclasses import dataclass

ADDITION = "addition"
DELETION = "deletion"
HUNK = "hunk"
CONTEXT = "context"


@dataclass(frozen=True)
class DiffLine:
    kind: str  # addition | deletion | hunk | context
    prefix: str  # gutter marker: "+", "-", " " or "" for hunk headers
    content: str


def classify_line(line: str) -> DiffLine:
    """Classify one unified-diff line by its leading character.

    Hunk headers are kept verbatim. Context lines lose their first
    character, which is the single leading space of the unified format.
    """
    if line.startswith("+"):
        return DiffLine(ADDITION, "+", line[1:])
    if line.startswith("-"):
        return DiffLine(DELETION, "-", line[1:])
    if line.startswith("@@"):
        return DiffLine(HUNK, "", line)
    return DiffLine(CONTEXT, " ", line[1:])


def split_patch(patch: str | None) -> list[DiffLine]:
    if not patch:
        return []
    # Only surrounding newlines are dropped; a leading space is a context marker.
    trimmed = patch.strip("\n")
    if not trimmed.strip():
        return []
    return [classify_line(line) for line in trimmed.split("\n")]
