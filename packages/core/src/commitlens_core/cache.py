"""Per-session cache of fetched diffs, keyed by commit SHA."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commitlens_core.models import DiffResult


class DiffCache:
    """Plain key-value store with no eviction.

    The session clears it on every import, so it never holds more than one
    page of commits.
    """

    def __init__(self):
        self._entries: dict[str, DiffResult] = {}

    def get(self, changeset_id: str) -> DiffResult | None:
        return self._entries.get(changeset_id)

    def put(self, changeset_id: str, result: DiffResult) -> None:
        self._entries[changeset_id] = result

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, changeset_id: object) -> bool:
        return changeset_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
