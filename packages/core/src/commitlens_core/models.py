"""Data models shared by the repository client, the review client and the session.

All models are frozen: a Changeset or DiffResult never changes once created,
so the same instance can sit in the diff cache and in the session state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

NO_CHANGES_FILE_NAME = "No file changes"
NO_CHANGES_PATCH = "This commit might be a merge commit or have no direct code changes to display."
NO_APPLICABLE_PATCH = "No applicable code changes to display for this file (e.g., binary file or mode change)."


@dataclass(frozen=True)
class RepositoryReference:
    """Owner and name of a GitHub repository, extracted from a URL."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class Changeset:
    """One commit as shown in the commit list."""

    id: str  # full commit SHA
    summary: str  # first line of the commit message
    author_name: str
    date: str  # locale-formatted author date

    @property
    def short_id(self) -> str:
        return self.id[:7]


@dataclass(frozen=True)
class DiffResult:
    """The patch of a single file within a commit.

    Sentinel results are synthesized when GitHub has no patch text to show.
    They are displayed like any other diff but never sent for review.
    """

    file_name: str
    patch: str
    is_sentinel: bool = field(default=False, compare=False)

    @classmethod
    def no_changes(cls) -> DiffResult:
        return cls(file_name=NO_CHANGES_FILE_NAME, patch=NO_CHANGES_PATCH, is_sentinel=True)

    @classmethod
    def no_applicable_patch(cls, file_name: str) -> DiffResult:
        return cls(file_name=file_name, patch=NO_APPLICABLE_PATCH, is_sentinel=True)

    @property
    def is_reviewable(self) -> bool:
        return not self.is_sentinel and bool(self.patch)

    def review_input(self) -> str:
        """Text handed to the reviewer: the file name header followed by the patch."""
        return f"File: {self.file_name}\n{self.patch}"
