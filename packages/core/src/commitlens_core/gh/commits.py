from __future__ import annotations

import logging
import re
from datetime import datetime
from itertools import islice

import requests
from github import Github, GithubException

from commitlens_core.errors import NotFound, RateLimited, RemoteError, RepositoryError
from commitlens_core.models import Changeset, DiffResult, RepositoryReference

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

# The list view shows one page of history; there is no "load more".
MAX_CHANGESETS = 15

# Owner is the first path segment; the name stops at the next "/" or "."
# so "repo.git" and "repo/tree/main" both resolve to "repo".
_REPO_URL_RE = re.compile(r"github\.com/([^/]+)/([^/.]+)")


def parse_reference(url) -> RepositoryReference | None:
    """Extract owner and name from a GitHub URL, or return None if it does not match."""
    if not isinstance(url, str):
        return None
    match = _REPO_URL_RE.search(url)
    if not match:
        return None
    return RepositoryReference(owner=match.group(1), name=match.group(2))


def format_date(value: datetime | None) -> str:
    """Render a commit date the way the list shows it: the local date only."""
    if value is None:
        return ""
    return value.astimezone().strftime("%x")


def first_line(message: str | None) -> str:
    return (message or "").split("\n", 1)[0]


def _translate(exc: GithubException) -> RepositoryError:
    if exc.status == 404:
        return NotFound()
    if exc.status == 403:
        data = exc.data if isinstance(exc.data, dict) else {}
        return RateLimited(data.get("message", ""))
    return RemoteError(exc.status)


def _to_changeset(commit) -> Changeset:
    git_commit = commit.commit
    author = git_commit.author
    return Changeset(
        id=commit.sha,
        summary=first_line(git_commit.message),
        author_name=author.name if author else "",
        date=format_date(author.date if author else None),
    )


def _to_diff(files) -> DiffResult | None:
    if not files:
        return None
    # Only the first file carrying a patch is shown.
    for f in files:
        if f.patch:
            return DiffResult(file_name=f.filename, patch=f.patch)
    return DiffResult.no_applicable_patch(files[0].filename)


class RepositoryClient:
    """Read-only access to a repository's commit history through the GitHub REST API.

    Requests are anonymous. Each public method issues exactly one HTTP
    request and raises a RepositoryError subclass on failure.
    """

    def __init__(self, base_url: str = GITHUB_API_URL, github: Github | None = None):
        # retry=None: a failed request raises at once instead of backing off
        # or sleeping until the rate limit resets.
        self._gh = github if github is not None else Github(base_url=base_url, retry=None, lazy=True)

    def _repo(self, owner: str, name: str):
        # Lazy repositories skip the GET /repos/{owner}/{name} round-trip.
        return self._gh.get_repo(f"{owner}/{name}")

    def list_changesets(self, owner: str, name: str) -> list[Changeset]:
        """Return up to MAX_CHANGESETS most recent commits, newest first."""
        try:
            commits = self._repo(owner, name).get_commits()
            return [_to_changeset(c) for c in islice(commits, MAX_CHANGESETS)]
        except GithubException as e:
            logger.debug("Listing commits of %s/%s failed: %s", owner, name, e)
            raise _translate(e) from e
        except requests.RequestException as e:
            logger.debug("Listing commits of %s/%s failed: %s", owner, name, e)
            raise RemoteError() from e

    def fetch_changeset_detail(self, owner: str, name: str, sha: str) -> DiffResult | None:
        """Return the diff of the first changed file with a patch.

        None means the commit touches no files at all (e.g. an empty merge).
        """
        try:
            files = self._repo(owner, name).get_commit(sha).files
            return _to_diff(list(files or []))
        except GithubException as e:
            logger.debug("Fetching commit %s of %s/%s failed: %s", sha, owner, name, e)
            raise _translate(e) from e
        except requests.RequestException as e:
            logger.debug("Fetching commit %s of %s/%s failed: %s", sha, owner, name, e)
            raise RemoteError() from e
