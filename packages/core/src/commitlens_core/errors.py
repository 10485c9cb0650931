"""Error taxonomy.

Every remote failure is mapped to one of these before it reaches the
session controller, which turns it into a user-visible message. The
message of each exception is already phrased for the end user.
"""

from __future__ import annotations


class CommitLensError(Exception):
    """Base class for all commitlens errors."""


class ConfigError(CommitLensError):
    """Missing or invalid configuration (e.g. no API key for the chosen provider)."""


class InvalidReference(CommitLensError):
    """The user-supplied URL does not look like a GitHub repository URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("Invalid GitHub repository URL. Please use a format like 'https://github.com/owner/repo'.")


class RepositoryError(CommitLensError):
    """A request to the GitHub API failed."""

    status: int | None = None


class NotFound(RepositoryError):
    status = 404

    def __init__(self):
        super().__init__("Repository not found. Please check the URL.")


class RateLimited(RepositoryError):
    status = 403

    def __init__(self, remote_message: str = ""):
        self.remote_message = remote_message
        super().__init__(f"API rate limit exceeded. Please wait and try again. Message: {remote_message}")


class RemoteError(RepositoryError):
    """Any other failed response. ``status`` is None when no response arrived at all."""

    def __init__(self, status: int | None = None):
        self.status = status
        if status is None:
            super().__init__("Could not reach the GitHub API.")
        else:
            super().__init__(f"GitHub API returned status {status}")


class ReviewUnavailable(CommitLensError):
    """The review service could not produce a review.

    The underlying cause is logged where it happens and kept on
    ``__cause__``, never in the message.
    """

    def __init__(self):
        super().__init__("Failed to communicate with the AI code review agent.")
