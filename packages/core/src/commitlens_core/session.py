"""Session controller: repository import, commit selection, diff caching and review.

``ReviewSession`` owns a ``SessionState`` and is the only thing that mutates
it. The presentation layer reads the state and forwards user intents
(import, select, retry, dismiss) back to the controller; an optional
``on_change`` callback fires after every transition so a view can redraw.

Network calls are the only suspension points. Every selection bumps a
generation counter and a detail/review response is committed only if its
generation is still current, so a late answer for an earlier selection can
never overwrite the state of a newer one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from commitlens_core.cache import DiffCache
from commitlens_core.config import API_KEY_ENV_VARS, PROVIDERS, api_key_for
from commitlens_core.errors import ConfigError, InvalidReference, RepositoryError, ReviewUnavailable
from commitlens_core.gh.commits import parse_reference
from commitlens_core.models import Changeset, DiffResult, RepositoryReference
from commitlens_core.providers.anthropic import AnthropicReviewer
from commitlens_core.providers.gemini import GeminiReviewer
from commitlens_core.providers.openai import OpenAIReviewer

logger = logging.getLogger(__name__)

NO_REPOSITORY_MESSAGE = "Cannot fetch commit details: no repository is loaded."
REVIEW_FAILED_MESSAGE = "Failed to get AI review. Please check your API key and try again."

# Conceptual phases reported by SessionState.phase
NO_REPOSITORY = "no_repository"
IMPORTING = "importing"
IMPORT_FAILED = "import_failed"
NO_SELECTION = "no_selection"
LOADING_DIFF = "loading_diff"
REVIEWING = "reviewing"
REVIEW_READY = "review_ready"
REVIEW_FAILED = "review_failed"
SELECTED = "selected"


def get_reviewer(config: dict):
    provider = config.get("provider")
    if provider not in PROVIDERS:
        raise ValueError(f"Unknown provider: {provider!r}. Choose one of {', '.join(PROVIDERS)}.")
    api_key = api_key_for(config)
    if not api_key:
        raise ConfigError(f"{API_KEY_ENV_VARS[provider]} environment variable is not set.")
    model = config.get("model")
    if provider == "gemini":
        return GeminiReviewer(api_key=api_key, model=model)
    if provider == "openai":
        return OpenAIReviewer(api_key=api_key, model=model)
    return AnthropicReviewer(api_key=api_key, model=model)


@dataclass
class SessionState:
    reference: RepositoryReference | None = None
    changesets: list[Changeset] = field(default_factory=list)
    selected: Changeset | None = None
    diff: DiffResult | None = None
    review: str | None = None
    import_error: str | None = None
    review_error: str | None = None  # also carries detail-fetch failures for the selection
    is_importing: bool = False
    is_diff_loading: bool = False
    is_reviewing: bool = False
    import_prompt_open: bool = False

    @property
    def phase(self) -> str:
        if self.is_importing:
            return IMPORTING
        if self.import_error:
            return IMPORT_FAILED
        if self.reference is None:
            return NO_REPOSITORY
        if self.selected is None:
            return NO_SELECTION
        if self.is_diff_loading:
            return LOADING_DIFF
        if self.is_reviewing:
            return REVIEWING
        if self.review_error:
            return REVIEW_FAILED
        if self.review is not None:
            return REVIEW_READY
        return SELECTED


class ReviewSession:
    def __init__(
        self,
        repo_client,
        reviewer,
        state: SessionState | None = None,
        cache: DiffCache | None = None,
        on_change: Callable[[SessionState], None] | None = None,
        auto_select: bool = True,
    ):
        self._repo = repo_client
        self._reviewer = reviewer
        self.state = state if state is not None else SessionState(import_prompt_open=True)
        self.cache = cache if cache is not None else DiffCache()
        self._on_change = on_change
        self._auto_select = auto_select
        self._generation = 0
        self._import_generation = 0

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)

    # ------------------------------------------------------------------ #
    # Import                                                               #
    # ------------------------------------------------------------------ #

    def import_repository(self, url: str) -> bool:
        """Replace the current session with the repository at ``url``.

        Returns True when the commit list was loaded. On failure the error
        is left on ``state.import_error`` and the import prompt stays open.
        """
        s = self.state
        self._import_generation += 1
        import_generation = self._import_generation
        self._reset_session()
        s.is_importing = True
        self._notify()

        reference = parse_reference(url)
        if reference is None:
            s.import_error = str(InvalidReference(url))
            s.is_importing = False
            self._notify()
            return False

        s.reference = reference
        try:
            changesets = self._repo.list_changesets(reference.owner, reference.name)
        except RepositoryError as e:
            if import_generation != self._import_generation:
                return False
            logger.warning("Import of %s failed: %s", reference.full_name, e)
            s.reference = None
            s.import_error = f"Failed to import repository: {e}"
            s.is_importing = False
            self._notify()
            return False

        if import_generation != self._import_generation:
            logger.debug("Dropping stale commit list for %s", reference.full_name)
            return False

        logger.info("Imported %d commit(s) from %s", len(changesets), reference.full_name)
        s.changesets = list(changesets)
        s.is_importing = False
        s.import_prompt_open = False
        self._notify()
        self._sync_selection()
        return True

    def _reset_session(self) -> None:
        s = self.state
        self._generation += 1
        self.cache.clear()
        s.reference = None
        s.changesets = []
        s.selected = None
        s.diff = None
        s.review = None
        s.import_error = None
        s.review_error = None
        s.is_diff_loading = False
        s.is_reviewing = False

    def _sync_selection(self) -> None:
        """Select the most recent commit when nothing is selected; clear selection when the list is empty."""
        s = self.state
        if s.changesets and s.selected is None and self._auto_select:
            self.select_changeset(s.changesets[0])
        elif not s.changesets:
            s.selected = None
            s.diff = None

    # ------------------------------------------------------------------ #
    # Selection                                                            #
    # ------------------------------------------------------------------ #

    def select_changeset(self, changeset: Changeset) -> None:
        s = self.state
        self._generation += 1
        generation = self._generation

        s.selected = changeset
        s.review = None
        s.review_error = None
        s.diff = None
        s.is_reviewing = False
        s.is_diff_loading = False

        cached = self.cache.get(changeset.id)
        if cached is not None:
            logger.debug("Diff cache hit for %s", changeset.short_id)
            self._show_diff(cached)
            return

        reference = s.reference
        if reference is None:
            s.review_error = NO_REPOSITORY_MESSAGE
            self._notify()
            return

        s.is_diff_loading = True
        self._notify()

        try:
            result = self._repo.fetch_changeset_detail(reference.owner, reference.name, changeset.id)
        except RepositoryError as e:
            if generation != self._generation:
                return
            logger.warning("Fetching %s failed: %s", changeset.short_id, e)
            s.is_diff_loading = False
            s.review_error = f"Failed to fetch commit details: {e}"
            self._notify()
            return

        if result is None:
            result = DiffResult.no_changes()
        # A late response is still the right diff for its commit, as long as
        # the repository has not been replaced in the meantime.
        if s.reference == reference:
            self.cache.put(changeset.id, result)

        if generation != self._generation:
            logger.debug("Dropping stale diff for %s", changeset.short_id)
            return

        s.is_diff_loading = False
        self._show_diff(result)

    def _show_diff(self, diff: DiffResult) -> None:
        self.state.diff = diff
        self._notify()
        if diff.is_reviewable:
            self.trigger_review()

    # ------------------------------------------------------------------ #
    # Review                                                               #
    # ------------------------------------------------------------------ #

    def trigger_review(self) -> bool:
        """Review the current diff. Sentinel diffs are never reviewed.

        Returns True when a review text was stored.
        """
        s = self.state
        diff = s.diff
        if diff is None or not diff.is_reviewable:
            return False

        generation = self._generation
        s.review = None
        s.review_error = None
        s.is_reviewing = True
        self._notify()

        try:
            review = self._reviewer.review_diff(diff.review_input())
        except ReviewUnavailable:
            if generation != self._generation:
                return False
            s.is_reviewing = False
            s.review_error = REVIEW_FAILED_MESSAGE
            self._notify()
            return False

        if generation != self._generation:
            logger.debug("Dropping stale review for %s", diff.file_name)
            return False

        s.is_reviewing = False
        s.review = review
        self._notify()
        return True

    def retry_review(self) -> bool:
        """Run the review again for the current diff without refetching it."""
        if self.state.is_reviewing:
            return False
        return self.trigger_review()

    # ------------------------------------------------------------------ #
    # Import prompt                                                        #
    # ------------------------------------------------------------------ #

    def open_import_prompt(self) -> None:
        self.state.import_prompt_open = True
        self._notify()

    def dismiss_import_prompt(self) -> None:
        # The prompt cannot be dismissed while an import is running.
        if self.state.is_importing:
            return
        self.state.import_prompt_open = False
        self._notify()

    def acknowledge_import_error(self) -> None:
        """Clear the import error and reopen the prompt ("Try Again")."""
        self.state.import_error = None
        self.state.import_prompt_open = True
        self._notify()
