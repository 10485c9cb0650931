"""Base reviewer implementing the Template Method pattern.

All providers share the same review algorithm:
    review_diff() → _build_system_prompt() + _build_user_prompt()
                  → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

There are no retries: a failed call is terminal for that review and the
user triggers a new one by reselecting the commit or retrying explicitly.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from commitlens_core.errors import ReviewUnavailable

logger = logging.getLogger(__name__)

_MAX_TOKENS = 4096

SYSTEM_INSTRUCTION = """
You are an expert senior software engineer and a world-class code reviewer. Your task is to analyze code changes and provide a concise, constructive review.

**Review Guidelines:**
1.  **Clarity and Readability:** Is the code easy to understand? Are variable names meaningful?
2.  **Best Practices:** Does the code follow established programming principles (e.g., DRY, SOLID)?
3.  **Potential Bugs:** Are there any logical errors, edge cases missed, or race conditions?
4.  **Performance:** Are there any obvious performance bottlenecks?
5.  **Security:** Are there any potential security vulnerabilities (e.g., XSS, injection flaws)?
6.  **Style:** Does the code adhere to common style conventions?

**Output Format:**
- Use Markdown for formatting.
- Start with a brief, one-sentence summary of the changes.
- Use bullet points for specific feedback.
- Frame suggestions constructively.
- If the code is excellent, provide positive reinforcement.

Example:
"This commit refactors the data fetching logic to use async/await, which is a great improvement for readability.

-   **Suggestion:** Consider adding more specific error handling for different HTTP status codes (e.g., 404, 500).
-   **Nitpick:** The variable 'data' could be renamed to 'userData' for better clarity.
-   **Positive:** The use of type annotations is excellent and improves code safety."
"""  # noqa: E501


class BaseReviewer(ABC):
    MODEL: str = ""
    TEMPERATURE: float = 0.3
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(self, model: str | None = None):
        self.model = model or self.MODEL

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def review_diff(self, diff_text: str) -> str:
        """Return the model's Markdown review of ``diff_text``, unmodified.

        Raises ReviewUnavailable on any failure; the cause is logged here
        and chained, never shown to the user.
        """
        system = self._build_system_prompt()
        user = self._build_user_prompt(diff_text)
        try:
            text = self._call_api(system, user)
        except Exception as e:
            logger.error("%s API call failed: %s", self.__class__.__name__, e)
            raise ReviewUnavailable() from e
        if not text:
            logger.error("%s API returned an empty response", self.__class__.__name__)
            raise ReviewUnavailable()
        return text

    # ------------------------------------------------------------------ #
    # Abstract: implement in each provider                                #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        This is the only method subclasses must implement. It should raise
        on failure; review_diff handles logging and error translation.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _build_system_prompt(self) -> str:
        return SYSTEM_INSTRUCTION

    def _build_user_prompt(self, diff_text: str) -> str:
        return f"Please review the following code changes:\n\n```diff\n{diff_text}\n```"
