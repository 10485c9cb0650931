from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from commitlens_core.providers.base import BaseReviewer


class OpenAIReviewer(BaseReviewer):
    """Chat Completions backend, selected with ``provider: openai``.

    Needs the ``openai`` extra and OPENAI_API_KEY. Same single-call contract
    as the Gemini reviewer: errors surface as ReviewUnavailable.
    """

    MODEL = "gpt-4o"
    TEMPERATURE = 0.2

    def __init__(self, api_key: str, model: str | None = None):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. "
                "Install it with: pip install 'commitlens[openai]'"
            )
        super().__init__(model)
        self.client = _OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        if not response.choices:
            return ""
        # content is None for refusals; review_diff treats "" as no review.
        return response.choices[0].message.content or ""
