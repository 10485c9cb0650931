from __future__ import annotations

from google import genai
from google.genai import types

from commitlens_core.providers.base import BaseReviewer


class GeminiReviewer(BaseReviewer):
    """Default review backend (google-genai), keyed by GEMINI_API_KEY or GOOGLE_API_KEY."""

    MODEL = "gemini-2.5-flash"
    # Low temperature keeps reviews focused and repeatable for the same diff.
    TEMPERATURE = 0.3

    def __init__(self, api_key: str, model: str | None = None):
        super().__init__(model)
        self.client = genai.Client(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=self.TEMPERATURE,
                max_output_tokens=self.MAX_TOKENS,
            ),
        )
        return response.text
