"""Tests for AI provider implementations.

Shared behaviour (prompt construction, error translation) lives in
BaseReviewer and is tested once via a lightweight stub. Provider-specific
tests cover only the SDK client setup and _call_api.
"""

import types
from unittest.mock import MagicMock

import pytest

from commitlens_core.errors import ReviewUnavailable
from commitlens_core.providers.anthropic import AnthropicReviewer
from commitlens_core.providers.base import SYSTEM_INSTRUCTION, BaseReviewer
from commitlens_core.providers.gemini import GeminiReviewer
from commitlens_core.providers.openai import OpenAIReviewer

REVIEW = "Renames a variable.\n\n- **Positive:** clearer name."


class _StubReviewer(BaseReviewer):
    """Records every call and returns a canned response."""

    MODEL = "stub-model"

    def __init__(self, response=REVIEW, error=None):
        super().__init__()
        self.response = response
        self.error = error
        self.calls = []

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.response


# ---------------------------------------------------------------------------
# Shared behaviour, tested once through the stub, not per provider
# ---------------------------------------------------------------------------


class TestBaseReviewerPrompts:
    def test_user_prompt_embeds_diff_unmodified(self):
        diff = "File: a.py\n@@ -1 +1 @@\n-x = 1\n+x = 2"
        prompt = _StubReviewer()._build_user_prompt(diff)
        assert prompt == f"Please review the following code changes:\n\n```diff\n{diff}\n```"

    @pytest.mark.parametrize(
        "dimension",
        ["Clarity and Readability", "Best Practices", "Potential Bugs", "Performance", "Security", "Style"],
    )
    def test_system_prompt_lists_review_dimensions(self, dimension):
        assert dimension in _StubReviewer()._build_system_prompt()

    def test_system_prompt_asks_for_markdown(self):
        assert "Use Markdown for formatting." in SYSTEM_INSTRUCTION


class TestBaseReviewerReviewDiff:
    def test_returns_response_unmodified(self):
        raw = "  Looks good.\n- **Nitpick:** trailing space  \n"
        assert _StubReviewer(response=raw).review_diff("+x") == raw

    def test_single_call_with_system_and_user_prompt(self):
        reviewer = _StubReviewer()
        reviewer.review_diff("+added line")
        assert len(reviewer.calls) == 1
        system, user = reviewer.calls[0]
        assert system == SYSTEM_INSTRUCTION
        assert "+added line" in user

    def test_failure_raises_review_unavailable_without_retry(self):
        cause = RuntimeError("401 invalid api key sk-secret")
        reviewer = _StubReviewer(error=cause)

        with pytest.raises(ReviewUnavailable) as exc_info:
            reviewer.review_diff("+x")

        assert len(reviewer.calls) == 1
        assert exc_info.value.__cause__ is cause
        assert "sk-secret" not in str(exc_info.value)

    def test_failure_cause_is_logged(self, caplog):
        with pytest.raises(ReviewUnavailable):
            _StubReviewer(error=RuntimeError("quota exhausted")).review_diff("+x")
        assert "quota exhausted" in caplog.text

    @pytest.mark.parametrize("empty", ["", None])
    def test_empty_response_is_unavailable(self, empty):
        with pytest.raises(ReviewUnavailable):
            _StubReviewer(response=empty).review_diff("+x")

    def test_model_defaults_to_class_model(self):
        assert _StubReviewer().model == "stub-model"


# ---------------------------------------------------------------------------
# Provider-specific
# ---------------------------------------------------------------------------


class TestGeminiReviewer:
    def test_model_and_temperature(self):
        assert GeminiReviewer.MODEL == "gemini-2.5-flash"
        assert GeminiReviewer.TEMPERATURE == 0.3

    def test_call_api_passes_system_instruction_and_temperature(self, mocker):
        client_cls = mocker.patch("commitlens_core.providers.gemini.genai.Client")
        client_cls.return_value.models.generate_content.return_value = types.SimpleNamespace(text=REVIEW)

        reviewer = GeminiReviewer(api_key="key")
        result = reviewer.review_diff("+x")

        assert result == REVIEW
        client_cls.assert_called_once_with(api_key="key")
        kwargs = client_cls.return_value.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert "+x" in kwargs["contents"]
        assert kwargs["config"].system_instruction == SYSTEM_INSTRUCTION
        assert kwargs["config"].temperature == 0.3

    def test_model_override(self, mocker):
        mocker.patch("commitlens_core.providers.gemini.genai.Client")
        assert GeminiReviewer(api_key="key", model="gemini-2.5-pro").model == "gemini-2.5-pro"

    def test_sdk_error_becomes_review_unavailable(self, mocker):
        client_cls = mocker.patch("commitlens_core.providers.gemini.genai.Client")
        client_cls.return_value.models.generate_content.side_effect = RuntimeError("503")
        with pytest.raises(ReviewUnavailable):
            GeminiReviewer(api_key="key").review_diff("+x")


class TestOpenAIReviewer:
    def test_raises_import_error_without_sdk(self, mocker):
        mocker.patch("commitlens_core.providers.openai._OpenAI", None)
        with pytest.raises(ImportError):
            OpenAIReviewer(api_key="key")

    def test_model_is_gpt(self):
        assert "gpt" in OpenAIReviewer.MODEL

    def test_temperature_is_set(self):
        assert OpenAIReviewer.TEMPERATURE == 0.2

    def test_call_api(self, mocker):
        client_cls = MagicMock()
        client_cls.return_value.chat.completions.create.return_value = types.SimpleNamespace(
            choices=[types.SimpleNamespace(message=types.SimpleNamespace(content=REVIEW))]
        )
        mocker.patch("commitlens_core.providers.openai._OpenAI", client_cls)

        assert OpenAIReviewer(api_key="key").review_diff("+x") == REVIEW
        kwargs = client_cls.return_value.chat.completions.create.call_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_INSTRUCTION}
        assert kwargs["temperature"] == 0.2

    @pytest.mark.parametrize("choices", [[], [types.SimpleNamespace(message=types.SimpleNamespace(content=None))]])
    def test_missing_content_is_unavailable(self, mocker, choices):
        client_cls = MagicMock()
        client_cls.return_value.chat.completions.create.return_value = types.SimpleNamespace(choices=choices)
        mocker.patch("commitlens_core.providers.openai._OpenAI", client_cls)

        with pytest.raises(ReviewUnavailable):
            OpenAIReviewer(api_key="key").review_diff("+x")


class TestAnthropicReviewer:
    def test_raises_import_error_without_sdk(self, mocker):
        mocker.patch.dict("sys.modules", {"anthropic": None})
        with pytest.raises(ImportError):
            AnthropicReviewer(api_key="key")

    def test_model_is_claude(self):
        assert "claude" in AnthropicReviewer.MODEL

    def test_temperature_is_set(self):
        assert AnthropicReviewer.TEMPERATURE == 0.3
