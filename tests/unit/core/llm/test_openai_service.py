"""
Unit tests for the OpenAI-compatible generative model client.

Tests verify:
- generate_text sends system + user messages with the right settings
- Transient errors are retried, other errors are not
- Empty completions raise instead of returning None
"""
import pytest
from unittest.mock import MagicMock, patch

import httpx
import openai

from core.llm.openai_service import (
    GEMINI_OPENAI_BASE_URL,
    OpenAIService,
    _parse_reset_duration,
)


def completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", GEMINI_OPENAI_BASE_URL))


@pytest.fixture
def service():
    svc = OpenAIService(
        api_key="test-key",
        model_config={'default_model': 'gemini-2.0-flash', 'temperature': 0.2, 'max_output_tokens': 2048},
        retry_attempts=3,
    )
    svc.client = MagicMock()
    return svc


class TestGenerateText:

    def test_returns_message_content(self, service):
        service.client.chat.completions.create.return_value = completion('{"ats_score": 70}')

        text = service.generate_text("prompt", model="gemini-pro", temperature=0.1,
                                     max_output_tokens=100, system_prompt="be strict")

        assert text == '{"ats_score": 70}'
        kwargs = service.client.chat.completions.create.call_args.kwargs
        assert kwargs['model'] == "gemini-pro"
        assert kwargs['temperature'] == 0.1
        assert kwargs['max_tokens'] == 100
        assert kwargs['messages'] == [
            {"role": "system", "content": "be strict"},
            {"role": "user", "content": "prompt"},
        ]

    def test_defaults_from_model_config(self, service):
        service.client.chat.completions.create.return_value = completion("ok")

        service.generate_text("prompt")

        kwargs = service.client.chat.completions.create.call_args.kwargs
        assert kwargs['model'] == "gemini-2.0-flash"
        assert kwargs['temperature'] == 0.2
        assert kwargs['max_tokens'] == 2048
        assert kwargs['messages'] == [{"role": "user", "content": "prompt"}]

    def test_zero_temperature_is_kept(self, service):
        service.client.chat.completions.create.return_value = completion("ok")
        service.generate_text("prompt", temperature=0.0)
        assert service.client.chat.completions.create.call_args.kwargs['temperature'] == 0.0

    def test_empty_completion_raises(self, service):
        service.client.chat.completions.create.return_value = completion(None)
        with pytest.raises(ValueError):
            service.generate_text("prompt")


class TestRetries:

    @patch("time.sleep")
    def test_transient_error_retried(self, mock_sleep, service):
        service.client.chat.completions.create.side_effect = [connection_error(), completion("ok")]

        assert service.generate_text("prompt") == "ok"
        assert service.client.chat.completions.create.call_count == 2

    @patch("time.sleep")
    def test_gives_up_after_configured_attempts(self, mock_sleep, service):
        service.client.chat.completions.create.side_effect = connection_error()

        with pytest.raises(openai.APIConnectionError):
            service.generate_text("prompt")
        assert service.client.chat.completions.create.call_count == 3

    def test_non_transient_error_not_retried(self, service):
        service.client.chat.completions.create.side_effect = KeyError("bad request shape")

        with pytest.raises(KeyError):
            service.generate_text("prompt")
        assert service.client.chat.completions.create.call_count == 1


class TestClientSetup:

    def test_gemini_endpoint_by_default(self):
        svc = OpenAIService(api_key="test-key")
        assert str(svc.client.base_url) == GEMINI_OPENAI_BASE_URL

    def test_custom_endpoint(self):
        svc = OpenAIService(api_key="test-key", base_url="http://localhost:11434/v1/")
        assert str(svc.client.base_url) == "http://localhost:11434/v1/"

    @pytest.mark.parametrize("value,seconds", [("1s", 1.0), ("500ms", 0.5), ("1m30s", 90.0), ("", 0.0)])
    def test_parse_reset_duration(self, value, seconds):
        assert _parse_reset_duration(value) == seconds
