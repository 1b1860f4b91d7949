"""
Unit Tests for AIChatService

Tests client configuration from the environment and forwarding of chat
completions with the OpenAI client mocked out.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from services.ai_chat_service import DEFAULT_BASE_URL, DEFAULT_MODEL, AIChatService


@pytest.fixture
def mock_openai():
    """Mock the AsyncOpenAI client class."""
    with patch('services.ai_chat_service.AsyncOpenAI') as mock:
        yield mock


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("AI_API_KEY", "test-key")
    monkeypatch.delenv("AI_MODEL", raising=False)
    monkeypatch.delenv("AI_BASE_URL", raising=False)
    monkeypatch.delenv("AI_TIMEOUT_SECONDS", raising=False)
    return "test-key"


class TestConfiguration:
    """Tests for environment-driven configuration."""

    def test_missing_key_raises(self, monkeypatch, mock_openai):
        monkeypatch.delenv("AI_API_KEY", raising=False)

        with pytest.raises(ValueError, match="AI_API_KEY"):
            AIChatService()
        mock_openai.assert_not_called()

    def test_defaults(self, api_key, mock_openai):
        service = AIChatService()

        assert service.model == DEFAULT_MODEL
        assert service.base_url == DEFAULT_BASE_URL
        mock_openai.assert_called_once_with(
            api_key="test-key",
            base_url=DEFAULT_BASE_URL,
            default_headers={"x-api-key": "test-key"},
            timeout=60.0
        )

    def test_environment_overrides(self, api_key, mock_openai, monkeypatch):
        monkeypatch.setenv("AI_MODEL", "qwen-3-max")
        monkeypatch.setenv("AI_BASE_URL", "http://localhost:9000/v1")
        monkeypatch.setenv("AI_TIMEOUT_SECONDS", "5")

        service = AIChatService()

        assert service.model == "qwen-3-max"
        assert service.base_url == "http://localhost:9000/v1"
        assert mock_openai.call_args.kwargs["timeout"] == 5.0

    def test_is_configured(self, monkeypatch):
        monkeypatch.delenv("AI_API_KEY", raising=False)
        assert AIChatService.is_configured() is False

        monkeypatch.setenv("AI_API_KEY", "k")
        assert AIChatService.is_configured() is True


class TestComplete:
    """Tests for forwarding chat completions."""

    @pytest.mark.asyncio
    async def test_complete_returns_dict(self, api_key, mock_openai):
        completion = MagicMock()
        completion.model_dump.return_value = {
            "id": "chatcmpl-1",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hi"}}],
        }
        client = mock_openai.return_value
        client.chat.completions.create = AsyncMock(return_value=completion)

        messages = [{"role": "user", "content": "Hello"}]
        result = await AIChatService().complete(messages)

        assert result["choices"][0]["message"]["content"] == "Hi"
        client.chat.completions.create.assert_awaited_once_with(
            model=DEFAULT_MODEL,
            messages=messages
        )
        completion.model_dump.assert_called_once_with(exclude_unset=True)

    @pytest.mark.asyncio
    async def test_complete_reraises_errors(self, api_key, mock_openai):
        client = mock_openai.return_value
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(RuntimeError, match="connection reset"):
            await AIChatService().complete([{"role": "user", "content": "Hello"}])
