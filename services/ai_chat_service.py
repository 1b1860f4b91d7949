"""AIChatService for forwarding chat messages to the upstream AI proxy.

The upstream service speaks the OpenAI chat-completions protocol, so the
OpenAI SDK is pointed at it with a custom base URL. The proxy authenticates
with an ``x-api-key`` header, which is sent alongside the bearer token.
"""
import os
import logging
from typing import Any, Dict, List
from openai import AsyncOpenAI


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://console.dakaei.com/api"
DEFAULT_MODEL = "qwen-3"


class AIChatService:
    """Service for chat completions against the configured AI proxy."""

    def __init__(self):
        """Initialize the client from environment configuration."""
        api_key = os.getenv("AI_API_KEY")
        if not api_key:
            raise ValueError("AI_API_KEY environment variable is required")

        self.model = os.getenv("AI_MODEL", DEFAULT_MODEL)
        self.base_url = os.getenv("AI_BASE_URL", DEFAULT_BASE_URL)
        timeout = float(os.getenv("AI_TIMEOUT_SECONDS", "60"))
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            default_headers={"x-api-key": api_key},
            timeout=timeout
        )
        logger.info(f"AIChatService initialized with model={self.model}, base_url={self.base_url}")

    @staticmethod
    def is_configured() -> bool:
        """Return True when an upstream API key is configured."""
        return bool(os.getenv("AI_API_KEY"))

    async def complete(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Forward chat messages to the upstream AI service.

        Args:
            messages: Chat messages as received from the client

        Returns:
            The upstream chat-completion response as a dict

        Raises:
            openai.APIStatusError: If the upstream service returns non-2xx
            openai.APIError: If the upstream service cannot be reached
        """
        logger.info(f"Forwarding chat completion: model={self.model}, messages={len(messages)}")
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages
            )
        except Exception as e:
            logger.error(f"Chat completion failed: model={self.model}, error={type(e).__name__}: {e}")
            raise

        return completion.model_dump(exclude_unset=True)
