"""Chat-completion providers (OpenAI and Anthropic).

Clients are created lazily on first use so that importing this module
does not require the SDKs to be configured.
"""

import logging
from typing import Any

from ..config import Settings
from ..exceptions import AIServiceError
from .base import PromptingAIService

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a course document extraction assistant."
JSON_SYSTEM_PROMPT = SYSTEM_PROMPT + " Return only valid JSON."


class OpenAIService(PromptingAIService):
    """AIService backed by the OpenAI chat completions API."""

    provider = "openai"

    def __init__(self, settings: Settings, client: Any = None):
        super().__init__(settings)
        self._client = client

    def _get_client(self) -> Any:
        """Get or create the OpenAI client."""
        if self._client is None:
            try:
                import openai
            except ImportError:
                raise RuntimeError("openai package not installed")
            self._client = openai.OpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.ai_timeout_seconds,
            )
        return self._client

    def _complete(self, prompt: str, json_output: bool) -> str:
        client = self._get_client()
        response = client.chat.completions.create(
            model=self.settings.openai_model,
            messages=[
                {
                    "role": "system",
                    "content": JSON_SYSTEM_PROMPT if json_output else SYSTEM_PROMPT,
                },
                {"role": "user", "content": prompt},
            ],
            temperature=self.settings.ai_temperature,
            max_tokens=self.settings.ai_max_output_tokens,
        )
        if not response.choices:
            raise AIServiceError("OpenAI returned no choices")
        return response.choices[0].message.content or ""


class AnthropicService(PromptingAIService):
    """AIService backed by the Anthropic messages API."""

    provider = "anthropic"

    def __init__(self, settings: Settings, client: Any = None):
        super().__init__(settings)
        self._client = client

    def _get_client(self) -> Any:
        """Get or create the Anthropic client."""
        if self._client is None:
            try:
                import anthropic
            except ImportError:
                raise RuntimeError("anthropic package not installed")
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                timeout=self.settings.ai_timeout_seconds,
            )
        return self._client

    def _complete(self, prompt: str, json_output: bool) -> str:
        client = self._get_client()
        response = client.messages.create(
            model=self.settings.anthropic_model,
            max_tokens=self.settings.ai_max_output_tokens,
            system=JSON_SYSTEM_PROMPT if json_output else SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.content:
            raise AIServiceError("Anthropic returned no content blocks")
        return getattr(response.content[0], "text", "") or ""
