"""Google Gemini provider.

Calls the generateContent REST endpoint directly with httpx.
"""

import logging
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import AIServiceError
from .base import PromptingAIService

logger = logging.getLogger(__name__)


class GeminiAIService(PromptingAIService):
    """AIService backed by the Gemini generateContent API."""

    provider = "gemini"

    USER_AGENT = "SyllabusAI/1.0"

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self.timeout = httpx.Timeout(settings.ai_timeout_seconds)

    @property
    def endpoint(self) -> str:
        base = self.settings.gemini_base_url.rstrip("/")
        return f"{base}/{self.settings.gemini_model}:generateContent"

    def build_request(self, prompt: str, json_output: bool) -> dict[str, Any]:
        generation_config: dict[str, Any] = {
            "temperature": self.settings.ai_temperature,
            "topK": 40,
            "topP": 0.8,
            "maxOutputTokens": self.settings.ai_max_output_tokens,
        }
        if json_output:
            generation_config["responseMimeType"] = "application/json"

        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    def _complete(self, prompt: str, json_output: bool) -> str:
        logger.debug(f"Calling Gemini API with prompt length: {len(prompt)}")

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self.endpoint,
                    params={"key": self.settings.gemini_api_key},
                    headers={"User-Agent": self.USER_AGENT},
                    json=self.build_request(prompt, json_output),
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Gemini HTTP error {e.response.status_code}: {e.response.text[:500]}")
            return ""
        except httpx.RequestError as e:
            logger.error(f"Gemini request failed: {e}")
            return ""

        return self.parse_payload(payload)

    def parse_payload(self, payload: Any) -> str:
        """Pull the reply text out of a generateContent response.

        Raises:
            AIServiceError: The response has no usable candidate
        """
        if not isinstance(payload, dict):
            raise AIServiceError("Gemini returned a non-object payload")

        candidates = payload.get("candidates") or []
        if not candidates or not isinstance(candidates[0], dict):
            raise AIServiceError("No candidates in Gemini response")

        candidate = candidates[0]
        finish_reason = candidate.get("finishReason", "")
        if finish_reason == "SAFETY":
            raise AIServiceError("Gemini response blocked by safety filters")

        parts = (candidate.get("content") or {}).get("parts") or []
        if not parts or not isinstance(parts[0], dict):
            raise AIServiceError("No parts in Gemini response content")

        text = parts[0].get("text") or ""
        if finish_reason == "MAX_TOKENS":
            # Partial JSON is still worth handing to the tolerant parser
            logger.warning(f"Gemini response truncated at MAX_TOKENS, partial length: {len(text)}")

        return text
