"""AI service boundary for the AI-backed extraction strategy.

Providers:
- GeminiAIService: Gemini generateContent over httpx (default)
- OpenAIService / AnthropicService: chat completions through the vendor SDKs
- DemoAIService: offline placeholder used when no credential is configured
"""

from ..config import Settings, get_settings
from .base import AIService, PromptingAIService
from .demo import DemoAIService
from .gemini import GeminiAIService
from .llm import AnthropicService, OpenAIService

_PROVIDERS: dict[str, type[PromptingAIService]] = {
    "gemini": GeminiAIService,
    "openai": OpenAIService,
    "anthropic": AnthropicService,
}


# Factory function
def get_ai_service(settings: Settings | None = None) -> AIService:
    """Get the AI service for the configured provider.

    Args:
        settings: Settings to read the provider and credentials from.
                  If not specified, uses cached settings.

    Returns:
        AIService instance; DemoAIService when no credential is set
    """
    settings = settings or get_settings()
    if settings.ai_demo_mode:
        return DemoAIService()

    provider_cls = _PROVIDERS.get(settings.ai_provider)
    if provider_cls is None:
        raise ValueError(f"Unknown AI provider: {settings.ai_provider}")
    return provider_cls(settings)


__all__ = [
    "AIService",
    "PromptingAIService",
    "DemoAIService",
    "GeminiAIService",
    "OpenAIService",
    "AnthropicService",
    "get_ai_service",
]
