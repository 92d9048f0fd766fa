"""Unit tests for AI service selection and prompt helpers.

Run with: pytest tests/unit/ai/test_providers.py -v
"""

from datetime import date

import pytest

from syllabusai.ai import (
    AnthropicService,
    DemoAIService,
    GeminiAIService,
    OpenAIService,
    get_ai_service,
)
from syllabusai.ai.prompts import (
    TRUNCATION_MARKER,
    deadline_prompt,
    default_semester_start,
    difficulty_prompt,
    truncate_content,
)
from syllabusai.config import Settings


class TestGetAIService:
    """Tests for provider selection."""

    @pytest.mark.parametrize("key", ["", "   ", "demo-key-placeholder"])
    def test_missing_key_gives_demo_service(self, key):
        service = get_ai_service(Settings(gemini_api_key=key))

        assert isinstance(service, DemoAIService)
        assert service.is_demo_mode

    @pytest.mark.parametrize(
        "provider,key_field,expected",
        [
            ("gemini", "gemini_api_key", GeminiAIService),
            ("openai", "openai_api_key", OpenAIService),
            ("anthropic", "anthropic_api_key", AnthropicService),
        ],
    )
    def test_configured_provider(self, provider, key_field, expected):
        settings = Settings(ai_provider=provider, **{key_field: "real-key"})

        service = get_ai_service(settings)

        assert isinstance(service, expected)
        assert not service.is_demo_mode

    def test_key_of_other_provider_does_not_count(self):
        """Test demo mode follows the key of the selected provider only."""
        settings = Settings(ai_provider="openai", gemini_api_key="gemini-key", openai_api_key="")
        assert isinstance(get_ai_service(settings), DemoAIService)

    def test_uses_cached_settings_by_default(self, monkeypatch):
        from syllabusai.config import get_settings

        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        get_settings.cache_clear()

        assert isinstance(get_ai_service(), GeminiAIService)


class TestDemoService:
    """Tests for the offline demo service."""

    def test_fixed_replies(self):
        service = DemoAIService()

        assert service.extract_topics("anything") == "[]"
        assert service.extract_deadlines("anything") == "[]"
        assert service.extract_materials("anything") == "[]"
        assert service.generate_text("anything") == "MEDIUM"


class TestPrompts:
    """Tests for prompt helpers."""

    def test_short_content_not_truncated(self):
        assert truncate_content("short", 1000) == "short"

    def test_truncation_keeps_head_and_tail(self):
        content = "H" * 1500 + "T" * 1500

        result = truncate_content(content, 1000)

        assert result.startswith("H" * 500)
        assert result.endswith("T" * 500)
        assert TRUNCATION_MARKER in result

    def test_default_semester_start(self):
        assert default_semester_start(date(2025, 3, 10)) == date(2025, 9, 1)

    def test_deadline_prompt_includes_start_and_content(self):
        prompt = deadline_prompt("Midterm in week 5", date(2025, 9, 1))

        assert "2025-09-01" in prompt
        assert "Midterm in week 5" in prompt
        assert '{"week": 2' in prompt

    def test_difficulty_prompt_defaults(self):
        prompt = difficulty_prompt("Graphs", None, None)

        assert "TOPIC: Graphs" in prompt
        assert "No description provided" in prompt
        assert "WEEK: 1" in prompt
