"""Pytest fixtures for extraction pipeline unit tests."""

from datetime import datetime

import pytest

from syllabusai.ai.base import AIService
from syllabusai.config import get_settings


SAMPLE_SYLLABUS = """CS 301 - Design Patterns
Course topics are listed per week below.

Week 1: Introduction to Algorithms
Week 2: Creational patterns and the Builder
Week 3: Structural patterns and adapters

Assignment 1 due 10/15/2025
Midterm exam on 10/20/2025
Project report due 12/05/2025

Textbook: "Head First Design Patterns"
Video: Lecture recordings at https://example.com/videos
"""


class FakeAIService(AIService):
    """In-memory AI service returning canned replies.

    Records every call as (operation, content) in ``calls``.
    """

    def __init__(
        self,
        topics: str = "[]",
        deadlines: str = "[]",
        materials: str = "[]",
        text: str = "MEDIUM",
        error: Exception | None = None,
    ):
        self.replies = {
            "topics": topics,
            "deadlines": deadlines,
            "materials": materials,
            "text": text,
        }
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def _reply(self, operation: str, content: str) -> str:
        self.calls.append((operation, content))
        if self.error is not None:
            raise self.error
        return self.replies[operation]

    def extract_topics(self, content: str) -> str:
        return self._reply("topics", content)

    def extract_deadlines(self, content: str) -> str:
        return self._reply("deadlines", content)

    def extract_materials(self, content: str) -> str:
        return self._reply("materials", content)

    def generate_text(self, prompt: str) -> str:
        return self._reply("text", prompt)

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)


@pytest.fixture(autouse=True)
def demo_environment(monkeypatch):
    """Run every test without a real AI credential and with fresh settings."""
    monkeypatch.setenv("AI_PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("ENABLE_DIFFICULTY_ANALYSIS", "false")
    monkeypatch.setenv("LOG_FORMAT", "text")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_ai_service():
    """Factory for in-memory AI services with canned replies."""
    return FakeAIService


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed point in time for clock-dependent behaviour."""
    return datetime(2025, 9, 1, 12, 0, 0)


@pytest.fixture
def clock(fixed_now):
    """Clock callable returning fixed_now."""
    return lambda: fixed_now


@pytest.fixture
def sample_syllabus() -> str:
    """A short course document with topics, deadlines and materials."""
    return SAMPLE_SYLLABUS


@pytest.fixture
def long_syllabus(sample_syllabus) -> str:
    """Sample syllabus padded past the AI strategy's length threshold."""
    return sample_syllabus + "\nOffice hours are held every Tuesday afternoon." * 5
