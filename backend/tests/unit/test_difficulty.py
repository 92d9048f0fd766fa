"""Unit tests for AI difficulty analysis of topics.

Run with: pytest tests/unit/test_difficulty.py -v
"""

import pytest

from syllabusai.enrichment import DifficultyAnalyzer
from syllabusai.models import DifficultyLevel, Topic


def make_topic(title: str = "Graph algorithms", description: str = "", week: int = 3) -> Topic:
    return Topic(title=title, week=week, description=description)


class TestAnalyze:
    """Tests for DifficultyAnalyzer.analyze."""

    def test_rates_every_topic(self, make_ai_service):
        service = make_ai_service(text="HARD")
        analyzer = DifficultyAnalyzer(service)
        topics = [make_topic("Graphs", "Traversal"), make_topic("Trees")]

        rated = analyzer.analyze(topics)

        assert [t.difficulty_level for t in rated] == [DifficultyLevel.HARD, DifficultyLevel.HARD]
        assert rated[0].description == "Traversal [AI Difficulty: HARD]"
        assert rated[1].description == "Topic content [AI Difficulty: HARD]"
        assert service.count("text") == 2

    def test_originals_are_untouched(self, make_ai_service):
        """Test analysis returns copies instead of modifying topics."""
        original = make_topic(description="Traversal")

        rated = DifficultyAnalyzer(make_ai_service(text="EASY")).analyze([original])

        assert original.difficulty_level == DifficultyLevel.MEDIUM
        assert original.description == "Traversal"
        assert rated[0] is not original

    def test_prompt_mentions_topic(self, make_ai_service):
        service = make_ai_service(text="MEDIUM")

        DifficultyAnalyzer(service).analyze([make_topic("Dynamic programming", week=7)])

        _, prompt = service.calls[0]
        assert "TOPIC: Dynamic programming" in prompt
        assert "WEEK: 7" in prompt

    def test_service_error_uses_heuristics(self, make_ai_service):
        """Test a failing service falls back to the topic keywords."""
        analyzer = DifficultyAnalyzer(make_ai_service(error=RuntimeError("quota exceeded")))

        rated = analyzer.analyze([make_topic("Advanced type systems")])

        assert rated[0].difficulty_level == DifficultyLevel.HARD

    def test_empty_input(self, make_ai_service):
        assert DifficultyAnalyzer(make_ai_service()).analyze([]) == []


class TestParseReply:
    """Tests for interpreting the AI reply."""

    @pytest.mark.parametrize(
        "reply,expected",
        [
            ("EASY", DifficultyLevel.EASY),
            (" hard. ", DifficultyLevel.HARD),
            ("Medium", DifficultyLevel.MEDIUM),
            ("This is a basic topic", DifficultyLevel.EASY),
            ("Quite advanced material", DifficultyLevel.HARD),
            ("It depends", DifficultyLevel.MEDIUM),
        ],
    )
    def test_reply_interpretation(self, make_ai_service, reply, expected):
        analyzer = DifficultyAnalyzer(make_ai_service())
        assert analyzer.parse_reply(reply, make_topic()) == expected

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Introduction to sets", DifficultyLevel.EASY),
            ("Research seminar", DifficultyLevel.HARD),
            ("Hash tables", DifficultyLevel.MEDIUM),
        ],
    )
    def test_empty_reply_uses_topic_keywords(self, make_ai_service, title, expected):
        analyzer = DifficultyAnalyzer(make_ai_service())
        assert analyzer.parse_reply("", make_topic(title)) == expected
