"""AI difficulty analysis for extracted topics.

Asks the AI service to rate each topic EASY, MEDIUM or HARD and
returns re-rated copies. When the reply is unusable or the service
fails, falls back to keyword heuristics on the topic itself.
"""

import logging

from ..ai.base import AIService
from ..ai.prompts import difficulty_prompt
from ..models import DifficultyLevel, Topic

logger = logging.getLogger(__name__)


class DifficultyAnalyzer:
    """Re-rates topic difficulty with an AI service.

    Example::

        analyzer = DifficultyAnalyzer(get_ai_service())
        rated = analyzer.analyze(topics)
    """

    # Keyword rules for free-text AI replies, checked in order
    REPLY_KEYWORDS: tuple[tuple[tuple[str, ...], DifficultyLevel], ...] = (
        (("easy", "basic", "introductory", "fundamental"), DifficultyLevel.EASY),
        (("hard", "advanced", "complex", "expert"), DifficultyLevel.HARD),
    )

    # Keyword rules applied to the topic's own text when the AI is silent
    TOPIC_KEYWORDS: tuple[tuple[tuple[str, ...], DifficultyLevel], ...] = (
        (("introduction", "overview", "basic"), DifficultyLevel.EASY),
        (("advanced", "complex", "research"), DifficultyLevel.HARD),
    )

    def __init__(self, ai_service: AIService):
        self.ai_service = ai_service

    def analyze(self, topics: list[Topic]) -> list[Topic]:
        """Return new topics with AI-assessed difficulty.

        Args:
            topics: Topics to rate; left untouched

        Returns:
            New Topic instances in the same order
        """
        if not topics:
            return []

        logger.info(f"Calculating AI difficulty for {len(topics)} topics")
        rated: list[Topic] = []
        for topic in topics:
            try:
                level = self._rate(topic)
            except Exception as e:
                logger.warning(f"AI difficulty analysis failed for topic '{topic.title}': {e}")
                level = self.fallback_difficulty(topic)
            rated.append(self._with_difficulty(topic, level))
        return rated

    def _rate(self, topic: Topic) -> DifficultyLevel:
        prompt = difficulty_prompt(topic.title, topic.description, topic.week)
        reply = self.ai_service.generate_text(prompt)
        return self.parse_reply(reply, topic)

    def parse_reply(self, reply: str | None, topic: Topic) -> DifficultyLevel:
        """Interpret an AI reply, falling back to topic heuristics when empty."""
        if not reply or not reply.strip():
            logger.debug(f"Empty AI response for topic: {topic.title}")
            return self.fallback_difficulty(topic)

        cleaned = reply.strip().strip(".").upper()
        if cleaned in DifficultyLevel.__members__:
            return DifficultyLevel[cleaned]

        logger.warning(f"Invalid AI difficulty response '{cleaned}' for topic: {topic.title}")
        return self._match(cleaned.lower(), self.REPLY_KEYWORDS)

    def fallback_difficulty(self, topic: Topic) -> DifficultyLevel:
        text = f"{topic.title} {topic.description or ''}".lower()
        return self._match(text, self.TOPIC_KEYWORDS)

    @staticmethod
    def _match(
        text: str,
        rules: tuple[tuple[tuple[str, ...], DifficultyLevel], ...],
    ) -> DifficultyLevel:
        for words, level in rules:
            if any(word in text for word in words):
                return level
        return DifficultyLevel.MEDIUM

    @staticmethod
    def _with_difficulty(topic: Topic, level: DifficultyLevel) -> Topic:
        description = topic.description or "Topic content"
        return topic.model_copy(update={
            "difficulty_level": level,
            "description": f"{description} [AI Difficulty: {level.value}]",
        })
