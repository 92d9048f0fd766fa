"""Offline AI service used when no credential is configured."""

import logging

from .base import EMPTY_RESPONSE, AIService

logger = logging.getLogger(__name__)


class DemoAIService(AIService):
    """Returns fixed placeholder payloads without any network call."""

    @property
    def is_demo_mode(self) -> bool:
        return True

    def extract_topics(self, content: str) -> str:
        logger.warning("API key not configured, returning empty topics")
        return EMPTY_RESPONSE

    def extract_deadlines(self, content: str) -> str:
        logger.warning("API key not configured, returning empty deadlines")
        return EMPTY_RESPONSE

    def extract_materials(self, content: str) -> str:
        logger.warning("API key not configured, returning empty materials")
        return EMPTY_RESPONSE

    def generate_text(self, prompt: str) -> str:
        return "MEDIUM"
