"""AI-backed extraction strategy.

Delegates raw extraction to an AIService and owns the hard part:
turning whatever text comes back into well-formed entities. Replies may
be wrapped in Markdown fences, may not be JSON at all, and may use
alternate field names; none of that is allowed to escape as an error.
"""

import json
import logging
import re
from datetime import datetime
from typing import Any, Callable

from ..ai.base import AIService
from ..models import Deadline, ExtractionCategory, Material, Topic
from .base import ExtractionStrategy
from .normalize import (
    DEADLINE_TITLE_MAX,
    MATERIAL_TITLE_MAX,
    TOPIC_TITLE_MAX,
    clean_text,
    default_deadline_date,
    parse_datetime,
    parse_deadline_type,
    parse_difficulty,
    parse_material_type,
    parse_week,
    pick_field,
    truncate,
)

logger = logging.getLogger(__name__)

AI_STRATEGY_NAME = "AI_EXTRACTION_STRATEGY"

# Opening fence with optional language tag, and closing fence
_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
_FENCE_CLOSE = re.compile(r"\r?\n?```$")


def strip_code_fences(response: str) -> str:
    """Remove a leading ```lang / trailing ``` wrapper from a reply."""
    cleaned = response.strip()
    cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


class AIExtractionStrategy(ExtractionStrategy):
    """Extraction strategy backed by a text-generation service.

    In demo mode (no real credential configured) the strategy reports
    itself as unsupported with zero confidence, so the orchestrator
    routes around it without ever calling the service.
    """

    MIN_TEXT_LENGTH = 200
    CONFIDENCE = 85

    def __init__(
        self,
        ai_service: AIService,
        demo_mode: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the strategy.

        Args:
            ai_service: Service boundary that performs the AI calls
            demo_mode: True when no usable credential is configured
            clock: Source of "now" for default deadline dates
        """
        self.ai_service = ai_service
        self.demo_mode = demo_mode
        self._clock = clock

    @property
    def name(self) -> str:
        return AI_STRATEGY_NAME

    @property
    def priority(self) -> int:
        return 1

    def supports(self, text: str | None) -> bool:
        if self.demo_mode:
            return False
        return text is not None and len(text) > self.MIN_TEXT_LENGTH

    def confidence(self, text: str | None) -> int:
        if self.demo_mode:
            return 0
        return self.CONFIDENCE

    def extract_topics(self, text: str) -> list[Topic]:
        return self._run(ExtractionCategory.TOPICS, self.ai_service.extract_topics, text)

    def extract_deadlines(self, text: str) -> list[Deadline]:
        return self._run(ExtractionCategory.DEADLINES, self.ai_service.extract_deadlines, text)

    def extract_materials(self, text: str) -> list[Material]:
        return self._run(ExtractionCategory.MATERIALS, self.ai_service.extract_materials, text)

    def _run(
        self,
        category: ExtractionCategory,
        call: Callable[[str], str],
        text: str,
    ) -> list:
        if self.demo_mode:
            logger.warning(
                f"AI API key not configured, skipping AI extraction for {category.value}"
            )
            return []

        try:
            logger.debug(f"Using AI strategy to extract {category.value}")
            response = call(text)
        except Exception as e:
            logger.warning(f"AI {category.value} extraction failed: {e}")
            return []

        return self.parse_response(response, category)

    # =========================================================================
    # Response normalization
    # =========================================================================

    def parse_response(self, response: str | None, category: ExtractionCategory) -> list:
        """Parse an AI reply into entities of the given category.

        Args:
            response: Raw reply text, possibly fence-wrapped
            category: Entity category the reply describes

        Returns:
            Parsed entities; empty when the reply is unusable
        """
        if not response or not response.strip():
            logger.warning(f"Empty AI response for {category.value}")
            return []

        cleaned = strip_code_fences(response)
        logger.debug(f"Parsing {category.value} response, cleaned JSON length: {len(cleaned)}")

        try:
            data = json.loads(cleaned)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError, oversized integers and runaway nesting
            logger.error(f"Failed to parse AI {category.value} response as JSON: {e}")
            logger.debug(f"Raw response was: {response[:500]}")
            return []

        if not isinstance(data, list):
            logger.warning(f"AI response is not a JSON array for type: {category.value}")
            return []

        builders = {
            ExtractionCategory.TOPICS: self._build_topic,
            ExtractionCategory.DEADLINES: self._build_deadline,
            ExtractionCategory.MATERIALS: self._build_material,
        }
        build = builders[category]

        results = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object {category.value} item at index {index}")
                continue
            try:
                results.append(build(item))
            except Exception as e:
                logger.warning(f"Failed to parse {category.value} entity from AI response: {e}")
                logger.debug(f"Problematic item: {item!r}")

        logger.info(f"Parsed {len(results)} {category.value} entities from AI response")
        return results

    def _build_topic(self, item: dict[str, Any]) -> Topic:
        title = clean_text(pick_field(item, "title"), "Unnamed Topic")
        return Topic(
            title=truncate(title, TOPIC_TITLE_MAX),
            week=parse_week(pick_field(item, "week")),
            description=clean_text(pick_field(item, "description")),
            difficulty_level=parse_difficulty(pick_field(item, "difficulty")),
        )

    def _build_deadline(self, item: dict[str, Any]) -> Deadline:
        title = clean_text(pick_field(item, "title"), "Unnamed Deadline")
        due = parse_datetime(pick_field(item, "date"))
        if due is None:
            due = default_deadline_date(self._clock())
        return Deadline(
            title=truncate(title, DEADLINE_TITLE_MAX),
            date=due,
            type=parse_deadline_type(pick_field(item, "type")),
            description=clean_text(pick_field(item, "description")),
        )

    def _build_material(self, item: dict[str, Any]) -> Material:
        title = clean_text(pick_field(item, "title"), "Unnamed Material")
        week = pick_field(item, "week")
        return Material(
            title=truncate(title, MATERIAL_TITLE_MAX),
            type=parse_material_type(pick_field(item, "type")),
            link=clean_text(pick_field(item, "link")),
            week=parse_week(week) if week is not None else None,
        )
