"""Pattern-based extraction strategy.

Regex heuristics for course documents: week/lecture headers become
topics, keyword + date mentions become deadlines, and "Textbook:" style
lines become materials. Stateless, fast, and always available once the
text is long enough to say anything.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Callable

from ..models import Deadline, DeadlineType, DifficultyLevel, Material, Topic
from .base import ExtractionStrategy
from .normalize import (
    DEADLINE_TITLE_MAX,
    END_OF_DAY,
    MATERIAL_TITLE_MAX,
    TOPIC_TITLE_MAX,
    map_deadline_keyword,
    map_material_keyword,
    normalize_year,
    truncate,
)

logger = logging.getLogger(__name__)

PATTERN_STRATEGY_NAME = "REGEX_EXTRACTION_STRATEGY"


class PatternExtractionStrategy(ExtractionStrategy):
    """Regex-driven heuristic extractor.

    Extracts:
    - Topics from "Week 3: Graph Algorithms" style headers
    - Deadlines from "Assignment 2 due 10/15/2025" style mentions
    - Materials from 'Textbook: "Clean Code"' style lines
    """

    # Header keyword + number + optional separator + rest of the line
    TOPIC_PATTERN = re.compile(
        r"\b(?:week|lecture|topic|chapter|module|session|lesson)[ \t]*(\d+)"
        r"[ \t]*[:\-.)]?[ \t]*([^\n]{5,100})",
        re.IGNORECASE,
    )

    # Deliverable keyword followed on the same line by an M/D/Y date
    DEADLINE_PATTERN = re.compile(
        r"\b(assignment|homework|exam|midterm|final|endterm|test|quiz|project)\w*"
        r"[^\n]*?\b(\d{1,2})[/-](\d{1,2})[/-](\d{2}|\d{4})\b",
        re.IGNORECASE,
    )

    # Material keyword + ':' or '-' + quoted or bare title
    MATERIAL_PATTERN = re.compile(
        r"\b(textbook|reading|book|material|resource|video|website|exercise)s?"
        r"[ \t]*[:\-][ \t]*\"?([^\"\n]+)\"?",
        re.IGNORECASE,
    )

    URL_PATTERN = re.compile(r"https?://[^\s<>\"']+", re.IGNORECASE)

    MAX_TOPICS = 25
    MAX_DEADLINES = 15

    MIN_TEXT_LENGTH = 50
    MIN_TOPIC_TITLE_LENGTH = 5
    MIN_MATERIAL_TITLE_LENGTH = 10

    TOPIC_BOILERPLATE = ("syllabus", "introduction to course", "table of contents")
    MATERIAL_FILLER = ("see above", "as needed", "various")

    # Synthesized when a document names no dated deliverables
    DEFAULT_DEADLINES = (
        ("Midterm Examination", timedelta(weeks=5), "Midterm exam covering the first half of the course"),
        ("Final Examination", timedelta(weeks=10), "Final exam covering the whole course"),
    )

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """Initialize the strategy.

        Args:
            clock: Source of "now" for synthesized deadlines
        """
        self._clock = clock

    @property
    def name(self) -> str:
        return PATTERN_STRATEGY_NAME

    @property
    def priority(self) -> int:
        return 50

    def supports(self, text: str | None) -> bool:
        return text is not None and len(text) > self.MIN_TEXT_LENGTH

    def confidence(self, text: str | None) -> int:
        """Score how much recognisable structure the text has.

        Starts at 30 and adds 20 for topic headers, 20 for dated
        deadlines, 15 for material lines and 15 when the text talks
        about both weeks and topics.
        """
        if not self.supports(text):
            return 0

        score = 30
        if self.TOPIC_PATTERN.search(text):
            score += 20
        if self.DEADLINE_PATTERN.search(text):
            score += 20
        if self.MATERIAL_PATTERN.search(text):
            score += 15

        lowered = text.lower()
        if "week" in lowered and "topic" in lowered:
            score += 15

        return min(score, 100)

    # =========================================================================
    # Topics
    # =========================================================================

    def extract_topics(self, text: str) -> list[Topic]:
        topics: list[Topic] = []
        try:
            for match in self.TOPIC_PATTERN.finditer(text):
                if len(topics) >= self.MAX_TOPICS:
                    break

                title = match.group(2).strip()
                if not self._is_valid_topic(title):
                    continue

                try:
                    week = int(match.group(1))
                except ValueError:
                    logger.debug(f"Invalid week number: {match.group(1)}")
                    continue

                topics.append(Topic(
                    title=truncate(title, TOPIC_TITLE_MAX),
                    week=max(week, 1),
                    description="Extracted from document structure",
                    difficulty_level=DifficultyLevel.MEDIUM,
                ))
        except Exception as e:
            logger.warning(f"Pattern topic extraction failed: {e}")
            return []

        logger.debug(f"Pattern strategy extracted {len(topics)} topics")
        return topics

    def _is_valid_topic(self, title: str) -> bool:
        if len(title) < self.MIN_TOPIC_TITLE_LENGTH:
            return False
        lowered = title.lower()
        return not any(phrase in lowered for phrase in self.TOPIC_BOILERPLATE)

    # =========================================================================
    # Deadlines
    # =========================================================================

    def extract_deadlines(self, text: str) -> list[Deadline]:
        deadlines: list[Deadline] = []
        try:
            for match in self.DEADLINE_PATTERN.finditer(text):
                if len(deadlines) >= self.MAX_DEADLINES:
                    break

                keyword = match.group(1)
                try:
                    month = int(match.group(2))
                    day = int(match.group(3))
                    year = normalize_year(int(match.group(4)))
                    due = datetime(
                        year, month, day,
                        END_OF_DAY.hour, END_OF_DAY.minute, END_OF_DAY.second,
                    )
                except ValueError:
                    logger.debug(f"Invalid deadline date: {match.group(0)!r}")
                    continue

                deadlines.append(Deadline(
                    title=truncate(f"{keyword.capitalize()} {len(deadlines) + 1}", DEADLINE_TITLE_MAX),
                    date=due,
                    type=map_deadline_keyword(keyword),
                    description="Automatically extracted deadline",
                ))
        except Exception as e:
            logger.warning(f"Pattern deadline extraction failed: {e}")
            deadlines = []

        if not deadlines:
            deadlines = self._default_deadlines()

        logger.debug(f"Pattern strategy extracted {len(deadlines)} deadlines")
        return deadlines

    def _default_deadlines(self) -> list[Deadline]:
        now = self._clock()
        return [
            Deadline(
                title=title,
                date=now + offset,
                type=DeadlineType.EXAM,
                description=description,
            )
            for title, offset, description in self.DEFAULT_DEADLINES
        ]

    # =========================================================================
    # Materials
    # =========================================================================

    def extract_materials(self, text: str) -> list[Material]:
        materials: list[Material] = []
        try:
            for match in self.MATERIAL_PATTERN.finditer(text):
                title = match.group(2).strip()
                if not self._is_valid_material(title):
                    continue

                url_match = self.URL_PATTERN.search(title)
                materials.append(Material(
                    title=truncate(title, MATERIAL_TITLE_MAX),
                    type=map_material_keyword(match.group(1)),
                    link=url_match.group(0) if url_match else "",
                ))
        except Exception as e:
            logger.warning(f"Pattern material extraction failed: {e}")
            return []

        logger.debug(f"Pattern strategy extracted {len(materials)} materials")
        return materials

    def _is_valid_material(self, title: str) -> bool:
        if len(title) < self.MIN_MATERIAL_TITLE_LENGTH:
            return False
        lowered = title.lower()
        return not any(phrase in lowered for phrase in self.MATERIAL_FILLER)
