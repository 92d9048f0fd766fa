"""Document processing service.

Runs the extraction orchestrator over a document's text, optionally
re-rates topic difficulty, and reports progress to an optional
listener. Persistence and progress transport belong to the caller.
"""

import logging
from datetime import datetime
from typing import Iterable, Protocol

from .ai import get_ai_service
from .config import Settings, get_settings
from .enrichment import DifficultyAnalyzer
from .extraction import ExtractionOrchestrator, get_extraction_orchestrator
from .models import (
    DifficultyLevel,
    ExtractionCategory,
    ExtractionResult,
    SyllabusOverview,
)

logger = logging.getLogger(__name__)

UPCOMING_DEADLINE_LIMIT = 5


class ProgressListener(Protocol):
    """Receives progress updates while a document is processed."""

    def on_progress(self, percent: int, message: str) -> None:
        ...

    def on_error(self, message: str) -> None:
        ...


class SyllabusProcessor:
    """Extracts topics, deadlines and materials from document text.

    Flow:
    1. Run the orchestrator for each requested category
    2. Re-rate topic difficulty (optional, if an analyzer is configured)
    3. Return an ExtractionResult with a list per category
    """

    def __init__(
        self,
        orchestrator: ExtractionOrchestrator,
        difficulty_analyzer: DifficultyAnalyzer | None = None,
        progress: ProgressListener | None = None,
    ):
        """Initialize the processor.

        Args:
            orchestrator: Strategy orchestrator
            difficulty_analyzer: Optional topic difficulty enrichment
            progress: Optional progress listener
        """
        self.orchestrator = orchestrator
        self.difficulty_analyzer = difficulty_analyzer
        self.progress = progress

    def process(
        self,
        text: str,
        categories: Iterable[ExtractionCategory] | None = None,
    ) -> ExtractionResult:
        """Extract the requested categories from document text.

        Args:
            text: Document text
            categories: Categories to extract (default: all)

        Returns:
            ExtractionResult

        Raises:
            EmptyContentError: text is empty
            NoSuitableStrategyError: no strategy can handle the text
        """
        requested = list(categories) if categories is not None else list(ExtractionCategory)
        self._notify(10, "Starting extraction")

        try:
            result = self.orchestrator.extract_all(text, requested)
            self._notify(80, "Extraction finished")

            if self.difficulty_analyzer is not None and result.topics:
                self._notify(85, "Analyzing topic difficulty")
                result = result.model_copy(
                    update={"topics": self.difficulty_analyzer.analyze(result.topics)}
                )
        except Exception as e:
            logger.error(f"Document processing failed: {e}")
            if self.progress is not None:
                self.progress.on_error(f"Processing failed: {e}")
            raise

        logger.info(
            f"Processing completed: {len(result.topics)} topics, "
            f"{len(result.deadlines)} deadlines, {len(result.materials)} materials"
        )
        self._notify(100, "Document processed successfully")
        return result

    def _notify(self, percent: int, message: str) -> None:
        if self.progress is not None:
            self.progress.on_progress(percent, message)


def build_overview(result: ExtractionResult, now: datetime | None = None) -> SyllabusOverview:
    """Summarize an extraction result for presentation.

    Args:
        result: Extraction result to summarize
        now: Reference time for "upcoming" (default: current time)

    Returns:
        SyllabusOverview
    """
    now = now or datetime.now()

    upcoming = sorted(
        (d for d in result.deadlines if d.date > now),
        key=lambda d: d.date,
    )[:UPCOMING_DEADLINE_LIMIT]

    distribution = {level: 0 for level in DifficultyLevel}
    for topic in result.topics:
        distribution[topic.difficulty_level] += 1

    return SyllabusOverview(
        total_weeks=max((t.week for t in result.topics), default=0),
        topic_count=len(result.topics),
        deadline_count=len(result.deadlines),
        material_count=len(result.materials),
        upcoming_deadlines=upcoming,
        difficulty_distribution=distribution,
    )


# Factory function
def get_syllabus_processor(
    settings: Settings | None = None,
    progress: ProgressListener | None = None,
    enable_difficulty: bool | None = None,
) -> SyllabusProcessor:
    """Get a processor wired from settings.

    Args:
        settings: Settings to use. If not specified, uses cached settings.
        progress: Optional progress listener
        enable_difficulty: Override settings.enable_difficulty_analysis

    Returns:
        SyllabusProcessor instance
    """
    settings = settings or get_settings()
    ai_service = get_ai_service(settings)

    if enable_difficulty is None:
        enable_difficulty = settings.enable_difficulty_analysis

    analyzer = None
    if enable_difficulty and not ai_service.is_demo_mode:
        analyzer = DifficultyAnalyzer(ai_service)

    return SyllabusProcessor(
        orchestrator=get_extraction_orchestrator(settings, ai_service=ai_service),
        difficulty_analyzer=analyzer,
        progress=progress,
    )
