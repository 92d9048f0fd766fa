"""Extraction orchestrator.

Picks the best strategy for a text, runs it, and when it comes back
empty chains through the remaining heuristic strategies.

Selection:
1. Keep strategies whose supports(text) is true
2. Lowest priority wins if its confidence clears the threshold
3. Otherwise the most confident admissible strategy
4. Otherwise the first admissible strategy in configured order
"""

import logging
from typing import Iterable, Sequence

from ..ai import get_ai_service
from ..ai.base import AIService
from ..config import Settings, get_settings
from ..exceptions import EmptyContentError, NoSuitableStrategyError
from ..logging import (
    get_context_logger,
    log_extraction_result,
    log_fallback_used,
    log_strategy_selected,
)
from ..models import (
    Deadline,
    ExtractionCategory,
    ExtractionResult,
    Material,
    StrategyAnalysis,
    StrategyInfo,
    Topic,
)
from .ai import AI_STRATEGY_NAME, AIExtractionStrategy
from .base import ExtractionStrategy
from .pattern import PatternExtractionStrategy

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 50


class ExtractionOrchestrator:
    """Selects, runs and falls back between extraction strategies.

    Holds an ordered, fixed collection of strategies and no per-call
    state; a single instance can serve concurrent requests.
    """

    def __init__(
        self,
        strategies: Sequence[ExtractionStrategy],
        confidence_threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
        fallback_excluded: Iterable[str] = (AI_STRATEGY_NAME,),
    ):
        """Initialize the orchestrator.

        Args:
            strategies: Strategies in their natural (tie-breaking) order
            confidence_threshold: Minimum confidence for the priority pick
            fallback_excluded: Strategy names never used by the
                empty-result fallback chain
        """
        self.strategies: tuple[ExtractionStrategy, ...] = tuple(strategies)
        self.confidence_threshold = confidence_threshold
        self.fallback_excluded = frozenset(fallback_excluded)

    # =========================================================================
    # Selection
    # =========================================================================

    def select_best_strategy(self, text: str | None) -> ExtractionStrategy:
        """Select the strategy to run first for this text.

        Raises:
            EmptyContentError: text is None, empty or whitespace
            NoSuitableStrategyError: no strategy supports the text
        """
        strategy, _ = self._select(text)
        return strategy

    def _select(self, text: str | None) -> tuple[ExtractionStrategy, str]:
        if text is None or not text.strip():
            raise EmptyContentError()

        admissible = [s for s in self.strategies if s.supports(text)]
        if not admissible:
            raise NoSuitableStrategyError(len(text))

        # min() keeps the first of equal priorities
        by_priority = min(admissible, key=lambda s: s.priority)
        confidence = by_priority.confidence(text)
        if confidence >= self.confidence_threshold:
            return by_priority, "priority"

        logger.debug(
            f"Strategy {by_priority.name} has low confidence ({confidence}%), "
            f"trying alternatives"
        )

        scored = [(s, s.confidence(text)) for s in admissible]
        confident = [(s, c) for s, c in scored if c > 0]
        if confident:
            best, _ = max(confident, key=lambda pair: pair[1])
            return best, "confidence"

        return admissible[0], "last_resort"

    def analyze_strategies(self, text: str) -> StrategyAnalysis:
        """Report every strategy's standing for a text, sorted by priority.

        Diagnostic only; never used on the extraction path.
        """
        infos = [
            StrategyInfo(
                name=s.name,
                priority=s.priority,
                supported=s.supports(text),
                confidence=s.confidence(text),
            )
            for s in self.strategies
        ]
        infos.sort(key=lambda info: info.priority)
        return StrategyAnalysis(content_length=len(text or ""), strategies=infos)

    # =========================================================================
    # Extraction
    # =========================================================================

    def extract_topics(self, text: str) -> list[Topic]:
        return self.extract(ExtractionCategory.TOPICS, text)

    def extract_deadlines(self, text: str) -> list[Deadline]:
        return self.extract(ExtractionCategory.DEADLINES, text)

    def extract_materials(self, text: str) -> list[Material]:
        return self.extract(ExtractionCategory.MATERIALS, text)

    def extract(self, category: ExtractionCategory, text: str) -> list:
        """Extract one category using the selected strategy and fallbacks."""
        entities, _ = self._extract_with_source(category, text)
        return entities

    def extract_all(
        self,
        text: str,
        categories: Iterable[ExtractionCategory] | None = None,
    ) -> ExtractionResult:
        """Extract several categories independently.

        Args:
            text: Document text
            categories: Categories to extract (default: all)

        Returns:
            ExtractionResult with an (possibly empty) list per category
        """
        requested = list(categories) if categories is not None else list(ExtractionCategory)
        if text is None or not text.strip():
            raise EmptyContentError()

        found: dict[str, list] = {}
        used: dict[ExtractionCategory, str | None] = {}
        for category in requested:
            entities, source = self._extract_with_source(category, text)
            found[category.value] = entities
            used[category] = source

        return ExtractionResult(**found, strategies_used=used)

    def _extract_with_source(
        self, category: ExtractionCategory, text: str
    ) -> tuple[list, str | None]:
        primary, reason = self._select(text)
        confidence = primary.confidence(text)
        log_strategy_selected(category.value, primary.name, confidence, reason)

        entities = self._invoke(primary, category, text)
        if entities:
            log_extraction_result(category.value, primary.name, len(entities))
            return entities, primary.name

        for fallback in self._fallback_chain(primary, text):
            entities = self._invoke(fallback, category, text)
            if entities:
                log_fallback_used(category.value, primary.name, fallback.name, len(entities))
                log_extraction_result(category.value, fallback.name, len(entities))
                return entities, fallback.name

        log_extraction_result(category.value, None, 0)
        return [], None

    def _fallback_chain(
        self, primary: ExtractionStrategy, text: str
    ) -> list[ExtractionStrategy]:
        return [
            s for s in self.strategies
            if s is not primary
            and s.name not in self.fallback_excluded
            and s.supports(text)
        ]

    def _invoke(
        self,
        strategy: ExtractionStrategy,
        category: ExtractionCategory,
        text: str,
    ) -> list:
        try:
            return list(strategy.extract(category, text) or [])
        except Exception as e:
            log = get_context_logger(__name__, strategy=strategy.name, category=category.value)
            log.warning(f"{strategy.name}: {category.value} extraction raised: {e}")
            return []


# Factory function
def get_extraction_orchestrator(
    settings: Settings | None = None,
    ai_service: AIService | None = None,
) -> ExtractionOrchestrator:
    """Build the default orchestrator (AI first, patterns as fallback).

    Args:
        settings: Settings to read the AI provider and demo mode from.
                  If not specified, uses cached settings.
        ai_service: Service boundary to use instead of the configured one

    Returns:
        ExtractionOrchestrator instance
    """
    settings = settings or get_settings()
    if ai_service is None:
        ai_service = get_ai_service(settings)

    strategies: list[ExtractionStrategy] = [
        AIExtractionStrategy(ai_service, demo_mode=settings.ai_demo_mode),
        PatternExtractionStrategy(),
    ]
    return ExtractionOrchestrator(strategies)
