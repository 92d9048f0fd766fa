"""Extraction pipeline for course documents.

Provides interchangeable strategies and the orchestrator that chooses
between them.

Components:
- PatternExtractionStrategy: Regex heuristics (week headers, dated deliverables, reading lists)
- AIExtractionStrategy: Delegates to an AI service and normalizes its JSON replies
- ExtractionOrchestrator: Priority/confidence selection with an empty-result fallback chain
"""

from .ai import AI_STRATEGY_NAME, AIExtractionStrategy, strip_code_fences
from .base import ExtractionStrategy
from .orchestrator import ExtractionOrchestrator, get_extraction_orchestrator
from .pattern import PATTERN_STRATEGY_NAME, PatternExtractionStrategy

__all__ = [
    "AI_STRATEGY_NAME",
    "AIExtractionStrategy",
    "strip_code_fences",
    "ExtractionStrategy",
    "ExtractionOrchestrator",
    "get_extraction_orchestrator",
    "PATTERN_STRATEGY_NAME",
    "PatternExtractionStrategy",
]
