"""Post-extraction enrichment of topics."""

from .difficulty import DifficultyAnalyzer

__all__ = ["DifficultyAnalyzer"]
