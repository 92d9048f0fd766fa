"""Base class for extraction strategies.

A strategy turns document text into candidate topics, deadlines and
materials, and tells the orchestrator whether (and how well) it can
handle a given text.
"""

from abc import ABC, abstractmethod

from ..models import Deadline, ExtractionCategory, Material, Topic


class ExtractionStrategy(ABC):
    """Abstract base class for extraction strategies.

    Subclasses must implement:
    - extract_topics / extract_deadlines / extract_materials
    - supports(): cheap admissibility check
    - priority: lower value is tried first
    - name: stable identifier used by fallback exclusion

    Every extract_* call is total: internal failures are logged and
    turned into an empty list, never raised. Strategies keep no per-call
    state, so one instance can serve concurrent requests.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable strategy identifier."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Selection priority; lower values are preferred."""
        ...

    @abstractmethod
    def supports(self, text: str | None) -> bool:
        """Check whether this strategy can handle the text at all."""
        ...

    def confidence(self, text: str | None) -> int:
        """Self-reported fitness for this text, 0-100.

        Default: 80 when supported, otherwise 0.
        """
        return 80 if self.supports(text) else 0

    @abstractmethod
    def extract_topics(self, text: str) -> list[Topic]:
        ...

    @abstractmethod
    def extract_deadlines(self, text: str) -> list[Deadline]:
        ...

    @abstractmethod
    def extract_materials(self, text: str) -> list[Material]:
        ...

    def extract(self, category: ExtractionCategory, text: str) -> list:
        """Run the extractor for one category.

        Args:
            category: Which entity category to extract
            text: Document text

        Returns:
            List of entities of that category
        """
        if category is ExtractionCategory.TOPICS:
            return self.extract_topics(text)
        if category is ExtractionCategory.DEADLINES:
            return self.extract_deadlines(text)
        if category is ExtractionCategory.MATERIALS:
            return self.extract_materials(text)
        raise ValueError(f"Unknown extraction category: {category}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, priority={self.priority})"
