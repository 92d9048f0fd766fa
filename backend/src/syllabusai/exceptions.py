"""Exception hierarchy for the extraction pipeline.

Only caller errors and strategy exhaustion ever leave the pipeline;
everything else is recovered inside the strategy that hit it.
"""


class ExtractionError(Exception):
    """Base class for extraction pipeline errors."""


class EmptyContentError(ExtractionError, ValueError):
    """Document text was None, empty or whitespace only."""

    def __init__(self, message: str = "Content cannot be null or empty"):
        super().__init__(message)


class NoSuitableStrategyError(ExtractionError, RuntimeError):
    """No configured strategy accepts the given text."""

    def __init__(self, content_length: int):
        self.content_length = content_length
        super().__init__(
            f"No suitable extraction strategy found for content "
            f"({content_length} characters)"
        )


class AIServiceError(ExtractionError):
    """The AI provider returned something that could not be used."""
