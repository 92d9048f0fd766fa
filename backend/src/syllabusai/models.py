"""Pydantic models for the extraction pipeline.

Topics, deadlines and materials are transient value objects: every
extraction call builds fresh, frozen instances and nothing patches them
afterwards. Identity is assigned later by whatever persists them.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enumerations
# =============================================================================


class DifficultyLevel(str, Enum):
    """How demanding a topic is."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class DeadlineType(str, Enum):
    """Kinds of dated course deliverables."""

    ASSIGNMENT = "ASSIGNMENT"
    EXAM = "EXAM"
    QUIZ = "QUIZ"
    PROJECT = "PROJECT"


class MaterialType(str, Enum):
    """Kinds of learning material."""

    TEXTBOOK = "TEXTBOOK"
    READING = "READING"
    VIDEO = "VIDEO"
    WEBSITE = "WEBSITE"
    EXERCISE = "EXERCISE"


class ExtractionCategory(str, Enum):
    """Entity categories a strategy can extract."""

    TOPICS = "topics"
    DEADLINES = "deadlines"
    MATERIALS = "materials"


# =============================================================================
# Entities
# =============================================================================


class Topic(BaseModel):
    """One unit of course content, usually a week or lecture."""

    title: str = Field(..., min_length=1, description="Topic title, truncated to 500 chars")
    week: int = Field(default=1, ge=1, description="Course week the topic belongs to")
    description: str = Field(default="")
    difficulty_level: DifficultyLevel = DifficultyLevel.MEDIUM

    model_config = ConfigDict(frozen=True)


class Deadline(BaseModel):
    """A dated deliverable such as an assignment or exam."""

    title: str = Field(..., min_length=1, description="Deadline title, truncated to 500 chars")
    date: datetime
    type: DeadlineType = DeadlineType.ASSIGNMENT
    description: str = Field(default="")

    model_config = ConfigDict(frozen=True)


class Material(BaseModel):
    """A textbook, reading, video or other learning resource."""

    title: str = Field(..., min_length=1, description="Material title, truncated to 900 chars")
    type: MaterialType = MaterialType.READING
    link: str = Field(default="")
    week: int | None = Field(default=None, ge=1, description="Week the material supports")

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Pipeline results
# =============================================================================


class StrategyInfo(BaseModel):
    """Diagnostic snapshot of one strategy for a given text."""

    name: str
    priority: int
    supported: bool
    confidence: int = Field(..., ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class StrategyAnalysis(BaseModel):
    """Strategy snapshots for a text, ordered by priority."""

    content_length: int
    strategies: list[StrategyInfo] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ExtractionResult(BaseModel):
    """Output of a full extraction request.

    Categories that were not requested, or where nothing was found,
    are empty lists rather than missing.
    """

    topics: list[Topic] = Field(default_factory=list)
    deadlines: list[Deadline] = Field(default_factory=list)
    materials: list[Material] = Field(default_factory=list)
    strategies_used: dict[ExtractionCategory, str | None] = Field(
        default_factory=dict,
        description="Strategy that produced each requested category",
    )

    def for_category(self, category: ExtractionCategory) -> list:
        """Get the entity list for a category."""
        return getattr(self, category.value)


class SyllabusOverview(BaseModel):
    """Summary view of an extraction result for presentation layers."""

    total_weeks: int = 0
    topic_count: int = 0
    deadline_count: int = 0
    material_count: int = 0
    upcoming_deadlines: list[Deadline] = Field(default_factory=list)
    difficulty_distribution: dict[DifficultyLevel, int] = Field(default_factory=dict)
