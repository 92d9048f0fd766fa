"""Shared normalization helpers for extraction strategies.

Every strategy funnels raw strings through these functions so that enum
fields always land on a member of their closed set, titles respect the
same caps, and dates share one end-of-day convention.
"""

import logging
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Mapping, TypeVar

from ..models import DeadlineType, DifficultyLevel, MaterialType

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

TOPIC_TITLE_MAX = 500
DEADLINE_TITLE_MAX = 500
MATERIAL_TITLE_MAX = 900

END_OF_DAY = time(23, 59, 59)

# Default due date offset when a deadline date cannot be parsed
DEFAULT_DEADLINE_OFFSET = timedelta(weeks=2)

# Candidate field names per logical attribute, in lookup order
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("title", "name"),
    "description": ("description", "summary", "details"),
    "week": ("week", "weekNumber", "week_number"),
    "difficulty": ("difficulty", "difficultyLevel", "difficulty_level", "level"),
    "type": ("type", "category", "kind"),
    "date": ("date", "dueDate", "due_date", "deadline"),
    "link": ("link", "url", "href"),
}

# Ordered (substring, member) rules; first hit wins
DEADLINE_KEYWORD_RULES: tuple[tuple[str, DeadlineType], ...] = (
    ("midterm", DeadlineType.EXAM),
    ("endterm", DeadlineType.EXAM),
    ("final", DeadlineType.EXAM),
    ("exam", DeadlineType.EXAM),
    ("test", DeadlineType.EXAM),
    ("quiz", DeadlineType.QUIZ),
    ("project", DeadlineType.PROJECT),
)

MATERIAL_KEYWORD_RULES: tuple[tuple[str, MaterialType], ...] = (
    ("textbook", MaterialType.TEXTBOOK),
    ("book", MaterialType.TEXTBOOK),
    ("video", MaterialType.VIDEO),
    ("website", MaterialType.WEBSITE),
    ("resource", MaterialType.WEBSITE),
    ("web", MaterialType.WEBSITE),
    ("exercise", MaterialType.EXERCISE),
    ("problem set", MaterialType.EXERCISE),
    ("reading", MaterialType.READING),
)


def truncate(text: str, max_length: int) -> str:
    """Cap text at max_length characters, marking the cut with '...'.

    Text already within the cap is returned unchanged, so applying this
    twice gives the same result as applying it once.
    """
    if text is None or len(text) <= max_length:
        return text
    logger.warning(
        f"Truncating text from {len(text)} to {max_length} characters: "
        f"{text[:50]}..."
    )
    return text[: max_length - 3] + "..."


def parse_enum(enum_cls: type[E], value: Any, default: E) -> E:
    """Resolve a value to a member of enum_cls, case-insensitively.

    Members map to themselves; unknown or missing values map to default.
    """
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    key = str(value).strip().upper()
    for member in enum_cls:
        if member.name == key or str(member.value).upper() == key:
            return member
    return default


def parse_difficulty(value: Any) -> DifficultyLevel:
    return parse_enum(DifficultyLevel, value, DifficultyLevel.MEDIUM)


def parse_deadline_type(value: Any) -> DeadlineType:
    return parse_enum(DeadlineType, value, DeadlineType.ASSIGNMENT)


def parse_material_type(value: Any) -> MaterialType:
    return parse_enum(MaterialType, value, MaterialType.READING)


def _map_keyword(keyword: str | None, rules: tuple[tuple[str, E], ...], default: E) -> E:
    text = (keyword or "").lower()
    for needle, member in rules:
        if needle in text:
            return member
    return default


def map_deadline_keyword(keyword: str | None) -> DeadlineType:
    """Map a free-text deadline keyword ("Midterm", "quiz") to a DeadlineType."""
    return _map_keyword(keyword, DEADLINE_KEYWORD_RULES, DeadlineType.ASSIGNMENT)


def map_material_keyword(keyword: str | None) -> MaterialType:
    """Map a free-text material keyword ("Textbook", "resource") to a MaterialType."""
    return _map_keyword(keyword, MATERIAL_KEYWORD_RULES, MaterialType.READING)


def normalize_year(year: int) -> int:
    """Promote two-digit years (25 -> 2025)."""
    return year + 2000 if year < 100 else year


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def default_deadline_date(now: datetime) -> datetime:
    """End of day two weeks from now; used when a date cannot be read."""
    return end_of_day((now + DEFAULT_DEADLINE_OFFSET).date())


def parse_datetime(value: Any) -> datetime | None:
    """Parse a YYYY-MM-DD date (as end of day) or an ISO-8601 timestamp.

    Timezone-aware timestamps are converted to local naive time so all
    deadlines compare against each other. Returns None when unparsable.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    # Date-only values, extended or basic form (2025-10-15, 20251015)
    try:
        return end_of_day(date.fromisoformat(text))
    except ValueError:
        pass

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
    except (ValueError, OverflowError):
        logger.debug(f"Failed to parse date: {text}")
        return None
    return parsed


def parse_week(value: Any) -> int:
    """Positive week number, or 1 when missing or unusable."""
    if isinstance(value, bool):
        return 1
    try:
        week = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    return week if week >= 1 else 1


def pick_field(item: Mapping[str, Any], attribute: str, default: Any = None) -> Any:
    """Return the first non-blank value among the aliases of attribute.

    Args:
        item: Decoded JSON object
        attribute: Logical attribute name (a key of FIELD_ALIASES)
        default: Value when no alias holds anything

    Returns:
        The first present value, or default
    """
    for key in FIELD_ALIASES.get(attribute, (attribute,)):
        value = item.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return default


def clean_text(value: Any, default: str = "") -> str:
    """Stringify and trim a scalar field; non-scalars fall back to default."""
    if value is None or isinstance(value, (dict, list)):
        return default
    text = str(value).strip()
    return text or default
