"""Prompt templates for the AI service boundary."""

import logging
from datetime import date

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n\n...[TRUNCATED]...\n\n"


def default_semester_start(today: date | None = None) -> date:
    """September 1st of the current year."""
    today = today or date.today()
    return date(today.year, 9, 1)


def truncate_content(content: str, max_length: int) -> str:
    """Keep the head and tail of over-long content around a marker.

    Course plans tend to sit at the start and reading lists at the end,
    so both halves are kept.
    """
    if len(content) <= max_length:
        return content

    logger.warning(f"Content truncated from {len(content)} to {max_length} chars")
    half = max_length // 2
    return content[:half] + TRUNCATION_MARKER + content[-half:]


TOPIC_PROMPT = """You are analyzing a university course document. Find the "Course Plan" or "Course Topics" table.

Extract EACH WEEK'S topic as a SEPARATE entry. For each topic, rate its difficulty comparatively:
- EASY: Introductory concepts, little prior knowledge needed
- MEDIUM: Builds on earlier material, moderate abstraction
- HARD: Advanced material with complex relationships or heavy prerequisites

Return ONLY this JSON array:
[
  {{"week": 1, "title": "Builder", "description": "Brief summary of what's covered", "difficulty": "EASY"}},
  {{"week": 2, "title": "Factory Method", "description": "Brief summary", "difficulty": "MEDIUM"}}
]

IMPORTANT:
- Extract ALL weeks (typically 1-10 or 1-15)
- Each week = separate JSON object
- Title should be concise (under 100 chars)
- If no topics found, return []

Course document:
{content}"""


DEADLINE_PROMPT = """You are analyzing a university course document. Extract ALL deadlines, assignments and exams.

CALCULATE DATES:
- Assume the semester starts on: {semester_start}
- Week 1 starts on the semester start date
- Week N ends 7*N days after the start
- Assignments are due at the end of the week they are assigned
- Midterm is usually around week 4-5, final/endterm around week 10

Return ONLY this JSON array:
[
  {{"week": 2, "title": "Assignment 1", "date": "YYYY-MM-DD", "type": "ASSIGNMENT", "description": "What is due"}},
  {{"week": 5, "title": "Midterm Examination", "date": "YYYY-MM-DD", "type": "EXAM", "description": "Covers weeks 1-5"}}
]

IMPORTANT:
- Each deadline = separate JSON object
- Type must be: ASSIGNMENT, EXAM, QUIZ, or PROJECT
- Extract "Midterm week" and "Endterm week" mentions
- If no deadlines found, return []

Course document:
{content}"""


MATERIAL_PROMPT = """You are analyzing a university course document. Extract ALL learning materials and resources mentioned.

For each topic or week, find its associated materials, including tables and "Detailed Course Plan" sections.

Return ONLY this JSON array:
[
  {{"week": 1, "title": "Head First Design Patterns - Builder Chapter", "type": "TEXTBOOK", "link": ""}},
  {{"week": 1, "title": "Refactoring.Guru - Builder Tutorial", "type": "WEBSITE", "link": "https://refactoring.guru/design-patterns/builder"}}
]

IMPORTANT:
- Look in "Resources:", "Reading:" and "Supporting reading:" sections
- Each material = separate JSON object
- Type must be: TEXTBOOK, READING, VIDEO, WEBSITE, or EXERCISE
- Do NOT make up materials; if none are mentioned, return []

Course document:
{content}"""


DIFFICULTY_PROMPT = """Analyze the academic difficulty level of this course topic for university students.

TOPIC: {title}
DESCRIPTION: {description}
WEEK: {week}

Consider the complexity of the concepts, required background knowledge,
technical versus theoretical nature, and typical workload.

Classify the difficulty as:
- EASY: Introductory, basic concepts, minimal prerequisites
- MEDIUM: Intermediate, some prerequisites, moderate complexity
- HARD: Advanced, significant prerequisites, complex concepts

Respond ONLY with one of these three words: EASY, MEDIUM, or HARD."""


def topic_prompt(content: str) -> str:
    return TOPIC_PROMPT.format(content=content)


def deadline_prompt(content: str, semester_start: date) -> str:
    return DEADLINE_PROMPT.format(content=content, semester_start=semester_start.isoformat())


def material_prompt(content: str) -> str:
    return MATERIAL_PROMPT.format(content=content)


def difficulty_prompt(title: str, description: str | None, week: int | None) -> str:
    return DIFFICULTY_PROMPT.format(
        title=title,
        description=description or "No description provided",
        week=week or 1,
    )
