"""Unit tests for the pattern extraction strategy.

Run with: pytest tests/unit/extraction/test_pattern_strategy.py -v
"""

from datetime import datetime, timedelta

import pytest

from syllabusai.extraction.pattern import PATTERN_STRATEGY_NAME, PatternExtractionStrategy
from syllabusai.models import DeadlineType, DifficultyLevel, MaterialType


@pytest.fixture
def strategy(clock) -> PatternExtractionStrategy:
    return PatternExtractionStrategy(clock=clock)


class TestSupportsAndConfidence:
    """Tests for admissibility and self-reported confidence."""

    def test_identity(self, strategy):
        """Test name and priority."""
        assert strategy.name == PATTERN_STRATEGY_NAME
        assert strategy.priority == 50

    def test_requires_more_than_fifty_characters(self, strategy):
        """Test the length threshold is exclusive."""
        assert not strategy.supports("x" * 50)
        assert strategy.supports("x" * 51)
        assert not strategy.supports(None)

    def test_unsupported_text_has_zero_confidence(self, strategy):
        """Test confidence is 0 when the text is too short."""
        assert strategy.confidence("Week 1: Algorithms") == 0

    def test_plain_prose_gets_base_confidence(self, strategy):
        """Test text without structure scores the base 30."""
        text = "This paragraph describes nothing in particular and has no structure."
        assert strategy.confidence(text) == 30

    def test_topic_headers_raise_confidence(self, strategy):
        """Test topic headers add 20."""
        text = "Week 1: Introduction to Algorithms\nWeek 2: Sorting and searching in arrays"
        assert strategy.confidence(text) == 50

    def test_structured_syllabus_is_capped_at_100(self, strategy, sample_syllabus):
        """Test a fully structured document reaches the cap."""
        assert strategy.confidence(sample_syllabus) == 100

    def test_confidence_stays_in_range(self, strategy, sample_syllabus):
        """Test confidence is always within 0-100."""
        for text in ["", "short", sample_syllabus, sample_syllabus * 10]:
            assert 0 <= strategy.confidence(text) <= 100


class TestTopicExtraction:
    """Tests for topic extraction from week/lecture headers."""

    def test_extracts_week_header(self, strategy):
        """Test a week header becomes a medium-difficulty topic."""
        text = "Week 1: Introduction to Algorithms\nMore details follow in class sessions."
        topics = strategy.extract_topics(text)

        assert len(topics) == 1
        assert topics[0].week == 1
        assert topics[0].title == "Introduction to Algorithms"
        assert topics[0].difficulty_level == DifficultyLevel.MEDIUM
        assert topics[0].description == "Extracted from document structure"

    def test_extracts_topics_in_document_order(self, strategy, sample_syllabus):
        """Test multiple headers are kept in order with their weeks."""
        topics = strategy.extract_topics(sample_syllabus)

        assert [t.week for t in topics] == [1, 2, 3]
        assert topics[1].title == "Creational patterns and the Builder"

    def test_other_header_keywords(self, strategy):
        """Test lecture, chapter and module headers."""
        text = (
            "Lecture 4 - Dynamic programming basics\n"
            "Chapter 5. Greedy algorithms overview\n"
            "Module 6) Network flow problems\n"
        )
        topics = strategy.extract_topics(text)

        assert [t.week for t in topics] == [4, 5, 6]
        assert topics[0].title == "Dynamic programming basics"

    def test_week_zero_is_clamped(self, strategy):
        """Test week numbers below 1 become 1."""
        topics = strategy.extract_topics("Week 0: Orientation and course logistics")
        assert topics[0].week == 1

    def test_skips_boilerplate_titles(self, strategy):
        """Test syllabus boilerplate lines are not topics."""
        text = "Week 1: Syllabus and grading policy\nWeek 2: Hash tables and hashing"
        topics = strategy.extract_topics(text)

        assert [t.title for t in topics] == ["Hash tables and hashing"]

    def test_caps_topic_count(self, strategy):
        """Test at most 25 topics are returned."""
        text = "\n".join(f"Week {i}: Topic number {i} details" for i in range(1, 31))
        topics = strategy.extract_topics(text)

        assert len(topics) == 25
        assert topics[-1].week == 25

    def test_no_headers_gives_empty_list(self, strategy):
        """Test prose without headers yields no topics."""
        assert strategy.extract_topics("Nothing structured is written in this text at all.") == []


class TestDeadlineExtraction:
    """Tests for dated deadline extraction."""

    def test_extracts_assignment_date(self, strategy):
        """Test 'Assignment due M/D/YYYY' becomes an end-of-day assignment deadline."""
        text = "Course outline for the autumn term.\nAssignment due 10/15/2025"
        deadlines = strategy.extract_deadlines(text)

        assert len(deadlines) == 1
        assert deadlines[0].type == DeadlineType.ASSIGNMENT
        assert deadlines[0].date == datetime(2025, 10, 15, 23, 59, 59)
        assert deadlines[0].title == "Assignment 1"

    def test_keyword_types_and_numbering(self, strategy, sample_syllabus):
        """Test types follow keywords and titles are numbered in order."""
        deadlines = strategy.extract_deadlines(sample_syllabus)

        assert [d.title for d in deadlines] == ["Assignment 1", "Midterm 2", "Project 3"]
        assert [d.type for d in deadlines] == [
            DeadlineType.ASSIGNMENT,
            DeadlineType.EXAM,
            DeadlineType.PROJECT,
        ]

    def test_two_digit_year(self, strategy):
        """Test two-digit years are read as 20xx."""
        deadlines = strategy.extract_deadlines("Quiz on 3/4/25 covers the first two weeks.")

        assert deadlines[0].type == DeadlineType.QUIZ
        assert deadlines[0].date == datetime(2025, 3, 4, 23, 59, 59)

    def test_three_digit_year_is_not_a_date(self, strategy):
        """Test only two- and four-digit years are read."""
        deadlines = strategy.extract_deadlines("Homework due 10/15/202\nProject due 11/20/2025")

        assert len(deadlines) == 1
        assert deadlines[0].type == DeadlineType.PROJECT
        assert deadlines[0].date == datetime(2025, 11, 20, 23, 59, 59)

    def test_invalid_date_is_skipped(self, strategy):
        """Test impossible dates do not produce deadlines."""
        text = "Homework due 13/45/2025\nExam on 11/30/2025"
        deadlines = strategy.extract_deadlines(text)

        assert len(deadlines) == 1
        assert deadlines[0].type == DeadlineType.EXAM
        assert deadlines[0].title == "Exam 1"

    def test_caps_deadline_count(self, strategy):
        """Test at most 15 deadlines are returned."""
        text = "\n".join(f"Homework {i} due 10/{i}/2025" for i in range(1, 21))
        assert len(strategy.extract_deadlines(text)) == 15

    def test_synthesizes_defaults_without_deadlines(self, strategy, fixed_now):
        """Test a midterm and a final are synthesized when nothing is found."""
        deadlines = strategy.extract_deadlines("This document mentions no dated deliverables anywhere.")

        assert len(deadlines) == 2
        midterm, final = deadlines
        assert midterm.title == "Midterm Examination"
        assert midterm.date == fixed_now + timedelta(weeks=5)
        assert final.title == "Final Examination"
        assert final.date == fixed_now + timedelta(weeks=10)
        assert all(d.type == DeadlineType.EXAM for d in deadlines)

    def test_defaults_when_every_date_is_invalid(self, strategy):
        """Test unreadable dates still yield the synthesized pair."""
        deadlines = strategy.extract_deadlines("Assignment due 99/99/2025")
        assert [d.title for d in deadlines] == ["Midterm Examination", "Final Examination"]


class TestMaterialExtraction:
    """Tests for material extraction from labelled lines."""

    def test_extracts_quoted_textbook(self, strategy):
        """Test a quoted textbook title."""
        materials = strategy.extract_materials('Textbook: "Introduction to Algorithms"')

        assert len(materials) == 1
        assert materials[0].title == "Introduction to Algorithms"
        assert materials[0].type == MaterialType.TEXTBOOK
        assert materials[0].link == ""

    def test_url_becomes_link(self, strategy, sample_syllabus):
        """Test a URL in the line is used as the material link."""
        materials = strategy.extract_materials(sample_syllabus)

        video = [m for m in materials if m.type == MaterialType.VIDEO]
        assert len(video) == 1
        assert video[0].link == "https://example.com/videos"

    def test_keyword_types(self, strategy):
        """Test material keywords map to material types."""
        text = (
            "Website: The algorithms visualizer site\n"
            "Exercises: Weekly practice problem sheets\n"
            "Reading - Selected journal papers on graphs\n"
        )
        materials = strategy.extract_materials(text)

        assert [m.type for m in materials] == [
            MaterialType.WEBSITE,
            MaterialType.EXERCISE,
            MaterialType.READING,
        ]

    def test_skips_short_and_filler_titles(self, strategy):
        """Test short titles and filler phrases are ignored."""
        text = "Book: SICP\nReading: see above for details\nResources: as needed by students"
        assert strategy.extract_materials(text) == []

    def test_no_default_materials(self, strategy):
        """Test nothing is synthesized when no materials are found."""
        assert strategy.extract_materials("Plain text without any labelled resources at all.") == []
