"""
Tests for resume_insight.ml.nlp.parsers.summary_parser — SummaryParser.
"""

import pytest

from resume_insight.ml.nlp.parsers.summary_parser import SummaryParser


@pytest.fixture
def parser():
    return SummaryParser()


def never_header(line):
    return False


class TestSummarySection:
    def test_section_lines_joined(self, parser):
        lines = ["Backend engineer building APIs.", "Focused on reliability."]
        assert parser.parse(lines, lines, never_header) == (
            "Backend engineer building APIs. Focused on reliability."
        )

    def test_category_and_divider_lines_skipped(self, parser):
        lines = ["Backend engineer building APIs.", "PROGRAMMING SKILLS", "Programming: Python", "-----"]
        assert parser.parse(lines, lines, never_header) == "Backend engineer building APIs."

    def test_capped_length(self, parser):
        lines = ["word " * 400]
        assert len(parser.parse(lines, lines, never_header)) <= 1000


class TestSummaryFallback:
    def test_role_statement_after_contact(self, parser):
        all_lines = [
            "Jane Doe",
            "jane@x.com",
            "Short line",
            "Senior software engineer with 8 years of backend experience",
        ]
        assert parser.parse([], all_lines, never_header) == (
            "Senior software engineer with 8 years of backend experience"
        )

    def test_phone_marker_starts_scan(self, parser):
        all_lines = ["Jane Doe", "+44 7700 900123", "Full stack developer shipping web products daily"]
        assert parser.parse([], all_lines, never_header) == (
            "Full stack developer shipping web products daily"
        )

    def test_header_lines_are_not_summaries(self, parser):
        all_lines = ["jane@x.com", "Experience as a senior developer and engineer"]
        assert parser.parse([], all_lines, lambda line: True) is None

    def test_no_contact_marker(self, parser):
        all_lines = ["Jane Doe", "Senior software engineer with 8 years of backend experience"]
        assert parser.parse([], all_lines, never_header) is None

    def test_empty_section_falls_back(self, parser):
        all_lines = ["jane@x.com", "Data engineer with experience in streaming pipelines"]
        assert parser.parse(["-----"], all_lines, never_header) == (
            "Data engineer with experience in streaming pipelines"
        )
