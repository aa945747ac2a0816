"""
Tests for resume_insight.ml.nlp.parsers.experience_parser.
"""

from datetime import date

import pytest

from resume_insight.ml.nlp.parsers.experience_parser import (
    ExperienceParser,
    parse_duration,
    parse_month_year,
    total_experience_years,
)

TODAY = date(2025, 1, 1)


@pytest.fixture
def parser():
    return ExperienceParser()


class TestExperienceEntries:
    def test_entry_with_bullets(self, parser):
        entries = parser.parse(
            ["Senior Engineer | Acme Corp Jan 2020 – Present", "• Built X", "• Led Y"]
        )
        assert len(entries) == 1
        entry = entries[0]
        assert entry.position == "Senior Engineer"
        assert entry.company == "Acme Corp"
        assert entry.duration == "Jan 2020 – Present"
        assert entry.responsibilities == ["Built X", "Led Y"]

    def test_no_date_keeps_remainder_as_company(self, parser):
        entry = parser.parse(["Developer | Acme Corp Remote"])[0]
        assert entry.company == "Acme Corp Remote"
        assert entry.duration == ""

    def test_extra_pipes_joined(self, parser):
        entry = parser.parse(["Engineer | Acme | Jan 2020 – Dec 2021"])[0]
        assert entry.company == "Acme"
        assert entry.duration == "Jan 2020 – Dec 2021"

    def test_continuation_lines(self, parser):
        entry = parser.parse(
            [
                "Engineer | Acme Jan 2020 – Dec 2021",
                "Designed the event ingestion service",
                "Built X",
                "Worked on the search project",
                "Shipped the 2021 release",
            ]
        )[0]
        assert entry.responsibilities == ["Designed the event ingestion service"]

    def test_lines_before_first_entry_ignored(self, parser):
        entries = parser.parse(["Various consulting roles over time", "Engineer | Acme Jan 2020 – Dec 2021"])
        assert len(entries) == 1
        assert entries[0].responsibilities == []

    def test_multiple_entries_in_order(self, parser):
        entries = parser.parse(
            [
                "Senior Engineer | Acme Jan 2020 – Present",
                "• Led migration",
                "Engineer | Beta Jun 2017 – Dec 2019",
                "• Built tooling",
            ]
        )
        assert [e.company for e in entries] == ["Acme", "Beta"]
        assert entries[1].responsibilities == ["Built tooling"]

    def test_bullet_with_pipe_is_not_entry(self, parser):
        assert parser.parse(["• Python | Go"]) == []


class TestDurations:
    def test_parse_month_year(self):
        assert parse_month_year("Jan 2020") == date(2020, 1, 1)
        assert parse_month_year("September 2019") == date(2019, 9, 1)
        assert parse_month_year("03/2021") == date(2021, 3, 1)
        assert parse_month_year("2018") == date(2018, 1, 1)
        assert parse_month_year("soon") is None

    def test_open_range_ends_today(self):
        assert parse_duration("Jan 2020 – Present", TODAY) == (date(2020, 1, 1), TODAY)

    def test_reversed_range(self):
        assert parse_duration("Jan 2021 – Jan 2020", TODAY) is None

    def test_unparseable(self):
        assert parse_duration("", TODAY) is None
        assert parse_duration("a while", TODAY) is None


class TestTotalYears:
    def test_overlapping_ranges_merged(self):
        assert total_experience_years(["Jan 2020 – Dec 2020", "Jun 2020 – Jun 2021"], TODAY) == 1.4

    def test_disjoint_ranges_summed(self):
        assert total_experience_years(["Jun 2017 – Dec 2019", "Jan 2020 – Present"], TODAY) == 7.5

    def test_year_only_range(self):
        assert total_experience_years(["2018 - 2021"], TODAY) == 3.0

    def test_nothing_parseable(self):
        assert total_experience_years(["", "a while"], TODAY) == 0.0

    def test_parser_total_years(self, parser):
        entries = parser.parse(["Engineer | Acme Jan 2020 – Present"])
        assert parser.total_years(entries, TODAY) == 5.0
