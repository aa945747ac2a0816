"""
Tests for resume_insight.ml.nlp.parsers.skills_parser — SkillsParser.
"""

import pytest

from resume_insight.data.models import flatten_skills
from resume_insight.ml.nlp.parsers.skills_parser import SkillsParser


@pytest.fixture
def parser():
    return SkillsParser()


class TestSkillsParser:
    def test_colon_categories(self, parser):
        categories = parser.parse(["Programming: Python, Go", "Cloud: AWS, GCP"])
        assert categories == {"Programming": ["Python", "Go"], "Cloud": ["AWS", "GCP"]}
        assert flatten_skills(categories) == ["Python", "Go", "AWS", "GCP"]

    def test_glued_category(self, parser):
        assert parser.parse(["Programming LanguagesC++, Python"]) == {
            "Programming Languages": ["C++", "Python"]
        }

    def test_category_prefix_without_colon(self, parser):
        assert parser.parse(["Cloud AWS, GCP"]) == {"Cloud": ["AWS", "GCP"]}

    def test_continuation_extends_active_category(self, parser):
        assert parser.parse(["Languages: Python", "Go, Rust"]) == {
            "Languages": ["Python", "Go", "Rust"]
        }

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("Bootstrap, TailwindCSS", ["React", "Bootstrap", "TailwindCSS"]),
            ("Sass, MicroPython, Go", ["React", "Sass", "MicroPython", "Go"]),
        ],
    )
    def test_glued_spelling_inside_list_is_continuation(self, parser, line, expected):
        assert parser.parse(["Frontend: React", line]) == {"Frontend": expected}

    def test_continuation_without_category_ignored(self, parser):
        assert parser.parse(["Go, Rust"]) == {}

    def test_repeated_category_extended_in_first_position(self, parser):
        categories = parser.parse(["Cloud: AWS", "Tools: Git", "Cloud: GCP"])
        assert list(categories) == ["Cloud", "Tools"]
        assert categories["Cloud"] == ["AWS", "GCP"]

    def test_unclassifiable_line_ignored(self, parser):
        assert parser.parse(["Fast learner"]) == {}

    def test_bullets_and_empty_tokens(self, parser):
        assert parser.parse(["• Tools: Git, , Docker."]) == {"Tools": ["Git", "Docker"]}

    def test_empty_category_dropped(self, parser):
        assert parser.parse(["Cloud:"]) == {}


class TestClassificationRules:
    @pytest.mark.parametrize(
        "line,rule,category",
        [
            ("Programming: Python", "category_with_colon", "Programming"),
            ("ToolsGit, Linux", "category_glued_to_skills", "Tools"),
            ("Soft Skills Leadership, Teamwork", "category_without_colon", "Soft Skills"),
            ("Go, Rust", "continuation", "Cloud"),
            ("Bootstrap, TailwindCSS", "continuation", "Cloud"),
        ],
    )
    def test_rule_selected(self, parser, line, rule, category):
        classified = parser.classify(line, active="Cloud")
        assert classified.rule == rule
        assert classified.category == category

    def test_rules_in_order(self, parser):
        assert [name for name, _ in parser.rules] == [
            "category_with_colon",
            "category_glued_to_skills",
            "category_without_colon",
            "continuation",
        ]

    def test_no_rule_matches(self, parser):
        assert parser.classify("Fast learner", active="Cloud") is None
