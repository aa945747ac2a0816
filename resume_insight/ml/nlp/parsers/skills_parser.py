"""
Skills parser for resumes.

Turns the lines of a skills section into categorized skill lists. Each
line is classified by an ordered table of named rules; the first rule that
recognizes the line decides its category and the text holding the skills.
"""

import re
from typing import Callable, NamedTuple, Optional

from resume_insight.ml.nlp.segmenter import strip_bullet
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


class SkillLine(NamedTuple):
    """A classified skills line."""

    rule: str
    category: str
    remainder: str


# A rule receives the line and the active category
SkillRule = Callable[[str, Optional[str]], Optional[tuple[str, str]]]


class SkillsParser:
    """Parser for categorized skill lists."""

    # Canonical skill spellings used to find where a glued label ends.
    # Matched case-sensitively.
    SKILL_ANCHORS: tuple[str, ...] = (
        "C++", "Python", "JavaScript", "React", "Node", "AWS", "Docker",
        "Git", "MySQL", "Linux", "Next.js", "Firebase", "Supabase", "VMware",
        "DBMS", "HTML", "CSS", "Java",
    )

    # Category labels recognized without a colon, matched case-insensitively
    CATEGORY_PREFIXES: tuple[str, ...] = (
        "programming", "web/app dev", "web", "app dev", "cloud", "tools",
        "core", "soft skills", "languages", "frameworks", "databases",
        "technical skills",
    )

    # Shortest text accepted as a glued category label
    MIN_GLUED_LABEL = 3

    # A glued label is a single leading label, never part of a skill list
    LABEL_SEPARATORS = (",", ";", "|")

    def __init__(self) -> None:
        self._anchor_pattern = re.compile(
            "|".join(
                re.escape(a) for a in sorted(self.SKILL_ANCHORS, key=len, reverse=True)
            )
        )
        self._prefixes = tuple(sorted(self.CATEGORY_PREFIXES, key=len, reverse=True))
        self.rules: list[tuple[str, SkillRule]] = [
            ("category_with_colon", self._match_colon),
            ("category_glued_to_skills", self._match_glued),
            ("category_without_colon", self._match_prefix),
            ("continuation", self._match_continuation),
        ]

    def parse(self, lines: list[str]) -> dict[str, list[str]]:
        """
        Parse the skills section.

        Args:
            lines: Lines of the skills section

        Returns:
            Mapping of category label to skills, in document order
        """
        categories: dict[str, list[str]] = {}
        active: Optional[str] = None

        for line in lines:
            classified = self.classify(line, active)
            if classified is None:
                continue
            active = classified.category
            skills = self.split_skills(classified.remainder)
            categories.setdefault(active, []).extend(skills)

        return {label: skills for label, skills in categories.items() if skills}

    def classify(self, line: str, active: Optional[str] = None) -> Optional[SkillLine]:
        """Apply the rules in order; None when no rule recognizes the line."""
        text = strip_bullet(line)
        if not text:
            return None
        for name, rule in self.rules:
            match = rule(text, active)
            if match is not None:
                category, remainder = match
                return SkillLine(name, category, remainder)
        return None

    @staticmethod
    def split_skills(text: str) -> list[str]:
        return [part.strip().rstrip(".").strip() for part in text.split(",") if part.strip(" .")]

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def _match_colon(self, line: str, active: Optional[str]) -> Optional[tuple[str, str]]:
        if ":" not in line:
            return None
        label, remainder = line.split(":", 1)
        label = label.strip()
        if not label:
            return None
        return label, remainder

    def _match_glued(self, line: str, active: Optional[str]) -> Optional[tuple[str, str]]:
        match = self._anchor_pattern.search(line)
        if match is None or match.start() < self.MIN_GLUED_LABEL:
            return None
        # Glued means no separator between label and first skill
        if not line[match.start() - 1].isalpha():
            return None
        label = line[: match.start()]
        if any(separator in label for separator in self.LABEL_SEPARATORS):
            return None
        return label.strip(), line[match.start():]

    def _match_prefix(self, line: str, active: Optional[str]) -> Optional[tuple[str, str]]:
        lowered = line.lower()
        for prefix in self._prefixes:
            if not lowered.startswith(prefix):
                continue
            following = line[len(prefix): len(prefix) + 1]
            if following.isalpha():
                continue
            return line[: len(prefix)], line[len(prefix):].lstrip(" -–")
        return None

    def _match_continuation(
        self, line: str, active: Optional[str]
    ) -> Optional[tuple[str, str]]:
        if active is None or "," not in line:
            return None
        return active, line
