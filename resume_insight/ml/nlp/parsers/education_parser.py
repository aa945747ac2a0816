"""
Education parser for resumes.

A degree line opens an entry; the next line names the institution, and
date ranges, CGPA/GPA values and honors found below fill in the rest.
"""

import re
from typing import Optional

from resume_insight.data.models.profile import EducationEntry
from resume_insight.ml.nlp.segmenter import strip_bullet
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


class EducationParser:
    """Parser for extracting education entries."""

    DEGREE_PATTERN = re.compile(
        r"bachelor|master|ph\.?\s?d|doctorate|degree|diploma|associate"
        r"|\bb\.?\s?tech\b|\bm\.?\s?tech\b|\bb\.?\s?sc\b|\bm\.?\s?sc\b|\bb\.e\b|\bm\.e\b"
        r"|\bmba\b|\bbs\b|\bms\b|\bba\b|\bma\b|\bb\.s\.|\bm\.s\.|\bb\.a\.|\bm\.a\.",
        re.IGNORECASE,
    )

    DATE_RANGE_PATTERNS = [
        re.compile(r"\d{4}\s*[-–]\s*\d{4}"),
        re.compile(r"\d{4}\s*[-–]\s*Present", re.IGNORECASE),
        re.compile(r"\w{3}\s*\d{4}\s*[-–]\s*\w{3}\s*\d{4}"),
        re.compile(r"\w{3}\s*\d{4}\s*[-–]\s*Present", re.IGNORECASE),
    ]

    # "2019", "May 2019", "Expected 2025"
    SINGLE_YEAR_PATTERN = re.compile(r"^(?:[A-Za-z]+\.?\s+)?(?:19|20)\d{2}$")

    GPA_KEYWORDS = ("cgpa", "gpa")
    DECIMAL_PATTERN = re.compile(r"\d+(?:\.\d+)?")

    HONORS_PATTERN = re.compile(
        r"summa\s*cum\s*laude|magna\s*cum\s*laude|cum\s*laude|with\s*(?:highest\s+)?honou?rs?"
        r"|first\s*class|distinction|dean'?s\s*list",
        re.IGNORECASE,
    )

    def parse(self, lines: list[str]) -> list[EducationEntry]:
        """
        Parse the education section.

        Args:
            lines: Lines of the education section

        Returns:
            Entries in document order
        """
        entries: list[EducationEntry] = []
        current: Optional[dict] = None
        lines_since_degree = 0

        for raw_line in lines:
            line = strip_bullet(raw_line)
            if not line:
                continue

            if self.is_degree(line):
                self._commit(current, entries)
                current = {"degree": line}
                self._fill_details(current, line)
                lines_since_degree = 0
                continue

            if current is None:
                continue
            lines_since_degree += 1

            if self._fill_details(current, line):
                continue
            if lines_since_degree == 1 and not current.get("institution"):
                current["institution"] = line

        self._commit(current, entries)
        return entries

    def is_degree(self, line: str) -> bool:
        return bool(self.DEGREE_PATTERN.search(line))

    def is_date_range(self, line: str) -> bool:
        return any(pattern.search(line) for pattern in self.DATE_RANGE_PATTERNS)

    def _fill_details(self, current: dict, line: str) -> bool:
        """Record year, GPA and honors found on a line; True if any was found."""
        found = False

        if self.is_date_range(line):
            current.setdefault("year", self._date_range_text(line))
            found = True
        elif self.SINGLE_YEAR_PATTERN.match(line):
            current.setdefault("year", line)
            found = True

        lowered = line.lower()
        for keyword in self.GPA_KEYWORDS:
            position = lowered.find(keyword)
            if position < 0:
                continue
            number = self.DECIMAL_PATTERN.search(line, position)
            if number:
                current.setdefault("gpa", number.group(0))
                found = True
            break

        honors = self.HONORS_PATTERN.search(line)
        if honors:
            current.setdefault("honors", honors.group(0))
            found = True

        return found

    def _date_range_text(self, line: str) -> str:
        for pattern in self.DATE_RANGE_PATTERNS:
            match = pattern.search(line)
            if match:
                return match.group(0).strip()
        return line

    @staticmethod
    def _commit(current: Optional[dict], entries: list[EducationEntry]) -> None:
        if current and current.get("degree"):
            entries.append(EducationEntry(**current))
