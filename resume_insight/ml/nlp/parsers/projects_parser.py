"""
Projects parser for resumes.

Entries open on a "Name – Role Month YYYY – Month YYYY" line. Lines with a
pipe belong to experience-shaped entries and never open a project.
"""

import re
from typing import Optional

from resume_insight.data.models.profile import ProjectEntry
from resume_insight.ml.nlp.segmenter import is_bullet, strip_bullet
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


class ProjectsParser:
    """Parser for extracting projects from a projects section."""

    ENTRY_DASHES = ("–", "—")

    # Role followed by a month-year range
    ROLE_AND_DATE = re.compile(r"^(.*?)\s+([A-Za-z]{3,}\.?\s+\d{4}\s*[–—-]\s*.+)$")
    YEAR_PATTERN = re.compile(r"\d{4}")

    URL_PATTERN = re.compile(r"https?://[^\s|,]+", re.IGNORECASE)

    # "Tech stack:", "Technologies:", "Built with:", etc.
    TECH_LABEL_PATTERN = re.compile(
        r"^(?:tech(?:nologies|nology)?(?:\s*stack)?|stack|tools?\s*used|built\s*with)\s*[:\-]\s*(.+)$",
        re.IGNORECASE,
    )

    # Plain lines are kept only when they talk about building something
    DESCRIPTION_VERBS = (
        "tech", "stack", "built", "using", "created", "implemented",
        "developed", "designed",
    )
    MIN_DESCRIPTION_LENGTH = 10

    def parse(self, lines: list[str]) -> list[ProjectEntry]:
        """
        Parse the projects section.

        Args:
            lines: Lines of the projects section

        Returns:
            Projects in document order
        """
        projects: list[ProjectEntry] = []
        current: Optional[dict] = None

        for line in lines:
            if self._is_entry_line(line):
                self._commit(current, projects)
                current = self._start_entry(line)
                continue
            if current is None:
                continue

            if "live link" in line.lower():
                url = self.URL_PATTERN.search(line)
                if url:
                    current["live_link"] = url.group(0)
                continue

            if is_bullet(line):
                text = strip_bullet(line)
                if text:
                    self._add_description(current, text)
            elif self._is_description(line):
                self._add_description(current, line)

        self._commit(current, projects)
        return projects

    def _is_entry_line(self, line: str) -> bool:
        if "|" in line or is_bullet(line):
            return False
        dash = self._first_dash(line)
        if dash < 0:
            return False
        # A date range alone is not a project name
        return not self.YEAR_PATTERN.search(line[:dash])

    def _first_dash(self, line: str) -> int:
        positions = [line.find(d) for d in self.ENTRY_DASHES if d in line]
        return min(positions) if positions else -1

    def _start_entry(self, line: str) -> dict:
        dash = self._first_dash(line)
        name = line[:dash].strip()
        role_and_date = line[dash + 1:].strip()

        role: Optional[str] = role_and_date or None
        duration: Optional[str] = None
        match = self.ROLE_AND_DATE.match(role_and_date)
        if match:
            role, duration = match.group(1).strip() or None, match.group(2).strip()

        return {
            "name": name,
            "role": role,
            "duration": duration,
            "description": [],
            "technologies": [],
            "live_link": None,
        }

    def _is_description(self, line: str) -> bool:
        lowered = line.lower()
        return (
            len(line) > self.MIN_DESCRIPTION_LENGTH
            and self._first_dash(line) < 0
            and "|" not in line
            and not self.YEAR_PATTERN.search(line)
            and any(verb in lowered for verb in self.DESCRIPTION_VERBS)
        )

    def _add_description(self, current: dict, text: str) -> None:
        current["description"].append(text)
        tech = self.TECH_LABEL_PATTERN.match(text)
        if tech:
            for item in tech.group(1).split(","):
                item = item.strip().rstrip(".")
                if item and item not in current["technologies"]:
                    current["technologies"].append(item)

    @staticmethod
    def _commit(current: Optional[dict], projects: list[ProjectEntry]) -> None:
        if current and current["name"]:
            projects.append(ProjectEntry(**current))
