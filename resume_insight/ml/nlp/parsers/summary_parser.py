"""
Summary/objective/profile parser for resumes.

Reads the summary section when one exists; otherwise infers a one-line
summary from the first role statement following the contact block.
"""

import re
from typing import Callable, Optional

from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


class SummaryParser:
    """Parser for extracting professional summaries from resume text."""

    # Lines opening with these words are skill category rows, not prose
    CATEGORY_PREFIXES = ("programming", "web", "cloud", "tools", "core")

    UPPERCASE_DIVIDER = re.compile(r"^[A-Z\s]+$")
    RULE_MARKERS = ("---", "===")

    # Fallback rule
    CONTACT_MARKERS = ("@", "github", "linkedin", "portfolio")
    PHONE_MARKER = re.compile(r"\+\d{2}\s*\d+")
    MIN_FALLBACK_LENGTH = 30
    ROLE_WORDS = ("engineer", "developer", "experience")

    # Cap length to prevent bloat
    MAX_LENGTH = 1000

    def parse(
        self,
        section_lines: list[str],
        all_lines: list[str],
        is_header: Callable[[str], bool],
    ) -> Optional[str]:
        """
        Parse the professional summary.

        Args:
            section_lines: Lines of the summary section (may be empty)
            all_lines: Every normalized line of the document
            is_header: Predicate recognizing section header lines

        Returns:
            The summary text, or None when nothing reads like one
        """
        if section_lines:
            summary = self._from_section(section_lines)
            if summary:
                return summary
        return self._infer_after_contact(all_lines, is_header)

    def _from_section(self, lines: list[str]) -> Optional[str]:
        kept = [line for line in lines if not self._is_skipped(line)]
        if not kept:
            return None
        text = re.sub(r"\s+", " ", " ".join(kept)).strip()
        return text[: self.MAX_LENGTH] or None

    def _is_skipped(self, line: str) -> bool:
        if self.UPPERCASE_DIVIDER.match(line):
            return True
        if any(marker in line for marker in self.RULE_MARKERS):
            return True
        return self._starts_with_category(line)

    def _starts_with_category(self, line: str) -> bool:
        return line.lower().startswith(self.CATEGORY_PREFIXES)

    def _infer_after_contact(
        self, lines: list[str], is_header: Callable[[str], bool]
    ) -> Optional[str]:
        found_contact = False
        for line in lines:
            lowered = line.lower()
            if not found_contact:
                if any(m in lowered for m in self.CONTACT_MARKERS) or self.PHONE_MARKER.search(line):
                    found_contact = True
                continue

            if (
                len(line) > self.MIN_FALLBACK_LENGTH
                and not is_header(line)
                and not self._starts_with_category(line)
                and any(word in lowered for word in self.ROLE_WORDS)
            ):
                logger.debug("Inferred summary from first role statement after contact info")
                return line[: self.MAX_LENGTH]
        return None
