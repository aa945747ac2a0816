"""
Work experience parser for resumes.

Entries open on a "Position | Company Mon YYYY – Mon YYYY" line; bullets
and longer prose lines below it become responsibilities.
"""

import re
from datetime import date
from typing import Optional

from resume_insight.data.models.profile import ExperienceEntry
from resume_insight.ml.nlp.segmenter import is_bullet, strip_bullet
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|"
    r"jul(?:y)?|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

# Month-year range at the end of a "company + dates" fragment
TRAILING_DATE_RANGE = re.compile(r"^(.*?)\s+([A-Za-z]{3,}\.?\s+\d{4}\s*[–—-]\s*.+)$")

# Range inside a duration string, e.g. "Jan 2020 – Present" or "2018 - 2021"
DATE_RANGE_PATTERN = re.compile(
    rf"({_MONTH}[,.\s]*\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}})"
    r"\s*(?:[-–—]|to)\s*"
    rf"({_MONTH}[,.\s]*\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}}|present|current|now|ongoing)",
    re.IGNORECASE,
)

MONTH_NAMES = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]

CURRENT_MARKERS = ("present", "current", "now", "ongoing")


def parse_month_year(text: str) -> Optional[date]:
    """Parse "Jan 2020", "January 2020", "03/2020" or "2020" to a date."""
    text = text.strip().lower()
    year_match = re.search(r"\b(19|20)\d{2}\b", text)
    if not year_match:
        return None
    year = int(year_match.group(0))

    month = 1
    numeric = re.match(r"(\d{1,2})/", text)
    if numeric and 1 <= int(numeric.group(1)) <= 12:
        month = int(numeric.group(1))
    else:
        for i, name in enumerate(MONTH_NAMES):
            if text.startswith(name[:3]):
                month = i + 1
                break
    return date(year, month, 1)


def parse_duration(duration: str, today: Optional[date] = None) -> Optional[tuple[date, date]]:
    """Start and end dates of a duration string; open ranges end today."""
    if not duration:
        return None
    match = DATE_RANGE_PATTERN.search(duration)
    if not match:
        return None

    start = parse_month_year(match.group(1))
    end_text = match.group(2).lower()
    end = (today or date.today()) if end_text in CURRENT_MARKERS else parse_month_year(end_text)
    if start is None or end is None or end < start:
        return None
    return start, end


def total_experience_years(durations: list[str], today: Optional[date] = None) -> float:
    """
    Total years covered by a set of durations.

    Overlapping ranges are merged so concurrent roles are not double counted.
    """
    ranges = sorted(r for r in (parse_duration(d, today) for d in durations) if r)
    if not ranges:
        return 0.0

    total_months = 0
    current_start, current_end = ranges[0]
    for start, end in ranges[1:]:
        if start <= current_end:
            current_end = max(current_end, end)
            continue
        total_months += _months_between(current_start, current_end)
        current_start, current_end = start, end
    total_months += _months_between(current_start, current_end)

    return round(total_months / 12, 1)


def _months_between(start: date, end: date) -> int:
    return max(1, (end.year - start.year) * 12 + end.month - start.month)


class ExperienceParser:
    """Parser for extracting work experience entries."""

    ENTRY_DELIMITER = "|"

    # Continuation lines need this many characters
    MIN_CONTINUATION_LENGTH = 10
    YEAR_PATTERN = re.compile(r"\d{4}")
    FOREIGN_SECTION_WORDS = ("project", "education")

    def parse(self, lines: list[str]) -> list[ExperienceEntry]:
        """
        Parse the experience section.

        Args:
            lines: Lines of the experience section

        Returns:
            Entries in document order
        """
        entries: list[ExperienceEntry] = []
        current: Optional[dict] = None

        for line in lines:
            if self._is_entry_line(line):
                self._commit(current, entries)
                current = self._start_entry(line)
            elif current is None:
                continue
            elif is_bullet(line):
                text = strip_bullet(line)
                if text:
                    current["responsibilities"].append(text)
            elif self._is_continuation(line):
                current["responsibilities"].append(line)

        self._commit(current, entries)
        return entries

    def total_years(self, entries: list[ExperienceEntry], today: Optional[date] = None) -> float:
        return total_experience_years([e.duration for e in entries], today)

    def _is_entry_line(self, line: str) -> bool:
        return self.ENTRY_DELIMITER in line and not is_bullet(line)

    def _start_entry(self, line: str) -> dict:
        position, _, rest = line.partition(self.ENTRY_DELIMITER)
        company_and_date = " ".join(
            part.strip() for part in rest.split(self.ENTRY_DELIMITER) if part.strip()
        )

        company, duration = company_and_date, ""
        match = TRAILING_DATE_RANGE.match(company_and_date)
        if match:
            company, duration = match.group(1).strip(), match.group(2).strip()

        return {
            "position": position.strip(),
            "company": company.strip(),
            "duration": duration,
            "responsibilities": [],
        }

    def _is_continuation(self, line: str) -> bool:
        lowered = line.lower()
        return (
            len(line) >= self.MIN_CONTINUATION_LENGTH
            and self.ENTRY_DELIMITER not in line
            and not self.YEAR_PATTERN.search(line)
            and not any(word in lowered for word in self.FOREIGN_SECTION_WORDS)
        )

    @staticmethod
    def _commit(current: Optional[dict], entries: list[ExperienceEntry]) -> None:
        if current and current["position"]:
            entries.append(ExperienceEntry(**current))
