"""
Section segmentation for resume text.

Splits normalized resume lines into per-section buffers with a single
left-to-right scan. The scan carries one piece of state, the section the
previous lines belonged to; a header line for a different section closes
the current buffer and opens the next one.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional

from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


class Section(str, Enum):
    """Resume sections recognized by the segmenter."""

    NONE = "none"
    SUMMARY = "summary"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"
    ACHIEVEMENTS = "achievements"


# Header keywords per section, in scan order. Sets are disjoint; within a
# section longer phrases are tried first.
SECTION_KEYWORDS: tuple[tuple[Section, tuple[str, ...]], ...] = (
    (Section.SUMMARY, (
        "professional summary", "career objective", "about me",
        "summary", "objective", "profile",
    )),
    (Section.SKILLS, (
        "technical skills", "core competencies", "key skills", "skills",
    )),
    (Section.EXPERIENCE, (
        "professional experience", "employment history", "work experience",
        "work history", "experience", "employment",
    )),
    (Section.PROJECTS, (
        "academic projects", "personal projects", "key projects", "projects",
    )),
    (Section.EDUCATION, (
        "academic background", "qualifications", "education", "academic",
    )),
    (Section.CERTIFICATIONS, (
        "certifications", "certification", "certificates", "certificate",
        "certified", "licenses",
    )),
    (Section.ACHIEVEMENTS, (
        "accomplishments", "achievements", "awards",
    )),
)

# Characters that open a bulleted line
BULLET_CHARS = "•-*▪◦●‣·"

# Short lines of at most this many words can be headers on containment alone
MAX_HEADER_WORDS = 4

_NOT_HEADER_SHAPED = re.compile(r"[\d@|]|https?://|www\.", re.IGNORECASE)
_HAS_COLON_CONTENT = re.compile(r":\s*\S")

_CHAR_REPLACEMENTS = {
    "\u00a0": " ",  # Non-breaking space
    "\u00ad": "",  # Soft hyphen
    "\ufeff": "",  # BOM
    "\u200b": "",  # Zero-width space
    "\t": " ",
}


def is_bullet(line: str) -> bool:
    return bool(line) and line[0] in BULLET_CHARS


def strip_bullet(line: str) -> str:
    """Remove a leading bullet marker and surrounding whitespace."""
    return line.lstrip(BULLET_CHARS).strip() if is_bullet(line) else line.strip()


def normalize_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines in document order."""
    if not text:
        return []

    text = unicodedata.normalize("NFKC", text)
    for old, new in _CHAR_REPLACEMENTS.items():
        text = text.replace(old, new)
    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    lines = (re.sub(r"[ ]{2,}", " ", line).strip() for line in text.split("\n"))
    return [line for line in lines if line]


class HeaderMatch(NamedTuple):
    """A line recognized as a section header."""

    section: Section
    inline: str  # content sharing the header's line
    exact: bool  # the line is nothing but the keyword


@dataclass
class SegmentedText:
    """Normalized lines plus the per-section line buffers."""

    lines: list[str]
    sections: dict[Section, list[str]]
    contact_block: list[str] = field(default_factory=list)

    def section(self, name: Section | str) -> list[str]:
        """Lines of a section, empty when the section is absent."""
        return self.sections.get(Section(name), [])

    def has_section(self, name: Section | str) -> bool:
        return bool(self.section(name))

    @property
    def found_sections(self) -> list[Section]:
        return [name for name, lines in self.sections.items() if lines]


@dataclass
class _ScanState:
    current: Section = Section.NONE
    buffers: dict[Section, list[str]] = field(
        default_factory=lambda: {s: [] for s in Section if s is not Section.NONE}
    )
    contact_block: list[str] = field(default_factory=list)


class SectionSegmenter:
    """
    Segments resume text into sections.

    A line is a header when, case-insensitively:
    - it is exactly a keyword (an optional trailing colon is ignored);
    - it starts with a keyword followed by a colon, by glued content
      starting with an upper-case letter ("SummaryBuilt ..."), or the
      keyword itself is written in capitals ("SUMMARY Built ...");
    - it is a short header-shaped line that contains a keyword as a word.
    Bulleted lines are never headers.
    """

    def __init__(
        self,
        keywords: tuple[tuple[Section, tuple[str, ...]], ...] = SECTION_KEYWORDS,
    ) -> None:
        self._keywords = tuple(
            (section, tuple(sorted(words, key=len, reverse=True)))
            for section, words in keywords
        )
        self._word_patterns = {
            word: re.compile(rf"\b{re.escape(word)}\b")
            for _, words in self._keywords
            for word in words
        }

    def segment(self, text: str) -> SegmentedText:
        """
        Segment resume text.

        Args:
            text: Raw extracted text

        Returns:
            SegmentedText with a (possibly empty) buffer for every section
        """
        lines = normalize_lines(text)
        state = _ScanState()
        for line in lines:
            self._advance(state, line)

        result = SegmentedText(
            lines=lines,
            sections=state.buffers,
            contact_block=state.contact_block,
        )
        logger.debug(
            f"Segmented {len(lines)} lines into sections: "
            f"{[s.value for s in result.found_sections]}"
        )
        return result

    def match_header(self, line: str) -> Optional[HeaderMatch]:
        """Return the header match for a line, or None for content lines."""
        if not line or is_bullet(line):
            return None

        lowered = line.lower()
        for section, words in self._keywords:
            for word in words:
                match = self._match_keyword(line, lowered, word)
                if match is not None:
                    inline, exact = match
                    return HeaderMatch(section, inline, exact)
        return None

    def is_header(self, line: str) -> bool:
        return self.match_header(line) is not None

    # -------------------------------------------------------------------------
    # Scan
    # -------------------------------------------------------------------------

    def _advance(self, state: _ScanState, line: str) -> None:
        header = self.match_header(line)

        if header is None:
            if state.current is Section.NONE:
                state.contact_block.append(line)
            else:
                state.buffers[state.current].append(line)
            return

        if header.section is state.current:
            # Repeated header of the open section, e.g. "Soft Skills: ..."
            if not header.exact:
                state.buffers[state.current].append(line)
            return

        state.current = header.section
        if header.inline:
            state.buffers[state.current].append(header.inline)

    def _match_keyword(
        self, line: str, lowered: str, word: str
    ) -> Optional[tuple[str, bool]]:
        if lowered.rstrip(" :").strip() == word:
            return "", True

        if lowered.startswith(word):
            rest = line[len(word):]
            if rest.startswith(":"):
                return rest[1:].strip(), False
            if rest[:1].isupper():
                return rest.strip(), False
            if rest[:1] == " " and line[: len(word)].isupper() and not self._is_header_shaped(line):
                return rest.strip(" :-–"), False

        if self._is_header_shaped(line) and self._word_patterns[word].search(lowered):
            # "Soft Skills: Leadership" keeps its content
            return (line if _HAS_COLON_CONTENT.search(line) else ""), False

        return None

    @staticmethod
    def _is_header_shaped(line: str) -> bool:
        return (
            len(line.split()) <= MAX_HEADER_WORDS
            and not _NOT_HEADER_SHAPED.search(line)
            and not line.endswith(".")
        )


# Singleton instance
_segmenter: Optional[SectionSegmenter] = None


def get_segmenter() -> SectionSegmenter:
    """Get the section segmenter singleton instance."""
    global _segmenter
    if _segmenter is None:
        _segmenter = SectionSegmenter()
    return _segmenter
