"""
Heuristic resume parser.

Segments the text into sections, then runs the section parsers over their
buffers and assembles one ExtractedProfile. Deterministic and offline.
"""

import time
from datetime import date
from typing import Callable, Optional

from resume_insight.data.models.profile import (
    ExtractedProfile,
    Identity,
    ProfileLinks,
    ProfileMetadata,
    SkillSet,
)
from resume_insight.utils.constants import ParserStrategy
from resume_insight.utils.logger import get_logger

from .base import BaseProfileParser
from .parsers import (
    ContactParser,
    EducationParser,
    ExperienceParser,
    HighlightsParser,
    ProjectsParser,
    SkillsParser,
    SummaryParser,
)
from .segmenter import Section, SectionSegmenter, get_segmenter

logger = get_logger(__name__)


class HeuristicResumeParser(BaseProfileParser):
    """
    Rule-based resume parser.

    Pipeline:
    1. Normalize and segment the text
    2. Contact fields from the whole document
    3. Summary, skills, experience, projects, education from their sections
    4. Certifications, achievements, languages from the whole document
    5. Derive metadata (total years, current role, location)
    """

    strategy = ParserStrategy.HEURISTIC

    def __init__(
        self,
        segmenter: Optional[SectionSegmenter] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.segmenter = segmenter or get_segmenter()
        self.contact_parser = ContactParser()
        self.summary_parser = SummaryParser()
        self.skills_parser = SkillsParser()
        self.experience_parser = ExperienceParser()
        self.projects_parser = ProjectsParser()
        self.education_parser = EducationParser()
        self.highlights_parser = HighlightsParser()
        self._today = today or date.today

    def parse(self, raw_text: str) -> ExtractedProfile:
        start_time = time.time()
        segmented = self.segmenter.segment(raw_text)
        lines = segmented.lines

        contact = self.contact_parser.parse(lines, raw_text)
        summary = self.summary_parser.parse(
            segmented.section(Section.SUMMARY), lines, self.segmenter.is_header
        )
        skills = self.skills_parser.parse(segmented.section(Section.SKILLS))
        experience = self.experience_parser.parse(segmented.section(Section.EXPERIENCE))
        projects = self.projects_parser.parse(segmented.section(Section.PROJECTS))
        education = self.education_parser.parse(segmented.section(Section.EDUCATION))

        certifications = self.highlights_parser.parse_certifications(
            lines, self._is_exact_header
        )
        achievements = self.highlights_parser.parse_achievements(lines)
        languages = self.highlights_parser.parse_languages(raw_text)

        current = experience[0] if experience else None
        metadata = ProfileMetadata(
            total_experience_years=self.experience_parser.total_years(experience, self._today()),
            current_role=current.position if current else None,
            current_company=(current.company or None) if current else None,
            location=contact.address,
        )

        profile = ExtractedProfile(
            identity=Identity(
                full_name=contact.full_name,
                email=contact.email,
                phone=contact.phone,
                address=contact.address,
                summary=summary,
            ),
            links=ProfileLinks(
                linkedin=contact.linkedin,
                github=contact.github,
                portfolio=contact.portfolio,
            ),
            skills=SkillSet.from_categories(skills),
            experience=experience,
            projects=projects,
            education=education,
            certifications=certifications,
            achievements=achievements,
            languages=languages,
            metadata=metadata,
            raw_text=raw_text,
            strategy=self.strategy,
        )

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Heuristic parse finished in {elapsed_ms}ms: "
            f"{len(profile.skills.all)} skills, {len(experience)} experience, "
            f"{len(education)} education, {len(projects)} projects"
        )
        return profile

    def _is_exact_header(self, line: str) -> bool:
        header = self.segmenter.match_header(line)
        return header is not None and header.exact


# Singleton instance
_heuristic_parser: Optional[HeuristicResumeParser] = None


def get_heuristic_parser() -> HeuristicResumeParser:
    """Get the heuristic parser singleton instance."""
    global _heuristic_parser
    if _heuristic_parser is None:
        _heuristic_parser = HeuristicResumeParser()
    return _heuristic_parser
