"""
Section parsers for resume field extraction.

Each parser is best-effort: missing data yields None or an empty list,
never an exception.
"""

from .contact_parser import ContactInfo, ContactParser
from .education_parser import EducationParser
from .experience_parser import ExperienceParser, total_experience_years
from .highlights_parser import HighlightsParser
from .projects_parser import ProjectsParser
from .skills_parser import SkillLine, SkillsParser
from .summary_parser import SummaryParser

__all__ = [
    "ContactInfo",
    "ContactParser",
    "EducationParser",
    "ExperienceParser",
    "HighlightsParser",
    "ProjectsParser",
    "SkillLine",
    "SkillsParser",
    "SummaryParser",
    "total_experience_years",
]
