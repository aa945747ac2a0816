"""
Extracted profile models for Resume Insight.

Defines the canonical structured profile produced by every parser strategy.
Both the heuristic and the LLM parser normalize into ExtractedProfile, so
downstream persistence, search and profile enhancement see one shape.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from pydantic import ConfigDict, Field, model_validator

from resume_insight.utils.constants import ExtractionStatus, ParserStrategy

from .base import EmbeddedModel


def dedupe_preserving_order(items: Iterable[str]) -> list[str]:
    """Exact-match de-duplication that keeps first occurrences in order."""
    seen: set[str] = set()
    result = []
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def flatten_skills(categories: dict[str, list[str]]) -> list[str]:
    """
    Flatten categorized skills into one list.

    Categories are visited in insertion order and skills in list order;
    duplicates are removed by exact string match. Flattening an already
    flat list again yields the same list.
    """
    return dedupe_preserving_order(
        skill for skills in categories.values() for skill in skills
    )


class Identity(EmbeddedModel):
    """Who the resume belongs to."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    summary: Optional[str] = None


class ProfileLinks(EmbeddedModel):
    """
    External profile links.

    None means no link was found; a placeholder such as "https://github.com"
    or "#" means the resume mentions the service without a usable URL.
    """

    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None


class SkillSet(EmbeddedModel):
    """Categorized skills plus their flattened, de-duplicated union."""

    categories: dict[str, list[str]] = Field(default_factory=dict)
    all: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def sync_all(self) -> "SkillSet":
        """Keep the flat list consistent with the categories."""
        if self.categories:
            self.all = flatten_skills(self.categories)
        else:
            self.all = dedupe_preserving_order(self.all)
        return self

    @classmethod
    def from_categories(cls, categories: dict[str, list[str]]) -> "SkillSet":
        return cls(categories=categories)

    @property
    def is_empty(self) -> bool:
        return not self.all


class ExperienceEntry(EmbeddedModel):
    """A single work experience entry."""

    company: str = ""
    position: str
    duration: str = ""  # free text, e.g. "Jan 2020 – Present"
    location: Optional[str] = None
    responsibilities: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)


class ProjectEntry(EmbeddedModel):
    """A single project entry."""

    name: str
    role: Optional[str] = None
    duration: Optional[str] = None
    description: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    live_link: Optional[str] = None


class EducationEntry(EmbeddedModel):
    """A single education entry."""

    degree: str
    institution: Optional[str] = None
    year: Optional[str] = None
    gpa: Optional[str] = None
    location: Optional[str] = None
    honors: Optional[str] = None


class CertificationEntry(EmbeddedModel):
    """A professional certification."""

    name: str
    issuer: Optional[str] = None
    date: Optional[str] = None
    expiry_date: Optional[str] = None
    credential_id: Optional[str] = None


class AchievementEntry(EmbeddedModel):
    """An award or quantified accomplishment."""

    title: str
    description: Optional[str] = None
    date: Optional[str] = None
    organization: Optional[str] = None


class LanguageEntry(EmbeddedModel):
    """A spoken language."""

    language: str
    proficiency: Optional[str] = None


class VolunteeringEntry(EmbeddedModel):
    """A volunteering role."""

    organization: str
    role: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None


class PublicationEntry(EmbeddedModel):
    """A publication."""

    title: str
    publisher: Optional[str] = None
    date: Optional[str] = None
    url: Optional[str] = None


class ProfileMetadata(EmbeddedModel):
    """Derived facts about the candidate."""

    total_experience_years: float = 0.0
    current_role: Optional[str] = None
    current_company: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    salary_expectation: Optional[str] = None


class ExtractedProfile(EmbeddedModel):
    """
    Canonical structured profile for one resume.

    Instances are immutable once produced; a new extraction run creates a
    fresh profile that replaces the previous one wholesale.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
    )

    identity: Identity = Field(default_factory=Identity)
    links: ProfileLinks = Field(default_factory=ProfileLinks)
    skills: SkillSet = Field(default_factory=SkillSet)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)
    achievements: list[AchievementEntry] = Field(default_factory=list)
    languages: list[LanguageEntry] = Field(default_factory=list)
    volunteering: list[VolunteeringEntry] = Field(default_factory=list)
    publications: list[PublicationEntry] = Field(default_factory=list)
    metadata: ProfileMetadata = Field(default_factory=ProfileMetadata)

    # Extraction lifecycle
    extraction_status: ExtractionStatus = ExtractionStatus.PENDING
    extracted_at: Optional[datetime] = None
    raw_text: Optional[str] = None
    error_message: Optional[str] = None
    error_type: Optional[str] = None
    strategy: Optional[ParserStrategy] = None
    raw_llm_response: Optional[dict[str, Any]] = None

    @property
    def status(self) -> ExtractionStatus:
        return ExtractionStatus(self.extraction_status)

    @property
    def location(self) -> Optional[str]:
        """Best known location: metadata first, then the contact address."""
        return self.metadata.location or self.identity.address

    def searchable_text(self) -> str:
        """Lower-cased raw text plus skills, used for full-text search."""
        parts = [self.raw_text or "", " ".join(self.skills.all)]
        return " ".join(part for part in parts if part).lower()

    def finalize(
        self,
        status: ExtractionStatus,
        extracted_at: datetime,
        **updates: Any,
    ) -> "ExtractedProfile":
        """Return a copy tagged with a terminal lifecycle status."""
        return self.model_copy(
            update={
                "extraction_status": status.value,
                "extracted_at": extracted_at,
                **updates,
            }
        )
