"""
LLM-backed resume parser.

Sends the raw text with a schema-shaped prompt to the chat-completion model
and maps the returned JSON document onto ExtractedProfile. Invalid JSON
fails the run; there is no automatic fallback to the heuristic parser.
"""

import re
from datetime import date
from typing import Any, Callable, Optional

from resume_insight.data.models.profile import (
    AchievementEntry,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    ExtractedProfile,
    Identity,
    LanguageEntry,
    ProfileLinks,
    ProfileMetadata,
    ProjectEntry,
    PublicationEntry,
    SkillSet,
    VolunteeringEntry,
)
from resume_insight.services.llm_client import LLMClient, get_llm_client, parse_json_response
from resume_insight.utils.constants import LLM_SKILL_CATEGORIES, ParserStrategy
from resume_insight.utils.logger import get_logger

from .base import BaseProfileParser
from .parsers.experience_parser import total_experience_years
from .segmenter import strip_bullet

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a professional resume parser that extracts structured data from "
    "resumes. Always return valid JSON format only."
)

RESPONSE_SCHEMA = """{
  "personalInfo": {
    "fullName": "Full name",
    "email": "Email address",
    "phone": "Phone number",
    "address": "Full address or location",
    "linkedIn": "LinkedIn profile URL or null",
    "github": "GitHub profile URL or null",
    "portfolio": "Portfolio website URL or null",
    "summary": "Professional summary or objective"
  },
  "experience": [
    {
      "company": "Company name",
      "position": "Job title",
      "duration": "Employment duration, e.g. 'Jan 2020 - Present'",
      "description": "Responsibilities, one per line",
      "location": "Company location",
      "technologies": ["Technologies used"]
    }
  ],
  "education": [
    {
      "institution": "School or university",
      "degree": "Degree type and field",
      "year": "Graduation year or duration",
      "gpa": "GPA if mentioned",
      "location": "Institution location",
      "honors": "Honors or distinctions"
    }
  ],
  "skills": {
    "technical": [], "programming": [], "frameworks": [], "databases": [],
    "tools": [], "cloud": [], "other": []
  },
  "projects": [
    {
      "name": "Project name",
      "description": "Project description",
      "technologies": ["Technologies used"],
      "url": "Project or repository URL",
      "duration": "Project timeline"
    }
  ],
  "certifications": [
    {"name": "", "issuer": "", "date": "", "expiryDate": null, "credentialId": null}
  ],
  "languages": [{"language": "", "proficiency": "Native, Fluent, Intermediate or Basic"}],
  "achievements": [{"title": "", "description": "", "date": "", "organization": ""}],
  "volunteering": [{"organization": "", "role": "", "duration": "", "description": ""}],
  "publications": [{"title": "", "publisher": "", "date": "", "url": ""}],
  "metadata": {
    "totalExperienceYears": 0,
    "currentRole": "Current job title",
    "currentCompany": "Current company",
    "location": "Current location",
    "availability": "Job seeking status if mentioned",
    "salaryExpectation": "Salary expectation if mentioned"
  }
}"""

GUIDELINES = """Important guidelines:
1. Extract only information that is clearly stated in the resume
2. Use null for missing information
3. For arrays, return empty arrays [] if no items found
4. Be consistent with date formats
5. For experience years, calculate based on work history
6. Extract skills comprehensively from all sections
7. If LinkedIn/GitHub profiles are mentioned but no URL, set to the profile page format
8. Return valid JSON only, no additional text or explanations"""

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def build_prompt(raw_text: str) -> str:
    """User message for one parse request."""
    return (
        "Parse the following resume text and extract structured information "
        "in JSON format. Be as accurate and detailed as possible.\n\n"
        f"Resume Text:\n{raw_text}\n\n"
        "Return a JSON object with the following structure:\n"
        f"{RESPONSE_SCHEMA}\n\n{GUIDELINES}"
    )


def _text(value: Any) -> Optional[str]:
    """Trimmed string, or None for null, blank and non-scalar values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    if not text or text.lower() in ("null", "none", "n/a"):
        return None
    return text


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [text for text in (_text(item) for item in value) if text]


def _lines(value: Any) -> list[str]:
    """A description given as a list or as newline separated text."""
    if isinstance(value, list):
        return _string_list(value)
    text = _text(value)
    if not text:
        return []
    return [line for line in (strip_bullet(part) for part in text.splitlines()) if line]


def _records(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _years(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return max(0.0, float(value))
    match = _NUMBER.search(str(value or ""))
    return float(match.group(0)) if match else 0.0


class LLMResumeParser(BaseProfileParser):
    """Resume parser that delegates field extraction to a language model."""

    strategy = ParserStrategy.LLM

    def __init__(
        self,
        client: Optional[LLMClient] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.client = client or get_llm_client()
        self._today = today or date.today

    def parse(self, raw_text: str) -> ExtractedProfile:
        """
        Parse resume text through the model.

        Raises:
            ConfigurationError: No credential is configured
            UpstreamServiceError: The request failed or timed out
            ParserError: The response is not a JSON object
        """
        logger.info("Starting LLM resume parsing")
        response = self.client.complete(build_prompt(raw_text), system_prompt=SYSTEM_PROMPT)
        data = parse_json_response(response)
        profile = self.to_profile(data, raw_text)
        logger.info(
            f"LLM parse finished: {len(profile.skills.all)} skills, "
            f"{len(profile.experience)} experience, {len(profile.education)} education"
        )
        return profile

    def to_profile(self, data: dict[str, Any], raw_text: str) -> ExtractedProfile:
        """Map the model's JSON document onto the canonical profile."""
        personal = data.get("personalInfo") if isinstance(data.get("personalInfo"), dict) else {}
        skills = data.get("skills") if isinstance(data.get("skills"), dict) else {}
        meta = data.get("metadata") if isinstance(data.get("metadata"), dict) else {}

        experience = self._experience(data.get("experience"))
        computed_years = total_experience_years(
            [entry.duration for entry in experience], self._today()
        )

        categories = {
            category: _string_list(skills.get(category))
            for category in LLM_SKILL_CATEGORIES
        }

        return ExtractedProfile(
            identity=Identity(
                full_name=_text(personal.get("fullName")),
                email=_text(personal.get("email")),
                phone=_text(personal.get("phone")),
                address=_text(personal.get("address")),
                summary=_text(personal.get("summary")),
            ),
            links=ProfileLinks(
                linkedin=_text(personal.get("linkedIn") or personal.get("linkedin")),
                github=_text(personal.get("github")),
                portfolio=_text(personal.get("portfolio")),
            ),
            skills=SkillSet.from_categories(
                {category: items for category, items in categories.items() if items}
            ),
            experience=experience,
            projects=self._projects(data.get("projects")),
            education=self._education(data.get("education")),
            certifications=[
                CertificationEntry(
                    name=_text(cert.get("name")) or "",
                    issuer=_text(cert.get("issuer")),
                    date=_text(cert.get("date")),
                    expiry_date=_text(cert.get("expiryDate")),
                    credential_id=_text(cert.get("credentialId")),
                )
                for cert in _records(data.get("certifications"))
                if _text(cert.get("name"))
            ],
            languages=[
                LanguageEntry(
                    language=_text(lang.get("language")),
                    proficiency=_text(lang.get("proficiency")),
                )
                for lang in _records(data.get("languages"))
                if _text(lang.get("language"))
            ],
            achievements=[
                AchievementEntry(
                    title=_text(item.get("title")),
                    description=_text(item.get("description")),
                    date=_text(item.get("date")),
                    organization=_text(item.get("organization")),
                )
                for item in _records(data.get("achievements"))
                if _text(item.get("title"))
            ],
            volunteering=[
                VolunteeringEntry(
                    organization=_text(item.get("organization")),
                    role=_text(item.get("role")),
                    duration=_text(item.get("duration")),
                    description=_text(item.get("description")),
                )
                for item in _records(data.get("volunteering"))
                if _text(item.get("organization"))
            ],
            publications=[
                PublicationEntry(
                    title=_text(item.get("title")),
                    publisher=_text(item.get("publisher")),
                    date=_text(item.get("date")),
                    url=_text(item.get("url")),
                )
                for item in _records(data.get("publications"))
                if _text(item.get("title"))
            ],
            metadata=ProfileMetadata(
                total_experience_years=computed_years or _years(meta.get("totalExperienceYears")),
                current_role=_text(meta.get("currentRole")),
                current_company=_text(meta.get("currentCompany")),
                location=_text(meta.get("location")),
                availability=_text(meta.get("availability")),
                salary_expectation=_text(meta.get("salaryExpectation")),
            ),
            raw_text=raw_text,
            strategy=self.strategy,
            raw_llm_response=data,
        )

    @staticmethod
    def _experience(value: Any) -> list[ExperienceEntry]:
        entries = []
        for item in _records(value):
            position = _text(item.get("position")) or ""
            company = _text(item.get("company")) or ""
            if not position and not company:
                continue
            entries.append(
                ExperienceEntry(
                    position=position,
                    company=company,
                    duration=_text(item.get("duration")) or "",
                    location=_text(item.get("location")),
                    responsibilities=_lines(item.get("description")),
                    technologies=_string_list(item.get("technologies")),
                )
            )
        return entries

    @staticmethod
    def _projects(value: Any) -> list[ProjectEntry]:
        return [
            ProjectEntry(
                name=_text(item.get("name")),
                role=_text(item.get("role")),
                duration=_text(item.get("duration")),
                description=_lines(item.get("description")),
                technologies=_string_list(item.get("technologies")),
                live_link=_text(item.get("url")),
            )
            for item in _records(value)
            if _text(item.get("name"))
        ]

    @staticmethod
    def _education(value: Any) -> list[EducationEntry]:
        entries = []
        for item in _records(value):
            degree = _text(item.get("degree"))
            institution = _text(item.get("institution"))
            if not degree and not institution:
                continue
            entries.append(
                EducationEntry(
                    degree=degree or "",
                    institution=institution,
                    year=_text(item.get("year")),
                    gpa=_text(item.get("gpa")),
                    location=_text(item.get("location")),
                    honors=_text(item.get("honors")),
                )
            )
        return entries


# Singleton instance
_llm_parser: Optional[LLMResumeParser] = None


def get_llm_parser() -> LLMResumeParser:
    """Get the LLM parser singleton instance."""
    global _llm_parser
    if _llm_parser is None:
        _llm_parser = LLMResumeParser()
    return _llm_parser
