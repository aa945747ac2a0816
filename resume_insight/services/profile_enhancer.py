"""
Profile enhancement from extracted resume data.

Fills a user's long-lived profile from a completed extraction. Whatever
produces the candidate values (deterministic mapping or the language
model), they pass through the same guard: a populated profile field is
never replaced by a blank value.
"""

import json
import re
from typing import Any, Optional

from resume_insight.data.models.base import utc_now
from resume_insight.data.models.profile import ExtractedProfile, dedupe_preserving_order
from resume_insight.data.models.resume import Resume
from resume_insight.data.models.user import ENHANCEABLE_FIELDS, UserProfile
from resume_insight.data.repositories.user_repository import UserRepository
from resume_insight.utils.config import get_settings
from resume_insight.utils.constants import (
    GITHUB_PLACEHOLDER,
    LINKEDIN_PLACEHOLDER,
    PLACEHOLDER_LINK,
    AuditAction,
)
from resume_insight.utils.logger import audit_log, get_logger

from .llm_client import LLMClient, get_llm_client, parse_json_response

logger = get_logger(__name__)

# Values that mean "mentioned, but no usable data"
PLACEHOLDER_VALUES = frozenset({PLACEHOLDER_LINK, LINKEDIN_PLACEHOLDER, GITHUB_PLACEHOLDER})

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def is_blank(value: Any) -> bool:
    """True for None, empty or whitespace text, placeholders, empty lists and zero."""
    if value is None:
        return True
    if isinstance(value, str):
        text = value.strip()
        return not text or text in PLACEHOLDER_VALUES
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value <= 0
    return False


def experience_narrative(profile: ExtractedProfile) -> Optional[str]:
    """One-line summary of the work history, most recent entry first."""
    parts = []
    for entry in profile.experience:
        text = entry.position
        if entry.company:
            text = f"{text} at {entry.company}" if text else entry.company
        if entry.duration:
            text = f"{text} ({entry.duration})"
        if text:
            parts.append(text)
    return "; ".join(parts) or None


class ProfileEnhancer:
    """
    Deterministic, field-by-field profile merge.

    merge() is pure: it returns a new UserProfile and never touches the
    database.
    """

    def candidate_values(self, extracted: ExtractedProfile) -> dict[str, Any]:
        """Profile fields proposed by an extracted profile."""
        first_job = extracted.experience[0] if extracted.experience else None
        current_role = extracted.metadata.current_role or (first_job.position if first_job else None)
        current_company = extracted.metadata.current_company or (
            first_job.company if first_job else None
        )

        return {
            "full_name": extracted.identity.full_name,
            "phone": extracted.identity.phone,
            "bio": extracted.identity.summary,
            "location": extracted.location,
            "job_title": current_role,
            "company": current_company,
            "website": extracted.links.portfolio,
            "skills": list(extracted.skills.all),
            "experience": experience_narrative(extracted),
            "linkedin": extracted.links.linkedin,
            "github": extracted.links.github,
            "portfolio": extracted.links.portfolio,
            "total_experience": extracted.metadata.total_experience_years,
            "current_role": current_role,
            "availability": extracted.metadata.availability,
        }

    def merge(self, existing: UserProfile, extracted: ExtractedProfile) -> UserProfile:
        """
        Merge an extracted profile into an existing user profile.

        Args:
            existing: The user's current profile
            extracted: A completed extraction

        Returns:
            A new UserProfile flagged as enhanced
        """
        return self.apply(existing, self.candidate_values(extracted))

    def apply(self, existing: UserProfile, candidates: dict[str, Any]) -> UserProfile:
        """Apply candidate values to the enhanceable fields without blanking any."""
        updates: dict[str, Any] = {}
        for name in ENHANCEABLE_FIELDS:
            current = getattr(existing, name)
            proposed = candidates.get(name)

            if name == "skills":
                merged = dedupe_preserving_order([*(proposed or []), *(current or [])])
                updates[name] = merged
            elif not is_blank(proposed):
                updates[name] = proposed
            else:
                updates[name] = current

        updates["enhanced_from_extraction"] = True
        updates["last_profile_update"] = utc_now()
        return existing.model_copy(update=updates)


class LLMProfileEnhancer(ProfileEnhancer):
    """Profile merge proposed by the language model, applied through the same guard."""

    SYSTEM_PROMPT = (
        "You are a profile enhancement assistant that merges profile and "
        "resume data intelligently."
    )

    # Response key -> UserProfile field
    RESPONSE_FIELDS = {
        "fullName": "full_name",
        "phone": "phone",
        "bio": "bio",
        "location": "location",
        "jobTitle": "job_title",
        "company": "company",
        "website": "website",
        "skills": "skills",
        "experience": "experience",
        "linkedin": "linkedin",
        "github": "github",
        "portfolio": "portfolio",
        "totalExperience": "total_experience",
        "currentRole": "current_role",
        "availability": "availability",
    }

    def __init__(self, client: Optional[LLMClient] = None):
        self.client = client or get_llm_client()

    def merge(self, existing: UserProfile, extracted: ExtractedProfile) -> UserProfile:
        settings = get_settings().llm
        response = self.client.complete(
            self.build_prompt(existing, extracted),
            system_prompt=self.SYSTEM_PROMPT,
            temperature=settings.enhancement_temperature,
            max_tokens=settings.enhancement_max_tokens,
        )
        return self.apply(existing, self.to_candidates(parse_json_response(response)))

    def build_prompt(self, existing: UserProfile, extracted: ExtractedProfile) -> str:
        existing_json = json.dumps(
            existing.model_dump(mode="json", include=set(ENHANCEABLE_FIELDS)), indent=2
        )
        resume_json = json.dumps(
            extracted.model_dump(
                mode="json",
                exclude={"raw_text", "raw_llm_response", "error_message", "error_type"},
            ),
            indent=2,
        )
        keys = ",\n".join(f'  "{key}": ...' for key in self.RESPONSE_FIELDS)
        return (
            "Based on the extracted resume data, fill gaps in the user's existing "
            "profile. Prefer a resume value only when it is present and more "
            "complete or recent; never replace an existing value with null or an "
            "empty value.\n\n"
            f"Existing Profile:\n{existing_json}\n\n"
            f"Resume Data:\n{resume_json}\n\n"
            f"Return the enhanced profile as a JSON object with these keys:\n{{\n{keys}\n}}\n\n"
            "Guidelines:\n"
            "- Create a concise professional bio from the summary and experience\n"
            "- Skills must be a deduplicated array of strings\n"
            "- totalExperience is a number of years\n"
            "- Use null for unavailable information\n"
            "- Return valid JSON only"
        )

    def to_candidates(self, data: dict[str, Any]) -> dict[str, Any]:
        candidates: dict[str, Any] = {}
        for key, field_name in self.RESPONSE_FIELDS.items():
            value = data.get(key)
            if field_name == "skills":
                items = value if isinstance(value, list) else []
                candidates[field_name] = [str(s).strip() for s in items if str(s).strip()]
            elif field_name == "total_experience":
                match = _NUMBER.search(str(value)) if value is not None else None
                candidates[field_name] = float(match.group(0)) if match else None
            elif isinstance(value, (str, int, float)) and not isinstance(value, bool):
                candidates[field_name] = str(value).strip() or None
            else:
                candidates[field_name] = None
        return candidates


def get_profile_enhancer(mode: Optional[str] = None) -> ProfileEnhancer:
    """Enhancer for the configured mode ("deterministic" or "llm")."""
    mode = mode or get_settings().extraction.enhancement_mode
    if mode == "llm":
        return LLMProfileEnhancer()
    return ProfileEnhancer()


def enhance_user_profile(
    resume: Resume,
    user_repository: UserRepository,
    enhancer: Optional[ProfileEnhancer] = None,
) -> Optional[UserProfile]:
    """
    Enhance the owner's profile from a resume's completed extraction.

    Best effort: every failure is logged and None is returned, so the
    extraction outcome is never affected.

    Returns:
        The enhanced profile, or None when nothing was written
    """
    resume_id = str(resume.id)
    try:
        if resume.user_id is None:
            logger.debug(f"Resume {resume_id} has no owner; skipping profile enhancement")
            return None

        user = user_repository.get_by_id(resume.user_id)
        if user is None:
            logger.warning(f"Owner {resume.user_id} of resume {resume_id} not found")
            return None

        enhancer = enhancer or get_profile_enhancer()
        enhanced = enhancer.merge(user, resume.extracted_data)
        if not user_repository.apply_enhancement(user.id, enhanced):
            logger.warning(f"User {user.id} disappeared before enhancement was saved")
            return None

        audit_log(
            AuditAction.PROFILE_ENHANCED.value,
            {
                "resume_id": resume_id,
                "user_id": str(user.id),
                "enhancer": type(enhancer).__name__,
            },
            audit_type="ENHANCEMENT",
        )
        logger.info(f"Enhanced profile of user {user.id} from resume {resume_id}")
        return enhanced

    except Exception as e:
        logger.error(f"Profile enhancement failed for resume {resume_id}: {e}")
        return None
