"""
User profile model for Resume Insight.

The user profile is the self-maintained record of a resume owner. The
profile enhancer fills its gaps from extracted resume data without ever
blanking a value the user already has.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import BaseDocument

# Fields the enhancer is allowed to write
ENHANCEABLE_FIELDS: tuple[str, ...] = (
    "full_name",
    "phone",
    "bio",
    "location",
    "job_title",
    "company",
    "website",
    "skills",
    "experience",
    "linkedin",
    "github",
    "portfolio",
    "total_experience",
    "current_role",
    "availability",
)


class UserProfile(BaseDocument):
    """User-maintained profile, stored in the users collection."""

    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    experience: Optional[str] = None  # narrative summary
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    total_experience: Optional[float] = None
    current_role: Optional[str] = None
    availability: Optional[str] = None

    enhanced_from_extraction: bool = False
    last_profile_update: Optional[datetime] = None

    def enhanceable_values(self) -> dict:
        return {name: getattr(self, name) for name in ENHANCEABLE_FIELDS}

    class Settings:
        """MongoDB collection settings."""

        name = "users"
        indexes = ["email", "created_at"]
