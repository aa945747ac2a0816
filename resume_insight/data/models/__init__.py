"""
Pydantic data models for Resume Insight.

This module provides the extracted profile value object, the resume and
user documents, and the read model returned to display code.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin, utc_now

# Extracted profile
from .profile import (
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
    dedupe_preserving_order,
    flatten_skills,
)

# Resume models
from .resume import ExtractionSnapshot, FileMetadata, ProcessingError, Resume

# User models
from .user import ENHANCEABLE_FIELDS, UserProfile

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    "utc_now",
    # Profile
    "AchievementEntry",
    "CertificationEntry",
    "EducationEntry",
    "ExperienceEntry",
    "ExtractedProfile",
    "Identity",
    "LanguageEntry",
    "ProfileLinks",
    "ProfileMetadata",
    "ProjectEntry",
    "PublicationEntry",
    "SkillSet",
    "VolunteeringEntry",
    "dedupe_preserving_order",
    "flatten_skills",
    # Resume
    "ExtractionSnapshot",
    "FileMetadata",
    "ProcessingError",
    "Resume",
    # User
    "ENHANCEABLE_FIELDS",
    "UserProfile",
]
