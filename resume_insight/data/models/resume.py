"""
Resume data models for Resume Insight.

Defines the schema for resume documents, including file metadata,
the extracted profile, and the denormalized search fields.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from resume_insight.utils.constants import ExtractionStatus

from .base import BaseDocument, EmbeddedModel, PyObjectId, utc_now
from .profile import ExtractedProfile


class FileMetadata(EmbeddedModel):
    """Metadata about the uploaded resume file."""

    original_filename: str
    storage_path: str  # Relative to the configured upload directory
    mime_type: str
    file_size_bytes: int = 0
    file_hash: Optional[str] = None  # SHA-256 hash for deduplication
    uploaded_at: datetime = Field(default_factory=utc_now)

    @field_validator("file_size_bytes")
    @classmethod
    def validate_file_size(cls, v: int) -> int:
        """Validate file size is reasonable (max 10MB)."""
        max_size = 10 * 1024 * 1024  # 10MB
        if v > max_size:
            raise ValueError(f"File size exceeds maximum of {max_size} bytes")
        return v


class ProcessingError(EmbeddedModel):
    """Record of a failed extraction run."""

    stage: str  # e.g., "extraction"
    error_type: str
    error_message: str
    occurred_at: datetime = Field(default_factory=utc_now)
    is_recoverable: bool = True


class Resume(BaseDocument):
    """
    Main resume document model.

    Stores the uploaded file metadata, the extracted profile and
    convenience fields copied from it for indexed search.
    """

    # Owner
    user_id: Optional[PyObjectId] = None

    # File Information
    file: FileMetadata

    # Extraction
    extracted_data: ExtractedProfile = Field(default_factory=ExtractedProfile)
    extraction_run_id: Optional[str] = None

    # Search fields derived from extracted_data
    skills: list[str] = Field(default_factory=list)
    experience_years: float = 0.0
    location: Optional[str] = None
    searchable_text: Optional[str] = None

    # Processing Information
    processing_errors: list[ProcessingError] = Field(default_factory=list)

    @property
    def extraction_status(self) -> ExtractionStatus:
        return self.extracted_data.status

    @property
    def has_errors(self) -> bool:
        """Check if resume has any processing errors."""
        return len(self.processing_errors) > 0

    @property
    def is_processed(self) -> bool:
        """Check if the latest extraction completed."""
        return self.extraction_status == ExtractionStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        """Check if the latest extraction failed."""
        return self.extraction_status == ExtractionStatus.FAILED

    class Settings:
        """MongoDB collection settings."""

        name = "resumes"
        indexes = [
            "user_id",
            "extracted_data.extraction_status",
            "skills",
            "experience_years",
            "location",
            "created_at",
        ]


class ExtractionSnapshot(EmbeddedModel):
    """Read model handed to display code."""

    resume_id: str
    status: ExtractionStatus
    profile: Optional[ExtractedProfile] = None
    error_message: Optional[str] = None
    extracted_at: Optional[datetime] = None

    @classmethod
    def from_resume(cls, resume: Resume) -> "ExtractionSnapshot":
        profile = resume.extracted_data
        return cls(
            resume_id=str(resume.id),
            status=profile.status,
            profile=profile if profile.status == ExtractionStatus.COMPLETED else None,
            error_message=profile.error_message,
            extracted_at=profile.extracted_at,
        )
