"""
Resume repository for Resume Insight.

Provides data access for resume documents: extraction status transitions
guarded by a per-run token, and the search queries served by the
denormalized skill, experience and location fields.
"""

import re
from typing import Any, Optional

from bson import ObjectId

from resume_insight.data.models.base import utc_now
from resume_insight.data.models.profile import ExtractedProfile
from resume_insight.data.models.resume import Resume
from resume_insight.utils.constants import ExtractionStatus
from resume_insight.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class ResumeRepository(BaseRepository[Resume]):
    """Repository for resume document operations."""

    @property
    def collection_name(self) -> str:
        return "resumes"

    @property
    def model_class(self) -> type[Resume]:
        return Resume

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def get_by_user(self, user_id: str | ObjectId, limit: int = 50) -> list[Resume]:
        """Get resumes uploaded by a user."""
        return self.find({"user_id": self._to_object_id(user_id)}, limit=limit)

    def get_by_status(
        self,
        status: ExtractionStatus,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Resume]:
        """Get resumes whose latest extraction is in the given status."""
        return self.find(
            {"extracted_data.extraction_status": status.value},
            skip=skip,
            limit=limit,
        )

    def search(
        self,
        skills: Optional[list[str]] = None,
        min_experience: Optional[float] = None,
        max_experience: Optional[float] = None,
        location: Optional[str] = None,
        limit: int = 50,
    ) -> list[Resume]:
        """
        Search completed resumes by skills, experience range and location.

        Skills match case-insensitively and all must be present; location is
        a case-insensitive substring match.
        """
        query: dict[str, Any] = {
            "extracted_data.extraction_status": ExtractionStatus.COMPLETED.value
        }
        if skills:
            query["skills"] = {
                "$all": [re.compile(f"^{re.escape(s)}$", re.IGNORECASE) for s in skills]
            }
        if min_experience is not None or max_experience is not None:
            bounds: dict[str, float] = {}
            if min_experience is not None:
                bounds["$gte"] = min_experience
            if max_experience is not None:
                bounds["$lte"] = max_experience
            query["experience_years"] = bounds
        if location:
            query["location"] = re.compile(re.escape(location), re.IGNORECASE)
        return self.find(query, limit=limit, sort_by="experience_years")

    # -------------------------------------------------------------------------
    # Extraction Status Transitions
    # -------------------------------------------------------------------------

    def mark_processing(self, id_value: str | ObjectId, run_id: str) -> bool:
        """Claim the resume for a run and flag it as processing."""
        result = self._get_collection().update_one(
            {"_id": self._to_object_id(id_value)},
            {
                "$set": {
                    "extraction_run_id": run_id,
                    "extracted_data.extraction_status": ExtractionStatus.PROCESSING.value,
                    "updated_at": utc_now(),
                }
            },
        )
        return result.matched_count > 0

    def complete_extraction(
        self,
        id_value: str | ObjectId,
        run_id: str,
        profile: ExtractedProfile,
    ) -> bool:
        """
        Store a completed profile and its search fields.

        Returns False when another run has claimed the resume since.
        """
        result = self._get_collection().update_one(
            {"_id": self._to_object_id(id_value), "extraction_run_id": run_id},
            {
                "$set": {
                    "extracted_data": profile.model_dump(),
                    "skills": list(profile.skills.all),
                    "experience_years": profile.metadata.total_experience_years,
                    "location": profile.location,
                    "searchable_text": profile.searchable_text(),
                    "updated_at": utc_now(),
                }
            },
        )
        return result.matched_count > 0

    def mark_failed(
        self,
        id_value: str | ObjectId,
        run_id: str,
        profile: ExtractedProfile,
    ) -> bool:
        """Store a failed profile and record the error."""
        error = {
            "stage": "extraction",
            "error_type": profile.error_type or "ExtractionError",
            "error_message": profile.error_message or "",
            "occurred_at": profile.extracted_at or utc_now(),
            "is_recoverable": True,
        }
        result = self._get_collection().update_one(
            {"_id": self._to_object_id(id_value), "extraction_run_id": run_id},
            {
                "$set": {
                    "extracted_data": profile.model_dump(),
                    "updated_at": utc_now(),
                },
                "$push": {"processing_errors": error},
            },
        )
        return result.matched_count > 0

    def get_status_counts(self) -> dict[str, int]:
        """Get count of resumes by extraction status."""
        pipeline = [
            {"$group": {"_id": "$extracted_data.extraction_status", "count": {"$sum": 1}}}
        ]
        results = self._get_collection().aggregate(pipeline)
        return {r["_id"]: r["count"] for r in results if r["_id"]}


# Singleton instance
_resume_repository: Optional[ResumeRepository] = None


def get_resume_repository() -> ResumeRepository:
    """Get the resume repository singleton instance."""
    global _resume_repository
    if _resume_repository is None:
        _resume_repository = ResumeRepository()
    return _resume_repository
