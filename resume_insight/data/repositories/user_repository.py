"""
User profile repository for Resume Insight.
"""

from typing import Any, Optional

from bson import ObjectId

from resume_insight.data.models.base import utc_now
from resume_insight.data.models.user import ENHANCEABLE_FIELDS, UserProfile
from resume_insight.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class UserRepository(BaseRepository[UserProfile]):
    """Repository for user profile operations."""

    @property
    def collection_name(self) -> str:
        return "users"

    @property
    def model_class(self) -> type[UserProfile]:
        return UserProfile

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        document = self._get_collection().find_one({"email": email.lower()})
        return self._to_model(document)

    def apply_enhancement(self, id_value: str | ObjectId, profile: UserProfile) -> bool:
        """Write the enhanceable field set and the enhancement markers."""
        update: dict[str, Any] = {name: getattr(profile, name) for name in ENHANCEABLE_FIELDS}
        update["enhanced_from_extraction"] = profile.enhanced_from_extraction
        update["last_profile_update"] = profile.last_profile_update or utc_now()
        update["updated_at"] = utc_now()

        result = self._get_collection().update_one(
            {"_id": self._to_object_id(id_value)},
            {"$set": update},
        )
        return result.matched_count > 0


# Singleton instance
_user_repository: Optional[UserRepository] = None


def get_user_repository() -> UserRepository:
    """Get the user repository singleton instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
