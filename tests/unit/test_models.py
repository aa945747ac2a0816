"""
Tests for resume_insight.data.models.
"""

from datetime import datetime

import pytest
from bson import ObjectId
from pydantic import ValidationError

from resume_insight.data.models import (
    ExtractedProfile,
    ExtractionSnapshot,
    FileMetadata,
    Resume,
    SkillSet,
    UserProfile,
    flatten_skills,
)
from resume_insight.utils.constants import ExtractionStatus, ParserStrategy


def make_resume(profile: ExtractedProfile) -> Resume:
    return Resume(
        _id=ObjectId(),
        file=FileMetadata(original_filename="cv.pdf", storage_path="cv.pdf", mime_type="application/pdf"),
        extracted_data=profile,
    )


class TestSkills:
    def test_flatten_in_category_order_without_duplicates(self):
        categories = {"Programming": ["Python", "Go"], "Backend": ["Go", "SQL"]}
        assert flatten_skills(categories) == ["Python", "Go", "SQL"]

    def test_flatten_is_idempotent(self):
        flat = flatten_skills({"a": ["Python", "Go", "Python"]})
        assert flatten_skills({"all": flat}) == flat

    def test_exact_match_only(self):
        assert flatten_skills({"a": ["python", "Python"]}) == ["python", "Python"]

    def test_skill_set_syncs_flat_list(self):
        skills = SkillSet.from_categories({"Cloud": ["AWS", "GCP"], "Ops": ["AWS"]})
        assert skills.all == ["AWS", "GCP"]
        assert not skills.is_empty

    def test_flat_only_skill_set_deduplicated(self):
        assert SkillSet(all=["Python", "Python", "Go"]).all == ["Python", "Go"]


class TestExtractedProfile:
    def test_defaults(self):
        profile = ExtractedProfile()
        assert profile.status == ExtractionStatus.PENDING
        assert profile.experience == []
        assert profile.projects == []
        assert profile.education == []
        assert profile.skills.all == []
        assert profile.metadata.total_experience_years == 0.0

    def test_frozen(self):
        profile = ExtractedProfile()
        with pytest.raises(ValidationError):
            profile.raw_text = "changed"

    def test_finalize_returns_tagged_copy(self):
        profile = ExtractedProfile(raw_text="text")
        stamp = datetime(2025, 1, 1, 12, 0)
        done = profile.finalize(
            ExtractionStatus.COMPLETED, stamp, strategy=ParserStrategy.HEURISTIC.value
        )
        assert done.status == ExtractionStatus.COMPLETED
        assert done.extracted_at == stamp
        assert done.raw_text == "text"
        assert profile.status == ExtractionStatus.PENDING

    def test_location_prefers_metadata(self):
        profile = ExtractedProfile(
            identity={"address": "Austin, TX"}, metadata={"location": "Remote"}
        )
        assert profile.location == "Remote"
        assert ExtractedProfile(identity={"address": "Austin, TX"}).location == "Austin, TX"

    def test_searchable_text(self):
        profile = ExtractedProfile(raw_text="Jane DOE", skills={"categories": {"x": ["Python"]}})
        assert profile.searchable_text() == "jane doe python"


class TestExtractionSnapshot:
    def test_completed_profile_exposed(self):
        profile = ExtractedProfile(raw_text="text").finalize(ExtractionStatus.COMPLETED, datetime(2025, 1, 1))
        snapshot = ExtractionSnapshot.from_resume(make_resume(profile))
        assert snapshot.status == ExtractionStatus.COMPLETED
        assert snapshot.profile is not None
        assert snapshot.extracted_at == datetime(2025, 1, 1)

    def test_failed_profile_hidden(self):
        profile = ExtractedProfile().finalize(
            ExtractionStatus.FAILED,
            datetime(2025, 1, 1),
            error_type="ParserError",
            error_message="bad json",
        )
        resume = make_resume(profile)
        snapshot = ExtractionSnapshot.from_resume(resume)
        assert snapshot.status == ExtractionStatus.FAILED
        assert snapshot.profile is None
        assert snapshot.error_message == "bad json"
        assert snapshot.resume_id == str(resume.id)
        assert resume.is_failed

    def test_pending_profile_hidden(self):
        resume = make_resume(ExtractedProfile())
        assert ExtractionSnapshot.from_resume(resume).profile is None
        assert not resume.is_processed


class TestUserProfile:
    def test_enhanceable_values(self):
        values = UserProfile(bio="Existing bio").enhanceable_values()
        assert values["bio"] == "Existing bio"
        assert values["skills"] == []
        assert "email" not in values
