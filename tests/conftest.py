"""
Shared test fixtures for the Resume Insight test suite.

Sets environment variables before any package imports so settings and
logging load in test mode, then provides in-memory repositories, an inline
executor and a scripted LLM client so no database or network is needed.
"""

import os
import tempfile

# === Set environment BEFORE any resume_insight imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "resume_insight_test")
os.environ.setdefault("LOG_CONSOLE_OUTPUT", "false")
os.environ.setdefault("LOG_FILE_PATH", os.path.join(tempfile.gettempdir(), "resume_insight_test", "test.log"))

from concurrent.futures import Executor, Future
from datetime import date
from typing import Any, Optional

import pytest
from bson import ObjectId

from resume_insight.data.models import (
    ExtractedProfile,
    FileMetadata,
    ProcessingError,
    Resume,
    UserProfile,
)
from resume_insight.core.extraction import ExtractionOrchestrator
from resume_insight.ml.nlp import HeuristicResumeParser
from resume_insight.services import ProfileEnhancer
from resume_insight.utils.config import ExtractionSettings
from resume_insight.utils.constants import ExtractionStatus, ParserStrategy

TODAY = date(2025, 1, 1)


# ---------------------------------------------------------------------------
# Sample resume texts
# ---------------------------------------------------------------------------

JANE_DOE_TEXT = (
    "Jane Doe\njane@x.com\n+1 555 123 4567\n\n"
    "Summary\nBackend engineer with 5 years experience.\n\n"
    "Skills\nProgramming: Python, Java\n\n"
    "Education\nBachelor of Science\nMIT\n2015-2019"
)

JOHN_SMITH_TEXT = """John Smith
San Francisco, CA
john.smith@example.com | +1 415 555 0199
linkedin.com/in/johnsmith | github.com/jsmith
Portfolio: https://jsmith.dev

Professional Summary
Backend engineer with 6 years of experience building data platforms.

Technical Skills
Programming: Python, Go, SQL
Cloud: AWS, GCP
Docker, Kubernetes
ToolsGit, Linux

Work Experience
Senior Engineer | Acme Corp Jan 2020 – Present
• Improved API latency by 40%
• Led migration to Kubernetes
Designed the event ingestion service for billing
Software Engineer | Beta Labs Jun 2017 – Dec 2019
• Built internal tooling

Projects
Insight Search – Lead Developer Mar 2021 – Jun 2021
• Built a semantic search service
Tech Stack: Python, FastAPI, Redis
Live Link: https://search.example.com

Education
Bachelor of Technology in Computer Science
State University
2013 - 2017
CGPA: 8.7

Certifications
AWS Certified Solutions Architect 2022
"""


@pytest.fixture
def jane_doe_text():
    return JANE_DOE_TEXT


@pytest.fixture
def john_smith_text():
    return JOHN_SMITH_TEXT


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class InlineExecutor(Executor):
    """Runs submitted work immediately on the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as e:
            future.set_exception(e)
        return future


class DeferredExecutor(Executor):
    """Queues submitted work until run_all() is called."""

    def __init__(self):
        self.pending: list[tuple[Future, Any, tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run_all(self) -> None:
        while self.pending:
            future, fn, args, kwargs = self.pending.pop(0)
            try:
                future.set_result(fn(*args, **kwargs))
            except BaseException as e:
                future.set_exception(e)


class FakeResumeRepository:
    """In-memory ResumeRepository honoring the run token."""

    def __init__(self):
        self.resumes: dict[str, Resume] = {}
        self.status_history: list[tuple[str, str]] = []

    def add(self, resume: Resume) -> Resume:
        if resume.id is None:
            resume = resume.model_copy(update={"id": ObjectId()})
        self.resumes[str(resume.id)] = resume
        return resume

    def get_by_id(self, id_value) -> Optional[Resume]:
        return self.resumes.get(str(id_value))

    def _record(self, key: str, status: ExtractionStatus) -> None:
        self.status_history.append((key, status.value))

    def mark_processing(self, id_value, run_id: str) -> bool:
        key = str(id_value)
        resume = self.resumes.get(key)
        if resume is None:
            return False
        profile = resume.extracted_data.model_copy(
            update={"extraction_status": ExtractionStatus.PROCESSING.value}
        )
        self.resumes[key] = resume.model_copy(
            update={"extraction_run_id": run_id, "extracted_data": profile}
        )
        self._record(key, ExtractionStatus.PROCESSING)
        return True

    def complete_extraction(self, id_value, run_id: str, profile: ExtractedProfile) -> bool:
        key = str(id_value)
        resume = self.resumes.get(key)
        if resume is None or resume.extraction_run_id != run_id:
            return False
        self.resumes[key] = resume.model_copy(
            update={
                "extracted_data": profile,
                "skills": list(profile.skills.all),
                "experience_years": profile.metadata.total_experience_years,
                "location": profile.location,
                "searchable_text": profile.searchable_text(),
            }
        )
        self._record(key, ExtractionStatus.COMPLETED)
        return True

    def mark_failed(self, id_value, run_id: str, profile: ExtractedProfile) -> bool:
        key = str(id_value)
        resume = self.resumes.get(key)
        if resume is None or resume.extraction_run_id != run_id:
            return False
        error = ProcessingError(
            stage="extraction",
            error_type=profile.error_type or "ExtractionError",
            error_message=profile.error_message or "",
        )
        self.resumes[key] = resume.model_copy(
            update={
                "extracted_data": profile,
                "processing_errors": [*resume.processing_errors, error],
            }
        )
        self._record(key, ExtractionStatus.FAILED)
        return True


class FakeUserRepository:
    """In-memory UserRepository."""

    def __init__(self):
        self.users: dict[str, UserProfile] = {}
        self.enhancement_calls = 0

    def add(self, user: UserProfile) -> UserProfile:
        if user.id is None:
            user = user.model_copy(update={"id": ObjectId()})
        self.users[str(user.id)] = user
        return user

    def get_by_id(self, id_value) -> Optional[UserProfile]:
        return self.users.get(str(id_value))

    def apply_enhancement(self, id_value, profile: UserProfile) -> bool:
        key = str(id_value)
        if key not in self.users:
            return False
        self.users[key] = profile
        self.enhancement_calls += 1
        return True


class FakeLLMClient:
    """Returns scripted responses; an Exception instance is raised instead."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def complete(self, prompt, system_prompt, temperature=None, max_tokens=None) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "system_prompt": system_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def resume_repository():
    return FakeResumeRepository()


@pytest.fixture
def user_repository():
    return FakeUserRepository()


@pytest.fixture
def uploads():
    """Uploaded file contents keyed by storage path."""
    return {}


@pytest.fixture
def heuristic_parser():
    return HeuristicResumeParser(today=lambda: TODAY)


@pytest.fixture
def make_resume(resume_repository, uploads):
    """Factory that stores text as an uploaded file and creates its resume."""

    def _factory(text: str, user_id: Optional[ObjectId] = None) -> Resume:
        storage_path = f"{ObjectId()}.txt"
        uploads[storage_path] = text.encode("utf-8")
        return resume_repository.add(
            Resume(
                user_id=user_id,
                file=FileMetadata(
                    original_filename="resume.txt",
                    storage_path=storage_path,
                    mime_type="text/plain",
                    file_size_bytes=len(text),
                ),
            )
        )

    return _factory


@pytest.fixture
def make_orchestrator(resume_repository, user_repository, uploads, heuristic_parser):
    """Factory for an orchestrator wired to in-memory collaborators."""

    def _factory(**overrides: Any) -> ExtractionOrchestrator:
        options: dict[str, Any] = {
            "resume_repository": resume_repository,
            "user_repository": user_repository,
            "parsers": {ParserStrategy.HEURISTIC: heuristic_parser},
            "text_extractor": lambda content, media_type, filename: content.decode("utf-8"),
            "file_loader": lambda resume: uploads[resume.file.storage_path],
            "enhancer": ProfileEnhancer(),
            "executor": InlineExecutor(),
            "settings": ExtractionSettings(),
        }
        options.update(overrides)
        return ExtractionOrchestrator(**options)

    return _factory


@pytest.fixture
def deferred_executor():
    return DeferredExecutor()


@pytest.fixture
def make_llm_client():
    """Factory for a scripted LLM client."""
    return FakeLLMClient
