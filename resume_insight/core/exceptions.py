"""
Error taxonomy for the extraction pipeline.

Every error carries a short `error_type` tag that is persisted with the
failed profile so callers can tell a short document apart from an
unreachable model or a missing credential.
"""

from typing import Optional


class ExtractionError(Exception):
    """Base class for extraction pipeline errors."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.message


class InsufficientTextError(ExtractionError):
    """Extracted text is shorter than the minimum length."""

    def __init__(self, length: int, minimum: int) -> None:
        super().__init__("Insufficient text extracted from resume")
        self.length = length
        self.minimum = minimum


class ParserError(ExtractionError):
    """The LLM parser returned something that is not a JSON object."""


class UpstreamServiceError(ExtractionError):
    """Text extraction or the LLM failed, timed out or was unreachable."""


class ConfigurationError(ExtractionError):
    """A required credential or setting is missing."""


class ResumeNotFoundError(ExtractionError):
    """No resume record exists for the given id."""

    def __init__(self, resume_id: str) -> None:
        super().__init__(f"Resume not found: {resume_id}")
        self.resume_id = resume_id


class ExtractionInProgressError(ExtractionError):
    """A run is already in flight for this resume."""

    def __init__(self, resume_id: str) -> None:
        super().__init__(f"Extraction already in progress for resume {resume_id}")
        self.resume_id = resume_id
