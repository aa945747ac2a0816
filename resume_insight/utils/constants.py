"""
Application-wide constants for Resume Insight.

Keyword tables used by the heuristic parser live with the parsers that use
them; this module holds values shared across packages.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "resume-insight"
APP_DISPLAY_NAME: Final[str] = "Resume Insight"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# File Types
# =============================================================================

SUPPORTED_RESUME_FORMATS: Final[tuple[str, ...]] = (
    ".pdf",
    ".docx",
    ".doc",
    ".txt",
    ".rtf",
    ".png",
    ".jpg",
    ".jpeg",
    ".tiff",
    ".bmp",
)

MEDIA_TYPE_PDF: Final[str] = "application/pdf"
MEDIA_TYPE_DOC: Final[str] = "application/msword"
MEDIA_TYPE_DOCX: Final[str] = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
MEDIA_TYPE_TEXT: Final[str] = "text/plain"
MEDIA_TYPE_RTF: Final[str] = "application/rtf"


# =============================================================================
# Extraction Constants
# =============================================================================

# Order in which LLM skill categories are flattened into the "all" list
LLM_SKILL_CATEGORIES: Final[tuple[str, ...]] = (
    "technical",
    "programming",
    "frameworks",
    "databases",
    "tools",
    "cloud",
    "other",
)

COMMON_LANGUAGES: Final[tuple[str, ...]] = (
    "english",
    "spanish",
    "french",
    "german",
    "chinese",
    "japanese",
    "korean",
    "hindi",
    "arabic",
)

# Placeholder recorded when a link keyword appears without a URL
PLACEHOLDER_LINK: Final[str] = "#"

# Recorded when a provider is named without a profile URL
LINKEDIN_PLACEHOLDER: Final[str] = "https://linkedin.com"
GITHUB_PLACEHOLDER: Final[str] = "https://github.com"


# =============================================================================
# Enums
# =============================================================================


class ExtractionStatus(str, Enum):
    """Lifecycle of one extraction run."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExtractionStatus.COMPLETED, ExtractionStatus.FAILED)


class ParserStrategy(str, Enum):
    """Available profile parser implementations."""

    HEURISTIC = "heuristic"
    LLM = "llm"


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    EXTRACTION_STARTED = "extraction_started"
    EXTRACTION_COMPLETED = "extraction_completed"
    EXTRACTION_FAILED = "extraction_failed"
    EXTRACTION_SUPERSEDED = "extraction_superseded"
    PROFILE_ENHANCED = "profile_enhanced"
