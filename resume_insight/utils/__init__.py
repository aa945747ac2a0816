"""
Utility modules for Resume Insight.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from resume_insight.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    DATA_DIR,
)
from resume_insight.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    SUPPORTED_RESUME_FORMATS,
    ExtractionStatus,
    ParserStrategy,
    AuditAction,
)
from resume_insight.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    "DATA_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "SUPPORTED_RESUME_FORMATS",
    "ExtractionStatus",
    "ParserStrategy",
    "AuditAction",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
]
