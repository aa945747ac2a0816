"""
Loguru configuration for Resume Insight.

Three sinks are installed: a colored console, a rotating application log
and ``audit.log``, which only receives records bound with an
``audit_type`` (extraction runs and profile enhancements).
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from resume_insight.utils.config import LoggingSettings, get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[audit_type]} | {message}"

REDACTED = "***REDACTED***"

# Substrings of detail keys whose values never reach the audit log
REDACTED_KEYS = frozenset(
    {
        "password", "passwd", "secret", "token", "api_key", "apikey",
        "auth", "credential", "access_token", "raw_text",
    }
)


def _is_audit_record(record: dict) -> bool:
    return "audit_type" in record["extra"]


def _add_audit_sink(log_dir: Path) -> None:
    logger.add(
        log_dir / "audit.log",
        format=AUDIT_FORMAT,
        level="INFO",
        filter=_is_audit_record,
        rotation="1 week",
        retention="6 months",
        compression="zip",
        enqueue=True,
    )


def setup_logging(log_settings: LoggingSettings | None = None) -> None:
    """
    Replace loguru's default handler with the configured sinks.

    Variable values are only rendered in tracebacks for a debug build in
    development, since they may hold resume text.
    """
    settings = get_settings()
    log_settings = log_settings or settings.logging
    diagnose = settings.debug and settings.environment == "development"

    logger.remove()

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=diagnose,
        )

    log_dir = log_settings.file_path.parent
    log_dir.mkdir(parents=True, exist_ok=True)
    # enqueue: records arrive from extraction worker threads
    logger.add(
        log_settings.file_path,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=diagnose,
        enqueue=True,
    )
    _add_audit_sink(log_dir)

    logger.debug(f"Logging to {log_settings.file_path} at {log_settings.level}")


def get_logger(name: str) -> Any:
    """Module logger; ``name`` is usually ``__name__``."""
    return logger.bind(name=name)


def redact(data: Any) -> Any:
    """Copy of ``data`` with sensitive values masked, recursing into dicts and lists."""
    if isinstance(data, dict):
        return {
            key: REDACTED
            if any(sensitive in str(key).lower() for sensitive in REDACTED_KEYS)
            else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [redact(item) for item in data]
    return data


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: str = "EXTRACTION",
) -> None:
    """
    Write one audit entry.

    Args:
        action: Event name, e.g. ``extraction_completed``
        details: Event fields; sensitive keys are redacted
        audit_type: EXTRACTION or ENHANCEMENT
    """
    logger.bind(audit_type=audit_type).info(f"{action} | {redact(details)}")


try:
    setup_logging()
except Exception as e:
    # Unwritable log directory: keep whichever sinks were added
    logger.warning(f"Logging setup failed, using defaults: {e}")
