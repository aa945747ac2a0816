"""
Configuration management for Resume Insight.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).resolve().parent.parent.parent
PACKAGE_DIR = ROOT_DIR / "resume_insight"
DATA_DIR = ROOT_DIR / "data"


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "resume_insight"
    username: str | None = None
    password: str | None = None

    @property
    def connection_string(self) -> str:
        """Generate MongoDB connection string."""
        if self.username and self.password:
            return f"mongodb://{self.username}:{self.password}@{self.host}:{self.port}"
        return f"mongodb://{self.host}:{self.port}"


class LLMSettings(BaseSettings):
    """OpenAI chat-completion configuration for the LLM parser and enhancer."""

    model_config = SettingsConfigDict(env_prefix="OPENAI_")

    api_key: str | None = None
    model: str = "gpt-4o-mini"
    timeout_seconds: float = 45.0
    max_retries: int = 2

    # Parsing request
    max_tokens: int = 4000
    temperature: float = 0.1

    # Profile enhancement request
    enhancement_max_tokens: int = 2000
    enhancement_temperature: float = 0.2

    @property
    def is_configured(self) -> bool:
        """True when a non-empty credential is available."""
        return bool(self.api_key and self.api_key.strip())


class ExtractionSettings(BaseSettings):
    """Extraction pipeline configuration."""

    model_config = SettingsConfigDict(env_prefix="EXTRACTION_")

    min_text_length: int = 50
    default_strategy: Literal["heuristic", "llm"] = "heuristic"
    max_workers: int = 4

    # Profile enhancement after a successful run
    enhance_profile: bool = True
    enhancement_mode: Literal["deterministic", "llm"] = "deterministic"

    # Uploaded file storage
    upload_dir: Path = DATA_DIR / "uploads"
    max_file_size_bytes: int = 10 * 1024 * 1024

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        """A worker pool needs at least one thread."""
        if v < 1:
            raise ValueError("max_workers must be at least 1")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "resume_insight.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "Resume Insight"
    version: str = "0.1.0"
    description: str = "Resume extraction pipeline with heuristic and LLM parsers"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
