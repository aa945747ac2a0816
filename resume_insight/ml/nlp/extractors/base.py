"""
Base extractor class for document text extraction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class ExtractionResult:
    """Result of text extraction from a document."""

    text: str
    page_count: int = 1
    metadata: dict = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    success: bool = True
    error_message: Optional[str] = None

    @property
    def word_count(self) -> int:
        """Count words in extracted text."""
        return len(self.text.split())

    @property
    def is_empty(self) -> bool:
        """Check if extraction resulted in empty text."""
        return len(self.text.strip()) == 0


class BaseExtractor(ABC):
    """
    Abstract base class for document text extractors.

    All format-specific extractors should inherit from this class.
    """

    # Largest document accepted from disk
    MAX_FILE_SIZE = 50 * 1024 * 1024

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., '.pdf', '.docx')."""
        pass

    @property
    @abstractmethod
    def supported_media_types(self) -> tuple[str, ...]:
        """Return tuple of supported MIME types."""
        pass

    def can_extract(self, file_path: str | Path) -> bool:
        """Check if this extractor can handle the given file."""
        return Path(file_path).suffix.lower() in self.supported_extensions

    def extract(self, file_path: str | Path) -> ExtractionResult:
        """Extract text content from a document on disk."""
        try:
            path = self._validate_file(file_path)
            return self.extract_from_bytes(path.read_bytes(), path.name)
        except (OSError, ValueError) as e:
            return self._create_error_result(e)

    @abstractmethod
    def extract_from_bytes(
        self, content: bytes, filename: str = "document"
    ) -> ExtractionResult:
        """
        Extract text content from document bytes.

        Args:
            content: Raw bytes of the document
            filename: Original filename (for extension detection)

        Returns:
            ExtractionResult containing the extracted text and metadata
        """
        pass

    def _validate_file(self, file_path: str | Path) -> Path:
        """
        Validate that file exists, is readable, and is not oversized.

        Security: resolves to an absolute path so relative segments cannot
        escape the upload directory unnoticed.
        """
        try:
            path = Path(file_path).resolve(strict=False)
        except (OSError, ValueError) as e:
            raise ValueError(f"Invalid file path: {file_path}") from e

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if not path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        size = path.stat().st_size
        if size > self.MAX_FILE_SIZE:
            raise ValueError(f"File too large: {size} bytes (max: {self.MAX_FILE_SIZE})")

        return path

    def _create_error_result(self, error: Exception) -> ExtractionResult:
        """Create an error result from an exception."""
        return ExtractionResult(
            text="",
            success=False,
            error_message=str(error),
        )
