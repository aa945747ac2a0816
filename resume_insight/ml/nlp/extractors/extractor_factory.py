"""
Factory for creating appropriate document extractors.
"""

from pathlib import Path
from typing import Optional

from resume_insight.core.exceptions import UpstreamServiceError
from resume_insight.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult
from .docx_extractor import DOCXExtractor
from .image_extractor import ImageExtractor
from .pdf_extractor import PDFExtractor
from .text_extractor import TextExtractor

logger = get_logger(__name__)


class ExtractorFactory:
    """
    Factory class for creating document extractors.

    Selects an extractor by file extension or by declared media type.
    Media types that are not PDF, Word or text are sent to OCR.
    """

    _extractors: list[BaseExtractor] = []
    _ocr_extractor: Optional[ImageExtractor] = None
    _initialized: bool = False

    @classmethod
    def _initialize(cls) -> None:
        """Initialize available extractors."""
        if cls._initialized:
            return

        cls._ocr_extractor = ImageExtractor()
        cls._extractors = [
            PDFExtractor(),
            DOCXExtractor(),
            TextExtractor(),
            cls._ocr_extractor,
        ]
        cls._initialized = True

    @classmethod
    def get_extractor(cls, file_path: str | Path) -> Optional[BaseExtractor]:
        """
        Get the appropriate extractor for a file.

        Args:
            file_path: Path to the file or filename

        Returns:
            Appropriate extractor or None if no extractor supports the format
        """
        cls._initialize()

        extension = Path(file_path).suffix.lower()
        for extractor in cls._extractors:
            if extension in extractor.supported_extensions:
                return extractor

        logger.warning(f"No extractor found for extension: {extension}")
        return None

    @classmethod
    def get_extractor_for_media_type(cls, media_type: str) -> BaseExtractor:
        """Get the extractor for a MIME type, falling back to OCR."""
        cls._initialize()

        normalized = (media_type or "").split(";")[0].strip().lower()
        for extractor in cls._extractors:
            if normalized in extractor.supported_media_types:
                return extractor
        return cls._ocr_extractor

    @classmethod
    def extract(cls, file_path: str | Path) -> ExtractionResult:
        """Extract text from a file on disk using the appropriate extractor."""
        extractor = cls.get_extractor(file_path)

        if extractor is None:
            return ExtractionResult(
                text="",
                success=False,
                error_message=f"Unsupported file format: {Path(file_path).suffix}",
            )

        return extractor.extract(file_path)

    @classmethod
    def extract_from_bytes(
        cls, content: bytes, media_type: str, filename: str = "document"
    ) -> ExtractionResult:
        """
        Extract text from file bytes.

        Args:
            content: Raw file bytes
            media_type: Declared MIME type of the upload
            filename: Original filename

        Returns:
            ExtractionResult with extracted text or error
        """
        extractor = cls.get_extractor_for_media_type(media_type)
        return extractor.extract_from_bytes(content, filename)

    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        """Get list of all supported file extensions."""
        cls._initialize()

        extensions = []
        for extractor in cls._extractors:
            extensions.extend(extractor.supported_extensions)
        return extensions

    @classmethod
    def is_supported(cls, file_path: str | Path) -> bool:
        """Check if a file format is supported."""
        return cls.get_extractor(file_path) is not None


def extract_text(content: bytes, media_type: str, filename: str = "document") -> str:
    """
    Turn document bytes into plain text.

    Raises:
        UpstreamServiceError: if the extractor could not read the document
    """
    result = ExtractorFactory.extract_from_bytes(content, media_type, filename)
    if not result.success:
        raise UpstreamServiceError(
            f"Text extraction failed for {filename}: {result.error_message}"
        )
    for warning in result.warnings:
        logger.debug(f"{filename}: {warning}")
    return result.text
