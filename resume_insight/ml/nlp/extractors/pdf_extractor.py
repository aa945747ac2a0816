"""
PDF document text extractor.

Uses multiple extraction methods for robust text extraction:
1. pdfplumber - Primary method, good for structured text
2. pypdf - Fallback method
"""

import io

import pdfplumber
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from resume_insight.utils.constants import MEDIA_TYPE_PDF
from resume_insight.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult

logger = get_logger(__name__)


class PDFExtractor(BaseExtractor):
    """Extractor for PDF documents."""

    # Below this many characters pdfplumber output is treated as unusable
    MIN_PRIMARY_TEXT = 50

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".pdf",)

    @property
    def supported_media_types(self) -> tuple[str, ...]:
        return (MEDIA_TYPE_PDF,)

    def extract_from_bytes(
        self, content: bytes, filename: str = "document.pdf"
    ) -> ExtractionResult:
        """Extract text from PDF bytes."""
        warnings = []

        text, page_count, metadata = self._extract_with_pdfplumber(io.BytesIO(content))
        if text and len(text.strip()) > self.MIN_PRIMARY_TEXT:
            return ExtractionResult(text=text, page_count=page_count, metadata=metadata)

        warnings.append("pdfplumber extraction yielded limited text, trying pypdf")
        try:
            text, page_count, metadata = self._extract_with_pypdf(io.BytesIO(content))
        except PyPdfError as e:
            logger.error(f"PDF extraction failed for {filename}: {e}")
            return self._create_error_result(e)

        if not text or len(text.strip()) < 10:
            warnings.append("PDF may be image-based or encrypted")

        return ExtractionResult(
            text=text,
            page_count=page_count,
            metadata=metadata,
            warnings=warnings,
        )

    def _extract_with_pdfplumber(self, file_obj) -> tuple[str, int, dict]:
        """Extract text using pdfplumber."""
        text_parts = []
        metadata: dict = {"extractor": "pdfplumber"}

        try:
            with pdfplumber.open(file_obj) as pdf:
                page_count = len(pdf.pages)
                metadata["page_count"] = page_count
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)
        except Exception as e:
            # pdfminer raises a wide range of parse errors; pypdf gets a second try
            logger.debug(f"pdfplumber extraction error: {e}")
            return "", 0, {}

        return "\n\n".join(text_parts), page_count, metadata

    def _extract_with_pypdf(self, file_obj) -> tuple[str, int, dict]:
        """Extract text using pypdf."""
        reader = PdfReader(file_obj)
        page_count = len(reader.pages)
        metadata = {"extractor": "pypdf", "page_count": page_count}

        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)

        return "\n\n".join(text_parts), page_count, metadata
