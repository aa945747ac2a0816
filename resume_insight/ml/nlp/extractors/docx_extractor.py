"""
DOCX document text extractor.

Uses python-docx; paragraphs come first, then table rows joined with " | ".
"""

import io
import zipfile
from pathlib import Path

from docx import Document

from resume_insight.utils.constants import MEDIA_TYPE_DOC, MEDIA_TYPE_DOCX
from resume_insight.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult

logger = get_logger(__name__)


class DOCXExtractor(BaseExtractor):
    """Extractor for Microsoft Word documents."""

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".docx", ".doc")

    @property
    def supported_media_types(self) -> tuple[str, ...]:
        return (MEDIA_TYPE_DOCX, MEDIA_TYPE_DOC)

    def extract_from_bytes(
        self, content: bytes, filename: str = "document.docx"
    ) -> ExtractionResult:
        """Extract text from DOCX bytes."""
        if Path(filename).suffix.lower() == ".doc" and not zipfile.is_zipfile(io.BytesIO(content)):
            return ExtractionResult(
                text="",
                success=False,
                error_message="Legacy .doc format is not supported, convert to .docx",
            )

        try:
            doc = Document(io.BytesIO(content))
        except (zipfile.BadZipFile, KeyError, ValueError) as e:
            logger.error(f"DOCX extraction failed for {filename}: {e}")
            return self._create_error_result(e)

        return self._process_document(doc)

    def _process_document(self, doc) -> ExtractionResult:
        """Process a python-docx Document object."""
        text_parts = []
        warnings = []

        for paragraph in doc.paragraphs:
            text = paragraph.text.strip()
            if text:
                text_parts.append(text)

        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    text_parts.append(" | ".join(cells))

        full_text = "\n".join(text_parts)
        if not full_text.strip():
            warnings.append("Document appears to be empty or contains only images")

        return ExtractionResult(
            text=full_text,
            page_count=len(doc.sections) or 1,
            metadata={"extractor": "python-docx"},
            warnings=warnings,
        )
