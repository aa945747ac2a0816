"""
Plain text and RTF document extractor.
"""

from pathlib import Path

from striprtf.striprtf import rtf_to_text

from resume_insight.utils.constants import MEDIA_TYPE_RTF, MEDIA_TYPE_TEXT

from .base import BaseExtractor, ExtractionResult


class TextExtractor(BaseExtractor):
    """Extractor for plain text and RTF documents."""

    ENCODINGS = ("utf-8", "utf-16", "cp1252", "latin-1")

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt", ".rtf", ".text", ".md")

    @property
    def supported_media_types(self) -> tuple[str, ...]:
        return (MEDIA_TYPE_TEXT, MEDIA_TYPE_RTF, "text/rtf", "text/markdown")

    def extract_from_bytes(
        self, content: bytes, filename: str = "document.txt"
    ) -> ExtractionResult:
        """Extract text from bytes."""
        text, encoding = self._decode(content)

        if Path(filename).suffix.lower() == ".rtf" or text.lstrip().startswith("{\\rtf"):
            return ExtractionResult(
                text=rtf_to_text(text),
                page_count=max(1, len(text) // 3000),
                metadata={"extractor": "striprtf"},
            )

        # Estimate page count (roughly 3000 chars per page)
        return ExtractionResult(
            text=text,
            page_count=max(1, len(text) // 3000),
            metadata={"extractor": "plain_text", "encoding": encoding},
        )

    def _decode(self, content: bytes) -> tuple[str, str]:
        for encoding in self.ENCODINGS:
            try:
                return content.decode(encoding), encoding
            except UnicodeDecodeError:
                continue
        return content.decode("utf-8", errors="ignore"), "utf-8 (with errors ignored)"
