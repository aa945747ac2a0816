"""
Image document text extractor.

Scanned resumes and photos are converted to grayscale with Pillow and
passed through Tesseract OCR.
"""

import io

import pytesseract
from PIL import Image, UnidentifiedImageError

from resume_insight.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult

logger = get_logger(__name__)


class ImageExtractor(BaseExtractor):
    """OCR extractor for image uploads."""

    def __init__(self, language: str = "eng") -> None:
        self.language = language

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".gif", ".webp")

    @property
    def supported_media_types(self) -> tuple[str, ...]:
        return (
            "image/png",
            "image/jpeg",
            "image/tiff",
            "image/bmp",
            "image/gif",
            "image/webp",
        )

    def extract_from_bytes(
        self, content: bytes, filename: str = "document.png"
    ) -> ExtractionResult:
        """Run OCR over an image."""
        try:
            image = Image.open(io.BytesIO(content)).convert("L")
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Could not open image {filename}: {e}")
            return self._create_error_result(e)

        try:
            text = pytesseract.image_to_string(image, lang=self.language)
        except pytesseract.TesseractError as e:
            logger.error(f"OCR failed for {filename}: {e}")
            return self._create_error_result(e)
        except pytesseract.TesseractNotFoundError as e:
            logger.error("Tesseract binary is not installed or not on PATH")
            return self._create_error_result(e)

        warnings = [] if text.strip() else ["OCR produced no text"]
        return ExtractionResult(
            text=text,
            metadata={"extractor": "tesseract", "size": image.size},
            warnings=warnings,
        )
