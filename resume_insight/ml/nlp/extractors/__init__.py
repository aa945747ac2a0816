"""
Document text extractors for various file formats.

Supports PDF, DOCX, TXT, RTF and image (OCR) formats.
"""

from .base import BaseExtractor, ExtractionResult
from .docx_extractor import DOCXExtractor
from .extractor_factory import ExtractorFactory, extract_text
from .image_extractor import ImageExtractor
from .pdf_extractor import PDFExtractor
from .text_extractor import TextExtractor

__all__ = [
    "BaseExtractor",
    "ExtractionResult",
    "DOCXExtractor",
    "ExtractorFactory",
    "ImageExtractor",
    "PDFExtractor",
    "TextExtractor",
    "extract_text",
]
