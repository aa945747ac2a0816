"""
NLP pipeline for Resume Insight.

Turns resume documents into structured profiles.

Main Components:
- ExtractorFactory / extract_text: Document text extraction (PDF, DOCX, TXT, RTF, OCR)
- SectionSegmenter: Line-oriented section scan
- Section parsers: contact, summary, skills, experience, projects, education,
  certifications/achievements/languages
- HeuristicResumeParser: Rule-based parser strategy
- LLMResumeParser: Language-model parser strategy
"""

from .base import BaseProfileParser

from .extractors import (
    BaseExtractor,
    ExtractionResult,
    ExtractorFactory,
    extract_text,
)

from .segmenter import (
    Section,
    SectionSegmenter,
    SegmentedText,
    get_segmenter,
)

from .resume_parser import (
    HeuristicResumeParser,
    get_heuristic_parser,
)

from .llm_parser import (
    LLMResumeParser,
    get_llm_parser,
)

__all__ = [
    # Strategies
    "BaseProfileParser",
    "HeuristicResumeParser",
    "get_heuristic_parser",
    "LLMResumeParser",
    "get_llm_parser",
    # Segmenter
    "Section",
    "SectionSegmenter",
    "SegmentedText",
    "get_segmenter",
    # Extractors
    "BaseExtractor",
    "ExtractionResult",
    "ExtractorFactory",
    "extract_text",
]
