"""
Tests for resume_insight.ml.nlp.extractors.
"""

import pytest

from resume_insight.core.exceptions import UpstreamServiceError
from resume_insight.ml.nlp.extractors import (
    DOCXExtractor,
    ExtractionResult,
    ExtractorFactory,
    ImageExtractor,
    PDFExtractor,
    TextExtractor,
    extract_text,
)


class TestTextExtractor:
    def test_utf8_bytes(self):
        result = TextExtractor().extract_from_bytes("Jane Doe\nRésumé".encode("utf-8"))
        assert result.success
        assert result.text == "Jane Doe\nRésumé"
        assert result.metadata["encoding"] == "utf-8"
        assert result.word_count == 3

    def test_rtf_bytes(self):
        result = TextExtractor().extract_from_bytes(rb"{\rtf1\ansi Jane Doe}", "cv.rtf")
        assert "Jane Doe" in result.text
        assert result.metadata["extractor"] == "striprtf"

    def test_extract_from_disk(self, tmp_path):
        path = tmp_path / "cv.txt"
        path.write_text("Jane Doe", encoding="utf-8")
        assert ExtractorFactory.extract(path).text == "Jane Doe"

    def test_missing_file(self, tmp_path):
        result = TextExtractor().extract(tmp_path / "missing.txt")
        assert not result.success
        assert result.is_empty


class TestExtractorFactory:
    @pytest.mark.parametrize(
        "media_type,extractor_type",
        [
            ("text/plain", TextExtractor),
            ("text/plain; charset=utf-8", TextExtractor),
            ("application/pdf", PDFExtractor),
            ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", DOCXExtractor),
            ("image/png", ImageExtractor),
            ("application/octet-stream", ImageExtractor),
        ],
    )
    def test_media_type_routing(self, media_type, extractor_type):
        assert isinstance(ExtractorFactory.get_extractor_for_media_type(media_type), extractor_type)

    def test_extension_lookup(self):
        assert isinstance(ExtractorFactory.get_extractor("cv.PDF"), PDFExtractor)
        assert ExtractorFactory.get_extractor("cv.xyz") is None
        assert not ExtractorFactory.is_supported("cv.xyz")

    def test_unsupported_extension_result(self):
        result = ExtractorFactory.extract("cv.xyz")
        assert not result.success
        assert "Unsupported" in result.error_message


class TestExtractText:
    def test_plain_text(self):
        assert extract_text(b"Jane Doe", "text/plain", "cv.txt") == "Jane Doe"

    def test_failed_result_raises(self, monkeypatch):
        monkeypatch.setattr(
            ExtractorFactory,
            "extract_from_bytes",
            classmethod(lambda cls, content, media_type, filename="document": ExtractionResult(
                text="", success=False, error_message="corrupt file"
            )),
        )
        with pytest.raises(UpstreamServiceError, match="corrupt file"):
            extract_text(b"%PDF-", "application/pdf", "cv.pdf")
