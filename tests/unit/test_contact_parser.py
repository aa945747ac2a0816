"""
Tests for resume_insight.ml.nlp.parsers.contact_parser — ContactParser.
"""

import pytest

from resume_insight.ml.nlp.parsers.contact_parser import ContactParser
from resume_insight.ml.nlp.segmenter import normalize_lines


@pytest.fixture
def parser():
    return ContactParser()


def parse(parser, text):
    return parser.parse(normalize_lines(text), text)


class TestName:
    def test_first_line_name(self, parser):
        assert parse(parser, "Jane Doe\njane@x.com").full_name == "Jane Doe"

    def test_first_line_with_symbols_is_not_a_name(self, parser):
        assert parse(parser, "Jane Doe - Engineer\njane@x.com").full_name is None

    def test_more_than_four_words_is_not_a_name(self, parser):
        assert parse(parser, "Curriculum Vitae of Jane Mary Doe\njane@x.com").full_name is None

    def test_empty_document(self, parser):
        info = parser.parse([])
        assert info.full_name is None
        assert info.email is None


class TestEmailAndPhone:
    def test_email(self, parser):
        assert parse(parser, "Jane Doe\nContact: jane.doe+cv@mail.example.org").email == "jane.doe+cv@mail.example.org"

    def test_phone_with_country_code(self, parser):
        assert parse(parser, "Jane Doe\n+1 555 123 4567").phone == "+1 555 123 4567"

    def test_phone_with_parentheses(self, parser):
        assert parse(parser, "Jane Doe\n(415) 555-0199").phone == "(415) 555-0199"

    def test_international_phone(self, parser):
        assert parse(parser, "Jane Doe\n+91 98765 43210").phone == "+91 98765 43210"

    def test_no_phone(self, parser):
        assert parse(parser, "Jane Doe\njane@x.com").phone is None


class TestAddress:
    def test_comma_fragment_in_header_lines(self, parser):
        assert parse(parser, "Jane Doe\nAustin, TX\njane@x.com").address == "Austin, TX"

    def test_pipe_separated_header_line(self, parser):
        info = parse(parser, "Jane Doe\nAustin, TX | Remote\njane@x.com")
        assert info.address == "Austin, TX"

    def test_line_with_email_is_skipped(self, parser):
        info = parse(parser, "Jane Doe\njane@x.com, Boston\nBerlin, Germany")
        assert info.address == "Berlin, Germany"


class TestLinks:
    def test_explicit_urls(self, parser, john_smith_text):
        info = parse(parser, john_smith_text)
        assert info.linkedin == "https://linkedin.com/in/johnsmith"
        assert info.github == "https://github.com/jsmith"
        assert info.portfolio == "https://jsmith.dev"

    def test_provider_named_without_url(self, parser):
        info = parse(parser, "Jane Doe\nLinkedIn\nGitHub\nPortfolio")
        assert info.linkedin == "https://linkedin.com"
        assert info.github == "https://github.com"
        assert info.portfolio == "#"

    def test_website_keyword_with_url(self, parser):
        assert parse(parser, "Jane Doe\nWebsite: https://jane.dev").portfolio == "https://jane.dev"

    def test_no_links_means_none(self, parser):
        info = parse(parser, "Jane Doe\njane@x.com")
        assert info.linkedin is None
        assert info.github is None
        assert info.portfolio is None
