"""
Certifications, achievements and languages parser.

These fields are collected from the whole document rather than from a
section buffer: a certification or a quantified achievement may appear
under any heading.
"""

import re
from typing import Callable, Optional

from resume_insight.data.models.profile import (
    AchievementEntry,
    CertificationEntry,
    LanguageEntry,
)
from resume_insight.ml.nlp.segmenter import strip_bullet
from resume_insight.utils.constants import COMMON_LANGUAGES
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


class HighlightsParser:
    """Parser for certifications, achievements and spoken languages."""

    CERTIFICATION_KEYWORDS = ("certification", "certified", "certificate")

    ACHIEVEMENT_MARKERS = ("%", "k+", "increased", "improved", "reduced")

    KNOWN_PROVIDERS = [
        "AWS", "Amazon", "Google", "Microsoft", "Azure",
        "Cisco", "CompTIA", "PMI", "Salesforce", "Oracle",
        "Red Hat", "HashiCorp", "CNCF", "ISC2", "ISACA",
        "EC-Council", "Scrum Alliance", "Coursera", "Udacity",
        "LinkedIn Learning", "edX", "Pluralsight", "SANS", "Meta", "IBM",
    ]

    CREDENTIAL_ID_PATTERN = re.compile(
        r"(?:credential\s*(?:id|#)?|cert(?:ificate)?\s*(?:id|#))\s*[:\-]?\s*([A-Z0-9][A-Z0-9\-]{4,28})",
        re.IGNORECASE,
    )
    YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")

    def __init__(self) -> None:
        self._provider_patterns = [
            (provider, re.compile(rf"\b{re.escape(provider)}\b"))
            for provider in self.KNOWN_PROVIDERS
        ]

    def parse_certifications(
        self,
        lines: list[str],
        is_exact_header: Optional[Callable[[str], bool]] = None,
    ) -> list[CertificationEntry]:
        """
        Every line mentioning a certification, in document order.

        Args:
            lines: All normalized document lines
            is_exact_header: Predicate for bare header lines ("Certifications"),
                which are not certifications themselves
        """
        certifications = []
        for line in lines:
            lowered = line.lower()
            if not any(keyword in lowered for keyword in self.CERTIFICATION_KEYWORDS):
                continue
            if is_exact_header is not None and is_exact_header(line):
                continue
            text = strip_bullet(line)
            if text:
                certifications.append(self._to_certification(text))
        return certifications

    def parse_achievements(self, lines: list[str]) -> list[AchievementEntry]:
        """Every line carrying a quantified-impact marker, bullet removed."""
        achievements = []
        for line in lines:
            # Case-sensitive: "Increased" does not count
            if not any(marker in line for marker in self.ACHIEVEMENT_MARKERS):
                continue
            text = strip_bullet(line)
            if text:
                achievements.append(AchievementEntry(title=text))
        return achievements

    def parse_languages(self, text: str) -> list[LanguageEntry]:
        """Common spoken languages mentioned anywhere in the text."""
        lowered = text.lower()
        return [
            LanguageEntry(language=language.capitalize())
            for language in COMMON_LANGUAGES
            if language in lowered
        ]

    def _to_certification(self, text: str) -> CertificationEntry:
        issuer = next(
            (provider for provider, pattern in self._provider_patterns if pattern.search(text)),
            None,
        )
        credential = self.CREDENTIAL_ID_PATTERN.search(text)
        year = self.YEAR_PATTERN.search(text)
        return CertificationEntry(
            name=text,
            issuer=issuer,
            date=year.group(0) if year else None,
            credential_id=credential.group(1) if credential else None,
        )
