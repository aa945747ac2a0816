"""
Contact information parser for resumes.

Extracts name, email, phone, address and profile links. Identity fields
read the top of the whole document rather than a section buffer.
"""

import re
from dataclasses import dataclass
from typing import Optional

from resume_insight.utils.constants import (
    GITHUB_PLACEHOLDER,
    LINKEDIN_PLACEHOLDER,
    PLACEHOLDER_LINK,
)
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ContactInfo:
    """Extracted contact information from a resume."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None


class ContactParser:
    """Parser for extracting contact information from resume text."""

    NAME_PATTERN = re.compile(r"^[A-Za-z\s]{2,50}$")
    MAX_NAME_WORDS = 4

    EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w.-]+\.\w+")

    # Tried in order; the first pattern with a match wins
    PHONE_PATTERNS = [
        # North American style 3-3-4, optional country code
        re.compile(r"(?:\+\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b"),
        # International with a leading +country and grouped digits
        re.compile(r"\+\d{1,3}[\s.-]?\d{2,5}(?:[\s.-]?\d{2,5}){1,3}\b"),
    ]

    # Digits in a phone number without the country code
    PHONE_CORE_DIGITS = (7, 10)

    ADDRESS_SCAN_LINES = 5
    MAX_ADDRESS_WORDS = 4
    ADDRESS_FALLBACK_PATTERN = re.compile(
        r"(\w+[\s,]+\w+[\s,]+\d{5}(-\d{4})?)|(\w+[\s,]+\w{2}[\s,]+\d{5})|(\w+,\s*\w+)"
    )

    LINKEDIN_PATTERN = re.compile(
        r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w\-.]+", re.IGNORECASE
    )
    GITHUB_PATTERN = re.compile(
        r"(?:https?://)?(?:www\.)?github\.com/[\w\-.]+", re.IGNORECASE
    )
    URL_PATTERN = re.compile(r"https?://[^\s|,]+", re.IGNORECASE)

    PORTFOLIO_KEYWORDS = ("portfolio", "website", "personal site")

    def parse(self, lines: list[str], text: Optional[str] = None) -> ContactInfo:
        """
        Parse contact information.

        Args:
            lines: Normalized resume lines in document order
            text: Full text; rebuilt from lines when omitted

        Returns:
            ContactInfo with whatever could be found
        """
        if text is None:
            text = "\n".join(lines)

        return ContactInfo(
            full_name=self._extract_name(lines),
            email=self._extract_email(text),
            phone=self._extract_phone(text),
            address=self._extract_address(lines, text),
            linkedin=self._extract_linkedin(text, lines),
            github=self._extract_github(text, lines),
            portfolio=self._extract_portfolio(lines),
        )

    def _extract_name(self, lines: list[str]) -> Optional[str]:
        """The first line, when it looks like a personal name."""
        if not lines:
            return None
        first = lines[0].strip()
        if self.NAME_PATTERN.match(first) and len(first.split()) <= self.MAX_NAME_WORDS:
            return " ".join(first.split())
        return None

    def _extract_email(self, text: str) -> Optional[str]:
        match = self.EMAIL_PATTERN.search(text)
        return match.group(0) if match else None

    def _extract_phone(self, text: str) -> Optional[str]:
        for pattern in self.PHONE_PATTERNS:
            for match in pattern.finditer(text):
                candidate = match.group(0).strip()
                if self._has_valid_core(candidate):
                    return candidate
        return None

    def _has_valid_core(self, phone: str) -> bool:
        digits = re.sub(r"\D", "", phone)
        if phone.startswith("+"):
            # Country codes are 1-3 digits; accept if any split gives a valid core
            return any(
                self.PHONE_CORE_DIGITS[0] <= len(digits) - cc <= self.PHONE_CORE_DIGITS[1]
                for cc in (1, 2, 3)
            )
        return self.PHONE_CORE_DIGITS[0] <= len(digits) <= self.PHONE_CORE_DIGITS[1]

    def _extract_address(self, lines: list[str], text: str) -> Optional[str]:
        for line in lines[: self.ADDRESS_SCAN_LINES]:
            if "," not in line or "@" in line or "+" in line:
                continue
            for part in line.split("|"):
                part = part.strip()
                if "," in part and len(part.split()) <= self.MAX_ADDRESS_WORDS:
                    return part

        match = self.ADDRESS_FALLBACK_PATTERN.search(text)
        return match.group(0).strip() if match else None

    # -------------------------------------------------------------------------
    # Links
    # -------------------------------------------------------------------------

    def _extract_linkedin(self, text: str, lines: list[str]) -> Optional[str]:
        match = self.LINKEDIN_PATTERN.search(text)
        if match:
            return self._with_scheme(match.group(0))
        if self._mentions_provider(lines, "linkedin"):
            return LINKEDIN_PLACEHOLDER
        return None

    def _extract_github(self, text: str, lines: list[str]) -> Optional[str]:
        match = self.GITHUB_PATTERN.search(text)
        if match:
            return self._with_scheme(match.group(0))
        if self._mentions_provider(lines, "github"):
            return GITHUB_PLACEHOLDER
        return None

    def _extract_portfolio(self, lines: list[str]) -> Optional[str]:
        """Only the first line naming a portfolio or website is considered."""
        for line in lines:
            lowered = line.lower()
            if not any(keyword in lowered for keyword in self.PORTFOLIO_KEYWORDS):
                continue
            url = self.URL_PATTERN.search(line)
            if url:
                return url.group(0)
            if "portfolio" in lowered:
                return PLACEHOLDER_LINK
            return None
        return None

    @staticmethod
    def _mentions_provider(lines: list[str], provider: str) -> bool:
        return any(provider in line.lower() and "|" not in line for line in lines)

    @staticmethod
    def _with_scheme(url: str) -> str:
        url = url.rstrip("/.")
        if url.lower().startswith(("http://", "https://")):
            return url
        return f"https://{url}"
