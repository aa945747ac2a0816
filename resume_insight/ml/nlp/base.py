"""
Common interface for profile parser strategies.
"""

from abc import ABC, abstractmethod

from resume_insight.data.models.profile import ExtractedProfile
from resume_insight.utils.constants import ParserStrategy


class BaseProfileParser(ABC):
    """
    Turns raw resume text into an ExtractedProfile.

    Implementations return a profile whose lifecycle fields are left for
    the caller to finalize; they raise ExtractionError subclasses on
    failure instead of returning partial results.
    """

    strategy: ParserStrategy

    @abstractmethod
    def parse(self, raw_text: str) -> ExtractedProfile:
        """
        Parse raw resume text.

        Args:
            raw_text: Text extracted from the uploaded document

        Returns:
            The structured profile
        """
        pass
