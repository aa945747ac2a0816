"""
Services for Resume Insight.

- llm_client: OpenAI chat-completion client
- profile_enhancer: merges extracted resume data into user profiles
"""

from .llm_client import (
    LLMClient,
    get_llm_client,
    parse_json_response,
    strip_code_fence,
)
from .profile_enhancer import (
    LLMProfileEnhancer,
    ProfileEnhancer,
    enhance_user_profile,
    get_profile_enhancer,
    is_blank,
)

__all__ = [
    "LLMClient",
    "get_llm_client",
    "parse_json_response",
    "strip_code_fence",
    "LLMProfileEnhancer",
    "ProfileEnhancer",
    "enhance_user_profile",
    "get_profile_enhancer",
    "is_blank",
]
