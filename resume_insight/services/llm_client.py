"""
OpenAI chat-completion client.

Thin wrapper over the openai SDK used by the LLM parser and the LLM profile
enhancer. Fails closed: without a configured credential no request is
attempted.
"""

import json
import re
from typing import Any, Optional

import openai

from resume_insight.core.exceptions import (
    ConfigurationError,
    ParserError,
    UpstreamServiceError,
)
from resume_insight.utils.config import LLMSettings, get_settings
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapping the whole response."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = _FENCE_OPEN.sub("", raw)
        raw = _FENCE_CLOSE.sub("", raw)
    return raw.strip()


def parse_json_response(text: str) -> dict[str, Any]:
    """
    Parse a model response that should hold a single JSON object.

    Raises:
        ParserError: If the response is not valid JSON or not an object
    """
    cleaned = strip_code_fence(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParserError(f"Model response is not valid JSON: {e.msg}", cause=e) from e

    if not isinstance(data, dict):
        raise ParserError(
            f"Model response is a JSON {type(data).__name__}, expected an object"
        )
    return data


class LLMClient:
    """Chat-completion client with a per-request timeout."""

    def __init__(
        self,
        settings: Optional[LLMSettings] = None,
        client: Optional[openai.OpenAI] = None,
    ):
        self.settings = settings or get_settings().llm
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or self.settings.is_configured

    def _get_client(self) -> openai.OpenAI:
        if self._client is None:
            if not self.settings.is_configured:
                raise ConfigurationError(
                    "LLM parser is not available: set OPENAI_API_KEY to enable it"
                )
            self._client = openai.OpenAI(
                api_key=self.settings.api_key,
                timeout=self.settings.timeout_seconds,
                max_retries=self.settings.max_retries,
            )
        return self._client

    def complete(
        self,
        prompt: str,
        system_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Send one chat completion request.

        Args:
            prompt: User message
            system_prompt: System message
            temperature: Sampling temperature, defaults to the parse setting
            max_tokens: Response token cap, defaults to the parse setting

        Returns:
            The trimmed response text

        Raises:
            ConfigurationError: No credential is configured
            UpstreamServiceError: The request failed, timed out or returned nothing
        """
        client = self._get_client()
        logger.debug(f"Sending prompt to {self.settings.model} ({len(prompt)} chars)")

        try:
            response = client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.settings.temperature if temperature is None else temperature,
                max_tokens=max_tokens or self.settings.max_tokens,
            )
        except openai.APITimeoutError as e:
            raise UpstreamServiceError(
                f"LLM request timed out after {self.settings.timeout_seconds}s", cause=e
            ) from e
        except openai.APIConnectionError as e:
            raise UpstreamServiceError(f"LLM service unreachable: {e}", cause=e) from e
        except openai.APIError as e:
            raise UpstreamServiceError(f"LLM request failed: {e}", cause=e) from e

        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice and choice.message else None
        if not content:
            raise UpstreamServiceError("LLM returned an empty response")

        logger.debug(f"LLM response received ({len(content)} chars)")
        return content.strip()


# Singleton instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the LLM client singleton instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client
