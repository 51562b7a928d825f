# =============================================================================
# lib/xai_client.py - xAI (Grok) Client Wrapper
# =============================================================================
# xAI serves an OpenAI-compatible chat completions API, so this wrapper reuses
# the openai SDK with a different base_url. All AI features in agents/ go
# through here, which keeps model defaults and error handling in one place.
#
# Usage:
#   from lib.xai_client import XAIClient
#   text = XAIClient.generate_text("Write a tagline for a bakery")
#   data = XAIClient.generate_json(prompt, system_prompt=SYSTEM, temperature=0.2)
# =============================================================================

from __future__ import annotations

import json
import logging
import re
from typing import Any

from openai import OpenAI

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Models sometimes wrap JSON in a markdown fence even in JSON mode
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class XAIClientError(ApplicationError):
    """Error during an xAI API call or while parsing its output."""

    status_code = 502

    def __init__(self, message: str, code: str = "XAI_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class XAIClient:
    """
    Singleton wrapper around an OpenAI SDK client pointed at xAI.

    Example:
        analysis = XAIClient.generate_json(
            prompt="Analyze these logs...",
            system_prompt="You are an expert software engineer...",
            model=settings.XAI_MODEL,
            temperature=0.2,
            max_tokens=1500,
        )
    """

    _instance: OpenAI | None = None

    @classmethod
    def get_client(cls) -> OpenAI:
        """Get or create the shared OpenAI-compatible client."""
        if cls._instance is None:
            cls._instance = OpenAI(
                api_key=settings.XAI_API_KEY,
                base_url=settings.XAI_BASE_URL,
                timeout=settings.XAI_TIMEOUT,
            )
            logger.info(f"xAI client initialized for {settings.XAI_BASE_URL}")
        return cls._instance

    @classmethod
    def _complete(
        cls,
        prompt: str,
        system_prompt: str | None,
        model: str | None,
        max_tokens: int | None,
        temperature: float | None,
        json_mode: bool,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        model = model or settings.XAI_FAST_MODEL
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens or settings.XAI_MAX_TOKENS,
            "temperature": temperature if temperature is not None else settings.XAI_TEMPERATURE,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = cls.get_client().chat.completions.create(**kwargs)
        except Exception as e:
            logger.error(f"xAI API call failed ({model}): {e}")
            raise XAIClientError(
                message=f"xAI API call failed: {e}",
                code="XAI_REQUEST_FAILED",
                suggestion="Check XAI_API_KEY and network connectivity",
                details={"model": model}
            )

        content = response.choices[0].message.content or ""
        if not content.strip():
            raise XAIClientError(
                message="xAI returned an empty response",
                code="XAI_EMPTY_RESPONSE",
                details={"model": model}
            )

        logger.debug(f"xAI response ({model}): {content[:200]}...")
        return content

    @classmethod
    def generate_text(
        cls,
        prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """
        Generate free-form text.

        Raises:
            XAIClientError: If the request fails or returns nothing
        """
        return cls._complete(prompt, system_prompt, model, max_tokens, temperature, json_mode=False).strip()

    @classmethod
    def generate_json(
        cls,
        prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """
        Generate a JSON object.

        Raises:
            XAIClientError: If the request fails or the output isn't a JSON object
        """
        content = cls._complete(prompt, system_prompt, model, max_tokens, temperature, json_mode=True)
        return parse_json_object(content)


def parse_json_object(content: str) -> dict[str, Any]:
    """
    Parse model output into a dict, tolerating markdown code fences.

    Raises:
        XAIClientError: If the text isn't a JSON object
    """
    cleaned = _CODE_FENCE_RE.sub("", content.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise XAIClientError(
            message=f"Invalid JSON response from model: {e}",
            code="XAI_INVALID_JSON",
            suggestion="Retry the request; the model may have returned prose",
            details={"response_preview": content[:200]}
        )

    if not isinstance(data, dict):
        raise XAIClientError(
            message="Model returned JSON that is not an object",
            code="XAI_INVALID_JSON",
            details={"response_preview": content[:200]}
        )
    return data
