"""Async wrapper around the OpenAI SDK for single-shot JSON completions.

Both vendors are reached through the same SDK: OpenAI directly, Anthropic
through its OpenAI-compatible endpoint. SDK exceptions are converted to
``TransportError`` here so providers never see vendor exception types.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from openai import APIError, AsyncOpenAI

from emotibot.errors import TransportError
from emotibot.schemas.analysis import AnalysisCategory

logger = logging.getLogger(__name__)

MAX_TOKENS = 2048
DEFAULT_TIMEOUT = 60.0

TokensCallback = Callable[[int, int], None]
"""Called with (input_tokens, output_tokens) when a completion finishes."""


class CompletionClient:
    """Thin async wrapper around ``AsyncOpenAI``.

    The SDK's built-in retries are disabled: a failed call surfaces as a
    ``TransportError`` on the first attempt.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        label: str = "OpenAI",
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_tokens: int = MAX_TOKENS,
    ) -> None:
        self.label = label
        self.max_tokens = max_tokens
        # No key means no client; the provider reports itself unavailable.
        self._client: AsyncOpenAI | None = None
        if api_key:
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=base_url or None,
                timeout=timeout,
                max_retries=0,
            )

    @property
    def has_credentials(self) -> bool:
        return self._client is not None

    async def _call(self, **kwargs: Any) -> Any:
        if self._client is None:
            raise TransportError(self.label, "no API key configured")
        try:
            return await self._client.chat.completions.create(**kwargs)
        except APIError as exc:
            logger.error("%s completion call failed: %s", self.label, exc)
            raise TransportError(self.label, str(exc)) from exc

    async def ping(self) -> None:
        """Cheap liveness and credential check against the models endpoint."""
        if self._client is None:
            raise TransportError(self.label, "no API key configured")
        try:
            await self._client.models.list()
        except APIError as exc:
            raise TransportError(self.label, str(exc)) from exc

    async def simple_completion(
        self,
        *,
        system: str,
        user_message: str,
        model: str,
        json_mode: bool = True,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        """Single request/response with no tools.

        When ``json_mode`` is True (default) the endpoint is asked for a JSON
        object reply.
        """
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": self.max_tokens,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user_message},
            ],
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self._call(**kwargs)
        usage = getattr(response, "usage", None)
        if on_tokens and usage:
            on_tokens(getattr(usage, "prompt_tokens", 0), getattr(usage, "completion_tokens", 0))
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        return choices[0].message.content or ""


# ======================================================================
# Dry-run mock client — zero API calls
# ======================================================================

_DRY_RUN_JSON: dict[AnalysisCategory, str] = {
    AnalysisCategory.STYLE: json.dumps({
        "metrics": {"clarity": 82, "conciseness": 74, "formality": 45, "engagement": 68, "complexity": 30},
        "analysis": {
            "clarity": "The main point is easy to follow.",
            "conciseness": "A few phrases could be shortened.",
            "formality": "Conversational, with an informal register.",
            "engagement": "Direct address keeps the reader involved.",
            "complexity": "Short sentences and everyday vocabulary.",
        },
        "summary": "A clear, friendly message with a relaxed tone.",
        "suggestions": [
            "Lead with the request so it is not missed.",
            "Remove filler words to tighten the message.",
        ],
    }),
    AnalysisCategory.IMPACT: json.dumps({
        "metrics": {"empathy": 70, "authority": 55, "persuasiveness": 60, "approachability": 85, "confidence": 58},
        "analysis": {
            "empathy": "Acknowledges the reader's situation.",
            "authority": "Few concrete facts back the claims.",
            "persuasiveness": "The benefit to the reader is implied, not stated.",
            "approachability": "Warm and easy to respond to.",
            "confidence": "Some hedging weakens the message.",
        },
        "summary": "Warm and approachable, but could sound more assured.",
        "suggestions": [
            "State the benefit to the reader explicitly.",
            "Replace hedges such as 'maybe' with direct statements.",
        ],
    }),
    AnalysisCategory.OUTCOME: json.dumps({
        "metrics": {"effectiveness": 66, "actionability": 50, "memorability": 48, "influence": 57, "audience_fit": 72},
        "analysis": {
            "effectiveness": "The purpose is recognizable but not emphasized.",
            "actionability": "No explicit next step is given.",
            "memorability": "Nothing distinctive stands out.",
            "influence": "Likely to be read, less likely to change decisions.",
            "audience_fit": "Register suits the intended reader.",
        },
        "summary": "Likely to be understood, but the reader may not act on it.",
        "suggestions": [
            "End with one concrete next step and a deadline.",
            "Add a specific detail the reader will remember.",
        ],
    }),
}


class DryRunClient:
    """Drop-in replacement for CompletionClient that makes zero API calls.

    Returns the canned JSON reply for the ``category`` the caller passes.
    """

    label = "DryRun"
    has_credentials = True

    async def ping(self) -> None:
        return None

    async def simple_completion(
        self,
        *,
        system: str,
        user_message: str,
        model: str,
        json_mode: bool = True,
        on_tokens: TokensCallback | None = None,
        category: AnalysisCategory = AnalysisCategory.STYLE,
    ) -> str:
        logger.info("[dry-run] Returning canned %s analysis", category.value)
        return _DRY_RUN_JSON[category]

