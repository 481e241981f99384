"""Base provider ABC — the capability set every analysis provider exposes."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Protocol

import httpx

from emotibot.errors import MalformedResponse, TransportError
from emotibot.prompts import SYSTEM_PROMPT, PromptRegistry
from emotibot.schemas.analysis import AnalysisCategory, AnalysisResult, resolve_category

logger = logging.getLogger(__name__)


class CompletionBackend(Protocol):
    """What a provider needs from its transport (CompletionClient, DryRunClient)."""

    label: str

    @property
    def has_credentials(self) -> bool: ...

    async def ping(self) -> None: ...

    async def simple_completion(
        self, *, system: str, user_message: str, model: str, json_mode: bool = True
    ) -> str: ...


class BaseProvider(ABC):
    """Abstract base class for analysis providers.

    Subclasses set:
    - ``name`` — vendor name shown to users and in logs
    - ``default_model`` — model used until ``set_model`` is called
    - ``api_key_env`` / ``base_url`` — transport defaults used by the registry

    The only state a provider keeps between calls is its selected model.
    """

    default_model: str = ""
    api_key_env: str = ""
    base_url: str = ""

    def __init__(
        self,
        client: CompletionBackend,
        *,
        prompts: PromptRegistry | None = None,
        model: str | None = None,
        probe: bool = False,
    ) -> None:
        self.client = client
        self.prompts = prompts if prompts is not None else PromptRegistry()
        self.model = model or self.default_model
        self.probe = probe

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable vendor name."""

    def set_model(self, model: str) -> None:
        self.model = model
        logger.info("%s model set to: %s", self.name, model)

    async def is_available(self) -> bool:
        """Return True if the provider can take requests.

        Without ``probe`` this only checks that credentials are configured;
        with it, a live call to the endpoint must also succeed.
        """
        if not self.client.has_credentials:
            logger.warning("%s has no API key configured", self.name)
            return False
        if not self.probe:
            return True
        try:
            await self.client.ping()
        except TransportError as exc:
            logger.error("%s availability check failed: %s", self.name, exc)
            return False
        return True

    async def analyze(
        self, text: str, category: AnalysisCategory | str
    ) -> AnalysisResult:
        """Build the prompt, call the endpoint, and normalize the reply.

        Raises ``TransportError`` if the endpoint call fails, including raw
        network errors from the transport, and ``MalformedResponse`` if the
        reply is not a JSON object.
        """
        category = resolve_category(category)
        prompt = self.prompts.build_prompt(category, text)
        logger.debug(
            "%s request: %s",
            self.name,
            {"message": text[:30], "category": category.value, "model": self.model,
             "prompt": f"<{len(prompt)} chars>"},
        )

        try:
            raw = await self._complete(prompt, category)
        except (OSError, asyncio.TimeoutError, httpx.TransportError) as exc:
            logger.error("%s request failed: %s", self.name, exc)
            raise TransportError(self.name, str(exc) or type(exc).__name__) from exc
        logger.debug("%s raw output:\n%s", self.name, raw[:500])
        return self.parse_output(raw, category)

    async def _complete(self, prompt: str, category: AnalysisCategory) -> str:
        return await self.client.simple_completion(
            system=SYSTEM_PROMPT,
            user_message=prompt,
            model=self.model,
        )

    def parse_output(self, raw_text: str, category: AnalysisCategory) -> AnalysisResult:
        """Parse the reply text and normalize it into an ``AnalysisResult``."""
        try:
            data = extract_json(raw_text)
        except ValueError as exc:
            logger.error("%s returned a reply that is not JSON: %s", self.name, exc)
            raise MalformedResponse(
                f"Invalid response format from {self.name}", raw_text=raw_text
            ) from exc
        return AnalysisResult.from_response(data, category)


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from a reply that may be wrapped in markdown fences.

    Raises ``ValueError`` (``json.JSONDecodeError`` is a subclass) if no JSON
    object can be found.
    """
    text = text.strip()

    candidate: Any = None
    if text.startswith("{"):
        try:
            candidate, _ = json.JSONDecoder().raw_decode(text)
        except json.JSONDecodeError:
            candidate = None

    if candidate is None:
        fenced = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
        if fenced:
            candidate = json.loads(fenced.group(1).strip())

    if candidate is None and "{" in text:
        try:
            candidate, _ = json.JSONDecoder().raw_decode(text, idx=text.index("{"))
        except json.JSONDecodeError:
            candidate = None

    if not isinstance(candidate, dict):
        raise ValueError(
            f"Could not extract a JSON object from model response (length={len(text)})"
        )
    return candidate
