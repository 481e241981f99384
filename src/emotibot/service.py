"""Analysis facade — the single entry point callers use to analyze text."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from emotibot.errors import AnalysisFailed, InvalidInput, MalformedResponse, ProviderUnavailable
from emotibot.prompts import PromptRegistry
from emotibot.registry import ProviderRegistry, build_registry
from emotibot.schemas.analysis import AnalysisCategory, AnalysisResult, resolve_category
from emotibot.schemas.config import AppConfig

logger = logging.getLogger(__name__)


class AnalysisService:
    """Validates a request, picks the active provider, and runs the analysis.

    The service holds no per-request state. Each ``analyze`` call reads the
    registry's active provider once, when it starts, so a provider switch
    made while a call is in flight only affects later calls. There is no
    retry, caching, or coalescing of identical requests.
    """

    def __init__(self, registry: ProviderRegistry, prompts: PromptRegistry) -> None:
        self.registry = registry
        self.prompts = prompts

    @classmethod
    def from_config(cls, config: AppConfig) -> "AnalysisService":
        prompts = PromptRegistry(config.templates)
        return cls(build_registry(config, prompts), prompts)

    def set_provider(self, name: str, options: Mapping[str, Any] | None = None) -> bool:
        return self.registry.set_provider(name, options)

    def set_template(self, category: AnalysisCategory | str, template: str) -> None:
        self.prompts.set_template(category, template)

    async def analyze(self, text: str, category: AnalysisCategory | str) -> AnalysisResult:
        """Analyze ``text`` along ``category`` with the active provider.

        Raises:
            InvalidInput: ``text`` is empty.
            ProviderUnavailable: the active provider's availability check failed;
                nothing was sent.
            AnalysisFailed: the provider call failed. ``TransportError`` and
                ``MalformedResponse`` pass through as-is, anything else is
                wrapped with the original exception as ``__cause__``.
        """
        if not text or not text.strip():
            raise InvalidInput("Message is required")
        category = resolve_category(category)

        provider = self.registry.get_active_provider()
        logger.info(
            "Analyzing %d chars with type %s using %s (%s)",
            len(text), category.value, provider.name, provider.model,
        )

        if not await provider.is_available():
            logger.error("AI provider %s is not available", provider.name)
            raise ProviderUnavailable(provider.name)

        start = time.perf_counter()
        try:
            raw_result = await provider.analyze(text, category)
        except AnalysisFailed:
            raise
        except Exception as exc:
            logger.error("Error analyzing text with %s: %s", provider.name, exc)
            raise AnalysisFailed(f"{provider.name} analysis failed: {exc}") from exc

        try:
            result = AnalysisResult.from_response(raw_result, category)
        except ValueError as exc:
            raise MalformedResponse(
                f"{provider.name} returned an unusable result", raw_text=repr(raw_result)[:500]
            ) from exc

        logger.info(
            "Analysis by %s finished in %.2fs", provider.name, time.perf_counter() - start
        )
        return result
