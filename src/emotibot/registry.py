"""Provider registry — a fixed table of providers and the one that is active."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping

from emotibot.errors import UnknownProvider
from emotibot.prompts import PromptRegistry
from emotibot.providers.anthropic import AnthropicProvider
from emotibot.providers.base import BaseProvider
from emotibot.providers.dry_run import DryRunProvider
from emotibot.providers.openai import OpenAIProvider
from emotibot.schemas.config import AppConfig
from emotibot.shared.completion_client import CompletionClient

logger = logging.getLogger(__name__)

_VENDOR_PROVIDERS: dict[str, type[BaseProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


class ProviderRegistry:
    """Holds constructed providers keyed by name, plus the active one.

    The table is fixed at construction. Switching only changes which provider
    later ``get_active_provider`` calls return; a call already holding the
    previous provider is unaffected.
    """

    def __init__(self, providers: Mapping[str, BaseProvider], default: str) -> None:
        if not providers:
            raise ValueError("ProviderRegistry needs at least one provider")
        self._providers: dict[str, BaseProvider] = {
            name.lower(): provider for name, provider in providers.items()
        }
        self._active = self.get(default)

    @property
    def names(self) -> list[str]:
        return list(self._providers)

    def get(self, name: str) -> BaseProvider:
        try:
            return self._providers[name.strip().lower()]
        except KeyError:
            raise UnknownProvider(name) from None

    def get_active_provider(self) -> BaseProvider:
        return self._active

    def set_provider(self, name: str, options: Mapping[str, Any] | None = None) -> bool:
        """Make ``name`` the active provider and apply ``options["model"]``
        whenever that key is present.

        Returns False, leaving the active provider unchanged, if ``name`` is
        not in the table.
        """
        try:
            provider = self.get(name)
        except UnknownProvider as exc:
            logger.error("%s", exc)
            return False

        self._active = provider
        if options and "model" in options:
            provider.set_model(options["model"])
        logger.info("AI provider set to: %s", provider.name)
        return True


def build_registry(config: AppConfig, prompts: PromptRegistry) -> ProviderRegistry:
    """Construct every provider from ``config`` and activate the default one.

    API keys are read from the environment variable each provider section
    names. A missing key is not an error here; that provider just reports
    itself unavailable.
    """
    providers: dict[str, BaseProvider] = {}
    for key, provider_cls in _VENDOR_PROVIDERS.items():
        settings = config.settings_for(key)
        api_key_env = settings.api_key_env or provider_cls.api_key_env
        client = CompletionClient(
            os.environ.get(api_key_env) or None,
            label=provider_cls.__name__.removesuffix("Provider"),
            base_url=settings.base_url or provider_cls.base_url or None,
            timeout=config.timeout_seconds,
            max_tokens=config.max_tokens,
        )
        providers[key] = provider_cls(
            client,
            prompts=prompts,
            model=settings.model or None,
            probe=config.probe,
        )
    providers["dry-run"] = DryRunProvider(prompts=prompts)
    return ProviderRegistry(providers, default=config.default_provider)
