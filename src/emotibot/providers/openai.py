"""OpenAI provider — chat completions on api.openai.com."""

from __future__ import annotations

from emotibot.providers.base import BaseProvider


class OpenAIProvider(BaseProvider):
    """Analyzes text with an OpenAI chat model."""

    default_model = "gpt-4.1-mini"
    api_key_env = "OPENAI_API_KEY"
    base_url = ""

    @property
    def name(self) -> str:
        return "OpenAI"
