"""Anthropic provider — Claude models via Anthropic's OpenAI-compatible endpoint."""

from __future__ import annotations

from emotibot.providers.base import BaseProvider


class AnthropicProvider(BaseProvider):
    """Analyzes text with a Claude model.

    The endpoint speaks the OpenAI chat-completions protocol, so the same
    ``CompletionClient`` is used with a different ``base_url``.
    """

    default_model = "claude-3-5-sonnet"
    api_key_env = "ANTHROPIC_API_KEY"
    base_url = "https://api.anthropic.com/v1/"

    @property
    def name(self) -> str:
        return "Anthropic"
