"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from emotibot.prompts import PromptRegistry
from emotibot.providers.base import BaseProvider
from emotibot.registry import ProviderRegistry
from emotibot.service import AnalysisService
from emotibot.shared.completion_client import CompletionClient


class FakeProvider(BaseProvider):
    """Concrete provider with a configurable name, for registry and service tests."""

    default_model = "fake-model"

    def __init__(self, client, label: str = "Fake", **kwargs) -> None:
        super().__init__(client, **kwargs)
        self._label = label

    @property
    def name(self) -> str:
        return self._label


def make_backend(
    reply: str | dict | None = None,
    *,
    side_effect: BaseException | None = None,
    has_credentials: bool = True,
) -> SimpleNamespace:
    """Build a stand-in for CompletionClient whose completion call is an AsyncMock."""
    if isinstance(reply, dict):
        reply = json.dumps(reply)
    completion = AsyncMock(return_value=reply, side_effect=side_effect)
    return SimpleNamespace(
        label="Mock",
        has_credentials=has_credentials,
        ping=AsyncMock(return_value=None),
        simple_completion=completion,
    )


def make_openai_response(content: str | None, usage: tuple[int, int] | None = None) -> SimpleNamespace:
    """Build a fake OpenAI chat completion response."""
    message = SimpleNamespace(content=content, tool_calls=None)
    response = SimpleNamespace(choices=[SimpleNamespace(message=message)])
    if usage:
        response.usage = SimpleNamespace(prompt_tokens=usage[0], completion_tokens=usage[1])
    return response


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "emotibot.yml"
    cfg.write_text(
        """\
default_provider: anthropic
timeout_seconds: 30
providers:
  anthropic:
    model: claude-3-5-haiku
"""
    )
    return cfg


@pytest.fixture
def mock_completion_client() -> CompletionClient:
    """Return a CompletionClient with a mocked OpenAI SDK underneath."""
    client = CompletionClient.__new__(CompletionClient)
    client.label = "OpenAI"
    client.max_tokens = 256
    client._client = AsyncMock()
    return client


@pytest.fixture
def prompts() -> PromptRegistry:
    return PromptRegistry()


@pytest.fixture
def two_provider_service(prompts: PromptRegistry) -> AnalysisService:
    """Service over two fake providers ("alpha" active, "beta" idle)."""
    alpha = FakeProvider(
        make_backend({"metrics": {"clarity": 11}, "summary": "alpha"}), "Alpha", prompts=prompts
    )
    beta = FakeProvider(
        make_backend({"metrics": {"clarity": 22}, "summary": "beta"}), "Beta", prompts=prompts
    )
    registry = ProviderRegistry({"alpha": alpha, "beta": beta}, default="alpha")
    return AnalysisService(registry, prompts)
