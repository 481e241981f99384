"""Dry-run provider — canned replies, no network access."""

from __future__ import annotations

from emotibot.providers.base import BaseProvider
from emotibot.prompts import SYSTEM_PROMPT, PromptRegistry
from emotibot.schemas.analysis import AnalysisCategory
from emotibot.shared.completion_client import DryRunClient


class DryRunProvider(BaseProvider):
    """Always available; answers every request from ``DryRunClient``."""

    default_model = "dry-run"
    api_key_env = ""
    base_url = ""

    def __init__(
        self,
        client: DryRunClient | None = None,
        *,
        prompts: PromptRegistry | None = None,
        model: str | None = None,
        probe: bool = False,
    ) -> None:
        super().__init__(client or DryRunClient(), prompts=prompts, model=model, probe=probe)

    @property
    def name(self) -> str:
        return "DryRun"

    async def _complete(self, prompt: str, category: AnalysisCategory) -> str:
        return await self.client.simple_completion(
            system=SYSTEM_PROMPT,
            user_message=prompt,
            model=self.model,
            category=category,
        )
