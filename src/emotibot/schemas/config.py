"""Configuration schema — validates emotibot.yml."""

from pydantic import BaseModel, model_validator

from emotibot.schemas.analysis import parse_category

KNOWN_PROVIDERS = ("openai", "anthropic", "dry-run")


class ProviderSettings(BaseModel):
    """Per-vendor settings. The API key itself is read from ``api_key_env``."""

    model: str = ""  # e.g. "gpt-4.1-mini"
    api_key_env: str = ""  # e.g. "OPENAI_API_KEY"
    base_url: str = ""


class AppConfig(BaseModel):
    """Top-level configuration loaded from emotibot.yml.

    Every field has a default, so an empty file (or no file) is valid.
    """

    default_provider: str = "openai"

    # Transport
    timeout_seconds: float = 60.0
    max_tokens: int = 2048

    # Availability: False only checks that an API key is configured,
    # True also makes a live call to the endpoint.
    probe: bool = False

    # Per-vendor overrides; empty fields fall back to the provider's defaults
    providers: dict[str, ProviderSettings] = {}

    # Per-category prompt template overrides
    templates: dict[str, str] = {}

    @model_validator(mode="after")
    def check_default_provider(self) -> "AppConfig":
        self.default_provider = self.default_provider.strip().lower()
        if self.default_provider not in KNOWN_PROVIDERS:
            raise ValueError(
                f"default_provider must be one of: {', '.join(KNOWN_PROVIDERS)}"
            )
        return self

    @model_validator(mode="after")
    def check_provider_names(self) -> "AppConfig":
        unknown = [name for name in self.providers if name not in KNOWN_PROVIDERS]
        if unknown:
            raise ValueError(f"Unknown provider section(s): {', '.join(unknown)}")
        return self

    @model_validator(mode="after")
    def check_template_categories(self) -> "AppConfig":
        for category in self.templates:
            parse_category(category)
        return self

    @model_validator(mode="after")
    def check_timeout(self) -> "AppConfig":
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        return self

    def settings_for(self, provider: str) -> ProviderSettings:
        """Return the settings section for ``provider`` (defaults if absent)."""
        return self.providers.get(provider) or ProviderSettings()
