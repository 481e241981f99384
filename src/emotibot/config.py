"""YAML config loader — reads emotibot.yml into AppConfig."""

from pathlib import Path

import yaml

from emotibot.schemas.config import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate a config file; ``None`` returns the defaults.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the YAML content is invalid.
    """
    if path is None:
        return AppConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # Sections with every entry commented out load as None; treat them as empty.
    for key in ("providers", "templates"):
        if key in raw and raw[key] is None:
            raw[key] = {}
    for name, section in list((raw.get("providers") or {}).items()):
        if section is None:
            raw["providers"][name] = {}

    return AppConfig(**raw)
