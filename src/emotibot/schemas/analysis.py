"""Analysis categories and the fixed result shape every provider returns."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class AnalysisCategory(str, Enum):
    """The dimension of text being evaluated."""

    STYLE = "style"
    IMPACT = "impact"
    OUTCOME = "outcome"

    @property
    def metrics(self) -> tuple[str, ...]:
        """Metric names a result for this category must carry, in display order."""
        return CATEGORY_METRICS[self]


CATEGORY_METRICS: dict[AnalysisCategory, tuple[str, ...]] = {
    AnalysisCategory.STYLE: ("clarity", "conciseness", "formality", "engagement", "complexity"),
    AnalysisCategory.IMPACT: ("empathy", "authority", "persuasiveness", "approachability", "confidence"),
    AnalysisCategory.OUTCOME: ("effectiveness", "actionability", "memorability", "influence", "audience_fit"),
}

DEFAULT_CATEGORY = AnalysisCategory.STYLE

# Older backends called the outcome category "result".
_CATEGORY_ALIASES = {"result": AnalysisCategory.OUTCOME}


def parse_category(value: AnalysisCategory | str) -> AnalysisCategory:
    """Strictly parse a category tag. Raises ``ValueError`` for unknown tags."""
    if isinstance(value, AnalysisCategory):
        return value
    key = str(value).strip().lower()
    if key in _CATEGORY_ALIASES:
        return _CATEGORY_ALIASES[key]
    try:
        return AnalysisCategory(key)
    except ValueError:
        known = ", ".join(c.value for c in AnalysisCategory)
        raise ValueError(f"Unknown analysis category {value!r} (expected one of: {known})") from None


def resolve_category(value: AnalysisCategory | str) -> AnalysisCategory:
    """Permissively resolve a category tag.

    Unknown tags fall back to ``DEFAULT_CATEGORY`` and log a warning instead of
    raising, so a stale or misspelled tag still produces a style analysis.
    """
    try:
        return parse_category(value)
    except ValueError:
        logger.warning(
            "Unknown analysis category %r, falling back to %s",
            value,
            DEFAULT_CATEGORY.value,
        )
        return DEFAULT_CATEGORY


def _to_number(value: Any) -> float | None:
    """Coerce a metric value from an untyped reply to a float, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().rstrip("%").strip()
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class AnalysisResult(BaseModel):
    """Canonical analysis output.

    ``metrics`` maps metric name to a score nominally in [0, 100];
    ``analysis`` maps metric name to an explanation.
    """

    metrics: dict[str, float] = {}
    analysis: dict[str, str] = {}
    summary: str = ""
    suggestions: list[str] = []

    @field_validator("analysis", mode="before")
    @classmethod
    def coerce_analysis(cls, v: object) -> dict[str, str]:
        if not isinstance(v, dict):
            return {}
        return {str(k): str(text) for k, text in v.items() if text is not None}

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_summary(cls, v: object) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("suggestions", mode="before")
    @classmethod
    def coerce_suggestions(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [v] if v.strip() else []
        if not isinstance(v, (list, tuple)):
            return []
        return [str(item) for item in v if item is not None and str(item).strip()]

    @classmethod
    def from_response(
        cls, data: Any, category: AnalysisCategory | str
    ) -> "AnalysisResult":
        """Validate an untyped parsed reply into a result for ``category``.

        Every metric of the category ends up present: numeric strings are
        coerced, missing or non-numeric values become 0. Metrics outside the
        category are dropped. Raises ``ValueError`` if ``data`` is
        not a mapping.
        """
        if isinstance(data, AnalysisResult):
            data = data.model_dump()
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        category = resolve_category(category)
        raw_metrics = data.get("metrics")
        if not isinstance(raw_metrics, dict):
            raw_metrics = {}

        metrics: dict[str, float] = {}
        for name in category.metrics:
            value = raw_metrics.get(name)
            score = _to_number(value)
            if score is None:
                if value is not None:
                    logger.warning("Metric %s has non-numeric value %r, using 0", name, value)
                score = 0.0
            metrics[name] = score

        return cls(
            metrics=metrics,
            analysis=data.get("analysis"),
            summary=data.get("summary"),
            suggestions=data.get("suggestions"),
        )


class AnalysisRecord(BaseModel):
    """A result together with what produced it, in the shape callers persist."""

    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    text: str
    category: AnalysisCategory
    provider: str
    model: str
    result: AnalysisResult
