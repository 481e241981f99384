"""Prompt templates — one instruction template per analysis category.

Templates carry a ``{message}`` placeholder for the raw input text. Formatting
is plain text substitution: the text is not escaped and other braces in a
template are left alone.
"""

from __future__ import annotations

import logging
from typing import Mapping

from emotibot.schemas.analysis import AnalysisCategory, parse_category, resolve_category

logger = logging.getLogger(__name__)

PLACEHOLDER = "{message}"

SYSTEM_PROMPT = """\
You are an AI assistant that analyzes text and provides both metrics and \
detailed explanations.

Respond with a single JSON object (no markdown fences, no commentary) that uses \
exactly the keys and metric names requested. Do not add, rename, or omit keys.

Write every explanation, the summary, and all suggestions in the same language \
as the text you analyze.
"""

STYLE_TEMPLATE = """\
Analyze the style of this text: "{message}"

Return a JSON object with:
1. "metrics" object with numerical scores for: clarity, conciseness, formality, \
engagement, and complexity on a scale of 0-100.
2. "analysis" object with a detailed text explanation for each metric.
3. "summary" string with an overall analysis of the text style.
4. "suggestions" array with 2-3 specific, actionable suggestions to improve the \
style. Give the suggestions in the same language as the text you analyze.
"""

IMPACT_TEMPLATE = """\
Analyze the emotional impact of this text: "{message}"

Return a JSON object with:
1. "metrics" object with numerical scores for: empathy, authority, \
persuasiveness, approachability, and confidence on a scale of 0-100.
2. "analysis" object with a detailed text explanation for each metric.
3. "summary" string with an overall analysis of the emotional impact.
4. "suggestions" array with 2-3 specific, actionable suggestions to improve the \
emotional impact. Give the suggestions in the same language as the text you analyze.
"""

OUTCOME_TEMPLATE = """\
Analyze the potential results of this message: "{message}"

Return a JSON object with:
1. "metrics" object with numerical scores for: effectiveness, actionability, \
memorability, influence, and audience_fit on a scale of 0-100.
2. "analysis" object with a detailed text explanation for each metric.
3. "summary" string with an overall prediction of the message's results.
4. "suggestions" array with 2-3 specific, actionable suggestions to improve the \
results. Give the suggestions in the same language as the text you analyze.
"""

DEFAULT_TEMPLATES: dict[AnalysisCategory, str] = {
    AnalysisCategory.STYLE: STYLE_TEMPLATE,
    AnalysisCategory.IMPACT: IMPACT_TEMPLATE,
    AnalysisCategory.OUTCOME: OUTCOME_TEMPLATE,
}


def format_template(template: str, text: str) -> str:
    """Substitute ``text`` for every placeholder occurrence in ``template``."""
    return template.replace(PLACEHOLDER, text)


class PromptRegistry:
    """Holds the active template for each category.

    Overrides apply to every later ``get_template`` call on this instance and
    are lost when the process exits.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self._templates: dict[AnalysisCategory, str] = dict(DEFAULT_TEMPLATES)
        for category, template in (overrides or {}).items():
            self.set_template(category, template)

    def get_template(self, category: AnalysisCategory | str) -> str:
        """Return the template for ``category``; unknown tags get the style template."""
        return self._templates[resolve_category(category)]

    def set_template(self, category: AnalysisCategory | str, template: str) -> None:
        """Replace the template for a known category. No structural checks."""
        parsed = parse_category(category)
        self._templates[parsed] = template
        logger.info("Prompt template for %s overridden (%d chars)", parsed.value, len(template))

    def reset(self) -> None:
        """Restore the built-in templates."""
        self._templates = dict(DEFAULT_TEMPLATES)

    def format_template(self, template: str, text: str) -> str:
        return format_template(template, text)

    def build_prompt(self, category: AnalysisCategory | str, text: str) -> str:
        """Fetch the category template and substitute ``text`` into it."""
        return format_template(self.get_template(category), text)
