"""Markdown report builder — renders an AnalysisRecord to a Markdown document."""

from __future__ import annotations

from emotibot.schemas.analysis import AnalysisRecord

_BAR_WIDTH = 20


def score_bar(score: float, width: int = _BAR_WIDTH) -> str:
    """Render a 0-100 score as a fixed-width text bar."""
    clamped = max(0.0, min(100.0, score))
    filled = round(clamped / 100 * width)
    return "█" * filled + "░" * (width - filled)


def render_markdown(record: AnalysisRecord) -> str:
    """Render an AnalysisRecord into a Markdown string."""
    result = record.result
    sections: list[str] = []

    sections.append(f"# {record.category.value.title()} Analysis\n")
    sections.append(f"*Generated: {record.created_at} by {record.provider} ({record.model})*\n")

    sections.append("## Text\n")
    sections.append("\n".join(f"> {line}" for line in record.text.splitlines() or [""]))
    sections.append("")

    sections.append("## Metrics\n")
    sections.append("| Metric | Score | |")
    sections.append("|--------|------:|---|")
    for name, score in result.metrics.items():
        label = name.replace("_", " ").title()
        sections.append(f"| {label} | {score:g} | `{score_bar(score)}` |")
    sections.append("")

    if result.analysis:
        sections.append("## Analysis\n")
        for name, explanation in result.analysis.items():
            sections.append(f"- **{name.replace('_', ' ').title()}:** {explanation}")
        sections.append("")

    if result.summary:
        sections.append("## Summary\n")
        sections.append(result.summary + "\n")

    if result.suggestions:
        sections.append("## Suggestions\n")
        for i, suggestion in enumerate(result.suggestions, 1):
            sections.append(f"{i}. {suggestion}")
        sections.append("")

    return "\n".join(sections)
