"""Tests for Markdown report generation."""

from __future__ import annotations

from emotibot.output.markdown import render_markdown, score_bar
from emotibot.schemas.analysis import AnalysisCategory, AnalysisRecord, AnalysisResult


def _make_record() -> AnalysisRecord:
    return AnalysisRecord(
        created_at="2026-01-01T00:00:00+00:00",
        text="Hi all,\nthe launch moves to Friday.",
        category=AnalysisCategory.OUTCOME,
        provider="OpenAI",
        model="gpt-4.1-mini",
        result=AnalysisResult(
            metrics={"effectiveness": 72, "audience_fit": 64.5},
            analysis={"effectiveness": "States the change plainly."},
            summary="Clear update, no call to action.",
            suggestions=["Say what readers should do next.", "Give the reason for the delay."],
        ),
    )


class TestScoreBar:
    def test_bounds(self) -> None:
        assert score_bar(0) == "░" * 20
        assert score_bar(100) == "█" * 20

    def test_out_of_range_clamped(self) -> None:
        assert score_bar(150) == score_bar(100)
        assert score_bar(-5) == score_bar(0)

    def test_width(self) -> None:
        assert len(score_bar(37, width=10)) == 10


class TestRenderMarkdown:
    def test_header(self) -> None:
        md = render_markdown(_make_record())
        assert md.startswith("# Outcome Analysis")
        assert "OpenAI (gpt-4.1-mini)" in md

    def test_text_quoted(self) -> None:
        md = render_markdown(_make_record())
        assert "> Hi all," in md
        assert "> the launch moves to Friday." in md

    def test_metric_table(self) -> None:
        md = render_markdown(_make_record())
        assert "| Effectiveness | 72 |" in md
        assert "| Audience Fit | 64.5 |" in md

    def test_sections(self) -> None:
        md = render_markdown(_make_record())
        assert "## Analysis" in md
        assert "- **Effectiveness:** States the change plainly." in md
        assert "## Summary" in md
        assert "1. Say what readers should do next." in md
        assert "2. Give the reason for the delay." in md

    def test_empty_sections_omitted(self) -> None:
        record = _make_record()
        record.result = AnalysisResult(metrics={"effectiveness": 0})
        md = render_markdown(record)
        assert "## Analysis" not in md
        assert "## Summary" not in md
        assert "## Suggestions" not in md
