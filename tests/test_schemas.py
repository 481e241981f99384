"""Tests for analysis categories and result normalization."""

from __future__ import annotations

import pytest

from emotibot.schemas.analysis import (
    CATEGORY_METRICS,
    AnalysisCategory,
    AnalysisRecord,
    AnalysisResult,
    parse_category,
    resolve_category,
)


class TestCategories:
    def test_each_category_has_five_metrics(self) -> None:
        for category in AnalysisCategory:
            assert len(category.metrics) == 5
            assert category.metrics == CATEGORY_METRICS[category]

    def test_parse_is_case_insensitive(self) -> None:
        assert parse_category(" Impact ") is AnalysisCategory.IMPACT

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="expected one of"):
            parse_category("tone")

    def test_resolve_falls_back_to_style(self) -> None:
        assert resolve_category("tone") is AnalysisCategory.STYLE

    def test_resolve_keeps_enum_members(self) -> None:
        assert resolve_category(AnalysisCategory.OUTCOME) is AnalysisCategory.OUTCOME


class TestFromResponse:
    def test_missing_metrics_default_to_zero(self) -> None:
        result = AnalysisResult.from_response({"metrics": {"clarity": 90}}, "style")
        assert result.metrics == {
            "clarity": 90,
            "conciseness": 0,
            "formality": 0,
            "engagement": 0,
            "complexity": 0,
        }

    def test_missing_metrics_key(self) -> None:
        result = AnalysisResult.from_response({"summary": "ok"}, AnalysisCategory.IMPACT)
        assert set(result.metrics) == set(AnalysisCategory.IMPACT.metrics)
        assert all(v == 0 for v in result.metrics.values())

    def test_numeric_strings_coerced(self) -> None:
        result = AnalysisResult.from_response(
            {"metrics": {"empathy": "72", "authority": " 64.5 ", "confidence": "80%"}},
            "impact",
        )
        assert result.metrics["empathy"] == 72
        assert result.metrics["authority"] == 64.5
        assert result.metrics["confidence"] == 80

    def test_non_numeric_values_become_zero(self) -> None:
        result = AnalysisResult.from_response(
            {"metrics": {"clarity": "high", "conciseness": True, "formality": None}},
            "style",
        )
        assert result.metrics["clarity"] == 0
        assert result.metrics["conciseness"] == 0
        assert result.metrics["formality"] == 0

    def test_metrics_not_a_mapping(self) -> None:
        result = AnalysisResult.from_response({"metrics": [1, 2, 3]}, "outcome")
        assert set(result.metrics) == set(AnalysisCategory.OUTCOME.metrics)

    def test_metrics_outside_category_dropped(self) -> None:
        result = AnalysisResult.from_response(
            {"metrics": {"clarity": 50, "tone": "40", "empathy": 70}}, "style"
        )
        assert list(result.metrics) == list(AnalysisCategory.STYLE.metrics)
        assert result.metrics["clarity"] == 50

    def test_metrics_in_category_order(self) -> None:
        result = AnalysisResult.from_response(
            {"metrics": {"extra": 1, "complexity": 5, "clarity": 9}}, "style"
        )
        assert list(result.metrics) == list(AnalysisCategory.STYLE.metrics)

    def test_defaults_for_text_fields(self) -> None:
        result = AnalysisResult.from_response({"metrics": {}}, "style")
        assert result.analysis == {}
        assert result.summary == ""
        assert result.suggestions == []

    def test_text_fields_coerced(self) -> None:
        result = AnalysisResult.from_response(
            {
                "analysis": {"clarity": "Clear.", "engagement": 3},
                "summary": None,
                "suggestions": "Shorten the opening.",
            },
            "style",
        )
        assert result.analysis == {"clarity": "Clear.", "engagement": "3"}
        assert result.summary == ""
        assert result.suggestions == ["Shorten the opening."]

    def test_suggestions_drop_blank_entries(self) -> None:
        result = AnalysisResult.from_response(
            {"suggestions": ["Be direct.", "", None, "Add a deadline."]}, "outcome"
        )
        assert result.suggestions == ["Be direct.", "Add a deadline."]

    def test_unknown_category_uses_style_metrics(self) -> None:
        result = AnalysisResult.from_response({"metrics": {}}, "tone")
        assert list(result.metrics) == list(AnalysisCategory.STYLE.metrics)

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            AnalysisResult.from_response(["not", "an", "object"], "style")

    def test_accepts_existing_result(self) -> None:
        partial = AnalysisResult(metrics={"clarity": 70}, summary="s")
        result = AnalysisResult.from_response(partial, "style")
        assert result.metrics["clarity"] == 70
        assert result.metrics["complexity"] == 0
        assert result.summary == "s"


class TestAnalysisRecord:
    def test_json_round_trip(self) -> None:
        record = AnalysisRecord(
            text="Hello",
            category=AnalysisCategory.STYLE,
            provider="OpenAI",
            model="gpt-4.1-mini",
            result=AnalysisResult(metrics={"clarity": 1}),
        )
        loaded = AnalysisRecord.model_validate_json(record.model_dump_json())
        assert loaded == record
        assert loaded.created_at
