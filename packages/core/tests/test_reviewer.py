"""Tests for review orchestration."""

from unittest.mock import MagicMock

import pytest

from codegenius_core.config import DEFAULT_REVIEW_TYPES
from codegenius_core.errors import ProviderError, ValidationError
from codegenius_core.reviewer import NO_CHANGES_SUMMARY, Reviewer

DIFF = "diff --git a/app.py b/app.py\n+password = 'hunter2'\n"


def _make_provider(response="Critical issue: hardcoded secret in file app.py line 1"):
    provider = MagicMock()
    provider.analyze.return_value = response
    return provider


class TestSupportedTypes:
    def test_defaults_when_none_configured(self):
        assert Reviewer(_make_provider()).supported_types == DEFAULT_REVIEW_TYPES

    def test_configured_types(self):
        reviewer = Reviewer(_make_provider(), review_types=["security", "docs"])
        assert reviewer.supported_types == ["security", "docs"]
        assert reviewer.is_valid_type("docs") is True
        assert reviewer.is_valid_type("style") is False


class TestPerformReview:
    def test_parses_provider_response(self):
        provider = _make_provider()
        result = Reviewer(provider).perform_review(DIFF, "security")

        provider.analyze.assert_called_once_with(DIFF, "security")
        assert result.type == "security"
        assert result.issues[0].severity == "critical"
        assert result.issues[0].file == "app.py"

    def test_empty_diff_short_circuits(self):
        provider = _make_provider()
        result = Reviewer(provider).perform_review("  \n", "style")

        provider.analyze.assert_not_called()
        assert result.summary == NO_CHANGES_SUMMARY
        assert result.issues == []
        assert result.suggestions == []

    def test_invalid_type_rejected_before_provider_call(self):
        provider = _make_provider()
        with pytest.raises(ValidationError):
            Reviewer(provider).perform_review(DIFF, "vibes")
        provider.analyze.assert_not_called()

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            Reviewer(_make_provider()).perform_review(DIFF, "vibes")

    def test_provider_error_propagates(self):
        provider = _make_provider()
        provider.analyze.side_effect = ProviderError("boom")
        with pytest.raises(ProviderError):
            Reviewer(provider).perform_review(DIFF, "security")


class TestBatchReview:
    def test_runs_every_type_in_order(self):
        results = Reviewer(_make_provider()).batch_review(DIFF)
        assert list(results) == DEFAULT_REVIEW_TYPES

    def test_failed_type_is_skipped(self):
        provider = _make_provider()

        def analyze(text, category):
            if category == "performance":
                raise ProviderError("timeout")
            return "Consider splitting this module"

        provider.analyze.side_effect = analyze
        results = Reviewer(provider).batch_review(DIFF)

        assert "performance" not in results
        assert list(results) == ["security", "style", "structure"]
        assert len(results["style"].suggestions) == 1

    def test_unknown_types_are_skipped(self):
        provider = _make_provider()
        results = Reviewer(provider).batch_review(DIFF, ["security", "vibes"])

        assert list(results) == ["security"]
        provider.analyze.assert_called_once()
