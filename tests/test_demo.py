"""Unit tests for demo mode fixtures."""

import pytest

from signal_insights.config import is_demo_mode_allowed
from signal_insights.demo import _demo_insights_template, get_demo_insights
from signal_insights.models import InsightRequest, Insights, Signal


def _request(*subreddits: str) -> InsightRequest:
    return InsightRequest(
        project_name="InvoiceFlow",
        signals=[Signal(content="post", intent_score=3, subreddit=s) for s in subreddits],
    )


class TestGetDemoInsights:
    """Tests for get_demo_insights function."""

    def test__get_demo_insights__returns_populated_insights(self) -> None:
        insights = get_demo_insights(_request("saas", "startups", "saas"))

        assert isinstance(insights, Insights)
        assert len(insights.pain_points) == 3
        assert len(insights.features) == 4
        assert len(insights.keywords) == 8
        assert insights.refined_idea

    def test__get_demo_insights__echoes_request_communities_in_order(self) -> None:
        insights = get_demo_insights(_request("startups", "saas", "startups", ""))

        assert insights.communities == ["startups", "saas"]

    def test__template__is_cached_and_untouched(self) -> None:
        """The cached template keeps empty communities after per-request copies."""
        first = _demo_insights_template()
        get_demo_insights(_request("saas", "freelance", "saas"))

        assert _demo_insights_template() is first
        assert first.communities == []


class TestIsDemoModeAllowed:
    """Tests for is_demo_mode_allowed function."""

    @pytest.mark.parametrize("environment", ["development", "staging"])
    def test__is_demo_mode_allowed__allows_non_production(
        self, monkeypatch: pytest.MonkeyPatch, environment: str
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", environment)
        assert is_demo_mode_allowed() is True

    def test__is_demo_mode_allowed__blocks_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert is_demo_mode_allowed() is False

    def test__is_demo_mode_allowed__defaults_to_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        assert is_demo_mode_allowed() is True
