"""Tests for automatic signal discovery."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from signal_insights.discovery import (
    MAX_NEW_SIGNALS,
    RESULTS_PER_QUERY,
    discover_signals,
    extract_keywords,
    generate_queries,
    score_intent,
    signal_tags,
    to_discovered_signal,
)
from signal_insights.exceptions import ConfigurationError, ExternalServiceError
from signal_insights.models import IntentLevel, SearchResult, SignalTag
from signal_insights.search import ExternalSearchClient


def _result(n: int, subreddit: str = "saas", snippet: str = "") -> SearchResult:
    return SearchResult(
        title=f"Post {n}",
        snippet=snippet,
        url=f"https://www.reddit.com/r/{subreddit}/comments/{n}/post/",
        subreddit=subreddit,
    )


def _mock_client(**search_kwargs: object) -> tuple[ExternalSearchClient, AsyncMock]:
    client = MagicMock(spec=ExternalSearchClient)
    client.search = AsyncMock(**search_kwargs)
    return client, client.search


class TestGenerateQueries:
    """Tests for query generation."""

    def test__extract_keywords__keeps_long_words(self) -> None:
        keywords = extract_keywords("Freelancers hate building invoices in spreadsheets, every single month!")
        assert keywords == ["freelancers", "hate", "building", "invoices", "spreadsheets"]

    def test__generate_queries__builds_three_site_scoped_queries(self) -> None:
        queries = generate_queries("InvoiceFlow", "Freelancers waste hours building invoices")

        assert queries == [
            "freelancers waste hours site:reddit.com",
            "frustrated freelancers site:reddit.com",
            "looking for freelancers waste site:reddit.com",
        ]

    def test__generate_queries__missing_pain__uses_fallback_word(self) -> None:
        queries = generate_queries("InvoiceFlow", None)

        assert queries[1] == "frustrated with site:reddit.com"
        assert all(q.endswith("site:reddit.com") for q in queries)


class TestScoring:
    """Tests for intent scoring and tagging."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Honestly I'd pay for this tomorrow", IntentLevel.HIGH),
            ("Take my money already", IntentLevel.HIGH),
            ("Is there a tool that does this?", IntentLevel.MEDIUM),
            ("So tired of copying rows", IntentLevel.MEDIUM),
            ("Looking for an alternative, I need this", IntentLevel.HIGH),
            ("Nice weather today", IntentLevel.LOW),
        ],
    )
    def test__score_intent__detects_level(self, text: str, expected: IntentLevel) -> None:
        assert score_intent(text) is expected

    def test__signal_tags__detects_all_groups_in_order(self) -> None:
        tags = signal_tags("I hate this. My workaround costs $20 a month")
        assert tags == [SignalTag.COMPLAINT, SignalTag.WORKAROUND, SignalTag.BUDGET_MENTION]

    def test__signal_tags__no_keywords__returns_empty(self) -> None:
        assert signal_tags("Just sharing a link") == []

    def test__to_discovered_signal__scores_title_and_snippet(self) -> None:
        result = _result(1, snippet="I would pay for a fix, so frustrated")

        signal = to_discovered_signal(result)

        assert signal.content == "Post 1 I would pay for a fix, so frustrated"
        assert signal.intent is IntentLevel.HIGH
        assert signal.intent_score == 5
        assert signal.tags == [SignalTag.COMPLAINT, SignalTag.BUDGET_MENTION]
        assert signal.url == result.url
        assert signal.subreddit == "saas"


class TestDiscoverSignals:
    """Tests for discover_signals."""

    @pytest.mark.asyncio
    async def test__runs_first_two_queries_with_five_results(self) -> None:
        client, search = _mock_client(return_value=[])

        await discover_signals("InvoiceFlow", "Freelancers waste hours building invoices", client)

        assert search.await_count == 2
        queries = [call.args[0] for call in search.await_args_list]
        assert queries == generate_queries("InvoiceFlow", "Freelancers waste hours building invoices")[:2]
        assert all(call.kwargs["num_results"] == RESULTS_PER_QUERY for call in search.await_args_list)

    @pytest.mark.asyncio
    async def test__skips_known_urls(self) -> None:
        client, _ = _mock_client(side_effect=[[_result(1), _result(2)], [_result(3)]])

        signals = await discover_signals("p", "pain points here", client, known_urls=[_result(2).url])

        assert [s.title for s in signals] == ["Post 1", "Post 3"]

    @pytest.mark.asyncio
    async def test__caps_new_signals(self) -> None:
        client, _ = _mock_client(side_effect=[[_result(n) for n in range(5)], [_result(n) for n in range(5, 10)]])

        signals = await discover_signals("p", "pain points here", client)

        assert len(signals) == MAX_NEW_SIGNALS
        assert [s.title for s in signals] == [f"Post {n}" for n in range(5)]

    @pytest.mark.asyncio
    async def test__failed_query__is_skipped(self) -> None:
        client, _ = _mock_client(side_effect=[ExternalServiceError("search index", "quota"), [_result(7)]])

        signals = await discover_signals("p", "pain points here", client)

        assert [s.title for s in signals] == ["Post 7"]

    @pytest.mark.asyncio
    async def test__configuration_error__propagates(self) -> None:
        client, _ = _mock_client(side_effect=ConfigurationError(["GOOGLE_API_KEY"], service="Search"))

        with pytest.raises(ConfigurationError):
            await discover_signals("p", "pain points here", client)
