"""Automatic discovery of candidate signals for a project.

Builds a few search queries from the project's pain description, runs them
against the search index and scores each hit by how strongly its wording
suggests purchase or pain intent. Persisting the candidates, and knowing which
URLs are already stored, is the caller's job.
"""

import re
from collections.abc import Iterable

from signal_insights.exceptions import ExternalServiceError
from signal_insights.logging import get_logger
from signal_insights.models import DiscoveredSignal, IntentLevel, SearchResult, SignalTag
from signal_insights.search import ExternalSearchClient

log = get_logger("signal_insights.discovery")

SITE_FILTER = "site:reddit.com"
QUERIES_PER_RUN = 2
RESULTS_PER_QUERY = 5
MAX_NEW_SIGNALS = 5

HIGH_INTENT_PHRASES = (
    "i'd pay",
    "i would pay",
    "take my money",
    "wish someone would build",
    "why doesn't this exist",
    "i need this",
)
MEDIUM_INTENT_PHRASES = (
    "frustrated with",
    "anyone else struggle",
    "looking for",
    "is there a tool",
    "alternative to",
    "tired of",
)

INTENT_SCORES: dict[IntentLevel, float] = {
    IntentLevel.HIGH: 5,
    IntentLevel.MEDIUM: 3,
    IntentLevel.LOW: 1,
}

TAG_KEYWORDS: dict[SignalTag, tuple[str, ...]] = {
    SignalTag.COMPLAINT: ("hate", "frustrated", "annoying", "terrible", "sucks"),
    SignalTag.WORKAROUND: ("i currently use", "my workaround", "right now i"),
    SignalTag.BUDGET_MENTION: ("$", "pay", "cost", "price", "subscription"),
}

_NON_WORD = re.compile(r"[^\w\s]")


def extract_keywords(pain_description: str | None, limit: int = 5) -> list[str]:
    if not pain_description:
        return []
    words = _NON_WORD.sub("", pain_description.lower()).split(" ")
    return [w for w in words if len(w) > 3][:limit]


def generate_queries(project_name: str, pain_description: str | None) -> list[str]:
    """Three site-scoped queries derived from the pain description.

    The project name is accepted for symmetry with the request but the
    queries are built from pain keywords only.
    """
    keywords = extract_keywords(pain_description)
    first = keywords[0] if keywords else "with"
    return [
        f"{' '.join(keywords[:3])} {SITE_FILTER}",
        f"frustrated {first} {SITE_FILTER}",
        f"looking for {' '.join(keywords[:2])} {SITE_FILTER}",
    ]


def score_intent(text: str) -> IntentLevel:
    lower = text.lower()
    if any(phrase in lower for phrase in HIGH_INTENT_PHRASES):
        return IntentLevel.HIGH
    if any(phrase in lower for phrase in MEDIUM_INTENT_PHRASES):
        return IntentLevel.MEDIUM
    return IntentLevel.LOW


def signal_tags(text: str) -> list[SignalTag]:
    lower = text.lower()
    return [tag for tag, words in TAG_KEYWORDS.items() if any(w in lower for w in words)]


def to_discovered_signal(result: SearchResult) -> DiscoveredSignal:
    content = f"{result.title} {result.snippet}"
    intent = score_intent(content)
    return DiscoveredSignal(
        **result.model_dump(),
        content=content,
        intent=intent,
        intent_score=INTENT_SCORES[intent],
        tags=signal_tags(content),
    )


async def discover_signals(
    project_name: str,
    pain_description: str | None,
    client: ExternalSearchClient,
    known_urls: Iterable[str] = (),
) -> list[DiscoveredSignal]:
    """Search for new candidate signals, skipping URLs the caller already has.

    A query that fails upstream is logged and skipped. Configuration errors
    surface from the client before any query runs.
    """
    queries = generate_queries(project_name, pain_description)[:QUERIES_PER_RUN]
    known = set(known_urls)

    results: list[SearchResult] = []
    for query in queries:
        try:
            results.extend(await client.search(query, num_results=RESULTS_PER_QUERY))
        except ExternalServiceError as e:
            log.warning("discovery.query_failed", query=query, error=str(e))

    fresh = [r for r in results if r.url not in known][:MAX_NEW_SIGNALS]
    log.info("discovery.completed", project=project_name, found=len(results), new=len(fresh))
    return [to_discovered_signal(r) for r in fresh]
