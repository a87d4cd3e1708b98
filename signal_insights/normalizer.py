"""Turn raw search index items into SearchResult records."""

import re
from collections.abc import Mapping
from typing import Any

from signal_insights.models import SearchResult, SignalSource

SITE_NAME = "Reddit"

_SUBREDDIT_PATTERN = re.compile(r"reddit\.com/r/(\w+)")
_AUTHOR_PATTERN = re.compile(r"by\s+u/(\w+)|posted\s+by\s+(\w+)", re.IGNORECASE)


def extract_subreddit(url: str | None) -> str:
    """Community name from a '.../r/<name>' link, or '' when absent."""
    if not url:
        return ""
    match = _SUBREDDIT_PATTERN.search(url)
    return match.group(1) if match else ""


def extract_author(snippet: str | None) -> str:
    """First 'by u/<name>' or 'posted by <name>' in the snippet, else 'unknown'."""
    if not snippet:
        return "unknown"
    match = _AUTHOR_PATTERN.search(snippet)
    if not match:
        return "unknown"
    return match.group(1) or match.group(2)


def clean_title(title: str | None, subreddit: str) -> str:
    """Strip a trailing ' - Reddit' and then a trailing ' : <subreddit>' segment."""
    if not title:
        return ""
    title = title.removesuffix(f" - {SITE_NAME}")
    if subreddit:
        title = title.removesuffix(f" : {subreddit}")
    return title


def normalize(raw_item: Mapping[str, Any]) -> SearchResult:
    """Build a SearchResult from a search index item ({title, snippet, link})."""
    url = raw_item.get("link") or ""
    snippet = raw_item.get("snippet") or ""
    subreddit = extract_subreddit(url)

    return SearchResult(
        title=clean_title(raw_item.get("title"), subreddit),
        snippet=snippet,
        url=url,
        subreddit=subreddit,
        author=extract_author(snippet),
        source=SignalSource.GOOGLE,
    )
