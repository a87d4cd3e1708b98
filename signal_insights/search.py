"""Client for the external web search index (Google Custom Search)."""

from time import perf_counter
from typing import Any

import httpx

from signal_insights.config import SearchSettings
from signal_insights.exceptions import ExternalServiceError, MissingQueryError
from signal_insights.logging import get_logger
from signal_insights.models import SearchResult
from signal_insights.normalizer import normalize

log = get_logger("signal_insights.search")

SEARCH_ENDPOINT = "https://www.googleapis.com/customsearch/v1"
MAX_RESULTS_PER_CALL = 10
RECENCY_WINDOW = "d30"  # last 30 days
SERVICE_NAME = "search index"


def clamp_num_results(num_results: int) -> int:
    return max(1, min(num_results, MAX_RESULTS_PER_CALL))


class ExternalSearchClient:
    """Searches recent posts on the configured domain and normalizes the hits.

    The HTTP client is injectable so tests can use ``httpx.MockTransport``.
    When none is given, a short-lived client is opened per call.
    """

    def __init__(self, settings: SearchSettings, http_client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self._http_client = http_client

    @classmethod
    def from_env(cls, http_client: httpx.AsyncClient | None = None) -> "ExternalSearchClient":
        return cls(SearchSettings.from_env(), http_client=http_client)

    def build_params(self, query: str, num_results: int) -> dict[str, Any]:
        return {
            "key": self.settings.api_key,
            "cx": self.settings.search_engine_id,
            "q": query,
            "num": clamp_num_results(num_results),
            "dateRestrict": RECENCY_WINDOW,
        }

    async def search(self, query: str, num_results: int = MAX_RESULTS_PER_CALL) -> list[SearchResult]:
        """Run one search and return normalized results.

        Raises:
            MissingQueryError: When the query is empty.
            ExternalServiceError: On transport failure or an error payload.
        """
        if not query or not query.strip():
            raise MissingQueryError()

        params = self.build_params(query, num_results)
        start = perf_counter()
        log.info("search.started", query=query, num=params["num"])

        payload = await self._fetch(params)

        error = payload.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else None
            log.error("search.upstream_error", query=query, error=error)
            raise ExternalServiceError(SERVICE_NAME, message or "Search failed", upstream_message=message)

        results = [normalize(item) for item in payload.get("items") or [] if item.get("link")]
        log.info(
            "search.completed",
            query=query,
            result_count=len(results),
            duration_ms=int((perf_counter() - start) * 1000),
        )
        return results

    async def _fetch(self, params: dict[str, Any]) -> dict[str, Any]:
        try:
            if self._http_client is not None:
                response = await self._http_client.get(SEARCH_ENDPOINT, params=params)
            else:
                timeout = httpx.Timeout(self.settings.timeout_seconds, connect=5.0)
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.get(SEARCH_ENDPOINT, params=params)
        except httpx.HTTPError as e:
            log.error("search.transport_failed", error=str(e))
            raise ExternalServiceError(SERVICE_NAME, str(e) or type(e).__name__) from e

        # Error bodies are JSON too; they are reported through the "error" key.
        try:
            payload = response.json()
        except ValueError as e:
            log.error("search.invalid_payload", status_code=response.status_code)
            raise ExternalServiceError(SERVICE_NAME, f"invalid response (HTTP {response.status_code})") from e

        if not isinstance(payload, dict):
            raise ExternalServiceError(SERVICE_NAME, "unexpected response shape")
        return payload
