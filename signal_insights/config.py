"""Environment-driven settings for the search index and the insight model."""

import os
from dataclasses import dataclass

from signal_insights.exceptions import ConfigurationError

DEFAULT_INSIGHT_MODEL = os.getenv("INSIGHT_MODEL", "anthropic:claude-sonnet-4-20250514")
DEFAULT_SEARCH_TIMEOUT_SECONDS = float(os.getenv("SEARCH_TIMEOUT_SECONDS", "10"))


@dataclass(frozen=True)
class SearchSettings:
    """Credentials and scope for the external search index."""

    api_key: str
    search_engine_id: str
    timeout_seconds: float = DEFAULT_SEARCH_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        missing = []
        if not self.api_key:
            missing.append("GOOGLE_API_KEY")
        if not self.search_engine_id:
            missing.append("GOOGLE_SEARCH_ENGINE_ID")
        if missing:
            raise ConfigurationError(missing, service="Search")

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """Read settings from the environment, failing fast on missing values."""
        return cls(
            api_key=os.getenv("GOOGLE_API_KEY", ""),
            search_engine_id=os.getenv("GOOGLE_SEARCH_ENGINE_ID", ""),
            timeout_seconds=float(os.getenv("SEARCH_TIMEOUT_SECONDS", str(DEFAULT_SEARCH_TIMEOUT_SECONDS))),
        )


def is_demo_mode_allowed() -> bool:
    """Demo responses are only served in development and staging."""
    environment = os.getenv("ENVIRONMENT", "development")
    return environment in ("development", "staging")
