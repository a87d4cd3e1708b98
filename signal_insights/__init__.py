"""Signal Insights - discover pain-point signals and synthesize founder insights"""

__version__ = "0.1.0"

from signal_insights.agents import (
    GenerativeInsightClient,
    clear_agent_cache,
    create_insight_agent,
    get_insight_agent,
)
from signal_insights.discovery import discover_signals, generate_queries, score_intent, signal_tags
from signal_insights.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    InsufficientSignalsError,
    MissingQueryError,
    ParseError,
    SignalInsightsError,
    SynthesisError,
    ValidationError,
)
from signal_insights.models import (
    DiscoveredSignal,
    InsightRequest,
    Insights,
    IntentLevel,
    SearchResult,
    Signal,
    SignalSource,
    SignalTag,
)
from signal_insights.normalizer import normalize
from signal_insights.parser import parse_insights
from signal_insights.prompts import build_insight_prompt
from signal_insights.search import ExternalSearchClient
from signal_insights.synthesis import InsightSynthesisService

__all__ = [
    # Models
    "Signal",
    "SignalSource",
    "SearchResult",
    "DiscoveredSignal",
    "IntentLevel",
    "SignalTag",
    "InsightRequest",
    "Insights",
    # Search and discovery
    "ExternalSearchClient",
    "normalize",
    "discover_signals",
    "generate_queries",
    "score_intent",
    "signal_tags",
    # Synthesis
    "build_insight_prompt",
    "create_insight_agent",
    "get_insight_agent",
    "clear_agent_cache",
    "GenerativeInsightClient",
    "parse_insights",
    "InsightSynthesisService",
    # Exceptions
    "SignalInsightsError",
    "ValidationError",
    "InsufficientSignalsError",
    "MissingQueryError",
    "ConfigurationError",
    "ExternalServiceError",
    "ParseError",
    "SynthesisError",
]
