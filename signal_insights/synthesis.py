"""Insight synthesis: prompt -> generative model -> tolerant parse."""

from time import perf_counter

from signal_insights.agents import GenerativeInsightClient
from signal_insights.exceptions import (
    ExternalServiceError,
    InsufficientSignalsError,
    ParseError,
    SynthesisError,
)
from signal_insights.logging import bind_context_vars, get_logger, new_correlation_id
from signal_insights.models import MIN_SIGNALS_FOR_INSIGHTS, InsightRequest, Insights
from signal_insights.parser import parse_insights
from signal_insights.prompts import build_insight_prompt

log = get_logger("signal_insights.synthesis")

GENERATION_FAILED_MESSAGE = "Failed to generate insights"
PARSE_FAILED_MESSAGE = "Failed to parse AI response"


class InsightSynthesisService:
    """Turns a curated batch of signals into Insights, all or nothing."""

    def __init__(self, client: GenerativeInsightClient) -> None:
        self.client = client

    @classmethod
    def from_env(cls) -> "InsightSynthesisService":
        return cls(GenerativeInsightClient.from_env())

    async def synthesize(self, request: InsightRequest) -> Insights:
        """Synthesize insights for a project.

        Args:
            request: Project context and at least three signals.

        Returns:
            Insights parsed from the model output.

        Raises:
            InsufficientSignalsError: Fewer than three signals; no external call is made.
            SynthesisError: Generation or parsing failed. The message is caller-safe;
                the underlying cause is logged.
        """
        if len(request.signals) < MIN_SIGNALS_FOR_INSIGHTS:
            raise InsufficientSignalsError(received=len(request.signals), required=MIN_SIGNALS_FOR_INSIGHTS)

        new_correlation_id()
        bind_context_vars(project=request.project_name)
        start = perf_counter()
        log.info("insights.started", signal_count=len(request.signals))

        prompt = build_insight_prompt(request)

        try:
            raw_text = await self.client.generate(prompt)
        except ExternalServiceError as e:
            log.error("insights.generation.failed", error=str(e))
            raise SynthesisError(GENERATION_FAILED_MESSAGE) from e

        try:
            insights = parse_insights(raw_text)
        except ParseError as e:
            log.error("insights.parse.failed", reason=e.reason, raw_text=e.raw_text)
            raise SynthesisError(PARSE_FAILED_MESSAGE) from e

        log.info(
            "insights.completed",
            duration_ms=int((perf_counter() - start) * 1000),
            pain_points=len(insights.pain_points),
            communities=len(insights.communities),
        )
        return insights
