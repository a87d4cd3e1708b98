"""FastAPI application for signal discovery and insight synthesis."""

from collections.abc import Sequence
from typing import Any

import structlog
from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from signal_insights import __version__
from signal_insights.config import is_demo_mode_allowed
from signal_insights.demo import get_demo_insights
from signal_insights.discovery import discover_signals
from signal_insights.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    InsufficientSignalsError,
    MissingQueryError,
    SynthesisError,
    ValidationError,
)
from signal_insights.logging import configure_structlog, new_correlation_id
from signal_insights.models import (
    MIN_SIGNALS_FOR_INSIGHTS,
    DiscoveredSignal,
    InsightRequest,
    Insights,
    SearchResult,
)
from signal_insights.search import MAX_RESULTS_PER_CALL, ExternalSearchClient
from signal_insights.synthesis import InsightSynthesisService

log = structlog.get_logger("signal_insights.server")

SEARCH_FAILED_MESSAGE = "Failed to search"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


# --- Request/Response schemas ---


class SearchRequest(BaseModel):
    """Incoming search request. A missing query is reported as 400, not 422."""

    query: str | None = Field(
        default=None,
        max_length=1000,
        description="Search terms for the external index",
        examples=["people hate using spreadsheets for invoicing"],
    )
    num_results: int = Field(
        default=MAX_RESULTS_PER_CALL,
        alias="numResults",
        description=f"Requested result count, capped at {MAX_RESULTS_PER_CALL}",
        examples=[5],
    )


class SearchResponse(BaseModel):
    results: list[SearchResult]


class DiscoverRequest(BaseModel):
    """Incoming discovery request."""

    project_name: str = Field(alias="projectName", examples=["InvoiceFlow"])
    project_pain: str | None = Field(
        default=None,
        alias="projectPain",
        examples=["Freelancers waste hours building invoices in spreadsheets"],
    )
    known_urls: list[str] = Field(
        default_factory=list,
        alias="knownUrls",
        description="URLs already stored for the project; they are skipped",
    )


class DiscoverResponse(BaseModel):
    signals: list[DiscoveredSignal]


class InsightsResponse(BaseModel):
    insights: Insights


class ErrorResponse(BaseModel):
    """Caller-safe error message."""

    error: str = Field(examples=["Failed to generate insights"])


class HealthResponse(BaseModel):
    status: str = Field(examples=["ok"])
    version: str = Field(default="", examples=["0.1.0"])


# --- Dependencies ---


def require_query(body: SearchRequest) -> SearchRequest:
    """Reject an empty query before the search client is configured."""
    if not body.query or not body.query.strip():
        raise MissingQueryError()
    return body


def require_min_signals(body: InsightRequest) -> InsightRequest:
    if len(body.signals) < MIN_SIGNALS_FOR_INSIGHTS:
        raise InsufficientSignalsError(received=len(body.signals), required=MIN_SIGNALS_FOR_INSIGHTS)
    return body


def get_search_client() -> ExternalSearchClient:
    return ExternalSearchClient.from_env()


def get_synthesis_service(
    demo: bool = Query(default=False, description="Serve canned insights for frontend testing"),
) -> InsightSynthesisService | None:
    """Return None for demo requests, which never touch the model and need no credentials."""
    if demo:
        if not is_demo_mode_allowed():
            raise HTTPException(
                status_code=403,
                detail="Demo mode not available in this environment",
            )
        return None
    return InsightSynthesisService.from_env()


# --- Exception handlers ---


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def _handle_insufficient_signals(request: Request, exc: InsufficientSignalsError) -> JSONResponse:
    log.info("request.insufficient_signals", received=exc.received)
    return _error(status.HTTP_400_BAD_REQUEST, f"Need at least {exc.required} signals")


async def _handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    log.info("request.validation_error", detail=str(exc))
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


def _describe_body_errors(errors: Sequence[Any]) -> str:
    """Map body validation errors to the message the endpoint would give for that field."""
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc == ("body", "query"):
            return str(MissingQueryError())
        if loc == ("body", "signals"):
            return f"Need at least {MIN_SIGNALS_FOR_INSIGHTS} signals"
    fields = [".".join(str(part) for part in error.get("loc", ())[1:]) or "body" for error in errors]
    return f"Invalid request: {', '.join(fields)}"


async def _handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("request.invalid_body", path=request.url.path, error_count=len(exc.errors()))
    return _error(status.HTTP_400_BAD_REQUEST, _describe_body_errors(exc.errors()))


async def _handle_configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    log.error("request.configuration_error", missing=exc.missing)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.safe_message)


async def _handle_external_service_error(request: Request, exc: ExternalServiceError) -> JSONResponse:
    log.error(
        "request.external_service_error",
        service=exc.service,
        reason=exc.reason,
        upstream_message=exc.upstream_message,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, SEARCH_FAILED_MESSAGE)


async def _handle_synthesis_error(request: Request, exc: SynthesisError) -> JSONResponse:
    # The cause has already been logged by the synthesis service.
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.reason)


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception("request.unexpected_error", error=str(exc))
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)


# --- App factory ---


def get_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_structlog()

    application = FastAPI(
        title="Signal Insights Service",
        description="""
Collects pain-point signals from recent social posts and synthesizes founder-facing insights.

## Endpoints

1. **Search** - Queries the web search index for posts from the last 30 days
2. **Discover** - Generates queries from a pain description and scores each hit's intent
3. **Insights** - Turns at least 3 curated signals into pain points, features, pivots and keywords
        """,
        version=__version__,
    )

    application.add_exception_handler(InsufficientSignalsError, _handle_insufficient_signals)  # type: ignore[arg-type]
    application.add_exception_handler(ValidationError, _handle_validation_error)  # type: ignore[arg-type]
    application.add_exception_handler(RequestValidationError, _handle_request_validation_error)  # type: ignore[arg-type]
    application.add_exception_handler(ConfigurationError, _handle_configuration_error)  # type: ignore[arg-type]
    application.add_exception_handler(ExternalServiceError, _handle_external_service_error)  # type: ignore[arg-type]
    application.add_exception_handler(SynthesisError, _handle_synthesis_error)  # type: ignore[arg-type]
    application.add_exception_handler(Exception, _handle_unexpected_error)

    @application.post(
        "/search",
        response_model=SearchResponse,
        status_code=status.HTTP_200_OK,
        summary="Search for Signals",
        description="Searches the configured community site for posts from the last 30 days.",
        tags=["Signals"],
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def search(
        body: SearchRequest = Depends(require_query),
        client: ExternalSearchClient = Depends(get_search_client),
    ) -> SearchResponse:
        new_correlation_id()
        results = await client.search(body.query, num_results=body.num_results)
        return SearchResponse(results=results)

    @application.post(
        "/discover",
        response_model=DiscoverResponse,
        status_code=status.HTTP_200_OK,
        summary="Discover New Signals",
        description="Runs generated queries for a project and returns up to 5 new, intent-scored candidates.",
        tags=["Signals"],
        responses={500: {"model": ErrorResponse}},
    )
    async def discover(
        body: DiscoverRequest,
        client: ExternalSearchClient = Depends(get_search_client),
    ) -> DiscoverResponse:
        new_correlation_id()
        signals = await discover_signals(
            body.project_name,
            body.project_pain,
            client=client,
            known_urls=body.known_urls,
        )
        return DiscoverResponse(signals=signals)

    @application.post(
        "/insights",
        response_model=InsightsResponse,
        status_code=status.HTTP_200_OK,
        summary="Synthesize Insights",
        description=f"Synthesizes insights from at least {MIN_SIGNALS_FOR_INSIGHTS} curated signals.",
        tags=["Insights"],
        responses={
            400: {
                "model": ErrorResponse,
                "content": {"application/json": {"example": {"error": "Need at least 3 signals"}}},
            },
            500: {
                "model": ErrorResponse,
                "content": {"application/json": {"example": {"error": "Failed to generate insights"}}},
            },
        },
    )
    async def insights(
        body: InsightRequest = Depends(require_min_signals),
        service: InsightSynthesisService | None = Depends(get_synthesis_service),
    ) -> InsightsResponse:
        if service is None:
            log.warning("demo_mode_active", project=body.project_name, endpoint="/insights")
            return InsightsResponse(insights=get_demo_insights(body))

        return InsightsResponse(insights=await service.synthesize(body))

    @application.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        tags=["Health"],
    )
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @application.get(
        "/health/liveness",
        response_model=HealthResponse,
        summary="Liveness Probe",
        tags=["Health"],
    )
    async def liveness() -> HealthResponse:
        return HealthResponse(status="alive")

    @application.get(
        "/health/readiness",
        response_model=HealthResponse,
        summary="Readiness Probe",
        tags=["Health"],
    )
    async def readiness() -> HealthResponse:
        return HealthResponse(status="ready")

    return application


app = get_app()
