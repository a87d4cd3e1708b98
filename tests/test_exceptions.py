"""Tests for signal insights exceptions."""

import pytest

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


class TestValidationErrors:
    """Tests for caller input errors."""

    def test__insufficient_signals__stores_counts(self) -> None:
        error = InsufficientSignalsError(received=2, required=3)
        assert error.received == 2
        assert error.required == 3

    def test__insufficient_signals__formats_message(self) -> None:
        error = InsufficientSignalsError(received=1, required=3)
        assert str(error) == "insufficient signals: need at least 3, got 1"

    def test__missing_query__formats_message(self) -> None:
        assert str(MissingQueryError()) == "Query required"

    @pytest.mark.parametrize("error", [InsufficientSignalsError(received=0, required=3), MissingQueryError()])
    def test__validation_errors__catchable_as_validation_error(self, error: ValidationError) -> None:
        with pytest.raises(ValidationError):
            raise error


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test__configuration_error__lists_missing_values(self) -> None:
        error = ConfigurationError(["GOOGLE_API_KEY", "GOOGLE_SEARCH_ENGINE_ID"], service="Search")
        assert error.missing == ["GOOGLE_API_KEY", "GOOGLE_SEARCH_ENGINE_ID"]
        assert str(error) == "Missing required configuration: GOOGLE_API_KEY, GOOGLE_SEARCH_ENGINE_ID"

    def test__configuration_error__safe_message_names_service_only(self) -> None:
        error = ConfigurationError(["GOOGLE_API_KEY"], service="Search")
        assert error.safe_message == "Search not configured"


class TestExternalServiceError:
    """Tests for ExternalServiceError."""

    def test__external_service_error__formats_message(self) -> None:
        error = ExternalServiceError("search index", "connection reset")
        assert str(error) == "search index request failed: connection reset"
        assert error.upstream_message is None

    def test__external_service_error__keeps_upstream_message(self) -> None:
        error = ExternalServiceError("search index", "Invalid API key", upstream_message="Invalid API key")
        assert error.upstream_message == "Invalid API key"


class TestParseError:
    """Tests for ParseError."""

    def test__parse_error__carries_raw_text(self) -> None:
        error = ParseError("not json at all", "invalid JSON: Expecting value")
        assert error.raw_text == "not json at all"
        assert error.reason == "invalid JSON: Expecting value"
        assert "not json at all" not in str(error)


class TestSynthesisError:
    """Tests for SynthesisError."""

    def test__synthesis_error__message_is_reason(self) -> None:
        error = SynthesisError("Failed to parse AI response")
        assert str(error) == "Failed to parse AI response"
        assert error.reason == "Failed to parse AI response"


@pytest.mark.parametrize(
    "error",
    [
        InsufficientSignalsError(received=0, required=3),
        ConfigurationError(["X"]),
        ExternalServiceError("svc", "down"),
        ParseError("", "empty"),
        SynthesisError("failed"),
    ],
)
def test__all_errors__catchable_as_base(error: SignalInsightsError) -> None:
    with pytest.raises(SignalInsightsError):
        raise error
