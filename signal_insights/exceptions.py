"""Domain-specific exceptions for signal discovery and insight synthesis."""


class SignalInsightsError(Exception):
    """Base exception for signal insights errors."""


class ValidationError(SignalInsightsError):
    """Raised when caller input violates a precondition."""


class InsufficientSignalsError(ValidationError):
    """Raised when an insight request carries too few signals."""

    def __init__(self, received: int, required: int) -> None:
        self.received = received
        self.required = required
        super().__init__(f"insufficient signals: need at least {required}, got {received}")


class MissingQueryError(ValidationError):
    """Raised when a search is attempted without a query."""

    def __init__(self) -> None:
        super().__init__("Query required")


class ConfigurationError(SignalInsightsError):
    """Raised when a required credential or scope identifier is missing."""

    def __init__(self, missing: list[str], service: str = "Service") -> None:
        self.missing = missing
        self.service = service
        super().__init__(f"Missing required configuration: {', '.join(missing)}")

    @property
    def safe_message(self) -> str:
        return f"{self.service} not configured"


class ExternalServiceError(SignalInsightsError):
    """Raised when the search index or the generative model fails.

    ``upstream_message`` is set only when the service reported a message of
    its own. It is logged for diagnosis and never returned to callers.
    """

    def __init__(self, service: str, reason: str, upstream_message: str | None = None) -> None:
        self.service = service
        self.reason = reason
        self.upstream_message = upstream_message
        super().__init__(f"{service} request failed: {reason}")


class ParseError(SignalInsightsError):
    """Raised when model output cannot be recovered as an insights object."""

    def __init__(self, raw_text: str, reason: str) -> None:
        self.raw_text = raw_text
        self.reason = reason
        super().__init__(f"Failed to parse insights response: {reason}")


class SynthesisError(SignalInsightsError):
    """Raised when insight synthesis fails. The message is safe to show callers."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
