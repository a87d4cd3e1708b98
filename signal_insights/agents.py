"""PydanticAI agent wrapper for the generative insight model."""

import os
from functools import lru_cache
from typing import Any

from pydantic_ai import Agent, UnexpectedModelBehavior, capture_run_messages
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart
from pydantic_ai.settings import ModelSettings

from signal_insights.config import DEFAULT_INSIGHT_MODEL
from signal_insights.exceptions import ConfigurationError, ExternalServiceError
from signal_insights.logging import get_logger

log = get_logger("signal_insights.agents")

MAX_OUTPUT_TOKENS = 1024
SERVICE_NAME = "generative model"

# Provider prefix -> environment variable holding its credential.
_PROVIDER_CREDENTIALS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "google-gla": "GEMINI_API_KEY",
}


def create_insight_agent(model: Any = DEFAULT_INSIGHT_MODEL) -> Agent[None, str]:
    """Uncached factory - use with TestModel for tests.

    No instructions are attached: the whole prompt travels as the single
    user message, and the agent returns plain text for the tolerant parser.
    Retries are disabled so each call is exactly one model request.
    """
    return Agent(
        model,
        output_type=str,
        model_settings=ModelSettings(max_tokens=MAX_OUTPUT_TOKENS),
        retries=0,
        output_retries=0,
        instrument=True,
        name="insight_agent",
    )


@lru_cache(maxsize=1)
def get_insight_agent(model: str = DEFAULT_INSIGHT_MODEL) -> Agent[None, str]:
    """Cached getter for production."""
    return create_insight_agent(model)


def clear_agent_cache() -> None:
    get_insight_agent.cache_clear()


def check_model_credentials(model: str = DEFAULT_INSIGHT_MODEL) -> None:
    """Fail fast when the provider behind a model string has no credential."""
    provider = model.split(":", 1)[0] if ":" in model else ""
    env_var = _PROVIDER_CREDENTIALS.get(provider)
    if env_var and not os.getenv(env_var):
        raise ConfigurationError([env_var], service="Insights")


class GenerativeInsightClient:
    """Sends a prompt to the insight model and returns its raw text."""

    def __init__(self, agent: Agent[Any, str]) -> None:
        self.agent = agent

    @classmethod
    def from_env(cls, model: str = DEFAULT_INSIGHT_MODEL) -> "GenerativeInsightClient":
        check_model_credentials(model)
        return cls(get_insight_agent(model))

    async def generate(self, prompt: str) -> str:
        """Return the model's text, or '' when it produced none.

        Raises:
            ExternalServiceError: On transport, auth or model-side failure.
        """
        with capture_run_messages() as messages:
            try:
                result = await self.agent.run(prompt)
            except UnexpectedModelBehavior as e:
                # With output retries disabled an empty response surfaces here.
                if _ended_without_text(messages):
                    log.warning("agent.run.empty_output", agent=self.agent.name)
                    return ""
                log.error("agent.run.failed", agent=self.agent.name, error=str(e))
                raise ExternalServiceError(SERVICE_NAME, str(e)) from e
            except Exception as e:
                log.error("agent.run.failed", agent=self.agent.name, error=str(e))
                raise ExternalServiceError(SERVICE_NAME, str(e) or type(e).__name__) from e

        return result.output or ""


def _ended_without_text(messages: list[ModelMessage]) -> bool:
    """True when the last model response holds no non-empty text part."""
    responses = [m for m in messages if isinstance(m, ModelResponse)]
    if not responses:
        return False
    return not any(isinstance(part, TextPart) and part.content for part in responses[-1].parts)
