"""Recover an Insights object from free-form model output."""

import json
import re

import pydantic

from signal_insights.exceptions import ParseError
from signal_insights.models import Insights

# Greedy: first "{" to last "}" across the whole text.
_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def extract_json_candidate(raw_text: str) -> str:
    """Return the brace-to-brace span of the text, or the text itself."""
    match = _JSON_OBJECT_PATTERN.search(raw_text)
    return match.group(0) if match else raw_text


def parse_insights(raw_text: str) -> Insights:
    """Extract the JSON object from model output and decode it as Insights.

    Surrounding prose and code fences are tolerated. There is no second repair
    attempt: a candidate that is not valid JSON is a ParseError. Missing fields
    fall back to empty values; list lengths are not checked.

    Raises:
        ParseError: When the text holds no decodable JSON object of the
            expected shape. Carries the raw text for diagnostics.
    """
    try:
        parsed = json.loads(extract_json_candidate(raw_text))
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; int-digit limits and deep nesting also land here.
        reason = e.msg if isinstance(e, json.JSONDecodeError) else str(e) or type(e).__name__
        raise ParseError(raw_text, f"invalid JSON: {reason}") from e

    if not isinstance(parsed, dict):
        raise ParseError(raw_text, f"expected a JSON object, got {type(parsed).__name__}")

    try:
        return Insights.model_validate(parsed)
    except pydantic.ValidationError as e:
        raise ParseError(raw_text, f"unexpected field types: {e.error_count()} error(s)") from e
