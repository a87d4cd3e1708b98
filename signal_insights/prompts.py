"""Prompt rendering for insight synthesis."""

from signal_insights.models import InsightRequest, IntentLevel, Signal

CONTENT_PREVIEW_CHARS = 500

INSIGHTS_PREAMBLE = """You are helping a founder validate and refine their startup idea based on real user signals they've collected.
You have to be 100% honest.

Project: {project_name}
Original Pain Point: {project_pain}

Here are {signal_count} signals (real posts/conversations) they've collected:

{signal_summaries}
"""

INSIGHTS_POSTSCRIPT = """
Based on these signals, provide insights in the following JSON format:
{
  "painPoints": ["3-5 common pain points you see across these signals"],
  "features": ["4-6 specific feature suggestions based on what users are asking for"],
  "pivots": ["2-3 potential pivot ideas or adjustments to consider"],
  "keywords": ["8-12 keywords/phrases that keep appearing"],
  "refinedIdea": "A 2-3 sentence refined version of their idea that better matches what users actually want",
  "communities": ["list of subreddits from the signals, deduplicated"]
}

Be specific and actionable. Reference actual things from the signals. Don't be generic.
Return ONLY valid JSON, no markdown, code fences or explanation."""


def _format_score(score: float | IntentLevel) -> str:
    if isinstance(score, IntentLevel):
        return score.value
    return str(int(score)) if float(score).is_integer() else str(score)


def summarize_signal(position: int, signal: Signal) -> str:
    """One paragraph per signal: position, intent, community, content, notes, status."""
    content = signal.content[:CONTENT_PREVIEW_CHARS] if signal.content else "No content"
    notes = f"Notes: {signal.notes}" if signal.notes else ""
    return (
        f"Signal {position} ({_format_score(signal.intent_score)} intent, r/{signal.subreddit}):\n"
        f"Content: {content}\n"
        f"{notes}\n"
        f"Status: {signal.status}"
    )


def build_insight_prompt(request: InsightRequest) -> str:
    """Render the full synthesis prompt; signal order sets the 'Signal N' numbering."""
    summaries = "\n\n".join(summarize_signal(i, signal) for i, signal in enumerate(request.signals, start=1))
    preamble = INSIGHTS_PREAMBLE.format(
        project_name=request.project_name,
        project_pain=request.project_pain or "Not specified",
        signal_count=len(request.signals),
        signal_summaries=summaries,
    )
    return preamble + INSIGHTS_POSTSCRIPT
