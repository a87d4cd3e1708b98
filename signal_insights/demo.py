"""Demo mode fixtures for frontend testing without burning API keys."""

from functools import lru_cache

from signal_insights.models import InsightRequest, Insights


def _communities(request: InsightRequest) -> list[str]:
    seen: dict[str, None] = {}
    for signal in request.signals:
        if signal.subreddit:
            seen.setdefault(signal.subreddit, None)
    return list(seen)


@lru_cache(maxsize=1)
def _demo_insights_template() -> Insights:
    """Hardcoded invoicing insights, cached to avoid rebuilding the model."""
    return Insights(
        pain_points=[
            "Copying billable rows from spreadsheets into invoice templates by hand",
            "Chasing late payments with manual follow-up emails",
            "Keeping invoice numbering and tax lines consistent across clients",
        ],
        features=[
            "Generate an invoice straight from a selected spreadsheet range",
            "Automatic payment reminders on a schedule the user controls",
            "Per-client templates with saved tax and currency settings",
            "Sync paid status back into the source spreadsheet",
        ],
        pivots=[
            "Sell to bookkeepers who invoice on behalf of many small clients",
            "Start as a spreadsheet add-on before building a standalone app",
        ],
        keywords=[
            "invoice template",
            "spreadsheet",
            "late payments",
            "freelance",
            "billing",
            "reminders",
            "tax",
            "clients",
        ],
        refined_idea=(
            "A spreadsheet add-on that turns billable rows into branded invoices in one click. "
            "It tracks who has paid and sends polite reminders so freelancers stop chasing clients."
        ),
    )


def get_demo_insights(request: InsightRequest) -> Insights:
    """Canned insights whose communities echo the request's signals."""
    return _demo_insights_template().model_copy(update={"communities": _communities(request)})
