"""Pydantic models for signal discovery and insight synthesis."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MIN_SIGNALS_FOR_INSIGHTS = 3


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignalSource(str, Enum):
    """Where a signal was found."""

    GOOGLE = "google"
    MANUAL = "manual"


class IntentLevel(str, Enum):
    """Coarse purchase/pain intent detected from a post's wording."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SignalTag(str, Enum):
    """Keyword-derived labels attached to discovered signals."""

    COMPLAINT = "complaint"
    WORKAROUND = "workaround"
    BUDGET_MENTION = "budget_mention"


class Signal(_WireModel):
    """A curated post or comment used as validation evidence."""

    model_config = ConfigDict(frozen=True)

    content: str | None = Field(
        default=None,
        description="Text of the post or comment",
        examples=["I'd pay for something that turns my spreadsheet into invoices automatically."],
    )
    notes: str | None = Field(
        default=None,
        description="Annotation added by the founder",
        examples=["Replied, wants a demo next week"],
    )
    intent_score: float | IntentLevel = Field(
        description="Caller-assigned intent strength: a number, usually on a 1-5 scale, or a level name",
        examples=[5, "high"],
    )
    subreddit: str = Field(
        default="",
        description="Community the signal came from, empty if unknown",
        examples=["smallbusiness"],
    )
    status: str = Field(
        default="new",
        description="Caller-defined lifecycle tag, echoed back verbatim",
        examples=["contacted"],
    )
    url: str = Field(
        default="",
        description="Permalink of the post",
        examples=["https://www.reddit.com/r/smallbusiness/comments/abc123/invoicing/"],
    )
    author: str = Field(
        default="unknown",
        description="Username of the poster",
        examples=["jane_doe"],
    )
    source: SignalSource = Field(
        default=SignalSource.MANUAL,
        description="How the signal was collected",
        examples=["google"],
    )


class SearchResult(_WireModel):
    """A normalized hit from the external search index."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(
        default="",
        description="Post title with the community and site suffixes removed",
        examples=["Anyone else hate invoicing from spreadsheets?"],
    )
    snippet: str = Field(
        default="",
        description="Excerpt returned by the search index",
        examples=["Posted by jane_doe. Every month I copy rows into a Word template..."],
    )
    url: str = Field(
        description="Link to the post",
        examples=["https://www.reddit.com/r/smallbusiness/comments/abc123/invoicing/"],
    )
    subreddit: str = Field(
        default="",
        description="Community extracted from the URL, empty if absent",
        examples=["smallbusiness"],
    )
    author: str = Field(
        default="unknown",
        description="Author extracted from the snippet, 'unknown' if absent",
        examples=["jane_doe"],
    )
    source: SignalSource = Field(
        default=SignalSource.GOOGLE,
        description="Search backend that produced the hit",
        examples=["google"],
    )


class DiscoveredSignal(SearchResult):
    """A search hit scored and tagged as a candidate signal."""

    content: str = Field(
        description="Title and snippet joined into the signal body",
        examples=["Anyone else hate invoicing from spreadsheets? Posted by jane_doe..."],
    )
    intent: IntentLevel = Field(
        description="Intent level detected from the wording",
        examples=["medium"],
    )
    intent_score: float = Field(
        description="Numeric intent matching the level (high=5, medium=3, low=1)",
        examples=[3],
    )
    tags: list[SignalTag] = Field(
        default_factory=list,
        description="Keyword-derived labels",
        examples=[["complaint", "budget_mention"]],
    )


class InsightRequest(_WireModel):
    """Project context plus the curated signals to synthesize."""

    project_name: str = Field(
        description="Name of the founder's project",
        examples=["InvoiceFlow"],
    )
    project_pain: str | None = Field(
        default=None,
        description="Pain point the project set out to solve",
        examples=["Freelancers waste hours building invoices in spreadsheets"],
    )
    signals: list[Signal] = Field(
        default_factory=list,
        description=f"Ordered signals; at least {MIN_SIGNALS_FOR_INSIGHTS} are required for synthesis",
    )


class Insights(_WireModel):
    """Founder-facing insights synthesized from a batch of signals.

    List lengths are what the model is asked for, not enforced: fields the
    model leaves out come back empty.
    """

    pain_points: list[str] = Field(
        default_factory=list,
        description="3-5 pain points shared across the signals",
        examples=[["Copying spreadsheet rows into invoice templates by hand"]],
    )
    features: list[str] = Field(
        default_factory=list,
        description="4-6 feature suggestions grounded in what users ask for",
        examples=[["One-click invoice from a spreadsheet row"]],
    )
    pivots: list[str] = Field(
        default_factory=list,
        description="2-3 pivots or adjustments to consider",
        examples=[["Target bookkeepers who invoice for many clients"]],
    )
    keywords: list[str] = Field(
        default_factory=list,
        description="8-12 recurring keywords or phrases",
        examples=[["invoice template", "late payments"]],
    )
    refined_idea: str = Field(
        default="",
        description="2-3 sentence refined version of the idea",
        examples=["A spreadsheet add-on that turns billable rows into branded invoices and chases late payers."],
    )
    communities: list[str] = Field(
        default_factory=list,
        description="Deduplicated communities the signals came from",
        examples=[["smallbusiness", "freelance"]],
    )
