"""Pydantic schemas for the infographic document, API bodies and slide views."""

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def _as_text(value: Any) -> str | None:
    """Any JSON value as display text: lists are joined, other scalars stringified."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def _as_list(value: Any) -> list | None:
    return value if isinstance(value, list) else None


def _as_records(value: Any) -> list | None:
    """Lists of objects; entries that are not objects become empty records."""
    items = _as_list(value)
    if items is None:
        return None
    return [item if isinstance(item, (dict, BaseModel)) else {} for item in items]


# The model's output is trusted as emitted: these never reject a value.
Text = Annotated[str | None, BeforeValidator(_as_text)]
TextList = Annotated[list[Text] | None, BeforeValidator(_as_list)]


class _ModelOutput(BaseModel):
    """Base for data emitted by the model: permissive, keeps unknown keys, camelCase on the wire."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )


class Character(_ModelOutput):
    """A character (fiction) or archetype / key figure (non-fiction)."""

    name: Text = None
    role: Text = None
    description: Text = None
    icon: Text = Field(None, description="Emoji or similar generic icon suggestion")


class PlotPoint(_ModelOutput):
    """One stage of the narrative arc or of the argument's progression."""

    stage: Text = None
    description: Text = None


class Theme(_ModelOutput):
    name: Text = None
    description: Text = None
    color: Text = Field(
        None,
        validation_alias=AliasChoices("color", "colorHex"),
        serialization_alias="color",
        description="Hex code",
    )


class KeyConcept(_ModelOutput):
    term: Text = None
    definition: Text = None
    icon: Text = None


class InfographicDocument(_ModelOutput):
    """
    Structured analysis of one book, as recovered from the model's JSON.

    No field is required and no value is rejected: scalars of another type
    are turned into text, a non-list where a list is expected becomes None.
    `sources` is never taken from the model; it is overwritten with the
    grounding citations of the response.
    """

    title: Text = None
    author: Text = None
    tagline: Text = Field(
        None,
        validation_alias=AliasChoices("tagline", "taglineText"),
        serialization_alias="tagline",
    )
    summary: Text = Field(
        None,
        validation_alias=AliasChoices("summary", "summaryText"),
        serialization_alias="summary",
    )
    publication_year: Text = Field(
        None,
        validation_alias=AliasChoices("publicationYear", "publication_year"),
        serialization_alias="publicationYear",
    )
    genre: Text = None
    target_audience: Text = Field(
        None,
        validation_alias=AliasChoices("targetAudience", "target_audience"),
        serialization_alias="targetAudience",
    )
    characters: Annotated[list[Character] | None, BeforeValidator(_as_records)] = None
    key_concepts: Annotated[list[KeyConcept] | None, BeforeValidator(_as_records)] = Field(
        None,
        validation_alias=AliasChoices("keyConcepts", "key_concepts"),
        serialization_alias="keyConcepts",
    )
    plot_arc: Annotated[list[PlotPoint] | None, BeforeValidator(_as_records)] = Field(
        None,
        validation_alias=AliasChoices("plotArc", "plot_arc"),
        serialization_alias="plotArc",
    )
    themes: Annotated[list[Theme] | None, BeforeValidator(_as_records)] = None
    key_quote: Text = Field(
        None,
        validation_alias=AliasChoices("keyQuote", "keyQuoteText", "key_quote"),
        serialization_alias="keyQuote",
    )
    takeaways: TextList = None
    sources: list[str] = Field(default_factory=list, description="Grounding citation URLs")


class InfographicRequest(BaseModel):
    """Request body for infographic generation."""

    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Book author")


class SlideView(BaseModel):
    """
    One fixed-layout slide over a subset of the document.

    - kind: Which of the ten layouts (cover, thesis, ...).
    - label: Small uppercase line above the heading.
    - heading: Main title of the slide.
    - byline: Secondary line under the heading (cover only).
    - body: Free text block (tagline, thesis, quote).
    - items: Cards / list entries; keys depend on the layout (title, tag, text, icon, color, number).
    - footnote: Small line at the bottom (genre and year, source domain).
    """

    index: int = Field(..., ge=0)
    kind: str
    label: str = ""
    heading: str = ""
    byline: str = ""
    body: str = ""
    items: list[dict[str, Any]] = Field(default_factory=list)
    footnote: str = ""
