"""Ten fixed slide layouts over an InfographicDocument."""

from typing import Any, Callable
from urllib.parse import urlparse

from app.models.schemas import InfographicDocument, SlideView

BRAND = "Book2Slide"

SLIDE_KINDS = (
    "cover",
    "thesis",
    "audience",
    "characters",
    "plot_arc",
    "themes",
    "concepts_1",
    "concepts_2",
    "key_quote",
    "takeaways",
)
TOTAL_SLIDES = len(SLIDE_KINDS)

MAX_CHARACTERS = 4
MAX_THEMES = 3
DEFAULT_CHARACTER_ICON = "👤"
DEFAULT_CONCEPT_ICON = "💡"


def clamp_slide_index(index: int) -> int:
    """Keep navigation within the first and last slide."""
    return max(0, min(index, TOTAL_SLIDES - 1))


def source_domain(sources: list[str]) -> str:
    """Host name of the first source, or "" when there are no sources."""
    if not sources:
        return ""
    return urlparse(sources[0]).hostname or ""


def footer_text(document: InfographicDocument) -> str:
    return f"{BRAND} • {document.title or ''}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _cover(doc: InfographicDocument) -> dict[str, Any]:
    return {
        "label": "LITERARY ANALYSIS DECK",
        "heading": _text(doc.title),
        "byline": f"by {_text(doc.author)}",
        "body": _text(doc.tagline),
        "footnote": f"{_text(doc.genre)} • {_text(doc.publication_year)}",
    }


def _thesis(doc: InfographicDocument) -> dict[str, Any]:
    return {"label": "The Core Argument", "heading": "Central Thesis", "body": _text(doc.summary)}


def _audience(doc: InfographicDocument) -> dict[str, Any]:
    return {
        "label": "The Framework",
        "heading": "Context & Audience",
        "items": [
            {"title": "Genre & Style", "text": _text(doc.genre)},
            {"title": "Ideal Reader", "text": _text(doc.target_audience)},
        ],
    }


def _characters(doc: InfographicDocument) -> dict[str, Any]:
    return {
        "label": "The Players",
        "heading": "Key Figures / Archetypes",
        "items": [
            {
                "title": _text(c.name),
                "tag": _text(c.role),
                "text": _text(c.description),
                "icon": c.icon or DEFAULT_CHARACTER_ICON,
            }
            for c in (doc.characters or [])[:MAX_CHARACTERS]
        ],
    }


def _plot_arc(doc: InfographicDocument) -> dict[str, Any]:
    return {
        "label": "The Progression",
        "heading": "Structural Evolution",
        "items": [
            {"number": i + 1, "title": _text(p.stage), "text": _text(p.description)}
            for i, p in enumerate(doc.plot_arc or [])
        ],
    }


def _themes(doc: InfographicDocument) -> dict[str, Any]:
    return {
        "label": "Underlying Messages",
        "heading": "Core Themes",
        "items": [
            {"title": _text(t.name), "text": _text(t.description), "color": _text(t.color)}
            for t in (doc.themes or [])[:MAX_THEMES]
        ],
    }


def _concepts(doc: InfographicDocument, start: int, numeral: str) -> dict[str, Any]:
    return {
        "label": "Authorial Concepts",
        "heading": f"Critical Terminology ({numeral})",
        "items": [
            {
                "title": _text(c.term),
                "text": _text(c.definition),
                "icon": c.icon or DEFAULT_CONCEPT_ICON,
            }
            for c in (doc.key_concepts or [])[start : start + 2]
        ],
    }


def _key_quote(doc: InfographicDocument) -> dict[str, Any]:
    return {"body": _text(doc.key_quote)}


def _takeaways(doc: InfographicDocument) -> dict[str, Any]:
    domain = source_domain(doc.sources)
    return {
        "label": "Critical Takeaways",
        "heading": "Final Diagnosis",
        "items": [{"number": i + 1, "text": _text(t)} for i, t in enumerate(doc.takeaways or [])],
        "footnote": f"Based on analysis from: {domain}" if doc.sources else "",
    }


_BUILDERS: dict[str, Callable[[InfographicDocument], dict[str, Any]]] = {
    "cover": _cover,
    "thesis": _thesis,
    "audience": _audience,
    "characters": _characters,
    "plot_arc": _plot_arc,
    "themes": _themes,
    "concepts_1": lambda doc: _concepts(doc, 0, "I"),
    "concepts_2": lambda doc: _concepts(doc, 2, "II"),
    "key_quote": _key_quote,
    "takeaways": _takeaways,
}


def build_slide(document: InfographicDocument, index: int) -> SlideView:
    """Slide `index` (0-9) of the deck. Raises IndexError outside that range."""
    if not 0 <= index < TOTAL_SLIDES:
        raise IndexError(f"Slide index {index} out of range 0..{TOTAL_SLIDES - 1}")
    kind = SLIDE_KINDS[index]
    return SlideView(index=index, kind=kind, **_BUILDERS[kind](document))


def build_deck(document: InfographicDocument) -> list[SlideView]:
    """All slides in order."""
    return [build_slide(document, i) for i in range(TOTAL_SLIDES)]
