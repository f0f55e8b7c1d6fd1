"""Pytest fixtures: client, fresh view state and sample data."""

import pytest
from fastapi.testclient import TestClient

import app.main as main
from app.models.schemas import InfographicDocument
from app.services.view_state import ViewController


@pytest.fixture(autouse=True)
def fresh_view(monkeypatch) -> ViewController:
    """Each test starts on the input screen."""
    controller = ViewController()
    monkeypatch.setattr(main, "view", controller)
    return controller


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    return TestClient(main.app)


def make_document_data() -> dict:
    """Document as the model emits it (camelCase keys, no sources)."""
    return {
        "title": "Brave New World",
        "author": "Aldous Huxley",
        "publicationYear": "1932",
        "genre": "Dystopian Fiction",
        "tagline": "Stability bought at the price of freedom",
        "summary": "Huxley imagines a World State where happiness is manufactured.",
        "targetAudience": "Students of political philosophy",
        "characters": [
            {"name": "Bernard Marx", "role": "Misfit", "description": "An Alpha who doubts.", "icon": "🧍"},
            {"name": "John", "role": "The Savage", "description": "Raised outside the State."},
            {"name": "Mustapha Mond", "role": "Controller", "description": "Defends stability."},
            {"name": "Lenina Crowne", "role": "Conformist", "description": "Content with the system."},
            {"name": "Helmholtz Watson", "role": "Writer", "description": "Seeks meaning."},
        ],
        "keyConcepts": [
            {"term": "Soma", "definition": "The perfect drug.", "icon": "💊"},
            {"term": "Hypnopaedia", "definition": "Sleep teaching."},
            {"term": "Bokanovsky's Process", "definition": "Mass cloning.", "icon": "🧬"},
            {"term": "Community, Identity, Stability", "definition": "The motto."},
        ],
        "plotArc": [
            {"stage": "Foundation", "description": "The Hatchery."},
            {"stage": "Development", "description": "The Reservation."},
            {"stage": "Crux", "description": "John in London."},
            {"stage": "Resolution", "description": "The lighthouse."},
        ],
        "themes": [
            {"name": "Technology", "description": "Control through comfort.", "color": "#FF5733"},
            {"name": "Individuality", "description": "Its suppression.", "color": "#3366FF"},
            {"name": "Truth vs Happiness", "description": "The trade-off.", "color": "#22AA55"},
            {"name": "Consumerism", "description": "Ending is better than mending.", "color": "#AA22AA"},
        ],
        "keyQuote": "But I don't want comfort. I want God, I want poetry.",
        "takeaways": ["Comfort can enslave.", "Freedom requires suffering.", "Beware engineered consent."],
    }


@pytest.fixture
def document_data() -> dict:
    return make_document_data()


@pytest.fixture
def sample_document() -> InfographicDocument:
    """Recovered document with two grounding sources."""
    document = InfographicDocument.model_validate(make_document_data())
    document.sources = [
        "https://www.britannica.com/topic/Brave-New-World",
        "https://en.wikipedia.org/wiki/Brave_New_World",
    ]
    return document
