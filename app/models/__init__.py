"""Pydantic models for the API."""

from app.models.schemas import (
    Character,
    InfographicDocument,
    InfographicRequest,
    KeyConcept,
    PlotPoint,
    SlideView,
    Theme,
)

__all__ = [
    "Character",
    "InfographicDocument",
    "InfographicRequest",
    "KeyConcept",
    "PlotPoint",
    "SlideView",
    "Theme",
]
