"""Errors raised by the generation, view-state and export layers."""

GENERATION_FAILURE_MESSAGE = (
    "Failed to generate deep analysis. Please check the title/author and try again."
)


class GenerationFailure(Exception):
    """Any failure between the model call and the recovered document.

    The message is fixed; the underlying error is only available as ``__cause__``.
    """

    def __init__(self) -> None:
        super().__init__(GENERATION_FAILURE_MESSAGE)


class ExportFailure(Exception):
    """PDF assembly failed."""


class InvalidTransition(Exception):
    """Requested action is not allowed from the current view state."""
