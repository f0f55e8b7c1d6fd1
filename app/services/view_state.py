"""Four-state view flow: input -> loading -> result | error."""

import logging
from enum import Enum
from typing import Awaitable, Callable

from app.exceptions import GENERATION_FAILURE_MESSAGE, GenerationFailure, InvalidTransition
from app.models.schemas import InfographicDocument
from app.services.presentation import clamp_slide_index

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please enter both the book title and the author."

GenerateFn = Callable[[str, str], Awaitable[InfographicDocument]]


class ViewState(str, Enum):
    """Screen currently shown."""

    INPUT = "input"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


class ViewController:
    """
    Single-owner UI state: inputs, current screen, document and slide position.

    Only one generation can be in flight: submissions are accepted from
    `input` alone, so a second one while `loading` is an invalid transition.
    """

    def __init__(self) -> None:
        self.state = ViewState.INPUT
        self.title = ""
        self.author = ""
        self.document: InfographicDocument | None = None
        self.error_message = ""
        self.current_slide = 0

    def _require(self, *allowed: ViewState, action: str) -> None:
        if self.state not in allowed:
            raise InvalidTransition(f"Cannot {action} while {self.state.value}")

    def _move(self, state: ViewState) -> None:
        logger.debug("View state %s -> %s", self.state.value, state.value)
        self.state = state

    def begin(self, title: str, author: str) -> bool:
        """Validate inputs and enter `loading`. Returns False (staying in `input`) on empty input."""
        self._require(ViewState.INPUT, action="submit")
        self.title = title
        self.author = author
        if not title or not author:
            self.error_message = VALIDATION_MESSAGE
            return False
        self.error_message = ""
        self._move(ViewState.LOADING)
        return True

    async def complete(self, generate: GenerateFn) -> None:
        """Run the generation for the stored inputs and settle in `result` or `error`."""
        self._require(ViewState.LOADING, action="complete a generation")
        try:
            document = await generate(self.title, self.author)
        except GenerationFailure as err:
            self.error_message = str(err)
            self._move(ViewState.ERROR)
            return
        except Exception:
            logger.exception("Unexpected error during generation")
            self.error_message = GENERATION_FAILURE_MESSAGE
            self._move(ViewState.ERROR)
            return
        self.document = document
        self.current_slide = 0
        self._move(ViewState.RESULT)

    async def submit(self, title: str, author: str, generate: GenerateFn) -> None:
        if self.begin(title, author):
            await self.complete(generate)

    def reset(self) -> None:
        """Leave the viewer: clears document, inputs and message."""
        self._require(ViewState.RESULT, action="reset")
        self.title = ""
        self.author = ""
        self.document = None
        self.error_message = ""
        self.current_slide = 0
        self._move(ViewState.INPUT)

    def retry(self) -> None:
        """Back to the form after a failure; previous inputs are kept."""
        self._require(ViewState.ERROR, action="retry")
        self.error_message = ""
        self._move(ViewState.INPUT)

    def go_to(self, index: int) -> int:
        self._require(ViewState.RESULT, action="navigate")
        self.current_slide = clamp_slide_index(index)
        return self.current_slide

    def next_slide(self) -> int:
        return self.go_to(self.current_slide + 1)

    def previous_slide(self) -> int:
        return self.go_to(self.current_slide - 1)
