"""Tests for the view state controller."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage

from app.exceptions import GENERATION_FAILURE_MESSAGE, GenerationFailure, InvalidTransition
from app.services.infographic_service import generate_infographic
from app.services.view_state import VALIDATION_MESSAGE, ViewController, ViewState


@pytest.fixture
def controller() -> ViewController:
    return ViewController()


@pytest.mark.asyncio
async def test_empty_author_never_generates(controller):
    generate = AsyncMock()

    await controller.submit("Dune", "", generate)

    generate.assert_not_called()
    assert controller.state is ViewState.INPUT
    assert controller.error_message == VALIDATION_MESSAGE


@pytest.mark.asyncio
async def test_empty_title_never_generates(controller):
    generate = AsyncMock()

    await controller.submit("", "Frank Herbert", generate)

    generate.assert_not_called()
    assert controller.state is ViewState.INPUT


@pytest.mark.asyncio
async def test_success_goes_to_result(controller, sample_document):
    generate = AsyncMock(return_value=sample_document)

    await controller.submit("Brave New World", "Aldous Huxley", generate)

    generate.assert_awaited_once_with("Brave New World", "Aldous Huxley")
    assert controller.state is ViewState.RESULT
    assert controller.document is sample_document
    assert controller.current_slide == 0
    assert controller.error_message == ""


@pytest.mark.asyncio
async def test_failure_goes_to_error_with_fixed_message(controller):
    generate = AsyncMock(side_effect=GenerationFailure())

    await controller.submit("X", "Y", generate)

    assert controller.state is ViewState.ERROR
    assert controller.error_message == GENERATION_FAILURE_MESSAGE
    assert controller.document is None


@pytest.mark.asyncio
async def test_misordered_braces_from_model_go_to_error(controller):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content="} nothing here {"))

    with patch("app.services.infographic_service.get_llm", return_value=llm):
        await controller.submit("X", "Y", generate_infographic)

    assert controller.state is ViewState.ERROR
    assert controller.error_message == GENERATION_FAILURE_MESSAGE
    assert controller.document is None


@pytest.mark.asyncio
async def test_unexpected_error_also_goes_to_error(controller):
    generate = AsyncMock(side_effect=KeyError("candidates"))

    await controller.submit("X", "Y", generate)

    assert controller.state is ViewState.ERROR
    assert controller.error_message == GENERATION_FAILURE_MESSAGE


def test_second_submission_while_loading_rejected(controller):
    assert controller.begin("Dune", "Frank Herbert") is True
    assert controller.state is ViewState.LOADING

    with pytest.raises(InvalidTransition):
        controller.begin("Emma", "Jane Austen")
    assert (controller.title, controller.author) == ("Dune", "Frank Herbert")


@pytest.mark.asyncio
async def test_validation_message_cleared_on_valid_submit(controller, sample_document):
    controller.begin("", "")
    assert controller.error_message == VALIDATION_MESSAGE

    await controller.submit("Dune", "Frank Herbert", AsyncMock(return_value=sample_document))

    assert controller.error_message == ""


@pytest.mark.asyncio
async def test_reset_clears_everything(controller, sample_document):
    await controller.submit("Dune", "Frank Herbert", AsyncMock(return_value=sample_document))
    controller.next_slide()

    controller.reset()

    assert controller.state is ViewState.INPUT
    assert controller.document is None
    assert (controller.title, controller.author) == ("", "")
    assert controller.current_slide == 0


@pytest.mark.asyncio
async def test_retry_keeps_inputs(controller):
    await controller.submit("Dune", "Frank Herbert", AsyncMock(side_effect=GenerationFailure()))

    controller.retry()

    assert controller.state is ViewState.INPUT
    assert controller.error_message == ""
    assert (controller.title, controller.author) == ("Dune", "Frank Herbert")


def test_invalid_transitions(controller):
    with pytest.raises(InvalidTransition):
        controller.reset()
    with pytest.raises(InvalidTransition):
        controller.retry()
    with pytest.raises(InvalidTransition):
        controller.next_slide()


@pytest.mark.asyncio
async def test_navigation_clamps(controller, sample_document):
    await controller.submit("Dune", "Frank Herbert", AsyncMock(return_value=sample_document))

    assert controller.previous_slide() == 0
    for _ in range(15):
        controller.next_slide()
    assert controller.current_slide == 9
    assert controller.go_to(4) == 4
    assert controller.go_to(-3) == 0
    assert controller.go_to(42) == 9
