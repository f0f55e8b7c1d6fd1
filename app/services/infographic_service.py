"""Infographic generation: one grounded LLM call, then JSON recovery."""

import logging

from langchain_core.messages import HumanMessage

from app.exceptions import GenerationFailure
from app.models.schemas import InfographicDocument
from app.services.llm_factory import get_llm
from app.services.prompts import build_prompt
from app.services.recovery import (
    EMPTY_OBJECT,
    grounding_sources,
    message_text,
    recover_document,
)

logger = logging.getLogger(__name__)


async def generate_infographic(title: str, author: str) -> InfographicDocument:
    """
    Generate the infographic document for one book.

    Model, network and JSON errors alike are logged and re-raised as
    GenerationFailure, whose message never carries the underlying detail.
    """
    try:
        llm = get_llm()
        prompt = build_prompt(title, author)
        response = await llm.ainvoke([HumanMessage(content=prompt)])
        text = message_text(response) or EMPTY_OBJECT
        sources = grounding_sources(getattr(response, "response_metadata", None))
        document = recover_document(text, sources)
    except Exception as err:
        logger.exception("Error generating book infographic for %r by %r", title, author)
        raise GenerationFailure() from err
    logger.info(
        "Generated infographic for %r by %r (%d sources)", title, author, len(document.sources)
    )
    return document
