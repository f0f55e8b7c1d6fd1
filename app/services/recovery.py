"""Best-effort recovery of the infographic JSON from free-form model text."""

import json
from collections.abc import Mapping
from typing import Any

from app.models.schemas import InfographicDocument

FENCE_JSON = "```json"
FENCE = "```"
EMPTY_OBJECT = "{}"


def extract_json_candidate(text: str) -> str:
    """
    Return the part of `text` to be parsed as JSON.

    The span from the first "{" to the last "}" wins whenever both exist in
    that order, even if the text also has code fences or braces in prose.
    Otherwise fence markers are stripped and the rest is the candidate, so a
    lone or misordered brace still fails to parse. Text with no brace and no
    fence at all yields "{}".
    """
    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace != -1 and last_brace != -1 and last_brace > first_brace:
        return text[first_brace : last_brace + 1]
    if first_brace != -1 or last_brace != -1 or FENCE in text:
        return text.replace(FENCE_JSON, "").replace(FENCE, "").strip()
    return EMPTY_OBJECT


def _lookup(mapping: Any, snake: str, camel: str) -> Any:
    if not isinstance(mapping, Mapping):
        return None
    value = mapping.get(snake)
    return value if value is not None else mapping.get(camel)


def grounding_sources(metadata: Mapping[str, Any] | None) -> list[str]:
    """
    Web URIs of the grounding chunks, in response order.

    Accepts LangChain response metadata (`grounding_metadata.grounding_chunks`)
    as well as a raw candidate (`groundingMetadata.groundingChunks`).
    Chunks without a web URI are skipped.
    """
    grounding = _lookup(metadata, "grounding_metadata", "groundingMetadata")
    chunks = _lookup(grounding, "grounding_chunks", "groundingChunks") or []
    sources: list[str] = []
    for chunk in chunks:
        web = _lookup(chunk, "web", "web")
        uri = _lookup(web, "uri", "uri")
        if uri:
            sources.append(uri)
    return sources


def message_text(message: Any) -> str:
    """Text of a chat message; list content (text blocks plus signatures) is concatenated."""
    content = message.content if hasattr(message, "content") else str(message)
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, Mapping) and block.get("type") == "text":
            parts.append(block.get("text") or "")
    return "".join(parts)


def recover_document(text: str, sources: list[str]) -> InfographicDocument:
    """Parse the recovered JSON and attach `sources`. Parse errors propagate."""
    data = json.loads(extract_json_candidate(text))
    if isinstance(data, dict):
        data.pop("sources", None)
    document = InfographicDocument.model_validate(data)
    document.sources = list(sources)
    return document
