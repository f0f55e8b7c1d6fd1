"""LLM factory: builds the configured LangChain Gemini chat model (cached, search-grounded)."""

from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import Runnable

from app.config import settings

GOOGLE_SEARCH_TOOL = {"google_search": {}}

_llm_cache: Runnable | None = None


def get_llm() -> BaseChatModel | Runnable:
    """Return the configured Gemini model, reused across requests to avoid reconnecting."""
    global _llm_cache
    if _llm_cache is not None:
        return _llm_cache
    if not settings.gemini_api_key:
        raise ValueError("GEMINI_API_KEY is required")
    from langchain_google_genai import ChatGoogleGenerativeAI

    llm = ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.gemini_api_key,
        temperature=settings.temperature,
        timeout=settings.llm_request_timeout_seconds,
        max_retries=0,
    )
    _llm_cache = llm.bind_tools([GOOGLE_SEARCH_TOOL]) if settings.search_grounding else llm
    return _llm_cache
