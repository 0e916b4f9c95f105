"""Structured-completion provider factory."""

from functools import lru_cache

from app.core.config import settings
from app.services.llm.base import BaseLLMProvider


@lru_cache
def _build_provider(provider: str) -> BaseLLMProvider:
    # One client per provider per process; the SDK client pools its connections
    if provider == "gemini":
        from app.services.llm.gemini import GeminiProvider
        return GeminiProvider()
    raise ValueError(f"Unknown LLM provider: {provider}")


def get_llm_provider(name: str | None = None) -> BaseLLMProvider:
    """Return the provider called `name`, defaulting to the configured one."""
    return _build_provider(name or settings.llm_provider)
