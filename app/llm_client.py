"""OpenAI chat-completion client factory."""
from __future__ import annotations

from typing import Any

from app.config import settings


class LLMConfigError(RuntimeError):
    pass


def get_client() -> Any:
    """Build an AsyncOpenAI client, failing fast when no key is configured."""
    from openai import AsyncOpenAI

    if not settings.openai_api_key:
        raise LLMConfigError("OPENAI_API_KEY environment variable is not set")

    base_url = settings.openai_base_url.strip() or "https://api.openai.com/v1"
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=base_url,
    )


def get_model(purpose: str = "advisor") -> str:
    """Model id for advisor generation or market analysis."""
    if purpose == "analysis":
        return settings.analysis_model
    return settings.advisor_model


def response_text(response: Any) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None) or ""


def response_usage(response: Any) -> tuple[int, int]:
    usage = getattr(response, "usage", None)
    return (
        getattr(usage, "prompt_tokens", 0) or 0,
        getattr(usage, "completion_tokens", 0) or 0,
    )
