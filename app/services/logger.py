"""Loguru sinks and structured log lines for model calls and served analyses."""

import logging
import sys
from typing import Any, Optional

from loguru import logger

from app.config import settings

IDEA_PREVIEW_CHARS = 100

logger.remove()

logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=settings.app_log_level.upper(),
    colorize=True,
)

if settings.log_to_file:
    logger.add(
        f"{settings.log_dir}/ideacheck_{{time:YYYY-MM-DD}}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}",
        level="DEBUG",
        rotation="00:00",
        retention="7 days",
        compression="zip",
    )

# httpx logs every agent status poll at INFO
for name in ("uvicorn.access", "httpx", "httpcore", "openai._base_client"):
    logging.getLogger(name).setLevel(settings.noisy_log_level.upper())


def log_llm_call(
    model: str,
    purpose: str,
    *,
    input_tokens: int = 0,
    output_tokens: int = 0,
    duration_ms: int = 0,
    error: Optional[str] = None,
) -> None:
    """One line per chat completion, tagged ``advisor`` or ``analysis``."""
    record: dict[str, Any] = {
        "model": model,
        "purpose": purpose,
        "tokens": input_tokens + output_tokens,
        "duration_ms": duration_ms,
    }
    if error:
        logger.bind(**record).error(f"LLM_CALL_FAILED purpose={purpose} model={model}: {error}")
        return
    logger.bind(**record).info(
        f"LLM_CALL purpose={purpose} model={model} "
        f"in={input_tokens} out={output_tokens} {duration_ms}ms"
    )


def log_analysis(
    mode: str,
    idea: str,
    *,
    total_competitors: int,
    opportunity_score: int,
    category: Optional[str] = None,
    runtime_ms: Optional[int] = None,
) -> None:
    """Summary of one served analysis; ``mode`` is ``canned`` or ``live``."""
    parts = [
        f"mode={mode}",
        f"competitors={total_competitors}",
        f"score={opportunity_score}",
    ]
    if category:
        parts.append(f"category={category}")
    if runtime_ms is not None:
        parts.append(f"runtime_ms={runtime_ms}")
    logger.info(f'ANALYSIS {" ".join(parts)} idea="{idea[:IDEA_PREVIEW_CHARS]}"')
