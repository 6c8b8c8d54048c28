"""Optimist/realist advisor texts generated by a chat-completion model."""
from __future__ import annotations

import asyncio
import json
import time
from dataclasses import dataclass
from typing import Any

from loguru import logger

from app.llm_client import get_model, response_text, response_usage
from app.models.search import SearchResultRecord
from app.services import logger as log_service

SYSTEM_PROMPT = """You are two AI business advisors analyzing a startup idea.

Advisor 1 (Optimist): You find opportunities and suggest pivots. Be encouraging but realistic. Focus on gaps in the market.

Advisor 2 (Realist): You point out challenges honestly. Be measured and analytical. Focus on real obstacles.

CRITICAL: Return ONLY a valid JSON object with EXACTLY these two fields:
{
  "optimist": "your optimistic response here (100-150 words)",
  "realist": "your realistic response here (100-150 words)"
}

Requirements:
- Both fields must be present and non-empty
- Each response should be 100-150 words
- NO markdown formatting, NO code blocks, NO explanations
- Return ONLY the JSON object, nothing else"""


class AdvisorGenerationError(RuntimeError):
    pass


@dataclass(slots=True)
class AdvisorResponses:
    optimist: str
    realist: str


def build_user_prompt(
    idea: str,
    total_competitors: int,
    top_competitors: list[SearchResultRecord],
) -> str:
    names = ", ".join(c.name for c in top_competitors)
    return (
        f"Idea: {idea}\n\n"
        f"Number of competitors found: {total_competitors}\n\n"
        f"Top competitors: {names or 'None found'}"
    )


def parse_advisor_payload(content: str) -> AdvisorResponses:
    cleaned = content.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
        if cleaned.startswith("json"):
            cleaned = cleaned[4:]
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
        cleaned = cleaned.strip()

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AdvisorGenerationError(f"Failed to parse JSON response: {e.msg}") from e

    if not isinstance(parsed, dict) or not parsed.get("optimist") or not parsed.get("realist"):
        raise AdvisorGenerationError(
            "Invalid response format: missing optimist or realist fields"
        )
    return AdvisorResponses(optimist=str(parsed["optimist"]), realist=str(parsed["realist"]))


class AdvisorGenerator:
    def __init__(
        self,
        llm: Any,
        *,
        model: str | None = None,
        max_retries: int = 3,
        attempt_timeout: float = 60.0,
        backoff_base: float = 2.0,
    ):
        self._llm = llm
        self.model = model or get_model("advisor")
        self.max_retries = max(int(max_retries), 1)
        self.attempt_timeout = attempt_timeout
        self.backoff_base = backoff_base

    async def _attempt(self, user_prompt: str) -> AdvisorResponses:
        started = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._llm.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": user_prompt},
                    ],
                    max_tokens=400,
                    temperature=0.7,
                    response_format={"type": "json_object"},
                ),
                timeout=self.attempt_timeout,
            )
        except asyncio.TimeoutError as e:
            raise AdvisorGenerationError(
                f"OpenAI API request timed out after {self.attempt_timeout:g} seconds"
            ) from e

        duration_ms = int((time.monotonic() - started) * 1000)
        input_tokens, output_tokens = response_usage(response)
        log_service.log_llm_call(
            model=self.model,
            purpose="advisor",
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            duration_ms=duration_ms,
        )

        content = response_text(response)
        if not content:
            raise AdvisorGenerationError("No response content received from OpenAI")
        logger.debug(f"[Advisors] Raw response: {content}")
        return parse_advisor_payload(content)

    async def generate(
        self,
        idea: str,
        total_competitors: int,
        top_competitors: list[SearchResultRecord],
    ) -> AdvisorResponses:
        user_prompt = build_user_prompt(idea, total_competitors, top_competitors)
        logger.info(
            f'[Advisors] Generating advisor responses for "{idea[:80]}" '
            f"({total_competitors} competitors)"
        )

        last_error: Exception | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                responses = await self._attempt(user_prompt)
                logger.info(f"[Advisors] Success on attempt {attempt}")
                return responses
            except Exception as e:
                last_error = e
                logger.warning(f"[Advisors] Attempt {attempt}/{self.max_retries} failed: {e}")
                if attempt < self.max_retries:
                    delay = self.backoff_base**attempt
                    logger.info(f"[Advisors] Retrying in {delay:g} seconds...")
                    await asyncio.sleep(delay)

        raise AdvisorGenerationError(
            f"Failed to generate advisor responses after {self.max_retries} attempts: {last_error}"
        ) from last_error
