from __future__ import annotations

import json
import re
import time
from typing import Any, Iterable

from loguru import logger

from app.llm_client import get_model, response_text, response_usage
from app.models.search import AnalysisResult, SearchResultRecord
from app.services import logger as log_service

TOP_COMPETITOR_COUNT = 5

# (max competitor count, score), checked in order.
SCORE_THRESHOLDS: tuple[tuple[int, int], ...] = ((10, 9), (25, 7), (50, 5))
CROWDED_MARKET_SCORE = 3

FALLBACK_INSIGHTS: dict[str, Any] = {
    "marketGaps": [
        {
            "category": "General",
            "opportunity": "Market entry opportunity exists",
            "reason": "Analysis unavailable - using fallback",
        }
    ],
    "threatAssessment": {
        "level": "medium",
        "description": "Unable to assess threats due to analysis failure",
        "mitigatingFactors": ["Further research needed"],
    },
    "positioningOpportunities": ["Differentiation through unique features"],
    "recommendedStrategy": "Conduct deeper market research before proceeding",
}

INSIGHTS_PROMPT = """You are a expert market analyst. Analyze the following competitor data for "{query}" and provide strategic insights.

Competitors:
{competitors}

Provide a JSON response with these exact keys:
{{
  "marketGaps": [
    {{"category": "string", "opportunity": "string", "reason": "string"}}
  ],
  "threatAssessment": {{
    "level": "low|medium|high",
    "description": "string",
    "mitigatingFactors": ["string"]
  }},
  "positioningOpportunities": ["string"],
  "recommendedStrategy": "string"
}}

Focus on actionable insights, market positioning, and strategic opportunities."""


def merge_competitors(
    *result_lists: Iterable[SearchResultRecord],
) -> list[SearchResultRecord]:
    """Concatenate lists and drop repeated URLs, keeping first occurrences in order."""
    merged: list[SearchResultRecord] = []
    seen: set[str] = set()
    for results in result_lists:
        for record in results:
            if record.url in seen:
                continue
            seen.add(record.url)
            merged.append(record)
    return merged


def opportunity_score(total_competitors: int) -> int:
    for ceiling, score in SCORE_THRESHOLDS:
        if total_competitors <= ceiling:
            return score
    return CROWDED_MARKET_SCORE


def build_analysis(
    product_hunt: Iterable[SearchResultRecord],
    google: Iterable[SearchResultRecord],
) -> AnalysisResult:
    unique = merge_competitors(product_hunt, google)
    return AnalysisResult(
        total_competitors=len(unique),
        opportunity_score=opportunity_score(len(unique)),
        top_competitors=unique[:TOP_COMPETITOR_COUNT],
    )


def _parse_insights(content: str) -> dict[str, Any]:
    match = re.search(r"\{[\s\S]*\}", content)
    if not match:
        raise ValueError("No JSON found in analysis response")
    parsed = json.loads(match.group(0))
    if not isinstance(parsed, dict):
        raise ValueError("Analysis response is not a JSON object")
    return parsed


async def generate_market_insights(
    llm: Any,
    competitors: list[SearchResultRecord],
    query: str,
) -> dict[str, Any]:
    """Qualitative fields from the language model, or a fixed payload on any failure."""
    competitor_lines = "\n".join(
        f"- {c.name}: {c.description} ({c.url})" for c in competitors
    )
    model = get_model("analysis")
    started = time.monotonic()
    try:
        response = await llm.chat.completions.create(
            model=model,
            messages=[
                {
                    "role": "user",
                    "content": INSIGHTS_PROMPT.format(query=query, competitors=competitor_lines),
                }
            ],
            temperature=0.3,
            max_tokens=1500,
        )
        content = response_text(response)
        if not content:
            raise ValueError("No response from analysis model")
        insights = _parse_insights(content)
    except Exception as e:
        logger.error(f"Market analysis failed, using fallback: {e}")
        log_service.log_llm_call(
            model=model,
            purpose="analysis",
            duration_ms=int((time.monotonic() - started) * 1000),
            error=str(e),
        )
        return dict(FALLBACK_INSIGHTS)

    input_tokens, output_tokens = response_usage(response)
    log_service.log_llm_call(
        model=model,
        purpose="analysis",
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    return insights


async def analyze_competition(
    product_hunt: list[SearchResultRecord],
    google: list[SearchResultRecord],
    query: str,
    *,
    llm: Any = None,
) -> AnalysisResult:
    """Deterministic counts and score, enriched with model insights when a client is given."""
    result = build_analysis(product_hunt, google)
    if llm is None:
        return result

    insights = await generate_market_insights(
        llm, merge_competitors(product_hunt, google), query
    )
    result.market_gaps = list(insights.get("marketGaps") or [])
    threat = insights.get("threatAssessment")
    result.threat_assessment = threat if isinstance(threat, dict) else None
    result.positioning_opportunities = [
        str(p) for p in insights.get("positioningOpportunities") or []
    ]
    strategy = insights.get("recommendedStrategy")
    result.recommended_strategy = str(strategy) if strategy else None
    return result
