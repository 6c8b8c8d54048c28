from __future__ import annotations

import time
from typing import Any

from app.models.search import SearchResultRecord
from app.services import logger as log_service
from app.services.advisors import AdvisorGenerator
from app.services.analysis import analyze_competition
from app.services.canned_analysis import PIVOT_HINT
from app.tools.agi_search import SearchClient


async def run_live_analysis(
    idea: str,
    search: SearchClient,
    advisors: AdvisorGenerator,
    *,
    llm: Any = None,
) -> dict[str, Any]:
    """Search, score and advise on an idea against the live agent and model APIs."""
    started = time.monotonic()
    workflow: dict[str, dict[str, Any]] = {}

    product_hunt: list[SearchResultRecord] = await search.search_product_hunt(idea)
    workflow["step1_productHunt"] = {"status": "success", "results": len(product_hunt)}

    google: list[SearchResultRecord] = await search.search_google(idea)
    workflow["step2_google"] = {"status": "success", "results": len(google)}

    analysis = await analyze_competition(product_hunt, google, idea, llm=llm)
    workflow["step3_analysis"] = {"status": "success"}

    responses = await advisors.generate(
        idea, analysis.total_competitors, analysis.top_competitors
    )
    workflow["step4_advisor"] = {"status": "success"}

    log_service.log_analysis(
        "live",
        idea,
        total_competitors=analysis.total_competitors,
        opportunity_score=analysis.opportunity_score,
        runtime_ms=int((time.monotonic() - started) * 1000),
    )

    return {
        "optimist": {"text": responses.optimist},
        "realist": {"text": responses.realist},
        "analysis": analysis.to_dict(),
        "pivot": PIVOT_HINT if analysis.opportunity_score <= 5 else None,
        "workflow": workflow,
    }
