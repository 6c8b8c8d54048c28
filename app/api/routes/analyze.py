from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from app.api.deps import Services, get_services
from app.models.schemas import AnalyzeData, AnalyzeRequest, AnalyzeResponse
from app.services import logger as log_service
from app.services.canned_analysis import analyze_idea
from app.services.pipeline import run_live_analysis

router = APIRouter(prefix="/api/analyze", tags=["analyze"])

INVALID_IDEA = "Invalid idea provided"


def _failure(message: str, status_code: int) -> JSONResponse:
    body = AnalyzeResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _success(data: dict) -> JSONResponse:
    body = AnalyzeResponse(success=True, data=AnalyzeData.model_validate(data))
    return JSONResponse(content=body.model_dump(exclude_none=True))


async def _read_idea(request: Request) -> str | None:
    try:
        payload = AnalyzeRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        return None
    idea = payload.idea
    if not isinstance(idea, str) or not idea:
        return None
    return idea


@router.get("")
async def analyze_status():
    """Static status payload for uptime checks."""
    return {
        "message": "AGI Analysis API is operational",
        "status": "ready",
        "version": "2.0.1",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("")
async def analyze(request: Request):
    """Keyword-routed analysis with pre-written advisor texts."""
    idea = await _read_idea(request)
    if idea is None:
        return _failure(INVALID_IDEA, 400)

    try:
        data = analyze_idea(idea)
        response = _success(data)
    except Exception as e:
        logger.exception(f"Canned analysis failed: {e}")
        return _failure("Internal server error", 500)

    analysis = data["analysis"]
    log_service.log_analysis(
        "canned",
        idea,
        total_competitors=analysis["totalCompetitors"],
        opportunity_score=analysis["opportunityScore"],
        category=analysis["category"],
    )
    return response


@router.post("/live")
async def analyze_live(request: Request, services: Services = Depends(get_services)):
    """Run the search, scoring and advisor pipeline against the live APIs."""
    idea = await _read_idea(request)
    if idea is None:
        return _failure(INVALID_IDEA, 400)

    try:
        llm = services.llm_client()
        data = await run_live_analysis(
            idea,
            services.search,
            services.advisor_generator(llm),
            llm=llm,
        )
    except Exception as e:
        logger.exception(f"Live analysis failed: {e}")
        return _failure(str(e), 502)
    return _success(data)
