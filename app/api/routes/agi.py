from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import Services, get_services
from app.models.schemas import CacheStatsResponse, ConnectionTestResponse, PoolStatusResponse
from app.tools.agi_client import AGIError

router = APIRouter(prefix="/api", tags=["agi"])


@router.get("/test-agi", response_model=ConnectionTestResponse, response_model_exclude_none=True)
async def test_agi(services: Services = Depends(get_services)):
    """Run a snippet-only search to check agent connectivity."""
    try:
        connected = await services.search.test_connection()
    except AGIError as e:
        return ConnectionTestResponse(
            status="error",
            message="Test failed with error",
            connected=False,
            error=str(e),
        )

    if connected:
        return ConnectionTestResponse(
            status="success",
            message="AGI API is connected and working",
            connected=True,
        )
    return ConnectionTestResponse(
        status="error",
        message="AGI API connection failed",
        connected=False,
    )


@router.get("/agi/cache", response_model=CacheStatsResponse)
async def cache_stats(services: Services = Depends(get_services)):
    return CacheStatsResponse(**services.cache.stats())


@router.delete("/agi/cache")
async def clear_cache(services: Services = Depends(get_services)):
    services.cache.clear()
    return {"status": "cleared"}


@router.get("/agi/pool", response_model=PoolStatusResponse)
async def pool_status(services: Services = Depends(get_services)):
    status = services.pool.status()
    return PoolStatusResponse(total=status.total, active=status.active, available=status.available)
