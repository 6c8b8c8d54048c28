from __future__ import annotations

from typing import Any

from pydantic import BaseModel


# --- Requests ---


class AnalyzeRequest(BaseModel):
    idea: Any = None


# --- Responses ---


class AdvisorText(BaseModel):
    text: str


class Competitor(BaseModel):
    name: str
    url: str
    description: str


class AnalysisPayload(BaseModel):
    totalCompetitors: int
    opportunityScore: int
    category: str | None = None
    topCompetitors: list[Competitor]
    marketGaps: list[dict[str, Any]] | None = None
    threatAssessment: dict[str, Any] | None = None
    positioningOpportunities: list[str] | None = None
    recommendedStrategy: str | None = None


class AnalyzeData(BaseModel):
    optimist: AdvisorText
    realist: AdvisorText
    analysis: AnalysisPayload
    pivot: str | None = None
    workflow: dict[str, dict[str, Any]]


class AnalyzeResponse(BaseModel):
    success: bool
    data: AnalyzeData | None = None
    error: str | None = None


class ConnectionTestResponse(BaseModel):
    status: str
    message: str
    connected: bool
    error: str | None = None


class CacheStatsResponse(BaseModel):
    total: int
    remote: int
    synthetic: int


class PoolStatusResponse(BaseModel):
    total: int
    active: int
    available: int
