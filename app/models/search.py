from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

SearchType = Literal["producthunt", "cost_effective", "google"]
ResultSource = Literal["remote", "synthetic"]

SEARCH_TYPES: tuple[str, ...] = ("producthunt", "cost_effective", "google")


@dataclass(slots=True)
class SearchResultRecord:
    name: str
    url: str
    description: str
    upvotes: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "url": self.url,
            "description": self.description,
        }
        if self.upvotes is not None:
            data["upvotes"] = self.upvotes
        return data

    @classmethod
    def from_raw(cls, item: Any, *, with_upvotes: bool = False) -> "SearchResultRecord":
        """Normalize a loosely-shaped agent result into a record."""
        if not isinstance(item, dict):
            item = {}
        upvotes: int | None = None
        if with_upvotes:
            raw_votes = item.get("upvotes") or item.get("votes") or 0
            try:
                upvotes = int(raw_votes)
            except (TypeError, ValueError):
                upvotes = 0
        return cls(
            name=str(item.get("name") or item.get("title") or "Unknown"),
            url=str(item.get("url") or ""),
            description=str(item.get("description") or item.get("snippet") or ""),
            upvotes=upvotes,
        )


@dataclass(slots=True)
class CacheEntry:
    query: str
    search_type: str
    results: list[dict[str, Any]]
    timestamp: str
    source: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "CacheEntry":
        return cls(
            query=str(payload.get("query", "")),
            search_type=str(payload.get("search_type", "")),
            results=list(payload.get("results") or []),
            timestamp=str(payload.get("timestamp", "")),
            source=str(payload.get("source", "remote")),
        )


@dataclass(slots=True)
class SessionHandle:
    id: str
    created_at: float
    last_used_at: float
    busy: bool = False
    current_task: str | None = None


@dataclass(slots=True)
class PoolStatus:
    total: int
    active: int
    available: int


@dataclass(slots=True)
class AnalysisResult:
    total_competitors: int
    opportunity_score: int
    top_competitors: list[SearchResultRecord]
    market_gaps: list[dict[str, Any]] = field(default_factory=list)
    threat_assessment: dict[str, Any] | None = None
    positioning_opportunities: list[str] = field(default_factory=list)
    recommended_strategy: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "totalCompetitors": self.total_competitors,
            "opportunityScore": self.opportunity_score,
            "topCompetitors": [
                {"name": c.name, "url": c.url, "description": c.description}
                for c in self.top_competitors
            ],
        }
        if self.market_gaps:
            data["marketGaps"] = self.market_gaps
        if self.threat_assessment is not None:
            data["threatAssessment"] = self.threat_assessment
        if self.positioning_opportunities:
            data["positioningOpportunities"] = self.positioning_opportunities
        if self.recommended_strategy is not None:
            data["recommendedStrategy"] = self.recommended_strategy
        return data
