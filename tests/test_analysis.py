from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models.search import SearchResultRecord
from app.services.analysis import (
    FALLBACK_INSIGHTS,
    analyze_competition,
    build_analysis,
    generate_market_insights,
    merge_competitors,
    opportunity_score,
)


def _record(name: str, url: str) -> SearchResultRecord:
    return SearchResultRecord(name=name, url=url, description=f"{name} description")


def _llm_returning(content: str) -> MagicMock:
    llm = MagicMock()
    llm.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
            usage=SimpleNamespace(prompt_tokens=10, completion_tokens=20),
        )
    )
    return llm


def test_merge_keeps_first_occurrence_of_each_url():
    ph = [_record("A", "https://a.io"), _record("B", "https://b.io")]
    google = [_record("A again", "https://a.io"), _record("C", "https://c.io")]

    merged = merge_competitors(ph, google)

    assert [r.name for r in merged] == ["A", "B", "C"]


@pytest.mark.parametrize(
    ("count", "score"),
    [(0, 9), (10, 9), (11, 7), (25, 7), (26, 5), (50, 5), (51, 3), (500, 3)],
)
def test_opportunity_score_thresholds(count, score):
    assert opportunity_score(count) == score


def test_build_analysis_caps_top_competitors():
    ph = [_record(f"P{i}", f"https://p{i}.io") for i in range(4)]
    google = [_record(f"G{i}", f"https://g{i}.io") for i in range(4)]

    analysis = build_analysis(ph, google)

    assert analysis.total_competitors == 8
    assert analysis.opportunity_score == 9
    assert [c.name for c in analysis.top_competitors] == ["P0", "P1", "P2", "P3", "G0"]
    assert "marketGaps" not in analysis.to_dict()


@pytest.mark.asyncio
async def test_market_insights_parse_model_json():
    llm = _llm_returning(
        'Sure! {"marketGaps": [], "threatAssessment": {"level": "high"}, '
        '"positioningOpportunities": ["niche"], "recommendedStrategy": "Go narrow"}'
    )

    insights = await generate_market_insights(llm, [_record("A", "https://a.io")], "pet sitting")

    assert insights["recommendedStrategy"] == "Go narrow"
    prompt = llm.chat.completions.create.await_args.kwargs["messages"][0]["content"]
    assert "- A: A description (https://a.io)" in prompt


@pytest.mark.asyncio
async def test_market_insights_fall_back_on_failure():
    llm = MagicMock()
    llm.chat.completions.create = AsyncMock(side_effect=RuntimeError("quota"))

    insights = await generate_market_insights(llm, [], "pet sitting")

    assert insights == FALLBACK_INSIGHTS


@pytest.mark.asyncio
async def test_analyze_competition_merges_insights():
    llm = _llm_returning("not json at all")
    analysis = await analyze_competition(
        [_record("A", "https://a.io")], [_record("A", "https://a.io")], "pets", llm=llm
    )

    data = analysis.to_dict()
    assert data["totalCompetitors"] == 1
    assert data["opportunityScore"] == 9
    assert data["recommendedStrategy"] == FALLBACK_INSIGHTS["recommendedStrategy"]
    assert data["threatAssessment"]["level"] == "medium"
