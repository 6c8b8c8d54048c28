"""Tests for API routes."""
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.llm_client import LLMConfigError


@pytest.fixture
def client(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "agi_cache_file", str(tmp_path / "agi-cache.json"))
    monkeypatch.setattr(settings, "agi_api_key", "")

    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "ideacheck"}


def test_analyze_status(client):
    response = client.get("/api/analyze")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["message"] == "AGI Analysis API is operational"
    assert "timestamp" in data


@pytest.mark.parametrize("body", [{}, {"idea": ""}, {"idea": 42}, {"idea": None}])
def test_analyze_rejects_invalid_idea(client, body):
    response = client.post("/api/analyze", json=body)
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid idea provided"}


def test_analyze_rejects_malformed_body(client):
    response = client.post(
        "/api/analyze", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


def test_analyze_fitness_idea(client):
    response = client.post("/api/analyze", json={"idea": "AI fitness coach"})
    assert response.status_code == 200

    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["analysis"]["opportunityScore"] == 6
    assert len(data["analysis"]["topCompetitors"]) == 5
    assert "pivot" not in data
    assert set(data["workflow"]) == {
        "step1_productHunt",
        "step2_google",
        "step3_analysis",
        "step4_advisor",
    }
    assert data["optimist"]["text"]
    assert data["realist"]["text"]


def test_analyze_low_score_includes_pivot(client):
    data = client.post("/api/analyze", json={"idea": "dating app"}).json()["data"]
    assert data["analysis"]["opportunityScore"] == 3
    assert data["pivot"].startswith("Consider pivoting")


def test_analyze_internal_failure_returns_500(client):
    with patch("app.api.routes.analyze.analyze_idea", side_effect=RuntimeError("boom")):
        response = client.post("/api/analyze", json={"idea": "anything"})
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_live_analysis_reports_configuration_errors(client):
    with patch(
        "app.api.deps.get_client",
        side_effect=LLMConfigError("OPENAI_API_KEY environment variable is not set"),
    ):
        response = client.post("/api/analyze/live", json={"idea": "AI fitness coach"})
    assert response.status_code == 502
    assert "OPENAI_API_KEY" in response.json()["error"]


def test_agi_connection_check(client):
    services = client.app.state.services
    services.search.test_connection = AsyncMock(return_value=True)

    response = client.get("/api/test-agi")

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "message": "AGI API is connected and working",
        "connected": True,
    }


def test_agi_connection_check_without_key_fails(client):
    response = client.get("/api/test-agi")
    assert response.status_code == 200
    body = response.json()
    assert body["connected"] is False
    assert body["status"] == "error"


def test_cache_and_pool_endpoints(client):
    services = client.app.state.services
    services.cache.store("google", "q", [{"name": "A", "url": "https://a.io"}], "remote")

    assert client.get("/api/agi/cache").json() == {"total": 1, "remote": 1, "synthetic": 0}
    assert client.delete("/api/agi/cache").json() == {"status": "cleared"}
    assert client.get("/api/agi/cache").json()["total"] == 0
    assert client.get("/api/agi/pool").json() == {"total": 0, "active": 0, "available": 0}
