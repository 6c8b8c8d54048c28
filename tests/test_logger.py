import pytest
from loguru import logger

from app.services import logger as log_service


@pytest.fixture
def records():
    captured = []
    sink_id = logger.add(lambda message: captured.append(message.record), level="DEBUG")
    yield captured
    logger.remove(sink_id)


def test_analysis_line_carries_score_and_trimmed_idea(records):
    log_service.log_analysis(
        "canned",
        "x" * 150,
        total_competitors=30,
        opportunity_score=6,
        category="fitness",
    )

    message = records[-1]["message"]
    assert message.startswith("ANALYSIS mode=canned competitors=30 score=6 category=fitness")
    assert f'idea="{"x" * 100}"' in message


def test_failed_llm_call_logs_error_with_bound_fields(records):
    log_service.log_llm_call("gpt-4", "analysis", duration_ms=12, error="quota")

    record = records[-1]
    assert record["level"].name == "ERROR"
    assert record["extra"]["purpose"] == "analysis"
    assert record["extra"]["duration_ms"] == 12
    assert "quota" in record["message"]
