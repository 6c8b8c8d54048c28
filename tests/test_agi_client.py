from __future__ import annotations

import json

import httpx
import pytest

from app.tools.agi_client import (
    AGIClient,
    AGIConfigError,
    AGIRequestError,
    AGISessionLimitError,
)

BASE_URL = "https://agi.test/v1"


def _client(handler, api_key: str = "test-key") -> AGIClient:
    return AGIClient(api_key, base_url=BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_create_session_posts_agent_name_with_bearer_token():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"session_id": "sess-1"})

    session_id = await _client(handler).create_session()

    assert session_id == "sess-1"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}/sessions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert json.loads(request.content) == {"agent_name": "agi-0"}


@pytest.mark.asyncio
async def test_rate_limit_503_raises_session_limit_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"detail": "Rate limit exceeded: max 3 sessions"})

    with pytest.raises(AGISessionLimitError, match="session limit reached"):
        await _client(handler).create_session()


@pytest.mark.asyncio
async def test_other_failures_raise_request_error_with_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "boom"})

    with pytest.raises(AGIRequestError) as excinfo:
        await _client(handler).create_session()

    assert excinfo.value.status_code == 500
    assert "AGI session creation failed: 500" in str(excinfo.value)


@pytest.mark.asyncio
async def test_null_session_id_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"session_id": None})

    with pytest.raises(AGIRequestError, match="null session_id"):
        await _client(handler).create_session()


@pytest.mark.asyncio
async def test_missing_key_fails_before_any_request():
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json={})

    with pytest.raises(AGIConfigError, match="AGI_API_KEY"):
        await _client(handler, api_key="  ").create_session()
    assert calls == 0


@pytest.mark.asyncio
async def test_get_messages_keeps_only_dict_entries():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/sessions/s1/messages"
        return httpx.Response(200, json={"messages": [{"type": "DONE", "content": "[]"}, "noise"]})

    messages = await _client(handler).get_messages("s1")
    assert messages == [{"type": "DONE", "content": "[]"}]


@pytest.mark.asyncio
async def test_get_status_propagates_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(httpx.ConnectError):
        await _client(handler).get_status("s1")


@pytest.mark.asyncio
async def test_delete_session_swallows_failures():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(404, json={"detail": "gone"})

    await _client(handler).delete_session("s1")
    await _client(handler, api_key="").delete_session("s1")


@pytest.mark.asyncio
async def test_html_transcript_is_treated_as_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    assert await _client(handler).get_messages("s1") == []


@pytest.mark.asyncio
async def test_html_session_reply_raises_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(AGIRequestError, match="malformed body"):
        await _client(handler).create_session()
