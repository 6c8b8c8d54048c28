from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

AGI_BASE_URL = "https://api.agi.tech/v1"


class AGIError(RuntimeError):
    """Base error for the remote agent API."""


class AGIConfigError(AGIError):
    pass


class AGIRequestError(AGIError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AGISessionLimitError(AGIError):
    pass


class AGITaskFailedError(AGIError):
    pass


class SessionPoolTimeoutError(AGIError):
    pass


def _describe_http_error(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text
        return f"{response.status_code} {response.reason_phrase} {body}"
    return f"No response {exc}"


class AGIClient:
    """Bearer-authenticated wrapper over the agent session endpoints."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = AGI_BASE_URL,
        agent_name: str = "agi-0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key.strip()
        self.base_url = (base_url.strip() or AGI_BASE_URL).rstrip("/")
        self.agent_name = agent_name
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise AGIConfigError("AGI_API_KEY is not configured")
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=self._transport,
        )

    async def create_session(self) -> str:
        headers = self._headers()
        try:
            async with self._client(30.0) as client:
                response = await client.post(
                    "/sessions",
                    json={"agent_name": self.agent_name},
                    headers=headers,
                )
                response.raise_for_status()
                payload = response.json()
        except ValueError as e:
            raise AGIRequestError(f"AGI session creation returned a malformed body: {e}") from e
        except httpx.HTTPStatusError as e:
            detail = ""
            try:
                detail = str(e.response.json().get("detail", ""))
            except (ValueError, AttributeError):
                detail = e.response.text
            if e.response.status_code == 503 and "Rate limit exceeded" in detail:
                raise AGISessionLimitError(
                    "AGI session limit reached. Please wait for sessions to expire "
                    "or check dashboard for cleanup."
                ) from e
            raise AGIRequestError(
                f"AGI session creation failed: {e.response.status_code} {e.response.reason_phrase}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise AGIRequestError(f"AGI session creation failed: {e}") from e

        session_id = payload.get("session_id") if isinstance(payload, dict) else None
        if not session_id:
            raise AGIRequestError("AGI API returned null session_id")
        return str(session_id)

    async def send_message(self, session_id: str, message: str) -> None:
        headers = self._headers()
        try:
            async with self._client(30.0) as client:
                response = await client.post(
                    f"/sessions/{session_id}/message",
                    json={"message": message},
                    headers=headers,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            status_code = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            raise AGIRequestError(
                f"Failed to send message to AGI agent: {_describe_http_error(e)}",
                status_code=status_code,
            ) from e

    async def get_status(self, session_id: str, *, timeout: float = 10.0) -> dict[str, Any]:
        """Raw status payload. Transport errors propagate; callers decide if transient."""
        headers = self._headers()
        async with self._client(timeout) as client:
            response = await client.get(f"/sessions/{session_id}/status", headers=headers)
            response.raise_for_status()
            payload = response.json()
        return payload if isinstance(payload, dict) else {}

    async def get_messages(self, session_id: str) -> list[dict[str, Any]]:
        headers = self._headers()
        try:
            async with self._client(30.0) as client:
                response = await client.get(f"/sessions/{session_id}/messages", headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise AGIRequestError(
                f"Failed to fetch AGI messages: {_describe_http_error(e)}"
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"[AGI] Malformed transcript for {session_id}, treating as empty: {e}")
            return []
        messages = payload.get("messages") if isinstance(payload, dict) else None
        return [m for m in messages or [] if isinstance(m, dict)]

    async def delete_session(self, session_id: str) -> None:
        try:
            headers = self._headers()
            async with self._client(10.0) as client:
                response = await client.delete(f"/sessions/{session_id}", headers=headers)
                response.raise_for_status()
        except (AGIConfigError, httpx.HTTPError) as e:
            logger.warning(f"[AGI] Failed to delete session {session_id}: {e}")
