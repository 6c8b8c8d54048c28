from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx
from loguru import logger

from app.models.search import SearchResultRecord
from app.tools import mock_results
from app.tools.agi_cache import ResultCache
from app.tools.agi_client import (
    AGIClient,
    AGIConfigError,
    AGIError,
    AGIRequestError,
    AGITaskFailedError,
)
from app.tools.agi_sessions import SessionPool
from app.tools.json_extract import NotFound, extract_from_messages

COST_EFFECTIVE_LIMIT = 8


def product_hunt_instruction(query: str) -> str:
    return f"""Search Product Hunt for innovative products and startups related to "{query}". Focus on:
1. Recently launched products (past 6 months)
2. Products with significant user engagement (upvotes, comments)
3. Tools that solve real problems in this domain
4. Both direct competitors and adjacent solutions

Return a JSON array with the top 5 most relevant results, each containing:
- name: Product name as shown on Product Hunt
- url: Direct Product Hunt URL
- description: Clear description of what the product does
- upvotes: Number of upvotes (if available)

Format: [{{"name": "...", "url": "...", "description": "...", "upvotes": ...}}]"""


def google_instruction(query: str) -> str:
    return f"""Search Google for comprehensive information about "{query}" startups, competitors, and market landscape. Focus on:
1. Established companies and startups in this space
2. Recent market reports and analysis
3. Technology solutions and alternatives
4. Industry trends and innovations

Return a JSON array with the top 5 most relevant results, each containing:
- name: Company/product name
- url: Direct URL to the source
- description: Brief summary of their relevance to "{query}"

Format: [{{"name": "...", "url": "...", "description": "..."}}]"""


def cost_effective_instruction(query: str) -> str:
    return f"""Search Google for: "{query} startup".
Return the first 5 results only. Do not visit any websites. Return results immediately as JSON.
Format as JSON array with exactly this structure: [{{"name": "...", "url": "...", "description": "..."}}]"""


class TaskState(str, Enum):
    SENT = "sent"
    POLLING = "polling"
    FINISHED = "finished"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(slots=True)
class TaskOutcome:
    state: TaskState
    results: list[Any] = field(default_factory=list)
    attempts: int = 0


class AgentTask:
    """One instruct-then-poll cycle on a session the caller already holds.

    States: SENT -> POLLING -> FINISHED | FAILED | TIMED_OUT. Cancelling the
    awaiting task stops polling at the next suspension point.
    """

    def __init__(
        self,
        client: AGIClient,
        session_id: str,
        instruction: str,
        *,
        poll_interval: float = 3.0,
        max_attempts: int = 5,
        status_timeout: float = 10.0,
    ):
        self._client = client
        self.session_id = session_id
        self.instruction = instruction
        self.poll_interval = poll_interval
        self.max_attempts = max(int(max_attempts), 1)
        self.status_timeout = status_timeout
        self.state: TaskState | None = None
        self.attempts = 0

    async def run(self) -> TaskOutcome:
        await self._client.send_message(self.session_id, self.instruction)
        self.state = TaskState.SENT
        logger.debug(f"[AGI] Instruction sent to {self.session_id}, starting polling...")

        self.state = TaskState.POLLING
        while self.attempts < self.max_attempts:
            await asyncio.sleep(self.poll_interval)
            self.attempts += 1

            try:
                payload = await self._client.get_status(
                    self.session_id, timeout=self.status_timeout
                )
            except (httpx.HTTPError, ValueError) as e:
                logger.warning(
                    f"[AGI] Status check failed (attempt {self.attempts}/{self.max_attempts}): {e!r}"
                )
                continue

            status = payload.get("status")
            logger.info(f'[AGI] Attempt {self.attempts}/{self.max_attempts}: Status = "{status}"')

            if status == "finished":
                try:
                    return await self._collect()
                except AGIRequestError as e:
                    logger.warning(
                        f"[AGI] Transcript fetch failed (attempt {self.attempts}/{self.max_attempts}): {e}"
                    )
                    continue
            if status == "error":
                self.state = TaskState.FAILED
                raise AGITaskFailedError(
                    f"AGI agent task failed: {payload.get('error') or 'Unknown error'}"
                )

        self.state = TaskState.TIMED_OUT
        logger.warning(
            f"[AGI] Polling timed out after {self.max_attempts} attempts "
            f"({self.max_attempts * self.poll_interval:g} seconds). Returning empty results."
        )
        return TaskOutcome(state=self.state, attempts=self.attempts)

    async def _collect(self) -> TaskOutcome:
        messages = await self._client.get_messages(self.session_id)
        self.state = TaskState.FINISHED
        outcome = extract_from_messages(messages)
        if isinstance(outcome, NotFound):
            logger.warning(
                f"[AGI] Status is 'finished' but no results extracted from "
                f"{len(messages)} messages: {outcome.reason}"
            )
            return TaskOutcome(state=self.state, attempts=self.attempts)

        logger.info(f"[AGI] Extracted {len(outcome.items)} results ({outcome.shape})")
        return TaskOutcome(state=self.state, results=outcome.items, attempts=self.attempts)


class SearchClient:
    """Cached, pooled searches through the remote browser agent."""

    def __init__(
        self,
        client: AGIClient,
        pool: SessionPool,
        cache: ResultCache,
        *,
        poll_interval: float = 3.0,
        max_attempts: int = 5,
        use_mock: bool = False,
    ):
        self._client = client
        self._pool = pool
        self._cache = cache
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.use_mock = use_mock

    async def execute(
        self,
        search_type: str,
        instruction: str,
        *,
        status_timeout: float = 10.0,
    ) -> list[Any]:
        """Run one agent task on a pooled session and return the raw result array."""
        session_id: str | None = None
        try:
            session_id = await self._pool.acquire(f"{search_type}_search")
            pool_status = self._pool.status()
            logger.info(
                f"[AGI] Using session {session_id} for {search_type} "
                f"(pool: {pool_status.total} total, {pool_status.active} active, "
                f"{pool_status.available} available)"
            )
            task = AgentTask(
                self._client,
                session_id,
                instruction,
                poll_interval=self.poll_interval,
                max_attempts=self.max_attempts,
                status_timeout=status_timeout,
            )
            outcome = await task.run()
            return outcome.results
        finally:
            if session_id is not None:
                self._pool.release(session_id)

    async def _search(
        self,
        search_type: str,
        query: str,
        instruction: str,
        *,
        status_timeout: float,
        fallback: bool,
    ) -> list[dict[str, Any]]:
        if self.use_mock:
            logger.warning(f"[AGI] Using synthetic {search_type} results (mock mode)")
            results = mock_results.synthetic_results(search_type, query)
            self._cache.store(search_type, query, results, "synthetic")
            return results

        if not self._cache.force_remote:
            entry = self._cache.lookup(search_type, query)
            if entry is not None:
                return entry.results

        try:
            results = await self.execute(search_type, instruction, status_timeout=status_timeout)
        except AGIError as e:
            logger.error(f"[AGI] {search_type} search failed: {e}")
            if not fallback or isinstance(e, AGIConfigError):
                raise
            results = mock_results.synthetic_results(search_type, query)
            self._cache.store(search_type, query, results, "synthetic")
            return results

        if results:
            self._cache.store(search_type, query, results, "remote")
        return results

    async def search_product_hunt(self, query: str) -> list[SearchResultRecord]:
        raw = await self._search(
            "producthunt",
            query,
            product_hunt_instruction(query),
            status_timeout=10.0,
            fallback=False,
        )
        return [SearchResultRecord.from_raw(item, with_upvotes=True) for item in raw]

    async def search_google(self, query: str) -> list[SearchResultRecord]:
        raw = await self._search(
            "google",
            query,
            google_instruction(query),
            status_timeout=10.0,
            fallback=False,
        )
        return [SearchResultRecord.from_raw(item) for item in raw]

    async def search_cost_effective(
        self, query: str, *, fallback: bool = True
    ) -> list[SearchResultRecord]:
        """Snippet-only search: no page visits, capped result count."""
        raw = await self._search(
            "cost_effective",
            query,
            cost_effective_instruction(query),
            status_timeout=8.0,
            fallback=fallback,
        )
        return [SearchResultRecord.from_raw(item) for item in raw[:COST_EFFECTIVE_LIMIT]]

    async def test_connection(self) -> bool:
        try:
            results = await self.search_cost_effective("test", fallback=False)
        except AGIError as e:
            logger.error(f"AGI connection failed: {e}")
            return False
        logger.info(f"AGI connected successfully: {len(results)} results")
        return True
