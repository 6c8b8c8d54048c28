from __future__ import annotations

import asyncio
import time
from typing import Callable

from loguru import logger

from app.models.search import PoolStatus, SessionHandle
from app.tools.agi_client import AGIClient, SessionPoolTimeoutError


class SessionPool:
    """Small in-process pool of remote agent sessions.

    Mutations happen between awaits on a single event loop, so no lock is
    taken. A slot is reserved in ``_pending`` before awaiting a remote create
    so concurrent callers never push the pool past ``max_size``. Waiters poll
    independently; there is no FIFO ordering among them.
    """

    def __init__(
        self,
        client: AGIClient,
        *,
        max_size: int = 3,
        soft_size: int = 2,
        session_ttl_seconds: float = 25 * 60,
        wait_timeout_seconds: float = 60.0,
        wait_interval_seconds: float = 2.0,
        clock: Callable[[], float] = time.time,
    ):
        self._client = client
        self.max_size = max(int(max_size), 1)
        self.soft_size = max(int(soft_size), 1)
        self.session_ttl_seconds = session_ttl_seconds
        self.wait_timeout_seconds = wait_timeout_seconds
        self.wait_interval_seconds = wait_interval_seconds
        self._clock = clock
        self._sessions: list[SessionHandle] = []
        self._pending = 0

    @property
    def sessions(self) -> list[SessionHandle]:
        return list(self._sessions)

    async def acquire(self, task_label: str) -> str:
        logger.debug(f"[SessionPool] Getting session for task: {task_label}")
        await self._sweep_expired()

        handle = self._claim_idle(task_label)
        if handle is not None:
            logger.info(f"[SessionPool] Reusing session: {handle.id}")
            return handle.id

        if len(self._sessions) + self._pending < self.max_size:
            self._pending += 1
            try:
                session_id = await self._client.create_session()
            finally:
                self._pending -= 1
            await self._add(session_id, task_label)
            logger.info(f"[SessionPool] Created new session: {session_id}")
            return session_id

        logger.info("[SessionPool] Pool full, waiting for available session...")
        return await self._wait_for_idle(task_label)

    def release(self, session_id: str) -> None:
        for handle in self._sessions:
            if handle.id == session_id:
                handle.busy = False
                handle.current_task = None
                logger.info(f"[SessionPool] Released session: {session_id}")
                return

    def status(self) -> PoolStatus:
        active = sum(1 for s in self._sessions if s.busy)
        return PoolStatus(
            total=len(self._sessions),
            active=active,
            available=len(self._sessions) - active,
        )

    async def cleanup(self) -> None:
        """Delete every pooled session remotely. Intended for process shutdown."""
        if not self._sessions:
            return
        logger.info(f"[SessionPool] Cleaning up {len(self._sessions)} sessions...")
        for handle in list(self._sessions):
            await self._client.delete_session(handle.id)
        self._sessions = []

    def _claim_idle(self, task_label: str) -> SessionHandle | None:
        for handle in self._sessions:
            if not handle.busy:
                handle.busy = True
                handle.last_used_at = self._clock()
                handle.current_task = task_label
                return handle
        return None

    async def _add(self, session_id: str, task_label: str) -> None:
        now = self._clock()
        self._sessions.append(
            SessionHandle(
                id=session_id,
                created_at=now,
                last_used_at=now,
                busy=True,
                current_task=task_label,
            )
        )
        if len(self._sessions) <= self.soft_size:
            return

        idle = [s for s in self._sessions if not s.busy]
        if not idle:
            return
        oldest = min(idle, key=lambda s: s.created_at)
        self._sessions.remove(oldest)
        logger.info(f"[SessionPool] Evicting idle session {oldest.id} to respect pool size")
        await self._client.delete_session(oldest.id)

    async def _sweep_expired(self) -> None:
        now = self._clock()
        expired = [
            s
            for s in self._sessions
            if not s.busy and now - s.created_at > self.session_ttl_seconds
        ]
        for handle in expired:
            # Drop from the pool before awaiting so no other task can claim it.
            self._sessions.remove(handle)
            await self._client.delete_session(handle.id)
            logger.info(f"[SessionPool] Cleaned up expired session: {handle.id}")

    async def _wait_for_idle(self, task_label: str) -> str:
        deadline = time.monotonic() + self.wait_timeout_seconds
        while time.monotonic() < deadline:
            await asyncio.sleep(self.wait_interval_seconds)
            handle = self._claim_idle(task_label)
            if handle is not None:
                logger.info(f"[SessionPool] Session {handle.id} freed up for {task_label}")
                return handle.id

        raise SessionPoolTimeoutError(
            f"No available session after waiting {self.wait_timeout_seconds:g} seconds"
        )
