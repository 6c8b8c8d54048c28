from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fastapi import Request

from app.config import Settings
from app.llm_client import get_client
from app.services.advisors import AdvisorGenerator
from app.tools.agi_cache import ResultCache
from app.tools.agi_client import AGIClient
from app.tools.agi_search import SearchClient
from app.tools.agi_sessions import SessionPool


@dataclass
class Services:
    settings: Settings
    cache: ResultCache
    pool: SessionPool
    search: SearchClient
    _llm: Any = field(default=None, repr=False)

    def llm_client(self) -> Any:
        """OpenAI client, created on first use and shared afterwards."""
        if self._llm is None:
            self._llm = get_client()
        return self._llm

    def advisor_generator(self, llm: Any) -> AdvisorGenerator:
        settings = self.settings
        return AdvisorGenerator(
            llm,
            model=settings.advisor_model,
            max_retries=settings.advisor_max_retries,
            attempt_timeout=settings.advisor_timeout_seconds,
        )


def build_services(settings: Settings) -> Services:
    client = AGIClient(
        settings.agi_api_key,
        base_url=settings.agi_base_url,
        agent_name=settings.agi_agent_name,
    )
    cache = ResultCache(
        settings.agi_cache_file,
        ttl_hours=settings.agi_cache_ttl_hours,
        force_remote=settings.agi_force_remote,
    )
    pool = SessionPool(
        client,
        max_size=settings.agi_pool_max_size,
        soft_size=settings.agi_pool_soft_size,
        session_ttl_seconds=settings.agi_session_ttl_minutes * 60,
        wait_timeout_seconds=settings.agi_pool_wait_timeout_seconds,
        wait_interval_seconds=settings.agi_pool_wait_interval_seconds,
    )
    search = SearchClient(
        client,
        pool,
        cache,
        poll_interval=settings.agi_poll_interval_seconds,
        max_attempts=settings.agi_poll_max_attempts,
        use_mock=settings.agi_mock_data,
    )
    return Services(settings=settings, cache=cache, pool=pool, search=search)


def get_services(request: Request) -> Services:
    return request.app.state.services
