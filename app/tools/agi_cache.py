"""File-backed cache for agent search results.

The whole map lives in one JSON file keyed by ``"<search_type>:<query>"``.
Entries older than the TTL are treated as absent.
"""
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from app.models.search import SEARCH_TYPES, CacheEntry


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def cache_key(search_type: str, query: str) -> str:
    return f"{search_type}:{query.lower().strip()}"


class ResultCache:
    def __init__(
        self,
        path: str | Path,
        *,
        ttl_hours: int = 24,
        force_remote: bool = False,
        now: Callable[[], datetime] = _utc_now,
    ):
        self.path = Path(path)
        self.ttl = timedelta(hours=max(int(ttl_hours), 0))
        self.force_remote = bool(force_remote)
        self._now = now
        self._entries: dict[str, CacheEntry] = self._load()

    def _load(self) -> dict[str, CacheEntry]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"[Cache] Failed to load cache from {self.path}: {e}")
            return {}
        if not isinstance(payload, dict):
            logger.warning(f"[Cache] Ignoring malformed cache file {self.path}")
            return {}

        entries = {
            key: CacheEntry.from_dict(raw)
            for key, raw in payload.items()
            if isinstance(raw, dict)
        }
        logger.info(f"[Cache] Loaded {len(entries)} cached results")
        return entries

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self.export(), encoding="utf-8")
            logger.debug(f"[Cache] Saved {len(self._entries)} results to {self.path}")
        except OSError as e:
            logger.error(f"[Cache] Failed to save cache: {e}")

    def _is_valid(self, entry: CacheEntry) -> bool:
        try:
            stored_at = datetime.fromisoformat(entry.timestamp)
        except ValueError:
            return False
        if stored_at.tzinfo is None:
            stored_at = stored_at.replace(tzinfo=timezone.utc)
        return self._now() - stored_at < self.ttl

    def lookup(self, search_type: str, query: str) -> CacheEntry | None:
        """Return a fresh entry, evicting it from the store if it has expired."""
        key = cache_key(search_type, query)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._is_valid(entry):
            logger.info(f'[Cache] {entry.source.upper()} HIT for {search_type}: "{query}"')
            return entry

        logger.info(f'[Cache] EXPIRED for {search_type}: "{query}"')
        del self._entries[key]
        self._save()
        return None

    def peek(self, search_type: str, query: str) -> CacheEntry | None:
        """Read-only lookup: never evicts and never logs a hit."""
        entry = self._entries.get(cache_key(search_type, query))
        if entry is None or not self._is_valid(entry):
            return None
        return entry

    def store(
        self,
        search_type: str,
        query: str,
        results: list[dict[str, Any]],
        source: str,
    ) -> CacheEntry:
        entry = CacheEntry(
            query=query,
            search_type=search_type,
            results=list(results),
            timestamp=self._now().isoformat(),
            source=source,
        )
        self._entries[cache_key(search_type, query)] = entry
        self._save()
        logger.info(
            f'[Cache] CACHED {len(results)} {source.upper()} results for {search_type}: "{query}"'
        )
        return entry

    def should_use_remote(self, search_type: str, query: str) -> bool:
        if self.force_remote:
            logger.info(f'[Cache] Using REMOTE (force mode) for {search_type}: "{query}"')
            return True
        if self.peek(search_type, query) is not None:
            return False
        return True

    def stats(self) -> dict[str, int]:
        counts = {"total": 0, "remote": 0, "synthetic": 0}
        for entry in self._entries.values():
            if not self._is_valid(entry):
                continue
            counts["total"] += 1
            if entry.source in counts:
                counts[entry.source] += 1
        return counts

    def stats_for_query(self, query: str) -> dict[str, Any]:
        counts = self.stats()
        sources: dict[str, str] = {}
        for search_type in ("producthunt", "google"):
            entry = self.peek(search_type, query)
            sources[search_type] = entry.source if entry else "none"
        return {
            "totalCached": counts["total"],
            "remoteResults": counts["remote"],
            "syntheticResults": counts["synthetic"],
            "sources": sources,
        }

    def clear(self) -> None:
        self._entries = {}
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"[Cache] Failed to delete cache file: {e}")
        logger.info("[Cache] Cache cleared")

    def export(self) -> str:
        return json.dumps(
            {key: entry.to_dict() for key, entry in self._entries.items()},
            ensure_ascii=False,
            indent=2,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        search_type, query = item
        if search_type not in SEARCH_TYPES:
            return False
        return cache_key(search_type, str(query)) in self._entries
