"""Redis-backed record store for content, analyses and archived results."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError
from fastapi import Request

from services.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

CONTENT_KEY_PREFIX = "content:"
ANALYSIS_KEY_PREFIX = "analysis:"
SAVED_KEY_PREFIX = "saved:"
SAVED_RESULTS_LIST_KEY = "saved_results_list"


def content_key(content_id: str) -> str:
    return f"{CONTENT_KEY_PREFIX}{content_id}"


def analysis_key(analysis_id: str) -> str:
    return f"{ANALYSIS_KEY_PREFIX}{analysis_id}"


def saved_key(saved_id: str) -> str:
    return f"{SAVED_KEY_PREFIX}{saved_id}"


class ContentStore:
    """
    Thin JSON layer over an asyncio Redis client.

    The store owns the client it is given: ``close`` releases its connection
    pool. Every Redis failure is re-raised as ``StoreUnavailableError`` and
    nothing is retried.
    """

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "ContentStore":
        return cls(redis.from_url(url, decode_responses=True))

    async def close(self) -> None:
        await self._client.aclose()

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as exc:
            raise StoreUnavailableError(f"Redis ping failed: {exc}") from exc

    async def put_json(self, key: str, ttl_seconds: int, record: Dict[str, Any]) -> None:
        """Serialize ``record`` and write it under ``key`` with an expiry."""
        payload = json.dumps(record, separators=(",", ":"), ensure_ascii=False)
        try:
            await self._client.setex(key, max(int(ttl_seconds), 1), payload)
        except RedisError as exc:
            raise StoreUnavailableError(f"Failed to write {key}: {exc}") from exc

    async def get_many_json(self, keys: List[str]) -> List[Optional[Dict[str, Any]]]:
        """
        Fetch several records in one round trip.

        The returned list lines up with ``keys``; missing or unparseable
        values come back as ``None``.
        """
        if not keys:
            return []
        try:
            raw_values = await self._client.mget(keys)
        except RedisError as exc:
            raise StoreUnavailableError(f"Failed to read {len(keys)} records: {exc}") from exc
        return [_decode_record(raw) for raw in raw_values]

    async def push_recent(self, list_key: str, member: str, limit: int) -> None:
        """Push ``member`` onto the head of ``list_key`` and keep the first ``limit`` entries."""
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.lpush(list_key, member)
            pipe.ltrim(list_key, 0, max(int(limit), 1) - 1)
            await pipe.execute()
        except RedisError as exc:
            raise StoreUnavailableError(f"Failed to update {list_key}: {exc}") from exc

    async def list_members(self, list_key: str) -> List[str]:
        try:
            return list(await self._client.lrange(list_key, 0, -1))
        except RedisError as exc:
            raise StoreUnavailableError(f"Failed to read {list_key}: {exc}") from exc


def _decode_record(raw: Any) -> Optional[Dict[str, Any]]:
    if not raw:
        return None
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Dropping unparseable stored record")
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def get_store(request: Request) -> ContentStore:
    """FastAPI dependency returning the store opened during startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreUnavailableError("Store is not initialised")
    return store
