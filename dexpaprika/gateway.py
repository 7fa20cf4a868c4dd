from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
from typing import Protocol

from dexpaprika.cache import Cache
from dexpaprika.http import JsonValue, QueryParams, Transport, build_cache_key
from dexpaprika.retry import RetryExecutor

logger = logging.getLogger(__name__)


class Gateway(Protocol):
    async def read(
        self, path: str, params: QueryParams | None = None
    ) -> JsonValue: ...

    async def write(
        self,
        path: str,
        body: JsonValue,
        params: QueryParams | None = None,
    ) -> JsonValue: ...


def _pending_reads() -> dict[str, asyncio.Task[JsonValue]]:
    return {}


@dataclass(slots=True)
class RequestGateway:
    transport: Transport
    cache: Cache
    retry: RetryExecutor
    base_url: str = ""
    coalesce_reads: bool = False
    _pending: dict[str, asyncio.Task[JsonValue]] = field(
        default_factory=_pending_reads
    )

    async def read(self, path: str, params: QueryParams | None = None) -> JsonValue:
        key = build_cache_key(path, params)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached
        if not self.coalesce_reads:
            return await self._fetch_and_store(key, path, params)

        pending = self._pending.get(key)
        if pending is not None:
            return await asyncio.shield(pending)
        task = asyncio.ensure_future(self._fetch_and_store(key, path, params))
        self._pending[key] = task
        task.add_done_callback(lambda done: self._finish_pending(key, done))
        return await asyncio.shield(task)

    def _finish_pending(self, key: str, task: asyncio.Task[JsonValue]) -> None:
        self._pending.pop(key, None)
        # Every waiter may have been cancelled; mark the failure as retrieved.
        if not task.cancelled():
            task.exception()

    async def write(
        self,
        path: str,
        body: JsonValue,
        params: QueryParams | None = None,
    ) -> JsonValue:
        url = self._url(path)

        async def operation() -> JsonValue:
            return await self.transport("POST", url, body, params)

        return await self.retry.run(operation)

    def clear_cache(self) -> None:
        self.cache.clear()

    @property
    def cache_size(self) -> int:
        return self.cache.size

    @property
    def cache_enabled(self) -> bool:
        return self.cache.enabled

    def set_cache_enabled(self, enabled: bool) -> None:
        self.cache.enabled = enabled

    async def _fetch_and_store(
        self, key: str, path: str, params: QueryParams | None
    ) -> JsonValue:
        url = self._url(path)

        async def operation() -> JsonValue:
            return await self.transport("GET", url, None, params)

        payload = await self.retry.run(operation)
        self.cache.set(key, payload)
        return payload

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"
