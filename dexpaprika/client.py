from __future__ import annotations

import asyncio
import time
from types import TracebackType

import aiohttp

from dexpaprika.api import (
    DexesApi,
    NetworksApi,
    PoolsApi,
    SearchApi,
    StatsApi,
    TokensApi,
)
from dexpaprika.cache import Clock, LruTtlCache
from dexpaprika.config import ClientConfig
from dexpaprika.gateway import RequestGateway
from dexpaprika.http import (
    JsonValue,
    QueryParams,
    Transport,
    build_transport,
)
from dexpaprika.retry import RetryExecutor, Sleep


class DexPaprikaClient:
    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Clock | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._session = session
        self._owns_session = session is None
        self._transport = transport
        self._session_lock: asyncio.Lock | None = None

        cache = LruTtlCache.from_config(self.config.cache, clock or time.monotonic)
        retry = RetryExecutor(policy=self.config.retry, sleep=sleep or asyncio.sleep)
        self.gateway = RequestGateway(
            transport=self._dispatch,
            cache=cache,
            retry=retry,
            base_url=self.config.base_url.rstrip("/"),
            coalesce_reads=self.config.coalesce_reads,
        )

        self.networks = NetworksApi(self.gateway)
        self.dexes = DexesApi(self.gateway)
        self.pools = PoolsApi(self.gateway)
        self.tokens = TokensApi(self.gateway)
        self.search = SearchApi(self.gateway)
        self.stats = StatsApi(self.gateway)

    async def get(self, path: str, params: QueryParams | None = None) -> JsonValue:
        """Cached GET. A cache hit returns the stored payload object, not a copy."""
        return await self.gateway.read(path, params)

    async def post(
        self,
        path: str,
        body: JsonValue,
        params: QueryParams | None = None,
    ) -> JsonValue:
        return await self.gateway.write(path, body, params)

    def clear_cache(self) -> None:
        self.gateway.clear_cache()

    @property
    def cache_size(self) -> int:
        return self.gateway.cache_size

    @property
    def cache_enabled(self) -> bool:
        return self.gateway.cache_enabled

    def set_cache_enabled(self, enabled: bool) -> None:
        self.gateway.set_cache_enabled(enabled)

    async def close(self) -> None:
        session = self._session
        if session is None or not self._owns_session:
            return
        self._session = None
        self._transport = None
        await session.close()

    async def __aenter__(self) -> DexPaprikaClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    async def _dispatch(
        self,
        method: str,
        url: str,
        body: JsonValue | None,
        params: QueryParams | None,
    ) -> JsonValue:
        transport = await self._ensure_transport()
        return await transport(method, url, body, params)

    async def _ensure_transport(self) -> Transport:
        if self._transport is not None:
            return self._transport
        lock = self._session_lock
        if lock is None:
            lock = asyncio.Lock()
            self._session_lock = lock
        async with lock:
            if self._transport is not None:
                return self._transport
            if self._session is None:
                self._session = aiohttp.ClientSession(headers=self._default_headers())
            self._transport = build_transport(
                self._session, timeout=self.config.timeout_seconds
            )
            return self._transport

    def _default_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }
