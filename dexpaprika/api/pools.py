from __future__ import annotations

from dataclasses import dataclass

from dexpaprika.api.params import (
    paging_params,
    path_segment,
    sorted_paging_params,
    validate_interval,
)
from dexpaprika.gateway import Gateway
from dexpaprika.http import QueryValue
from dexpaprika.models import (
    OhlcvInterval,
    OhlcvRecord,
    PageLimit,
    PoolDetails,
    PoolOrderField,
    PoolPage,
    SortDirection,
    TransactionPage,
)
from dexpaprika.parsing import (
    parse_ohlcv,
    parse_pool_details,
    parse_pool_page,
    parse_transaction_page,
)


@dataclass(frozen=True, slots=True)
class PoolsApi:
    gateway: Gateway

    async def list(
        self,
        page: int = 0,
        limit: int = PageLimit.DEFAULT.value,
        sort: SortDirection = "desc",
        order_by: PoolOrderField = "volume_usd",
    ) -> PoolPage:
        params = sorted_paging_params(page, limit, sort, order_by)
        payload = await self.gateway.read("/pools", params)
        return parse_pool_page(payload)

    async def list_by_network(
        self,
        network_id: str,
        page: int = 0,
        limit: int = PageLimit.DEFAULT.value,
        sort: SortDirection = "desc",
        order_by: PoolOrderField = "volume_usd",
    ) -> PoolPage:
        path = f"/networks/{path_segment(network_id)}/pools"
        params = sorted_paging_params(page, limit, sort, order_by)
        payload = await self.gateway.read(path, params)
        return parse_pool_page(payload)

    async def list_by_dex(
        self,
        network_id: str,
        dex_id: str,
        page: int = 0,
        limit: int = PageLimit.DEFAULT.value,
        sort: SortDirection = "desc",
        order_by: PoolOrderField = "volume_usd",
    ) -> PoolPage:
        path = (
            f"/networks/{path_segment(network_id)}"
            f"/dexes/{path_segment(dex_id)}/pools"
        )
        params = sorted_paging_params(page, limit, sort, order_by)
        payload = await self.gateway.read(path, params)
        return parse_pool_page(payload)

    async def get_details(
        self, network_id: str, pool_address: str, inversed: bool = False
    ) -> PoolDetails:
        params: dict[str, QueryValue] = {}
        if inversed:
            params["inversed"] = True
        payload = await self.gateway.read(_pool_path(network_id, pool_address), params)
        return parse_pool_details(payload)

    async def get_ohlcv(
        self,
        network_id: str,
        pool_address: str,
        start: str,
        end: str | None = None,
        limit: int = 1,
        interval: OhlcvInterval = "24h",
        inversed: bool = False,
    ) -> list[OhlcvRecord]:
        if not start.strip():
            raise ValueError("start must not be empty.")
        if limit < 1:
            raise ValueError("limit must be >= 1.")
        params: dict[str, QueryValue] = {
            "start": start.strip(),
            "limit": limit,
            "interval": validate_interval(interval),
        }
        if end:
            params["end"] = end.strip()
        if inversed:
            params["inversed"] = True
        path = f"{_pool_path(network_id, pool_address)}/ohlcv"
        payload = await self.gateway.read(path, params)
        return parse_ohlcv(payload)

    async def get_transactions(
        self,
        network_id: str,
        pool_address: str,
        page: int = 0,
        limit: int = PageLimit.DEFAULT.value,
        cursor: str | None = None,
    ) -> TransactionPage:
        params = paging_params(page, limit)
        if cursor:
            params["cursor"] = cursor
        path = f"{_pool_path(network_id, pool_address)}/transactions"
        payload = await self.gateway.read(path, params)
        return parse_transaction_page(payload)


def _pool_path(network_id: str, pool_address: str) -> str:
    return f"/networks/{path_segment(network_id)}/pools/{path_segment(pool_address)}"
