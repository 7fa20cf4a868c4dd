from __future__ import annotations

from dataclasses import dataclass

from dexpaprika.api.params import path_segment, sorted_paging_params
from dexpaprika.gateway import Gateway
from dexpaprika.models import (
    PageLimit,
    PoolOrderField,
    PoolPage,
    SortDirection,
    Token,
)
from dexpaprika.parsing import parse_pool_page, parse_token_details


@dataclass(frozen=True, slots=True)
class TokensApi:
    gateway: Gateway

    async def get_details(self, network_id: str, token_address: str) -> Token:
        payload = await self.gateway.read(_token_path(network_id, token_address))
        return parse_token_details(payload)

    async def get_pools(
        self,
        network_id: str,
        token_address: str,
        page: int = 0,
        limit: int = PageLimit.DEFAULT.value,
        sort: SortDirection = "desc",
        order_by: PoolOrderField = "volume_usd",
        pair_with: str | None = None,
    ) -> PoolPage:
        params = sorted_paging_params(page, limit, sort, order_by)
        if pair_with:
            params["address"] = pair_with.strip()
        path = f"{_token_path(network_id, token_address)}/pools"
        payload = await self.gateway.read(path, params)
        return parse_pool_page(payload)


def _token_path(network_id: str, token_address: str) -> str:
    return f"/networks/{path_segment(network_id)}/tokens/{path_segment(token_address)}"
