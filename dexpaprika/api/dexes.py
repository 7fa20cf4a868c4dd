from __future__ import annotations

from dataclasses import dataclass

from dexpaprika.api.params import paging_params, path_segment
from dexpaprika.gateway import Gateway
from dexpaprika.models import DexPage, PageLimit
from dexpaprika.parsing import parse_dex_page


@dataclass(frozen=True, slots=True)
class DexesApi:
    gateway: Gateway

    async def list_by_network(
        self,
        network_id: str,
        page: int = 0,
        limit: int = PageLimit.DEFAULT.value,
    ) -> DexPage:
        path = f"/networks/{path_segment(network_id)}/dexes"
        payload = await self.gateway.read(path, paging_params(page, limit))
        return parse_dex_page(payload)
