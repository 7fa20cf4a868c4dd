from __future__ import annotations

from dataclasses import dataclass

from dexpaprika.gateway import Gateway
from dexpaprika.models import SearchResult
from dexpaprika.parsing import parse_search_result


@dataclass(frozen=True, slots=True)
class SearchApi:
    gateway: Gateway

    async def search(self, query: str) -> SearchResult:
        cleaned = " ".join(query.split())
        payload = await self.gateway.read("/search", {"query": cleaned})
        return parse_search_result(payload)
