from __future__ import annotations

from dataclasses import dataclass

from dexpaprika.gateway import Gateway
from dexpaprika.models import Stats
from dexpaprika.parsing import parse_stats


@dataclass(frozen=True, slots=True)
class StatsApi:
    gateway: Gateway

    async def get_stats(self) -> Stats:
        payload = await self.gateway.read("/stats")
        return parse_stats(payload)
