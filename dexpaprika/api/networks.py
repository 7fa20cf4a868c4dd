from __future__ import annotations

from dataclasses import dataclass

from dexpaprika.gateway import Gateway
from dexpaprika.models import Network
from dexpaprika.parsing import parse_networks


@dataclass(frozen=True, slots=True)
class NetworksApi:
    gateway: Gateway

    async def list(self) -> list[Network]:
        payload = await self.gateway.read("/networks")
        return parse_networks(payload)
