from __future__ import annotations

from dexpaprika.api.dexes import DexesApi
from dexpaprika.api.networks import NetworksApi
from dexpaprika.api.pools import PoolsApi
from dexpaprika.api.search import SearchApi
from dexpaprika.api.stats import StatsApi
from dexpaprika.api.tokens import TokensApi

__all__ = [
    "DexesApi",
    "NetworksApi",
    "PoolsApi",
    "SearchApi",
    "StatsApi",
    "TokensApi",
]
