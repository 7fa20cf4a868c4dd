from __future__ import annotations

from dexpaprika.cache import CacheConfig, LruTtlCache
from dexpaprika.client import DexPaprikaClient
from dexpaprika.config import SDK_VERSION, ClientConfig, load_config
from dexpaprika.gateway import Gateway, RequestGateway
from dexpaprika.http import RequestError
from dexpaprika.parsing import PayloadError
from dexpaprika.retry import RetryExecutor, RetryPolicy

__version__ = SDK_VERSION

__all__ = [
    "CacheConfig",
    "ClientConfig",
    "DexPaprikaClient",
    "Gateway",
    "LruTtlCache",
    "PayloadError",
    "RequestError",
    "RequestGateway",
    "RetryExecutor",
    "RetryPolicy",
    "load_config",
]
