from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

SortDirection = Literal["asc", "desc"]
PoolOrderField = Literal[
    "volume_usd",
    "price_usd",
    "transactions",
    "last_price_change_usd_24h",
    "created_at",
]
OhlcvInterval = Literal["1m", "5m", "10m", "15m", "30m", "1h", "6h", "12h", "24h"]


class PageLimit(Enum):
    DEFAULT = 10
    MAX = 100


@dataclass(frozen=True, slots=True)
class Network:
    id: str
    display_name: str
    logo_url: str | None = None
    dexes_count: int = 0


@dataclass(frozen=True, slots=True)
class Dex:
    dex_id: str
    dex_name: str
    chain: str
    protocol: str | None = None
    website: str | None = None
    pools_count: int | None = None


@dataclass(frozen=True, slots=True)
class Token:
    id: str
    name: str
    symbol: str
    chain: str
    decimals: int | None = None
    added_at: str | None = None
    fdv: float | None = None
    total_supply: float | None = None
    description: str | None = None
    website: str | None = None
    explorer: str | None = None


@dataclass(frozen=True, slots=True)
class Pool:
    id: str
    dex_id: str
    dex_name: str
    chain: str
    volume_usd: float
    created_at: str | None
    created_at_block_number: int | None
    transactions: int
    price_usd: float
    last_price_change_usd_5m: float
    last_price_change_usd_1h: float
    last_price_change_usd_24h: float
    fee: float | None
    tokens: list[Token]


@dataclass(frozen=True, slots=True)
class PageInfo:
    limit: int
    page: int
    total_items: int | None = None
    total_pages: int | None = None
    next_cursor: str | None = None


@dataclass(frozen=True, slots=True)
class PoolPage:
    pools: list[Pool]
    page_info: PageInfo


@dataclass(frozen=True, slots=True)
class DexPage:
    dexes: list[Dex]
    page_info: PageInfo


@dataclass(frozen=True, slots=True)
class TimeIntervalMetrics:
    last_price_usd_change: float
    volume_usd: float
    buy_usd: float
    sell_usd: float
    sells: int
    buys: int
    txns: int


@dataclass(frozen=True, slots=True)
class PoolDetails:
    id: str
    chain: str
    dex_id: str
    dex_name: str
    factory_id: str | None
    created_at: str | None
    created_at_block_number: int | None
    tokens: list[Token]
    last_price: float
    last_price_usd: float
    fee: float | None
    price_time: str | None
    # Keyed by window label: "24h", "6h", "1h", "30m", "15m", "5m".
    metrics: dict[str, TimeIntervalMetrics]


@dataclass(frozen=True, slots=True)
class OhlcvRecord:
    time_open: str
    time_close: str
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True, slots=True)
class Transaction:
    id: str
    pool_id: str
    sender: str | None
    recipient: str | None
    token_0: str | None
    token_1: str | None
    amount_0: str | None
    amount_1: str | None
    log_index: int | None = None
    transaction_index: int | None = None
    created_at_block_number: int | None = None


@dataclass(frozen=True, slots=True)
class TransactionPage:
    transactions: list[Transaction]
    page_info: PageInfo


@dataclass(frozen=True, slots=True)
class DexSearchResult:
    id: str
    name: str
    chain: str
    website: str | None = None
    pools_count: int = 0


@dataclass(frozen=True, slots=True)
class SearchResult:
    tokens: list[Token]
    pools: list[Pool]
    dexes: list[DexSearchResult]


@dataclass(frozen=True, slots=True)
class Stats:
    chains: int
    factories: int
    pools: int
    tokens: int
