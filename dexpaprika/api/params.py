from __future__ import annotations

from typing import Final
from urllib.parse import quote

from dexpaprika.http import QueryValue
from dexpaprika.models import PageLimit

SORT_DIRECTIONS: Final[frozenset[str]] = frozenset({"asc", "desc"})
POOL_ORDER_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "volume_usd",
        "price_usd",
        "transactions",
        "last_price_change_usd_24h",
        "created_at",
    }
)
OHLCV_INTERVALS: Final[frozenset[str]] = frozenset(
    {"1m", "5m", "10m", "15m", "30m", "1h", "6h", "12h", "24h"}
)


def path_segment(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("Path segment must not be empty.")
    return quote(cleaned, safe="")


def paging_params(page: int, limit: int) -> dict[str, QueryValue]:
    if page < 0:
        raise ValueError("page must be >= 0.")
    if limit < 1 or limit > PageLimit.MAX.value:
        raise ValueError(f"limit must be between 1 and {PageLimit.MAX.value}.")
    return {"page": page, "limit": limit}


def sorted_paging_params(
    page: int, limit: int, sort: str, order_by: str
) -> dict[str, QueryValue]:
    if sort not in SORT_DIRECTIONS:
        raise ValueError("sort must be one of: asc, desc.")
    if order_by not in POOL_ORDER_FIELDS:
        allowed = ", ".join(sorted(POOL_ORDER_FIELDS))
        raise ValueError(f"order_by must be one of: {allowed}.")
    params = paging_params(page, limit)
    params["sort"] = sort
    params["order_by"] = order_by
    return params


def validate_interval(interval: str) -> str:
    if interval not in OHLCV_INTERVALS:
        raise ValueError("interval must be one of: 1m, 5m, 10m, 15m, 30m, 1h, 6h, 12h, 24h.")
    return interval
