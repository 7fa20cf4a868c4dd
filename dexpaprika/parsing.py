from __future__ import annotations

import logging

from dexpaprika.http import JsonValue
from dexpaprika.models import (
    Dex,
    DexPage,
    DexSearchResult,
    Network,
    OhlcvRecord,
    PageInfo,
    Pool,
    PoolDetails,
    PoolPage,
    SearchResult,
    Stats,
    TimeIntervalMetrics,
    Token,
    Transaction,
    TransactionPage,
)

METRIC_WINDOWS = ("24h", "6h", "1h", "30m", "15m", "5m")

logger = logging.getLogger(__name__)


class PayloadError(ValueError):
    pass


def parse_networks(payload: JsonValue) -> list[Network]:
    networks: list[Network] = []
    for item in coerce_dict_list(payload):
        network_id = get_str(item.get("id"))
        if network_id is None:
            continue
        networks.append(
            Network(
                id=network_id,
                display_name=get_str(item.get("display_name")) or network_id,
                logo_url=get_str(item.get("logo_url")),
                dexes_count=get_int(item.get("dexes_count")) or 0,
            )
        )
    return networks


def parse_dex_page(payload: JsonValue) -> DexPage:
    data = _require_dict(payload, "dex page")
    dexes: list[Dex] = []
    for item in coerce_dict_list(data.get("dexes")):
        dex_id = get_str(item.get("dex_id")) or get_str(item.get("id"))
        if dex_id is None:
            continue
        dexes.append(
            Dex(
                dex_id=dex_id,
                dex_name=get_str(item.get("dex_name")) or get_str(item.get("name")) or dex_id,
                chain=get_str(item.get("chain")) or "",
                protocol=get_str(item.get("protocol")),
                website=get_str(item.get("website")),
                pools_count=get_int(item.get("pools_count")),
            )
        )
    return DexPage(dexes=dexes, page_info=parse_page_info(data.get("page_info")))


def parse_token(value: JsonValue) -> Token | None:
    item = coerce_dict(value)
    if item is None:
        return None
    token_id = get_str(item.get("id"))
    if token_id is None:
        return None
    return Token(
        id=token_id,
        name=get_str(item.get("name")) or "",
        symbol=get_str(item.get("symbol")) or "",
        chain=get_str(item.get("chain")) or "",
        decimals=get_int(item.get("decimals")),
        added_at=get_str(item.get("added_at")),
        fdv=get_float(item.get("fdv")),
        total_supply=get_float(item.get("total_supply")),
        description=get_str(item.get("description")),
        website=get_str(item.get("website")),
        explorer=get_str(item.get("explorer")),
    )


def parse_token_details(payload: JsonValue) -> Token:
    token = parse_token(payload)
    if token is None:
        raise PayloadError("Token payload is missing an id")
    return token


def parse_tokens(value: JsonValue) -> list[Token]:
    tokens: list[Token] = []
    for item in coerce_dict_list(value):
        token = parse_token(item)
        if token is not None:
            tokens.append(token)
    return tokens


def parse_pool(value: JsonValue) -> Pool | None:
    item = coerce_dict(value)
    if item is None:
        return None
    pool_id = get_str(item.get("id"))
    if pool_id is None:
        return None
    return Pool(
        id=pool_id,
        dex_id=get_str(item.get("dex_id")) or "",
        dex_name=get_str(item.get("dex_name")) or "",
        chain=get_str(item.get("chain")) or "",
        volume_usd=get_float(item.get("volume_usd")) or 0.0,
        created_at=get_str(item.get("created_at")),
        created_at_block_number=get_int(item.get("created_at_block_number")),
        transactions=get_int(item.get("transactions")) or 0,
        price_usd=get_float(item.get("price_usd")) or 0.0,
        last_price_change_usd_5m=get_float(item.get("last_price_change_usd_5m")) or 0.0,
        last_price_change_usd_1h=get_float(item.get("last_price_change_usd_1h")) or 0.0,
        last_price_change_usd_24h=get_float(item.get("last_price_change_usd_24h")) or 0.0,
        fee=get_float(item.get("fee")),
        tokens=parse_tokens(item.get("tokens")),
    )


def parse_pools(value: JsonValue) -> list[Pool]:
    pools: list[Pool] = []
    for item in coerce_dict_list(value):
        pool = parse_pool(item)
        if pool is not None:
            pools.append(pool)
    return pools


def parse_pool_page(payload: JsonValue) -> PoolPage:
    data = _require_dict(payload, "pool page")
    return PoolPage(
        pools=parse_pools(data.get("pools")),
        page_info=parse_page_info(data.get("page_info")),
    )


def parse_page_info(value: JsonValue) -> PageInfo:
    item = coerce_dict(value) or {}
    return PageInfo(
        limit=get_int(item.get("limit")) or 0,
        page=get_int(item.get("page")) or 0,
        total_items=get_int(item.get("total_items")),
        total_pages=get_int(item.get("total_pages")),
        next_cursor=get_str(item.get("next_cursor")),
    )


def parse_pool_details(payload: JsonValue) -> PoolDetails:
    data = _require_dict(payload, "pool details")
    pool_id = get_str(data.get("id"))
    if pool_id is None:
        raise PayloadError("Pool details payload is missing an id")
    metrics: dict[str, TimeIntervalMetrics] = {}
    for window in METRIC_WINDOWS:
        parsed = _parse_interval_metrics(data.get(window))
        if parsed is not None:
            metrics[window] = parsed
    return PoolDetails(
        id=pool_id,
        chain=get_str(data.get("chain")) or "",
        dex_id=get_str(data.get("dex_id")) or "",
        dex_name=get_str(data.get("dex_name")) or "",
        factory_id=get_str(data.get("factory_id")),
        created_at=get_str(data.get("created_at")),
        created_at_block_number=get_int(data.get("created_at_block_number")),
        tokens=parse_tokens(data.get("tokens")),
        last_price=get_float(data.get("last_price")) or 0.0,
        last_price_usd=get_float(data.get("last_price_usd")) or 0.0,
        fee=get_float(data.get("fee")),
        price_time=get_str(data.get("price_time")),
        metrics=metrics,
    )


def parse_ohlcv(payload: JsonValue) -> list[OhlcvRecord]:
    records: list[OhlcvRecord] = []
    for item in coerce_dict_list(payload):
        time_open = get_str(item.get("time_open"))
        time_close = get_str(item.get("time_close"))
        if time_open is None or time_close is None:
            logger.warning("Skipping OHLCV record without time bounds")
            continue
        records.append(
            OhlcvRecord(
                time_open=time_open,
                time_close=time_close,
                open=get_float(item.get("open")) or 0.0,
                high=get_float(item.get("high")) or 0.0,
                low=get_float(item.get("low")) or 0.0,
                close=get_float(item.get("close")) or 0.0,
                volume=get_float(item.get("volume")) or 0.0,
            )
        )
    return records


def parse_transaction_page(payload: JsonValue) -> TransactionPage:
    data = _require_dict(payload, "transaction page")
    transactions: list[Transaction] = []
    for item in coerce_dict_list(data.get("transactions")):
        transaction_id = get_str(item.get("id"))
        if transaction_id is None:
            continue
        transactions.append(
            Transaction(
                id=transaction_id,
                pool_id=get_str(item.get("pool_id")) or "",
                sender=get_text(item.get("sender")),
                recipient=get_text(item.get("recipient")),
                token_0=get_str(item.get("token_0")),
                token_1=get_str(item.get("token_1")),
                amount_0=get_text(item.get("amount_0")),
                amount_1=get_text(item.get("amount_1")),
                log_index=get_int(item.get("log_index")),
                transaction_index=get_int(item.get("transaction_index")),
                created_at_block_number=get_int(item.get("created_at_block_number")),
            )
        )
    return TransactionPage(
        transactions=transactions,
        page_info=parse_page_info(data.get("page_info")),
    )


def parse_search_result(payload: JsonValue) -> SearchResult:
    data = coerce_dict(payload) or {}
    dexes: list[DexSearchResult] = []
    for item in coerce_dict_list(data.get("dexes")):
        dex_id = get_str(item.get("id"))
        if dex_id is None:
            continue
        dexes.append(
            DexSearchResult(
                id=dex_id,
                name=get_str(item.get("name")) or dex_id,
                chain=get_str(item.get("chain")) or "",
                website=get_str(item.get("website")),
                pools_count=get_int(item.get("pools_count")) or 0,
            )
        )
    return SearchResult(
        tokens=parse_tokens(data.get("tokens")),
        pools=parse_pools(data.get("pools")),
        dexes=dexes,
    )


def parse_stats(payload: JsonValue) -> Stats:
    data = _require_dict(payload, "stats")
    return Stats(
        chains=get_int(data.get("chains")) or 0,
        factories=get_int(data.get("factories")) or 0,
        pools=get_int(data.get("pools")) or 0,
        tokens=get_int(data.get("tokens")) or 0,
    )


def _parse_interval_metrics(value: JsonValue) -> TimeIntervalMetrics | None:
    item = coerce_dict(value)
    if item is None:
        return None
    return TimeIntervalMetrics(
        last_price_usd_change=get_float(item.get("last_price_usd_change")) or 0.0,
        volume_usd=get_float(item.get("volume_usd")) or 0.0,
        buy_usd=get_float(item.get("buy_usd")) or 0.0,
        sell_usd=get_float(item.get("sell_usd")) or 0.0,
        sells=get_int(item.get("sells")) or 0,
        buys=get_int(item.get("buys")) or 0,
        txns=get_int(item.get("txns")) or 0,
    )


def _require_dict(payload: JsonValue, label: str) -> dict[str, JsonValue]:
    data = coerce_dict(payload)
    if data is None:
        raise PayloadError(f"Expected a JSON object for {label}")
    return data


def coerce_dict_list(value: JsonValue) -> list[dict[str, JsonValue]]:
    if not isinstance(value, list):
        return []
    results: list[dict[str, JsonValue]] = []
    for item in value:
        item_dict = coerce_dict(item)
        if item_dict is not None:
            results.append(item_dict)
    return results


def coerce_dict(value: JsonValue) -> dict[str, JsonValue] | None:
    if not isinstance(value, dict):
        return None
    output: dict[str, JsonValue] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            return None
        output[key] = item
    return output


def get_str(value: JsonValue) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def get_text(value: JsonValue) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return get_str(value)


def get_int(value: JsonValue) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def get_float(value: JsonValue) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None
