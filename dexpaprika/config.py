from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
import logging
import os
from pathlib import Path
from typing import Final

from dexpaprika.cache import CacheConfig
from dexpaprika.http import DEFAULT_TIMEOUT_SECONDS, JsonValue
from dexpaprika.retry import RetryPolicy

CONFIG_DIR_NAME: Final[str] = "dexpaprika"
CONFIG_FILE_NAME: Final[str] = "client_config.json"
CONFIG_PATH_ENV: Final[str] = "DEXPAPRIKA_CONFIG"
BASE_URL_ENV: Final[str] = "DEXPAPRIKA_BASE_URL"
NO_CACHE_ENV: Final[str] = "DEXPAPRIKA_NO_CACHE"
DEFAULT_BASE_URL: Final[str] = "https://api.dexpaprika.com"
SDK_VERSION: Final[str] = "0.2.0"
DEFAULT_USER_AGENT: Final[str] = f"DexPaprika-SDK-Python/{SDK_VERSION}"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    cache: CacheConfig = field(default_factory=CacheConfig)
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    coalesce_reads: bool = False


def config_path() -> Path:
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        return Path(explicit)
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> ClientConfig:
    path = path or config_path()
    if not path.exists():
        return _apply_env_overrides(ClientConfig())
    try:
        raw_data = path.read_text(encoding="utf-8")
        payload: JsonValue = json.loads(raw_data)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return _apply_env_overrides(ClientConfig())
    return _apply_env_overrides(parse_config(payload))


def parse_config(payload: JsonValue) -> ClientConfig:
    defaults = ClientConfig()
    payload_dict = _get_dict(payload)
    if payload_dict is None:
        return defaults
    return ClientConfig(
        base_url=_normalize_base_url(
            _get_str(payload_dict.get("base_url"), defaults.base_url)
        ),
        timeout_seconds=_get_positive_float(
            payload_dict.get("timeout_seconds"), defaults.timeout_seconds
        ),
        user_agent=_get_str(payload_dict.get("user_agent"), defaults.user_agent),
        cache=_parse_cache(_get_dict(payload_dict.get("cache"))),
        retry=_parse_retry(_get_dict(payload_dict.get("retry"))),
        coalesce_reads=_get_bool(
            payload_dict.get("coalesce_reads"), defaults.coalesce_reads
        ),
    )


def _parse_cache(data: dict[str, JsonValue] | None) -> CacheConfig:
    defaults = CacheConfig()
    if data is None:
        return defaults
    return CacheConfig(
        ttl_seconds=_get_positive_float(data.get("ttl_seconds"), defaults.ttl_seconds),
        max_size=_get_non_negative_int(data.get("max_size"), defaults.max_size),
        enabled=_get_bool(data.get("enabled"), defaults.enabled),
    )


def _parse_retry(data: dict[str, JsonValue] | None) -> RetryPolicy:
    defaults = RetryPolicy()
    if data is None:
        return defaults
    delays_ms = _get_number_list(data.get("delay_sequence_ms"))
    delays = (
        tuple(delay / 1000.0 for delay in delays_ms)
        if delays_ms and all(delay >= 0 for delay in delays_ms)
        else defaults.delay_sequence_seconds
    )
    statuses = _get_number_list(data.get("retryable_statuses"))
    if statuses is not None and not all(isinstance(status, int) for status in statuses):
        statuses = None
    return RetryPolicy(
        max_retries=_get_non_negative_int(data.get("max_retries"), defaults.max_retries),
        delay_sequence_seconds=delays,
        retryable_statuses=(
            frozenset(int(status) for status in statuses)
            if statuses is not None
            else defaults.retryable_statuses
        ),
    )


def _apply_env_overrides(config: ClientConfig) -> ClientConfig:
    base_url = os.environ.get(BASE_URL_ENV, "").strip()
    if base_url:
        config = replace(config, base_url=_normalize_base_url(base_url))
    if os.environ.get(NO_CACHE_ENV, "").strip() == "1":
        config = replace(config, cache=replace(config.cache, enabled=False))
    return config


def _normalize_base_url(value: str) -> str:
    return value.rstrip("/")


def _get_dict(value: JsonValue | None) -> dict[str, JsonValue] | None:
    if isinstance(value, dict):
        return value
    return None


def _get_str(value: JsonValue | None, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _get_bool(value: JsonValue | None, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


def _get_positive_float(value: JsonValue | None, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0:
        return default
    return float(value)


def _get_non_negative_int(value: JsonValue | None, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < 0:
        return default
    return value


def _get_number_list(value: JsonValue | None) -> list[float] | None:
    if not isinstance(value, list):
        return None
    numbers: list[float] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            return None
        numbers.append(item)
    return numbers
