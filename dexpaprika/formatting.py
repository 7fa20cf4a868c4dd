from __future__ import annotations

from datetime import datetime, timezone
import time
from typing import Final

from dexpaprika.http import RequestError

SECONDS_PER_DAY: Final[int] = 86_400

_VOLUME_UNITS: Final[tuple[tuple[float, str], ...]] = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def format_volume(value: float) -> str:
    for threshold, suffix in _VOLUME_UNITS:
        if value >= threshold:
            return f"${value / threshold:.2f}{suffix}"
    return f"${value:.2f}"


def format_pair(base_symbol: str, quote_symbol: str) -> str:
    return f"{base_symbol}/{quote_symbol}"


def parse_date(value: str | int | float) -> datetime:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def now_unix() -> int:
    return int(time.time())


def yesterday_unix() -> int:
    return now_unix() - SECONDS_PER_DAY


def last_week_unix() -> int:
    return now_unix() - SECONDS_PER_DAY * 7


def describe_error(error: BaseException) -> str:
    if isinstance(error, RequestError):
        if error.status is not None:
            return f"{error.message} (HTTP {error.status})"
        return error.message
    message = str(error)
    return message or "Unknown error occurred"
