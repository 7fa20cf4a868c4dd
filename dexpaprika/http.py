from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
import json
import logging
from typing import Awaitable, Callable, Final, TypeAlias
from urllib.parse import urlencode

import aiohttp

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

JsonValue: TypeAlias = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)
QueryValue: TypeAlias = str | int | float | bool | None
QueryParams: TypeAlias = Mapping[str, QueryValue]

Transport = Callable[
    [str, str, JsonValue | None, QueryParams | None], Awaitable[JsonValue]
]

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class RequestError(Exception):
    message: str
    status: int | None = None
    url: str | None = None

    def __str__(self) -> str:
        return self.message


def serialize_params(params: QueryParams | None) -> list[tuple[str, str]]:
    if not params:
        return []
    pairs: list[tuple[str, str]] = []
    for name in sorted(params):
        value = params[name]
        if value is None:
            continue
        pairs.append((name, _format_param(value)))
    return pairs


def build_cache_key(path: str, params: QueryParams | None) -> str:
    query = urlencode(serialize_params(params))
    if not query:
        return path
    return f"{path}?{query}"


def extract_error_message(payload: JsonValue, fallback: str) -> str:
    if isinstance(payload, dict):
        for field_name in ("message", "error"):
            value = payload.get(field_name)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return fallback


async def fetch_json_async(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    body: JsonValue | None = None,
    params: QueryParams | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> JsonValue:
    timeout_config = aiohttp.ClientTimeout(total=timeout)
    try:
        async with session.request(
            method,
            url,
            params=serialize_params(params),
            json=body,
            timeout=timeout_config,
        ) as response:
            raw = await response.text(errors="replace")
            status = response.status
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.debug("%s %s failed: %s", method, url, exc)
        raise RequestError(f"Failed to reach {url}", url=url) from exc

    payload = _decode_payload(raw)
    if status >= 400:
        fallback = f"Request to {url} failed with status {status}"
        message = extract_error_message(payload, fallback)
        logger.debug("%s %s returned status %s", method, url, status)
        raise RequestError(message, status=status, url=url)
    if raw and payload is None and raw.strip() != "null":
        raise RequestError(f"Invalid JSON returned by {url}", status=status, url=url)
    return payload


def build_transport(
    session: aiohttp.ClientSession,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Transport:
    async def transport(
        method: str,
        url: str,
        body: JsonValue | None = None,
        params: QueryParams | None = None,
    ) -> JsonValue:
        return await fetch_json_async(session, method, url, body, params, timeout)

    return transport


def _format_param(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode_payload(raw: str) -> JsonValue:
    if not raw.strip():
        return None
    try:
        payload: JsonValue = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return payload
