from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
from typing import Awaitable, Callable, Final, TypeVar

import aiohttp

from dexpaprika.http import RequestError

DEFAULT_MAX_RETRIES: Final[int] = 4
DEFAULT_DELAY_SEQUENCE_SECONDS: Final[tuple[float, ...]] = (0.1, 0.5, 1.0, 5.0)
DEFAULT_RETRYABLE_STATUSES: Final[frozenset[int]] = frozenset(
    {408, 429, 500, 502, 503, 504}
)

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[None]]

logger = logging.getLogger(__name__)


def _default_retryable_statuses() -> frozenset[int]:
    return DEFAULT_RETRYABLE_STATUSES


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    max_retries: int = DEFAULT_MAX_RETRIES
    delay_sequence_seconds: tuple[float, ...] = DEFAULT_DELAY_SEQUENCE_SECONDS
    retryable_statuses: frozenset[int] = field(
        default_factory=_default_retryable_statuses
    )

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if not self.delay_sequence_seconds:
            raise ValueError("delay_sequence_seconds must not be empty")
        if any(delay < 0 for delay in self.delay_sequence_seconds):
            raise ValueError("delay_sequence_seconds must not contain negative delays")


def delay_for_attempt(policy: RetryPolicy, attempt: int) -> float:
    delays = policy.delay_sequence_seconds
    index = min(max(attempt - 1, 0), len(delays) - 1)
    return delays[index]


def status_of(error: BaseException) -> int | None:
    if isinstance(error, RequestError):
        return error.status
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status
    return None


def is_retryable(policy: RetryPolicy, error: BaseException) -> bool:
    status = status_of(error)
    if status is None:
        return True
    return status in policy.retryable_statuses


@dataclass(slots=True)
class RetryExecutor:
    policy: RetryPolicy = field(default_factory=RetryPolicy)
    sleep: Sleep = asyncio.sleep

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        policy: RetryPolicy | None = None,
    ) -> T:
        active = policy or self.policy
        attempt = 0
        while True:
            try:
                return await operation()
            except Exception as exc:
                if not is_retryable(active, exc):
                    raise
                if attempt >= active.max_retries:
                    logger.debug(
                        "Giving up after %d attempts: %s", attempt + 1, exc
                    )
                    raise
                attempt += 1
                delay = delay_for_attempt(active, attempt)
                logger.debug(
                    "Retry %d/%d in %.3fs after failure (status %s): %s",
                    attempt,
                    active.max_retries,
                    delay,
                    status_of(exc),
                    exc,
                )
            await self.sleep(delay)
