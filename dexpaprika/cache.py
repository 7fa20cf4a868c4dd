from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Callable, Protocol

Clock = Callable[[], float]

logger = logging.getLogger(__name__)


class CacheLimit(Enum):
    MAX_ENTRIES = 1000
    TTL_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class CacheConfig:
    ttl_seconds: float = CacheLimit.TTL_SECONDS.value
    max_size: int = CacheLimit.MAX_ENTRIES.value
    enabled: bool = True


class Cache(Protocol):
    enabled: bool

    def get(self, key: str) -> object | None: ...

    def set(self, key: str, value: object) -> None: ...

    def has(self, key: str) -> bool: ...

    def delete(self, key: str) -> bool: ...

    def clear(self) -> None: ...

    @property
    def size(self) -> int: ...


@dataclass(slots=True)
class CacheEntry:
    value: object
    expires_at: float
    last_accessed_at: float


def _default_items() -> OrderedDict[str, CacheEntry]:
    return OrderedDict()


@dataclass(slots=True)
class LruTtlCache:
    max_entries: int = CacheLimit.MAX_ENTRIES.value
    ttl_seconds: float = CacheLimit.TTL_SECONDS.value
    enabled: bool = True
    clock: Clock = time.monotonic
    # Ordered from least to most recently accessed.
    _items: OrderedDict[str, CacheEntry] = field(default_factory=_default_items)

    @classmethod
    def from_config(
        cls, config: CacheConfig, clock: Clock = time.monotonic
    ) -> LruTtlCache:
        return cls(
            max_entries=config.max_size,
            ttl_seconds=config.ttl_seconds,
            enabled=config.enabled,
            clock=clock,
        )

    def get(self, key: str) -> object | None:
        if not self.enabled:
            return None
        entry = self._live_entry(key)
        if entry is None:
            return None
        entry.last_accessed_at = self.clock()
        self._items.move_to_end(key)
        return entry.value

    def set(self, key: str, value: object) -> None:
        if not self.enabled or self.max_entries <= 0:
            return
        if len(self._items) >= self.max_entries:
            self._evict_lru()
        now = self.clock()
        self._items[key] = CacheEntry(
            value=value,
            expires_at=now + self.ttl_seconds,
            last_accessed_at=now,
        )
        self._items.move_to_end(key)

    def has(self, key: str) -> bool:
        if not self.enabled:
            return False
        return self._live_entry(key) is not None

    def delete(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def clear(self) -> None:
        self._items.clear()

    @property
    def size(self) -> int:
        return len(self._items)

    def _live_entry(self, key: str) -> CacheEntry | None:
        entry = self._items.get(key)
        if entry is None:
            return None
        if self.clock() > entry.expires_at:
            del self._items[key]
            return None
        return entry

    def _evict_lru(self) -> None:
        if not self._items:
            return
        key, _ = self._items.popitem(last=False)
        logger.debug("Evicted least recently used cache entry %s", key)
