"""Short-lived reply cache for repeated questions."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from cachetools import LRUCache

from tasktrack.infrastructure.telemetry.logging import get_logger
from tasktrack.infrastructure.telemetry.metrics import record_cache_lookup

logger = get_logger(__name__)

CacheKey = tuple[str, str]


@dataclass(frozen=True)
class CacheEntry:
    reply: str
    created_at: float


class ResponseCache:
    """Maps (role context, normalized message) to a generated reply.

    Entries older than `ttl_seconds` are never returned; they are dropped on
    the lookup that finds them stale. Size is bounded by LRU eviction.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: LRUCache[CacheKey, CacheEntry] = LRUCache(maxsize=max_entries)

    @staticmethod
    def key(role: str, message: str) -> CacheKey:
        # Not scoped to a user: within the TTL, two callers with the same role
        # and message share one reply, even though replies quote task data.
        return (role, message.lower().strip())

    def get(self, key: CacheKey) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            record_cache_lookup("miss")
            return None

        if self._clock() - entry.created_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            record_cache_lookup("expired")
            return None

        record_cache_lookup("hit")
        return entry.reply

    def put(self, key: CacheKey, reply: str) -> None:
        self._entries[key] = CacheEntry(reply=reply, created_at=self._clock())

    def __len__(self) -> int:
        return len(self._entries)
