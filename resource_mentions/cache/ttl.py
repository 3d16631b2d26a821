"""In-memory cache with lazy TTL expiry."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resource_mentions.mentions.models import ResolvedResource

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300.0  # 5 minutes


def make_cache_key(server: str, path: str, query: Mapping[str, str] | None) -> str:
    """Build the cache key for a (server, path, query) triple.

    The query is serialized with sorted keys, so mappings that are equal
    produce equal keys whatever order they were built in.
    """
    if query is not None:
        query = dict(query)
    serialized = json.dumps(query, sort_keys=True, separators=(",", ":"))
    return f"{server}:{path}:{serialized}"


@dataclass
class CacheEntry:
    """A cached resource and the clock reading when it was stored."""

    value: ResolvedResource
    inserted_at: float

    def is_valid(self, now: float, ttl: float) -> bool:
        """True while the entry is younger than ttl."""
        return now - self.inserted_at < ttl


class TTLCache:
    """In-memory cache whose entries expire after a time-to-live.

    Expiry is lazy: an expired entry is only dropped when it is read, when
    purge_expired() is called, or when max_entries forces room for a new
    entry. There is no background sweep. Without max_entries the cache can
    grow until keys are read again, which suits short-lived resolvers; set
    max_entries for long-running services.

    Values are copied on the way in and on the way out, so callers can
    mutate what they receive without touching the cache.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        *,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize empty cache.

        Args:
            ttl: Seconds an entry stays valid.
            max_entries: Optional upper bound on stored entries.
            clock: Monotonic time source, injectable for tests.
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._ttl = _check_ttl(ttl)
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def set_ttl(self, ttl: float) -> None:
        """Change the time-to-live. Applies to existing entries on their next read."""
        self._ttl = _check_ttl(ttl)

    def get(self, key: str) -> ResolvedResource | None:
        """Get a cached resource, dropping it if it has expired.

        Args:
            key: Cache key.

        Returns:
            Copy of the cached resource, or None if missing or expired.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        if not entry.is_valid(self._clock(), self._ttl):
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None

        return entry.value.model_copy(deep=True)

    def set(self, key: str, value: ResolvedResource) -> None:
        """Cache a resource with the current clock reading.

        Args:
            key: Cache key.
            value: Resource to cache.
        """
        # Re-inserting moves the key to the end of the insertion order
        self._entries.pop(key, None)
        if self._max_entries is not None and len(self._entries) >= self._max_entries:
            self._make_room(self._max_entries)
        self._entries[key] = CacheEntry(
            value=value.model_copy(deep=True), inserted_at=self._clock()
        )

    def purge_expired(self) -> int:
        """Drop every expired entry.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        expired = [
            key for key, entry in self._entries.items() if not entry.is_valid(now, self._ttl)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)

    def clear(self) -> None:
        """Clear all cached resources."""
        self._entries.clear()

    def keys(self) -> list[str]:
        """Keys currently stored, in insertion order. Expired entries not yet read are included."""
        return list(self._entries)

    @property
    def size(self) -> int:
        return len(self._entries)

    def _make_room(self, limit: int) -> None:
        """Evict expired entries, then the oldest ones, until one slot is free."""
        self.purge_expired()
        while len(self._entries) >= limit:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug(f"Evicted oldest cache entry: {oldest}")

    def __contains__(self, key: str) -> bool:
        """Check if key holds a valid entry."""
        entry = self._entries.get(key)
        return entry is not None and entry.is_valid(self._clock(), self._ttl)

    def __len__(self) -> int:
        return len(self._entries)


def _check_ttl(ttl: float) -> float:
    if ttl <= 0:
        raise ValueError(f"TTL must be positive, got {ttl}")
    return float(ttl)
