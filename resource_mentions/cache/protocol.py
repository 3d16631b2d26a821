"""Protocol for resolved-resource caching."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Protocol

if TYPE_CHECKING:
    from resource_mentions.mentions.models import ResolvedResource


class CacheProviderProtocol(Protocol):
    """Protocol for caching resolved resources.

    TTLCache provides in-memory, lazily expiring entries.
    Hosts may substitute their own implementation.
    """

    def get(self, key: str) -> ResolvedResource | None:
        """Get a cached resource.

        Args:
            key: Cache key (see make_cache_key).

        Returns:
            The cached resource, or None if missing or expired.
        """
        ...

    def set(self, key: str, value: ResolvedResource) -> None:
        """Cache a resource, replacing any existing entry.

        Args:
            key: Cache key.
            value: Resource to cache.
        """
        ...

    def clear(self) -> None:
        """Clear all cached resources."""
        ...

    @property
    def ttl(self) -> float:
        """Seconds an entry stays valid."""
        ...

    def set_ttl(self, ttl: float) -> None:
        """Change the time-to-live at runtime."""
        ...

    def keys(self) -> list[str]:
        """Keys currently stored, expired or not."""
        ...

    def __contains__(self, key: str) -> bool:
        """Check if key is cached."""
        ...

    def __len__(self) -> int:
        """Number of stored entries."""
        ...
