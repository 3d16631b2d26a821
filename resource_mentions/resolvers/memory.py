"""In-memory resolver, for tests and ephemeral data."""

from __future__ import annotations

from dataclasses import dataclass

from resource_mentions.mentions.models import ResolvedResource


@dataclass
class _StoredResource:
    content: str
    mime_type: str | None = None


class MemoryResolver:
    """Resolves mentions from a dict keyed by ``server:path``.

    One instance can back several servers; register it under each name.
    """

    def __init__(self) -> None:
        """Initialize empty store."""
        self._store: dict[str, _StoredResource] = {}

    def set(self, server: str, path: str, content: str, mime_type: str | None = None) -> None:
        """Store content for a server and path, replacing any previous value."""
        self._store[_key(server, path)] = _StoredResource(content=content, mime_type=mime_type)

    def delete(self, server: str, path: str) -> bool:
        """Remove stored content.

        Returns:
            True if something was removed.
        """
        return self._store.pop(_key(server, path), None) is not None

    def clear(self) -> None:
        """Remove all stored content."""
        self._store.clear()

    async def __call__(
        self,
        server: str,
        path: str,
        query: dict[str, str] | None = None,
    ) -> ResolvedResource | None:
        key = _key(server, path)
        stored = self._store.get(key)
        if stored is None:
            return None
        return ResolvedResource(
            content=stored.content, mime_type=stored.mime_type, uri=f"memory://{key}"
        )

    def __contains__(self, key: str) -> bool:
        """Check if a ``server:path`` key is stored."""
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)


def _key(server: str, path: str) -> str:
    return f"{server}:{path}"
