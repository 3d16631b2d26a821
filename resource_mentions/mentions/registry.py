"""Instance-scoped registry of resolvers keyed by server name."""

from __future__ import annotations

import logging

from .protocol import ResourceResolverProtocol

logger = logging.getLogger(__name__)


class ResolverRegistry:
    """Maps server names to resolvers.

    At most one resolver is bound per server; registering a name again
    replaces the previous binding. Each MentionResolver owns its own
    registry so independent hosts in one process never see each other's
    bindings.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._resolvers: dict[str, ResourceResolverProtocol] = {}

    def register(self, server: str, resolver: ResourceResolverProtocol) -> None:
        """Bind a resolver to a server name, replacing any existing binding.

        Args:
            server: Server name as it appears in mentions.
            resolver: Async callable resolving (server, path, query).
        """
        if not server:
            raise ValueError("Server name must not be empty")
        if server in self._resolvers:
            logger.debug(f"Replacing resolver for server '{server}'")
        self._resolvers[server] = resolver

    def unregister(self, server: str) -> bool:
        """Remove the binding for a server.

        Returns:
            True if a binding was removed, False if none existed.
        """
        return self._resolvers.pop(server, None) is not None

    def get(self, server: str) -> ResourceResolverProtocol | None:
        """Get the resolver bound to a server, or None."""
        return self._resolvers.get(server)

    def servers(self) -> list[str]:
        """Names of all bound servers, in registration order."""
        return list(self._resolvers)

    def __contains__(self, server: str) -> bool:
        """Check if a server has a resolver."""
        return server in self._resolvers

    def __len__(self) -> int:
        return len(self._resolvers)
