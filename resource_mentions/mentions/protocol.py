"""Protocol for resource resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Protocol

if TYPE_CHECKING:
    from .models import ResolvedResource


class ResourceResolverProtocol(Protocol):
    """Protocol for turning a mention's server, path and query into content.

    Any async callable with this signature works, including plain
    ``async def`` functions. Reference implementations live in
    ``resource_mentions.resolvers``.
    """

    async def __call__(
        self,
        server: str,
        path: str,
        query: dict[str, str] | None = None,
    ) -> ResolvedResource | None:
        """Resolve a resource.

        Args:
            server: Server name from the mention.
            path: Resource path (always starts with "/").
            query: Query parameters, or None when the mention has none.

        Returns:
            ResolvedResource, or None if the resource does not exist.
            Ordinary "not found" must be signalled with None; raise only for
            internal faults (I/O errors, malformed responses).
        """
        ...
