"""HTTP resolver for remote resources."""

from __future__ import annotations

import logging

import httpx

from resource_mentions.mentions.models import ResolvedResource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class HttpResolver:
    """Resolves mentions with an HTTP GET.

    ``@resource://example/a.md?rev=2`` fetches ``https://example/a.md?rev=2``
    unless a base_url is given, in which case the path is appended to it.

    Non-2xx responses resolve to None. Transport failures (connection
    errors, timeouts) are raised, so the orchestrator reports them as
    resolver faults. The timeout is this resolver's own; the orchestrator
    does not impose one.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            client: Shared client to send requests with. When omitted a
                short-lived client is created per request.
            timeout: Request timeout in seconds, used for per-request clients.
            base_url: Fixed URL prefix instead of ``https://<server>``.
        """
        self.client = client
        self.timeout = timeout
        self.base_url = base_url.rstrip("/") if base_url else None

    def build_url(self, server: str, path: str) -> str:
        """URL a mention's server and path map to."""
        if self.base_url:
            return f"{self.base_url}{path}"
        return f"https://{server}{path}"

    async def __call__(
        self,
        server: str,
        path: str,
        query: dict[str, str] | None = None,
    ) -> ResolvedResource | None:
        url = self.build_url(server, path)

        if self.client is not None:
            response = await self.client.get(url, params=query)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=query)

        if not response.is_success:
            logger.debug(f"GET {url} returned {response.status_code}")
            return None

        return ResolvedResource(
            content=response.text,
            mime_type=response.headers.get("content-type"),
            uri=str(response.url),
            metadata={"status_code": response.status_code},
        )
