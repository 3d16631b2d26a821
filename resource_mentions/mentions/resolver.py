"""Resolution of resource mentions through registered resolvers."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from resource_mentions import events
from resource_mentions.cache import CacheProviderProtocol
from resource_mentions.cache import TTLCache
from resource_mentions.cache import make_cache_key
from resource_mentions.config import MentionSettings
from resource_mentions.exceptions import InvalidMentionError
from resource_mentions.exceptions import ResolutionError
from resource_mentions.exceptions import ResolverFaultError
from resource_mentions.exceptions import ResolverNotFoundError
from resource_mentions.exceptions import ResourceNotFoundError
from resource_mentions.hooks import MentionHooks

from .models import CacheStats
from .models import MentionFailure
from .models import ResolveAllResult
from .models import ResolvedResource
from .models import ResourceInfo
from .models import ResourceMention
from .parser import parse_mentions
from .protocol import ResourceResolverProtocol
from .registry import ResolverRegistry

logger = logging.getLogger(__name__)

_Outcome = tuple[ResolvedResource | None, ResolutionError | None]


class MentionResolver:
    """Resolves resource mentions in text and substitutes their content.

    Each instance owns its resolver registry, cache and hooks, so one
    instance per embedding context keeps hosts isolated from each other.

    Lifecycle events (see events.py) are delivered to ``hooks``:
    - cache:hit when a mention is served from cache
    - resolver:not_found when no resolver is bound to the mention's server
    - resolve:start / resolve:complete around each resolver call
    - resolve:error when a resolver raises

    Example:
        resolver = MentionResolver()
        resolver.register_resolver("docs", FileResolver(Path("docs")))
        result = await resolver.resolve_all("Read @resource://docs/intro.md first")
    """

    def __init__(
        self,
        settings: MentionSettings | None = None,
        *,
        cache: CacheProviderProtocol | None = None,
        hooks: MentionHooks | None = None,
        registry: ResolverRegistry | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            settings: Cache and concurrency settings. Defaults to MentionSettings().
            cache: Cache implementation. Defaults to a TTLCache built from settings.
            hooks: Observer registry for lifecycle events.
            registry: Resolver registry. Defaults to a fresh, empty one.
            clock: Time source for the default cache (tests inject a fake clock).
        """
        self.settings = settings or MentionSettings()
        self.hooks = hooks or MentionHooks()
        self.registry = registry or ResolverRegistry()
        self.cache: CacheProviderProtocol = cache or TTLCache(
            self.settings.cache_ttl,
            max_entries=self.settings.cache_max_entries,
            clock=clock or time.monotonic,
        )
        self._cache_enabled = self.settings.cache_enabled

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register_resolver(self, server: str, resolver: ResourceResolverProtocol) -> None:
        """Bind a resolver to a server name, replacing any existing binding."""
        self.registry.register(server, resolver)
        logger.debug(f"Registered resolver for server '{server}'")
        self.hooks.emit(events.RESOLVER_REGISTERED, {"server": server})

    def unregister_resolver(self, server: str) -> bool:
        """Remove the resolver bound to a server.

        Returns:
            True if a binding was removed.
        """
        removed = self.registry.unregister(server)
        if removed:
            logger.debug(f"Unregistered resolver for server '{server}'")
        self.hooks.emit(events.RESOLVER_UNREGISTERED, {"server": server, "removed": removed})
        return removed

    # ------------------------------------------------------------------
    # Parsing and resolution
    # ------------------------------------------------------------------

    def parse(self, text: str) -> list[ResourceMention]:
        """Find the non-overlapping resource mentions in text, ordered by position."""
        return parse_mentions(text)

    async def resolve(self, mention: ResourceMention) -> ResolvedResource | None:
        """Resolve a single mention.

        Failures are reported through hooks and a None return; nothing is
        raised for a missing resolver, a missing resource, or a resolver fault.

        Args:
            mention: Mention produced by parse().

        Returns:
            The resolved resource, or None if it could not be resolved.

        Raises:
            InvalidMentionError: If mention is not a ResourceMention.
        """
        value, _ = await self._resolve_outcome(mention)
        return value

    async def resolve_all(self, text: str) -> ResolveAllResult:
        """Resolve every mention in text and substitute the resolved content.

        Mentions that fail to resolve are left verbatim in the returned text
        and reported in ``errors``.

        Args:
            text: Text containing resource mentions.

        Returns:
            ResolveAllResult with the substituted text, resolved values keyed
            by "server:path", and one MentionFailure per unresolved mention.
        """
        mentions = self.parse(text)
        if not mentions:
            return ResolveAllResult(text=text)

        if self.settings.concurrent:
            outcomes = await asyncio.gather(*(self._resolve_outcome(m) for m in mentions))
        else:
            outcomes = [await self._resolve_outcome(m) for m in mentions]

        values: dict[str, ResolvedResource] = {}
        errors: list[MentionFailure] = []
        resolved_text = text

        # Replace from the end so earlier offsets stay valid as lengths change
        for mention, (value, error) in sorted(
            zip(mentions, outcomes), key=lambda pair: pair[0].start, reverse=True
        ):
            if value is not None:
                values[mention.key] = value
                resolved_text = (
                    resolved_text[: mention.start] + value.content + resolved_text[mention.end :]
                )
            else:
                errors.append(
                    MentionFailure(mention=mention, error=error or ResourceNotFoundError(mention))
                )

        errors.reverse()
        if errors:
            logger.debug(f"Left {len(errors)} of {len(mentions)} mentions unresolved")
        return ResolveAllResult(text=resolved_text, values=values, errors=errors)

    async def _resolve_outcome(self, mention: ResourceMention) -> _Outcome:
        """Resolve a mention and report why it failed, if it did."""
        if not isinstance(mention, ResourceMention):
            raise InvalidMentionError(f"Expected ResourceMention, got {type(mention).__name__}")

        cache_key = make_cache_key(mention.server, mention.path, mention.query)

        if self._cache_enabled:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {cache_key}")
                self.hooks.emit(events.CACHE_HIT, {"key": cache_key, "mention": mention})
                return cached, None

        resolver = self.registry.get(mention.server)
        if resolver is None:
            logger.debug(f"No resolver registered for server '{mention.server}'")
            self.hooks.emit(
                events.RESOLVER_NOT_FOUND, {"server": mention.server, "mention": mention}
            )
            return None, ResolverNotFoundError(mention)

        self.hooks.emit(events.RESOLVE_START, {"mention": mention})
        try:
            value = await resolver(mention.server, mention.path, _query_arg(mention))
            if value is not None and not isinstance(value, ResolvedResource):
                raise TypeError(
                    f"Resolver returned {type(value).__name__}, expected ResolvedResource"
                )
        except Exception as e:
            logger.warning(f"Resolver for '{mention.server}' failed on {mention.path}: {e}")
            self.hooks.emit(events.RESOLVE_ERROR, {"mention": mention, "error": e})
            fault = ResolverFaultError(mention, e)
            fault.__cause__ = e
            return None, fault

        self.hooks.emit(events.RESOLVE_COMPLETE, {"mention": mention, "value": value})
        if value is None:
            return None, ResourceNotFoundError(mention)

        if self._cache_enabled:
            self.cache.set(cache_key, value)
        return value, None

    # ------------------------------------------------------------------
    # Introspection and cache control
    # ------------------------------------------------------------------

    def get_resource_info(self, mention: ResourceMention) -> ResourceInfo:
        """Describe a mention's target without resolving it."""
        return ResourceInfo(
            server=mention.server,
            path=mention.path,
            full_path=f"{mention.server}{mention.path}",
            has_resolver=mention.server in self.registry,
        )

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    def set_cache_enabled(self, enabled: bool) -> None:
        """Turn caching on or off. Turning it off drops every cached entry."""
        self._cache_enabled = enabled
        if not enabled:
            self.clear_cache()

    def set_cache_ttl(self, ttl: float) -> None:
        """Change the cache time-to-live, in seconds."""
        self.cache.set_ttl(ttl)

    def clear_cache(self) -> None:
        """Drop every cached resource."""
        self.cache.clear()
        self.hooks.emit(events.CACHE_CLEARED, {})

    def cache_stats(self) -> CacheStats:
        """Current cache size, keys and TTL."""
        keys = self.cache.keys()
        return CacheStats(
            size=len(keys), keys=keys, ttl=self.cache.ttl, enabled=self._cache_enabled
        )


def _query_arg(mention: ResourceMention) -> dict[str, str] | None:
    """Fresh query dict for a resolver call, so resolvers cannot alter the mention."""
    return dict(mention.query) if mention.query is not None else None
