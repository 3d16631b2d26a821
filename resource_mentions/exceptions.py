"""Exception hierarchy for resource-mentions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resource_mentions.mentions.models import ResourceMention


class ResourceMentionError(Exception):
    """Base exception for all resource-mention errors."""


class InvalidMentionError(ResourceMentionError, ValueError):
    """A mention record is malformed (bad offsets, wrong type, missing server)."""


class ResolutionError(ResourceMentionError):
    """A single mention could not be resolved.

    These are collected as diagnostics by ``MentionResolver.resolve_all`` and
    are never raised out of it.
    """

    def __init__(self, mention: ResourceMention, message: str) -> None:
        super().__init__(message)
        self.mention = mention


class ResolverNotFoundError(ResolutionError):
    """No resolver is registered for the mention's server."""

    def __init__(self, mention: ResourceMention) -> None:
        super().__init__(mention, f"No resolver registered for server '{mention.server}'")


class ResourceNotFoundError(ResolutionError):
    """The resolver ran but reported that the resource does not exist."""

    def __init__(self, mention: ResourceMention) -> None:
        super().__init__(mention, f"Resource not found: {mention.server}:{mention.path}")


class ResolverFaultError(ResolutionError):
    """The resolver raised while resolving. The original exception is the __cause__."""

    def __init__(self, mention: ResourceMention, error: BaseException) -> None:
        super().__init__(
            mention,
            f"Resolver for '{mention.server}' failed on {mention.path}: {error}",
        )
