"""Resource Mentions - resolve @resource:// references embedded in text.

Scans prompt text for mentions such as ``@resource://docs/guide.md`` or
``@res://notes/today``, resolves each through a resolver registered for its
server, caches the results, and substitutes the content back into the text.

Mentions that cannot be resolved stay in the text verbatim and are reported
alongside the result.
"""

from __future__ import annotations

# Cache
from resource_mentions.cache.protocol import CacheProviderProtocol
from resource_mentions.cache.ttl import TTLCache
from resource_mentions.cache.ttl import make_cache_key

# Configuration
from resource_mentions.config import MentionSettings
from resource_mentions.config import load_settings

# Exceptions
from resource_mentions.exceptions import InvalidMentionError
from resource_mentions.exceptions import ResolutionError
from resource_mentions.exceptions import ResolverFaultError
from resource_mentions.exceptions import ResolverNotFoundError
from resource_mentions.exceptions import ResourceMentionError
from resource_mentions.exceptions import ResourceNotFoundError

# Hooks
from resource_mentions.hooks import MentionHooks

# Mentions
from resource_mentions.mentions.deduplicator import deduplicate_mentions
from resource_mentions.mentions.models import CacheStats
from resource_mentions.mentions.models import MentionFailure
from resource_mentions.mentions.models import ResolveAllResult
from resource_mentions.mentions.models import ResolvedResource
from resource_mentions.mentions.models import ResourceInfo
from resource_mentions.mentions.models import ResourceMention
from resource_mentions.mentions.parser import create_mention
from resource_mentions.mentions.parser import find_mentions
from resource_mentions.mentions.parser import format_mention
from resource_mentions.mentions.parser import has_mentions
from resource_mentions.mentions.parser import parse_mentions
from resource_mentions.mentions.protocol import ResourceResolverProtocol
from resource_mentions.mentions.registry import ResolverRegistry
from resource_mentions.mentions.resolver import MentionResolver

# Reference resolvers
from resource_mentions.resolvers.file import FileResolver
from resource_mentions.resolvers.file import mime_type_for
from resource_mentions.resolvers.http import HttpResolver
from resource_mentions.resolvers.memory import MemoryResolver

__all__ = [
    # Orchestration
    "MentionResolver",
    "ResolverRegistry",
    "ResourceResolverProtocol",
    # Parsing
    "ResourceMention",
    "parse_mentions",
    "find_mentions",
    "deduplicate_mentions",
    "format_mention",
    "create_mention",
    "has_mentions",
    # Results
    "ResolvedResource",
    "ResolveAllResult",
    "MentionFailure",
    "ResourceInfo",
    "CacheStats",
    # Cache
    "CacheProviderProtocol",
    "TTLCache",
    "make_cache_key",
    # Hooks
    "MentionHooks",
    # Configuration
    "MentionSettings",
    "load_settings",
    # Resolvers
    "FileResolver",
    "HttpResolver",
    "MemoryResolver",
    "mime_type_for",
    # Exceptions
    "ResourceMentionError",
    "InvalidMentionError",
    "ResolutionError",
    "ResolverNotFoundError",
    "ResourceNotFoundError",
    "ResolverFaultError",
]
