"""Resource mention parsing and resolution."""

from .deduplicator import deduplicate_mentions
from .models import CacheStats
from .models import MentionFailure
from .models import ResolveAllResult
from .models import ResolvedResource
from .models import ResourceInfo
from .models import ResourceMention
from .parser import create_mention
from .parser import find_mentions
from .parser import format_mention
from .parser import has_mentions
from .parser import parse_mentions
from .protocol import ResourceResolverProtocol
from .registry import ResolverRegistry
from .resolver import MentionResolver

__all__ = [
    "CacheStats",
    "MentionFailure",
    "MentionResolver",
    "ResolveAllResult",
    "ResolvedResource",
    "ResolverRegistry",
    "ResourceInfo",
    "ResourceMention",
    "ResourceResolverProtocol",
    "create_mention",
    "deduplicate_mentions",
    "find_mentions",
    "format_mention",
    "has_mentions",
    "parse_mentions",
]
