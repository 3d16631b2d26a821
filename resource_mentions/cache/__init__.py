"""Cache protocols and implementations."""

from .protocol import CacheProviderProtocol
from .ttl import DEFAULT_TTL
from .ttl import CacheEntry
from .ttl import TTLCache
from .ttl import make_cache_key

__all__ = [
    "CacheEntry",
    "CacheProviderProtocol",
    "DEFAULT_TTL",
    "TTLCache",
    "make_cache_key",
]
