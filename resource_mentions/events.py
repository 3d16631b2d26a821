"""
Canonical lifecycle event names for mention resolution.
Stable surface for hooks and observability.
"""

# Registry
RESOLVER_REGISTERED = "resolver:registered"
RESOLVER_UNREGISTERED = "resolver:unregistered"
RESOLVER_NOT_FOUND = "resolver:not_found"

# Resolution
RESOLVE_START = "resolve:start"
RESOLVE_COMPLETE = "resolve:complete"
RESOLVE_ERROR = "resolve:error"

# Cache
CACHE_HIT = "cache:hit"
CACHE_CLEARED = "cache:cleared"

ALL_EVENTS = [
    RESOLVER_REGISTERED,
    RESOLVER_UNREGISTERED,
    RESOLVER_NOT_FOUND,
    RESOLVE_START,
    RESOLVE_COMPLETE,
    RESOLVE_ERROR,
    CACHE_HIT,
    CACHE_CLEARED,
]
