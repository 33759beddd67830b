"""In-memory caching layer."""

from .keys import CacheKeys
from .memory import CacheEntry, TTLCache

__all__ = [
    "CacheEntry",
    "CacheKeys",
    "TTLCache",
]
