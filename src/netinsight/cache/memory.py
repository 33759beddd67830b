"""In-memory cache with per-entry expiry."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and when it was stored."""

    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class TTLCache:
    """
    Process-local key/value cache with lazy expiry.

    Expired entries are removed when they are next looked up; nothing
    sweeps in the background. All operations take one lock, so the cache
    can be shared by concurrent resolutions (and threads). None is used to
    signal a miss, so None values are never stored.
    """

    def __init__(
        self,
        ttl: float = 300.0,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl: Default time to live in seconds
            enabled: When False, `set` is a no-op and `get` always misses
            clock: Monotonic time source in seconds
        """
        self._ttl = ttl
        self._enabled = enabled
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self, key: str) -> Any | None:
        """Get a live value, evicting it if it has expired."""
        if not self._enabled:
            return None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug(f"Cache entry expired: {key}")
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value, replacing any existing entry for the key."""
        if not self._enabled or value is None:
            return
        entry = CacheEntry(
            value=value,
            stored_at=self._clock(),
            ttl=self._ttl if ttl is None else ttl,
        )
        with self._lock:
            self._entries[key] = entry

    def invalidate(self, key: str | None = None) -> None:
        """Remove one entry, or every entry when no key is given."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
