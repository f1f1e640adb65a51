"""
Caching Module

In-memory TTL caches for data that changes rarely but is read on every
request:
- The course catalog (courses + categories)
- Google's public certificates for Firebase ID token verification
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar


T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with TTL support."""
    value: T
    expires_at: float

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Check if the entry has expired."""
        return (now if now is not None else time.time()) > self.expires_at


class TTLCache(Generic[T]):
    """
    TTL cache with LRU eviction.

    Entries expire after their TTL; when full, expired entries are purged
    first and then the least recently used entry is evicted.
    """

    def __init__(self, max_size: int = 128, default_ttl: int = 300):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries.
            default_ttl: Default time-to-live in seconds.
        """
        self._cache: "OrderedDict[str, CacheEntry[T]]" = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[T]:
        """
        Get a value from the cache.

        Returns:
            Cached value or None if not found/expired.
        """
        entry = self._cache.get(key)

        if entry is None:
            self._misses += 1
            return None

        if entry.is_expired():
            del self._cache[key]
            self._misses += 1
            return None

        self._cache.move_to_end(key)
        self._hits += 1
        return entry.value

    def set(self, key: str, value: T, ttl: Optional[int] = None) -> None:
        """
        Set a value in the cache.

        Args:
            key: Cache key.
            value: Value to cache.
            ttl: Optional TTL override in seconds.
        """
        ttl = self._default_ttl if ttl is None else ttl

        self._cache.pop(key, None)
        if len(self._cache) >= self._max_size:
            self._purge_expired()
        while len(self._cache) >= self._max_size:
            self._cache.popitem(last=False)

        self._cache[key] = CacheEntry(value=value, expires_at=time.time() + ttl)

    def delete(self, key: str) -> bool:
        """Delete a key; True if it was present."""
        return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        """Clear all entries and statistics."""
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def _purge_expired(self) -> None:
        now = time.time()
        for key in [k for k, entry in self._cache.items() if entry.is_expired(now)]:
            del self._cache[key]

    def stats(self) -> Dict[str, Any]:
        """Hit/miss counts and hit rate."""
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0.0
        return {
            "size": len(self._cache),
            "max_size": self._max_size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 2),
        }


# ============== Global Cache Instances ==============

CATALOG_KEY = "catalog"
GOOGLE_CERTS_KEY = "google_certs"

# Courses and categories, refreshed every few minutes
catalog_cache: TTLCache[Any] = TTLCache(max_size=4, default_ttl=300)

# Google x509 certificates; TTL comes from the Cache-Control max-age
certificate_cache: TTLCache[Dict[str, str]] = TTLCache(max_size=2, default_ttl=3600)


# ============== Cache Helper Functions ==============

def get_cached_catalog() -> Optional[Any]:
    """Get the cached ``(courses, categories)`` pair."""
    return catalog_cache.get(CATALOG_KEY)


def cache_catalog(catalog: Any, ttl: Optional[int] = None) -> None:
    """Cache the ``(courses, categories)`` pair."""
    catalog_cache.set(CATALOG_KEY, catalog, ttl=ttl)


def get_cached_certificates() -> Optional[Dict[str, str]]:
    """Get cached Google certificates keyed by key id."""
    return certificate_cache.get(GOOGLE_CERTS_KEY)


def cache_certificates(certificates: Dict[str, str], ttl: Optional[int] = None) -> None:
    """Cache Google certificates keyed by key id."""
    certificate_cache.set(GOOGLE_CERTS_KEY, certificates, ttl=ttl)


def get_cache_stats() -> Dict[str, Any]:
    """Get statistics for all caches."""
    return {
        "catalog_cache": catalog_cache.stats(),
        "certificate_cache": certificate_cache.stats(),
    }
