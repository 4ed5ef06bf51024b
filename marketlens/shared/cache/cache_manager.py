"""
Narration Response Cache

TTL cache for generated narration text (or any response payload), keyed by
a fingerprint of the request that produced it.

Features:
- Thread-safe with a per-instance lock
- Oldest-first bulk eviction when capacity is reached
- Injectable clock for deterministic expiry
- Stats tracking (hits, misses, hit rate)

The indicator engine never reads or writes this cache; callers that
narrate an analysis own an instance and pass it around explicitly.
"""

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from marketlens.shared.config.defaults import CACHE_SETTINGS

logger = logging.getLogger(__name__)


def request_fingerprint(payload: Any) -> str:
    """
    SHA-256 hex digest of the canonical JSON form of a request payload.

    Keys are sorted so logically equal mappings produce the same key;
    values JSON cannot encode natively are stringified.
    """
    canonical = json.dumps(payload, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CacheStats:
    """Cache statistics snapshot."""

    size: int
    hits: int
    misses: int
    total_requests: int
    hit_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "hits": self.hits,
            "misses": self.misses,
            "totalRequests": self.total_requests,
            "hitRate": round(self.hit_rate, 4),
        }


class NarrationCache:
    """
    Request-fingerprint keyed cache with TTL expiry.

    Entries expire `ttl_seconds` after they were stored. When the cache is
    full, the oldest `max(1, int(max_size * evict_fraction))` entries are
    dropped before the new one is inserted.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_SETTINGS.ttl_seconds,
        max_size: int = CACHE_SETTINGS.max_size,
        clock: Callable[[], float] = time.monotonic,
        evict_fraction: float = CACHE_SETTINGS.evict_fraction,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        if not 0 < evict_fraction <= 1:
            raise ValueError(f"evict_fraction must be in (0, 1], got {evict_fraction}")

        self._ttl = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._evict_fraction = evict_fraction
        self._cache: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get(self, key: str) -> Optional[Any]:
        """Get a cached value, returns None if expired or missing."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            if self._clock() - entry["_cached_at"] >= self._ttl:
                # Expired
                del self._cache[key]
                self._misses += 1
                return None

            self._hits += 1
            return entry["_value"]

    def set(self, key: str, value: Any) -> None:
        """Store a value, evicting the oldest entries when full."""
        with self._lock:
            if key in self._cache:
                del self._cache[key]
            elif len(self._cache) >= self._max_size:
                self._evict_oldest()

            self._cache[key] = {"_value": value, "_cached_at": self._clock()}

    def _evict_oldest(self) -> None:
        count = max(1, int(self._max_size * self._evict_fraction))
        for _ in range(min(count, len(self._cache))):
            self._cache.popitem(last=False)
        logger.debug("Narration cache full, evicted %d oldest entries", count)

    def clear(self) -> int:
        """Clear all entries and reset counters. Returns count cleared."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            return count

    def get_stats(self) -> CacheStats:
        with self._lock:
            total = self._hits + self._misses
            return CacheStats(
                size=len(self._cache),
                hits=self._hits,
                misses=self._misses,
                total_requests=total,
                hit_rate=self._hits / total if total > 0 else 0.0,
            )
