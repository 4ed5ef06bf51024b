"""Cache package - narration response caching for MarketLens."""

from marketlens.shared.cache.cache_manager import (
    CacheStats,
    NarrationCache,
    request_fingerprint,
)

__all__ = [
    "CacheStats",
    "NarrationCache",
    "request_fingerprint",
]
