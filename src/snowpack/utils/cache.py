"""Caching utilities for analysis results."""

import hashlib
import json
import threading
from typing import Any, Callable

from cachetools import TTLCache, cached
from pydantic import BaseModel

from snowpack.config import CACHE_TTL_SECONDS

# Sized for a few hundred distinct series (locations x granularity)
_analysis_cache: TTLCache = TTLCache(maxsize=500, ttl=CACHE_TTL_SECONDS)
# TTLCache is not thread-safe; sessions and batches analyse from many threads
_analysis_cache_lock = threading.Lock()


def _encode(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return str(value)


def get_cache_key(*args, **kwargs) -> str:
    """Generate a cache key from function arguments."""
    key_data = json.dumps(
        {"args": args, "kwargs": kwargs}, sort_keys=True, default=_encode
    )
    # MD5 is used here only for cache key generation, not for security purposes
    return hashlib.md5(key_data.encode(), usedforsecurity=False).hexdigest()


def cached_analysis(func: Callable) -> Callable:
    """Cache decorator for analysis results.

    Cache reads and writes hold the lock; the analysis itself runs outside
    it, so two threads missing on the same key may both compute it.
    """
    return cached(_analysis_cache, key=get_cache_key, lock=_analysis_cache_lock)(
        func
    )


def clear_analysis_cache() -> None:
    """Clear all cached analysis results."""
    with _analysis_cache_lock:
        _analysis_cache.clear()


def get_cache_stats() -> dict:
    """Get cache statistics for monitoring."""
    with _analysis_cache_lock:
        size = len(_analysis_cache)
    return {
        "analysis_cache": {
            "size": size,
            "maxsize": _analysis_cache.maxsize,
            "ttl": _analysis_cache.ttl,
        },
    }
