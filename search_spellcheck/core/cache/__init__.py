"""Process-wide cache bins.

`get_cache_bin(name)` hands out one shared backend per bin name: Redis when a client is
configured on settings, otherwise an in-process LRU store.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict

from search_spellcheck.core.config import settings

from .backends import (
    PERMANENT,
    CacheBackend,
    CacheItem,
    MemoryBackend,
    NullBackend,
    RedisBackend,
)

logger = logging.getLogger(__name__)

_bins: Dict[str, CacheBackend] = {}
_bins_lock = threading.Lock()


def _build_bin(name: str) -> CacheBackend:
    client = getattr(settings, "redis_client", None)
    if client is not None:
        logger.info(f"Cache bin '{name}' backed by Redis")
        return RedisBackend(name, client)
    return MemoryBackend(name, maxsize=settings.spellcheck_memory_maxsize)


def get_cache_bin(name: str) -> CacheBackend:
    """Return the shared cache backend for bin `name`, creating it on first use."""
    with _bins_lock:
        backend = _bins.get(name)
        if backend is None:
            backend = _build_bin(name)
            _bins[name] = backend
        return backend


def reset_cache_bins() -> None:
    """Forget every bin so the next lookup rebuilds it from current settings."""
    with _bins_lock:
        _bins.clear()


__all__ = [
    "PERMANENT",
    "CacheBackend",
    "CacheItem",
    "MemoryBackend",
    "NullBackend",
    "RedisBackend",
    "get_cache_bin",
    "reset_cache_bins",
]
