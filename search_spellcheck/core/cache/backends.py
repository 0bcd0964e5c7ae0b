"""Keyed cache bins with tag bookkeeping.

Design:
- A bin stores `CacheItem`s under string cids; a write replaces the previous item wholesale.
- `PERMANENT` items never expire; anything else is an absolute unix timestamp.
- Redis bins fail open: connection errors are logged, reads miss and writes are dropped.
- `NullBackend` accepts writes and never returns anything (used for live preview).
"""

from __future__ import annotations

import base64
import json
import logging
import threading
import time
import zlib
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from cachetools import Cache, LRUCache

logger = logging.getLogger(__name__)

PERMANENT = -1


@dataclass(frozen=True)
class CacheItem:
    """One cached value together with the metadata it was written with."""

    cid: str
    data: Any
    tags: Tuple[str, ...] = ()
    expire: float = PERMANENT
    created: float = field(default_factory=time.time)

    @property
    def valid(self) -> bool:
        return self.expire == PERMANENT or self.expire > time.time()


class CacheBackend:
    """Interface every cache bin implements."""

    name = "base"

    def __init__(self, bin_name: str):
        self.bin = bin_name

    def get(self, cid: str) -> Optional[CacheItem]:
        raise NotImplementedError

    def set(
        self,
        cid: str,
        data: Any,
        expire: float = PERMANENT,
        tags: Iterable[str] = (),
    ) -> None:
        raise NotImplementedError

    def delete(self, cid: str) -> None:
        raise NotImplementedError

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        raise NotImplementedError


class NullBackend(CacheBackend):
    """Cache bin that stores nothing."""

    name = "null"

    def get(self, cid: str) -> Optional[CacheItem]:
        return None

    def set(self, cid, data, expire=PERMANENT, tags=()) -> None:
        return None

    def delete(self, cid: str) -> None:
        return None

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        return None


class MemoryBackend(CacheBackend):
    """Process-local bin backed by a bounded LRU mapping."""

    name = "memory"

    def __init__(self, bin_name: str, maxsize: int = 1024):
        super().__init__(bin_name)
        self._items: LRUCache = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()

    def get(self, cid: str) -> Optional[CacheItem]:
        with self._lock:
            item = self._items.get(cid)
            if item is None:
                return None
            if not item.valid:
                self._items.pop(cid, None)
                return None
            return item

    def set(self, cid, data, expire=PERMANENT, tags=()) -> None:
        item = CacheItem(cid=cid, data=data, tags=tuple(sorted(set(tags))), expire=expire)
        with self._lock:
            self._items[cid] = item

    def delete(self, cid: str) -> None:
        with self._lock:
            self._items.pop(cid, None)

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        wanted = set(tags)
        with self._lock:
            # Base-class lookup leaves LRU order untouched.
            stale = [
                cid
                for cid in list(self._items)
                if wanted.intersection(Cache.__getitem__(self._items, cid).tags)
            ]
            for cid in stale:
                self._items.pop(cid, None)
        if stale:
            logger.info(f"Invalidated {len(stale)} item(s) in bin {self.bin} by tags {sorted(wanted)}")


class RedisBackend(CacheBackend):
    """
    Bin stored in Redis; tags are kept as `tag:<bin>:<tag>` sets of item keys.

    Members left behind by entries that expired through their TTL are dropped with the
    set on the next purge of that tag.
    """

    name = "redis"

    def __init__(self, bin_name: str, client, compression_threshold: int = 1024):
        super().__init__(bin_name)
        self.client = client
        self._compression_threshold = compression_threshold

    def _key(self, cid: str) -> str:
        return f"cache:{self.bin}:{cid}"

    def _tag_key(self, tag: str) -> str:
        return f"tag:{self.bin}:{tag}"

    def get(self, cid: str) -> Optional[CacheItem]:
        try:
            raw = self.client.get(self._key(cid))
        except Exception as e:
            logger.error(f"Cache get error for key {cid}: {e}")
            return None
        if not raw:
            return None
        try:
            envelope = self._decode_value(raw)
        except (ValueError, zlib.error) as e:
            logger.warning(f"Dropping undecodable cache entry {cid}: {e}")
            self.delete(cid)
            return None
        item = CacheItem(
            cid=cid,
            data=envelope.get("data"),
            tags=tuple(envelope.get("tags", ())),
            expire=envelope.get("expire", PERMANENT),
            created=envelope.get("created", 0.0),
        )
        return item if item.valid else None

    def set(self, cid, data, expire=PERMANENT, tags=()) -> None:
        tags = sorted(set(tags))
        envelope = {
            "data": data,
            "tags": tags,
            "expire": expire,
            "created": time.time(),
        }
        key = self._key(cid)
        ttl = None
        if expire != PERMANENT:
            ttl = max(int(expire - time.time()), 1)
        try:
            for tag in set(self._stored_tags(key)) - set(tags):
                self.client.srem(self._tag_key(tag), key)
            self.client.set(key, self._encode_value(envelope), ex=ttl)
            for tag in tags:
                self.client.sadd(self._tag_key(tag), key)
        except Exception as e:
            logger.error(f"Cache set error for key {cid}: {e}")

    def delete(self, cid: str) -> None:
        key = self._key(cid)
        try:
            for tag in self._stored_tags(key):
                self.client.srem(self._tag_key(tag), key)
            self.client.delete(key)
        except Exception as e:
            logger.error(f"Cache delete error for key {cid}: {e}")

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        for tag in tags:
            tag_key = self._tag_key(tag)
            try:
                keys = self.client.smembers(tag_key)
                if keys:
                    self.client.delete(*keys)
                self.client.delete(tag_key)
                logger.info(f"Invalidated cache by tag: {tag}")
            except Exception as e:
                logger.error(f"Cache invalidation by tag error for {tag}: {e}")

    def _stored_tags(self, key: str) -> Tuple[str, ...]:
        """Tags recorded in the envelope currently stored under `key`."""
        raw = self.client.get(key)
        if not raw:
            return ()
        try:
            return tuple(self._decode_value(raw).get("tags", ()))
        except (ValueError, AttributeError, zlib.error):
            return ()

    def _encode_value(self, value: Any) -> str:
        """Serialize and optionally compress a value into a string safe for Redis."""
        serialized = json.dumps(value, default=str).encode("utf-8")
        if len(serialized) >= self._compression_threshold:
            compressed = zlib.compress(serialized)
            return "1|" + base64.b64encode(compressed).decode("ascii")
        return "0|" + serialized.decode("utf-8")

    def _decode_value(self, data: Any) -> Any:
        """Decode a value stored with `_encode_value`."""
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        if data.startswith("1|"):
            return json.loads(zlib.decompress(base64.b64decode(data[2:])))
        if data.startswith("0|"):
            return json.loads(data[2:])
        raise ValueError("unknown cache encoding")
