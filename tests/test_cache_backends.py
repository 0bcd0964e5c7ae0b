"""Test module for cache bins (memory, redis, null)."""
import time

from search_spellcheck.core import cache as cache_module
from search_spellcheck.core.cache import (
    PERMANENT,
    MemoryBackend,
    NullBackend,
    RedisBackend,
    get_cache_bin,
    reset_cache_bins,
)
from search_spellcheck.core.config import settings

from tests.helpers import DummyRedis


def test_memory_backend_round_trip_and_last_write_wins():
    """Test case for memory bin set/get/overwrite."""
    backend = MemoryBackend("data")
    assert backend.get("k") is None

    backend.set("k", {"a": 1}, PERMANENT, ["t1", "t1", "t2"])
    item = backend.get("k")
    assert item.data == {"a": 1}
    assert item.tags == ("t1", "t2")

    backend.set("k", {"a": 2})
    assert backend.get("k").data == {"a": 2}


def test_memory_backend_expiry_and_tag_invalidation():
    """Test case for expired items and tag-based purge."""
    backend = MemoryBackend("data")
    backend.set("old", "v", expire=time.time() - 1)
    assert backend.get("old") is None

    backend.set("a", 1, tags=["view:x"])
    backend.set("b", 2, tags=["view:y"])
    backend.invalidate_tags(["view:x"])
    assert backend.get("a") is None
    assert backend.get("b").data == 2

    backend.delete("b")
    assert backend.get("b") is None


def test_memory_backend_is_bounded():
    """Test case for LRU eviction once maxsize is reached."""
    backend = MemoryBackend("data", maxsize=2)
    backend.set("a", 1)
    backend.set("b", 2)
    backend.set("c", 3)
    assert backend.get("a") is None
    assert backend.get("c").data == 3


def test_memory_tag_invalidation_keeps_recency():
    """Test case for tag purges not refreshing every surviving entry."""
    backend = MemoryBackend("data", maxsize=3)
    backend.set("a", 1)
    backend.set("b", 2)
    backend.set("c", 3, tags=["drop"])
    assert backend.get("a").data == 1

    backend.invalidate_tags(["drop"])
    backend.set("d", 4)
    backend.set("e", 5)

    assert backend.get("a").data == 1
    assert backend.get("b") is None


def test_null_backend_discards_writes():
    """Test case for the no-op bin."""
    backend = NullBackend("data")
    backend.set("k", "v")
    assert backend.get("k") is None


def test_redis_backend_round_trip_with_tags():
    """Test case for redis bin storage and tag sets."""
    client = DummyRedis()
    backend = RedisBackend("data", client)

    payload = {"spellcheck": {"suggestions": ["speling", {"suggestion": ["spelling"]}]}}
    backend.set("views:k:spellcheck", payload, PERMANENT, ["config:views.view.search"])

    assert client.expiries["cache:data:views:k:spellcheck"] is None
    assert "cache:data:views:k:spellcheck" in client.sets["tag:data:config:views.view.search"]

    item = backend.get("views:k:spellcheck")
    assert item.data == payload
    assert item.tags == ("config:views.view.search",)

    backend.invalidate_tags(["config:views.view.search"])
    assert backend.get("views:k:spellcheck") is None


def test_redis_backend_delete_and_rewrite_clean_tag_sets():
    """Test case for tag set membership following the stored entry."""
    client = DummyRedis()
    backend = RedisBackend("data", client)
    backend.set("k", "v", PERMANENT, ["t1", "t2"])
    backend.set("other", "v", PERMANENT, ["t1"])

    backend.set("k", "v2", PERMANENT, ["t2"])
    assert client.sets["tag:data:t1"] == {"cache:data:other"}
    assert client.sets["tag:data:t2"] == {"cache:data:k"}

    backend.delete("k")
    assert "cache:data:k" not in client.store
    assert "tag:data:t2" not in client.sets
    assert client.sets["tag:data:t1"] == {"cache:data:other"}


def test_redis_backend_compresses_large_values_and_sets_ttl():
    """Test case for compression and expiring entries."""
    client = DummyRedis()
    backend = RedisBackend("data", client, compression_threshold=16)
    backend.set("big", {"text": "x" * 200}, expire=time.time() + 60)

    assert client.store["cache:data:big"].startswith("1|")
    assert 0 < client.expiries["cache:data:big"] <= 60
    assert backend.get("big").data == {"text": "x" * 200}


def test_redis_backend_fails_open():
    """Test case for redis errors degrading to cache misses."""
    client = DummyRedis()
    backend = RedisBackend("data", client)
    client.fail = True
    backend.set("k", "v")
    assert backend.get("k") is None
    backend.invalidate_tags(["t"])


def test_redis_backend_drops_undecodable_entries():
    """Test case for entries not written by this backend."""
    client = DummyRedis()
    client.store["cache:data:bad"] = "not-an-envelope"
    backend = RedisBackend("data", client)
    assert backend.get("bad") is None
    assert "cache:data:bad" not in client.store


def test_get_cache_bin_shares_instances_and_prefers_redis(monkeypatch):
    """Test case for bin lookup and backend selection."""
    first = get_cache_bin("data")
    assert first is get_cache_bin("data")
    assert isinstance(first, MemoryBackend)

    dummy = DummyRedis()
    monkeypatch.setattr(settings.__class__, "redis_client", dummy)
    reset_cache_bins()
    backend = cache_module.get_cache_bin("data")
    assert isinstance(backend, RedisBackend)
    assert backend.client is dummy
