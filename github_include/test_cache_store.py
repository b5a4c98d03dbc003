"""
Pytest tests for cache_store (derive_key, DiskCacheStore, MemoryCacheStore).
"""

import os
import time

from github_include.cache_store import DiskCacheStore, MemoryCacheStore, derive_key


# ============================================================================
# derive_key
# ============================================================================

def test_derive_key_sanitizes_punctuation():
    assert derive_key("octo-org", "hello.world", "release/1.0") == "octo_org_hello_world_release_1_0"


def test_derive_key_deterministic_and_idempotent():
    k = derive_key("o", "r", "main")
    assert k == derive_key("o", "r", "main")
    assert derive_key(k, "", "").startswith(k)
    assert derive_key("a", "b", "c") != derive_key("a", "b", "d")


def test_derive_key_punctuation_only_difference_may_collide():
    # Accepted limitation: "a-b" and "a.b" sanitize identically.
    assert derive_key("a-b", "r", "main") == derive_key("a.b", "r", "main")


# ============================================================================
# DiskCacheStore
# ============================================================================

def test_disk_cache_round_trip(tmp_path):
    cache = DiskCacheStore(tmp_path / "c")
    cache.put("k", "hello\nworld")
    assert cache.get("k") == "hello\nworld"
    assert cache.stats.write == 1
    assert cache.stats.hit == 1


def test_disk_cache_preserves_crlf_and_cr(tmp_path):
    cache = DiskCacheStore(tmp_path / "c")
    cache.put("k", "a\r\nb\rc\n")
    assert cache.get("k") == "a\r\nb\rc\n"
    assert cache.path_for("k").read_bytes() == b"a\r\nb\rc\n"


def test_disk_cache_missing_key(tmp_path):
    cache = DiskCacheStore(tmp_path / "does-not-exist")
    assert cache.get("nope") is None
    assert cache.stats.miss == 1


def test_disk_cache_creates_directory(tmp_path):
    cache_dir = tmp_path / "a" / "b"
    DiskCacheStore(cache_dir).put("k", "v")
    assert (cache_dir / "k.md").read_text(encoding="utf-8") == "v"


def test_disk_cache_stale_entry_is_absent(tmp_path):
    cache = DiskCacheStore(tmp_path, ttl_s=3600)
    cache.put("k", "v")
    old = time.time() - 3601
    os.utime(cache.path_for("k"), (old, old))
    assert cache.get("k") is None


def test_disk_cache_entry_within_ttl_is_fresh(tmp_path):
    cache = DiskCacheStore(tmp_path, ttl_s=3600)
    cache.put("k", "v")
    recent = time.time() - 3000
    os.utime(cache.path_for("k"), (recent, recent))
    assert cache.get("k") == "v"


def test_disk_cache_put_replaces_and_leaves_no_tmp_files(tmp_path):
    cache = DiskCacheStore(tmp_path)
    cache.put("k", "one")
    cache.put("k", "two")
    assert cache.get("k") == "two"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["k.md"]


def test_disk_cache_unreadable_entry_is_a_miss(tmp_path):
    cache = DiskCacheStore(tmp_path)
    cache.path_for("k").mkdir(parents=True)  # a directory where the file should be
    assert cache.get("k") is None
    assert cache.stats.error == 1


def test_disk_cache_undecodable_entry_is_a_miss(tmp_path):
    cache = DiskCacheStore(tmp_path)
    cache.path_for("k").write_bytes(b"\xff\xfe\x00")
    assert cache.get("k") is None


def test_disk_cache_write_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    cache = DiskCacheStore(blocker / "sub")  # parent is a regular file
    cache.put("k", "v")
    assert cache.stats.error == 1
    assert cache.stats.write == 0
    assert cache.get("k") is None


def test_disk_cache_clear(tmp_path):
    cache = DiskCacheStore(tmp_path)
    cache.put("a", "1")
    cache.put("b", "2")
    assert cache.clear() == 2
    assert cache.get("a") is None


# ============================================================================
# MemoryCacheStore
# ============================================================================

def test_memory_cache_ttl_uses_clock():
    now = [1000.0]
    cache = MemoryCacheStore(ttl_s=60, clock=lambda: now[0])
    cache.put("k", "v")
    now[0] += 60
    assert cache.get("k") == "v"
    now[0] += 1
    assert cache.get("k") is None
    assert len(cache) == 1
