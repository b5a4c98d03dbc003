# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Time-expiring key -> text stores for rendered README output.

Disk layout (DiskCacheStore):
    <cache_dir>/<key>.md     plain text, file mtime is the "stored at" timestamp

Cache key format:
    derive_key("octo-org", "hello.world", "main") -> "octo_org_hello_world_main"

Expiry is evaluated at read time; there is no background sweep. Entries are
replaced whole (tmp file + rename) and never edited in place, so separate build
processes can share one directory without locking.

The cache is an optimization only: read/write failures are logged and behave
like a miss / no-op.
"""

from __future__ import annotations

import logging
import os
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from .common import DEFAULT_CACHE_TTL_S

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_]")


def derive_key(owner: str, repo: str, ref: str) -> str:
    """Cache key for (owner, repo, ref).

    Every character outside [A-Za-z0-9_] becomes "_", so "a-b/c" and "a_b/c" share a key.
    """
    return _UNSAFE_KEY_CHARS.sub("_", f"{owner}_{repo}_{ref}")


@dataclass
class CacheStats:
    """Basic cache statistics tracked automatically by every CacheStore."""
    hit: int = 0
    miss: int = 0
    write: int = 0
    error: int = 0


class CacheStore:
    """Interface shared by the disk and in-memory stores."""

    def __init__(self, *, ttl_s: int = DEFAULT_CACHE_TTL_S):
        self.ttl_s = int(ttl_s)
        self.stats = CacheStats()

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def put(self, key: str, content: str) -> None:
        raise NotImplementedError

    def _is_fresh(self, stored_at: float, now: float) -> bool:
        return (now - stored_at) <= self.ttl_s


class DiskCacheStore(CacheStore):
    """One plain text file per key; mtime decides freshness."""

    SUFFIX = ".md"

    def __init__(self, cache_dir: Path, *, ttl_s: int = DEFAULT_CACHE_TTL_S):
        super().__init__(ttl_s=ttl_s)
        self.cache_dir = Path(cache_dir)

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            mtime = path.stat().st_mtime
            if not self._is_fresh(mtime, time.time()):
                logger.debug("Cache stale: %s (age %.0fs > ttl %ss)", path.name, time.time() - mtime, self.ttl_s)
                self.stats.miss += 1
                return None
            content = path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            self.stats.miss += 1
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cache read failed for %s: %s", path, e)
            self.stats.error += 1
            self.stats.miss += 1
            return None

        self.stats.hit += 1
        logger.debug("Cache hit: %s", path.name)
        return content

    def put(self, key: str, content: str) -> None:
        path = self.path_for(key)
        tmp = path.with_name(f"{path.name}.tmp.{os.getpid()}")
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            # Atomic write (tmp file + rename); raw bytes, no newline translation
            tmp.write_bytes(content.encode("utf-8"))
            os.replace(str(tmp), str(path))
        except OSError as e:
            logger.warning("Cache write failed for %s: %s", path, e)
            self.stats.error += 1
            try:
                tmp.unlink()
            except OSError:
                pass
            return
        self.stats.write += 1

    def clear(self) -> int:
        """Delete every cached entry. Returns the number of files removed."""
        removed = 0
        try:
            paths = list(self.cache_dir.glob(f"*{self.SUFFIX}"))
        except OSError:
            return 0
        for p in paths:
            try:
                p.unlink()
                removed += 1
            except OSError as e:
                logger.warning("Could not remove cache file %s: %s", p, e)
        return removed


class MemoryCacheStore(CacheStore):
    """In-process store with the same TTL semantics (tests, --no-cache runs)."""

    def __init__(self, *, ttl_s: int = DEFAULT_CACHE_TTL_S, clock: Callable[[], float] = time.time):
        super().__init__(ttl_s=ttl_s)
        self._clock = clock
        self._items: Dict[str, Tuple[float, str]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._items.get(key)
        if entry is None or not self._is_fresh(entry[0], self._clock()):
            self.stats.miss += 1
            return None
        self.stats.hit += 1
        return entry[1]

    def put(self, key: str, content: str) -> None:
        self._items[key] = (self._clock(), content)
        self.stats.write += 1

    def __len__(self) -> int:
        return len(self._items)
