"""Memoization backend for pipeline payloads with optional Redis storage."""

from __future__ import annotations

import logging
import os
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1024


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[bytes]:
        ...

    def set(self, key: str, value: bytes, ttl_seconds: Optional[int] = None) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


@dataclass
class InMemoryCache(CacheBackend):
    """In-process LRU cache; expired entries are swept on every write."""

    max_entries: int = DEFAULT_MAX_ENTRIES
    clock: Callable[[], float] = time.monotonic
    store: "OrderedDict[str, tuple[bytes, Optional[float]]]" = field(default_factory=OrderedDict)

    def get(self, key: str) -> Optional[bytes]:
        entry = self.store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.clock() >= expires_at:
            self.store.pop(key, None)
            return None
        self.store.move_to_end(key)
        return value

    def set(self, key: str, value: bytes, ttl_seconds: Optional[int] = None) -> None:
        now = self.clock()
        self._sweep(now)
        expires_at = now + ttl_seconds if ttl_seconds else None
        self.store[key] = (value, expires_at)
        self.store.move_to_end(key)
        while len(self.store) > self.max_entries:
            evicted, _ = self.store.popitem(last=False)
            logger.debug("Evicted cache entry %s", evicted)

    def delete(self, key: str) -> None:
        self.store.pop(key, None)

    def _sweep(self, now: float) -> None:
        expired = [
            key
            for key, (_, expires_at) in self.store.items()
            if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self.store[key]


class RedisCache(CacheBackend):
    """Redis-backed cache; read/write failures are logged and treated as misses."""

    def __init__(self, url: str):
        try:
            import redis  # type: ignore
        except ImportError:  # pragma: no cover - optional dependency
            raise RuntimeError("redis package not installed")

        self.client = redis.Redis.from_url(url, decode_responses=False)

    def get(self, key: str) -> Optional[bytes]:
        try:
            return self.client.get(key)
        except Exception:  # pragma: no cover - network failure
            logger.warning("Redis get failed for key %s", key, exc_info=True)
            return None

    def set(self, key: str, value: bytes, ttl_seconds: Optional[int] = None) -> None:
        try:
            if ttl_seconds:
                self.client.setex(key, ttl_seconds, value)
            else:
                self.client.set(key, value)
        except Exception:  # pragma: no cover - network failure
            logger.warning("Redis set failed for key %s", key, exc_info=True)

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except Exception:  # pragma: no cover - network failure
            logger.warning("Redis delete failed for key %s", key, exc_info=True)


def build_window_key(window: str, as_of: date, series_token: Optional[str], artifact: str) -> str:
    """Namespaced key for a per-window artifact of one installed base series."""

    return f"dashboard:v2:series:{series_token}:win:{window}:asof:{as_of.isoformat()}:{artifact}"


def get_cache_backend() -> CacheBackend:
    """Return the configured cache backend (Redis when REDIS_URL set, else in-memory)."""

    redis_url = os.getenv("REDIS_URL")
    if redis_url:
        try:
            return RedisCache(redis_url)
        except Exception:
            logger.warning("Falling back to in-memory cache; Redis initialization failed", exc_info=True)
    return InMemoryCache()


__all__ = [
    "CacheBackend",
    "InMemoryCache",
    "RedisCache",
    "build_window_key",
    "get_cache_backend",
]
