"""
Snapshot storage backends for the cart.

A backend is a tiny string key-value store: the cart store writes the
whole serialized cart under one key after every mutation and deletes
the key on clear. Backends raise PersistenceUnavailable for anything
that prevents a read or write; they never interpret the value.
"""
from typing import Dict, Optional

from storefront.config import CART_TTL_SECONDS
from storefront.db import get_redis_sync, redis_configured
from storefront.errors import PersistenceUnavailable
from storefront.logging import get_logger

logger = get_logger(__name__)


class SnapshotStorage:
    """Interface for cart snapshot backends."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(SnapshotStorage):
    """
    Process-local storage.

    max_bytes emulates a storage quota: a write that would push the total
    stored size past it fails with PersistenceUnavailable, leaving the
    previous value in place.
    """

    def __init__(self, max_bytes: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self.max_bytes = max_bytes

    def _size_with(self, key: str, value: str) -> int:
        size = len(key.encode("utf-8")) + len(value.encode("utf-8"))
        for other_key, other_value in self._data.items():
            if other_key != key:
                size += len(other_key.encode("utf-8")) + len(other_value.encode("utf-8"))
        return size

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.max_bytes is not None and self._size_with(key, value) > self.max_bytes:
            raise PersistenceUnavailable(f"storage quota of {self.max_bytes} bytes exceeded")
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class RedisSnapshotStorage(SnapshotStorage):
    """
    Snapshots in Upstash Redis.

    The client is created lazily so a missing configuration only surfaces
    (as PersistenceUnavailable) when the cart first touches storage.
    """

    def __init__(self, client=None, ttl: int = CART_TTL_SECONDS):
        self._client = client
        self.ttl = ttl

    @property
    def client(self):
        if self._client is None:
            try:
                self._client = get_redis_sync()
            except ValueError as e:
                raise PersistenceUnavailable(f"Redis not configured: {e}") from e
        return self._client

    def get(self, key: str) -> Optional[str]:
        client = self.client
        try:
            value = client.get(key)
        except Exception as e:
            raise PersistenceUnavailable(f"Redis read failed: {e}") from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        client = self.client
        try:
            if self.ttl > 0:
                client.set(key, value, ex=self.ttl)
            else:
                client.set(key, value)
        except Exception as e:
            raise PersistenceUnavailable(f"Redis write failed: {e}") from e

    def delete(self, key: str) -> None:
        client = self.client
        try:
            client.delete(key)
        except Exception as e:
            raise PersistenceUnavailable(f"Redis delete failed: {e}") from e


_memory_fallback: Optional[MemoryStorage] = None


def get_default_storage() -> SnapshotStorage:
    """
    Redis when Upstash is configured, otherwise one process-wide
    MemoryStorage (carts then survive only as long as the process).
    """
    global _memory_fallback

    if redis_configured():
        return RedisSnapshotStorage()
    if _memory_fallback is None:
        logger.warning("Upstash Redis is not configured; cart snapshots are kept in memory")
        _memory_fallback = MemoryStorage()
    return _memory_fallback
